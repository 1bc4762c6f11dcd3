"""
Base interface for webhook endpoint providers.

The notification logic depends on ``WebhookEndpointSource`` only, so a static
document, an S3-backed document or a test double can be passed in its place.
"""

from abc import ABC, abstractmethod
from typing import List, Protocol, runtime_checkable

from orderbook_notifier.logic.endpoint_matcher import find_endpoints_matching_filter, find_exclusive_filler_endpoints
from orderbook_notifier.models.order import OrderFilter
from orderbook_notifier.models.webhook import Webhook, WebhookDefinition


@runtime_checkable
class WebhookEndpointSource(Protocol):
    """Protocol defining how webhook endpoints are resolved."""

    def get_endpoints(self, order_filter: OrderFilter) -> List[Webhook]:
        """Get the webhooks to notify for an order."""
        ...

    def get_exclusive_filler_endpoints(self, filler: str) -> List[Webhook]:
        """Get the webhooks registered for an exclusive filler."""
        ...


class BaseWebhookProvider(ABC):
    """Resolves endpoints against a routing document supplied by the subclass."""

    @abstractmethod
    def get_definition(self) -> WebhookDefinition:
        """Get the current routing document."""
        pass

    def get_endpoints(self, order_filter: OrderFilter) -> List[Webhook]:
        return find_endpoints_matching_filter(order_filter, self.get_definition())

    def get_exclusive_filler_endpoints(self, filler: str) -> List[Webhook]:
        return find_exclusive_filler_endpoints(filler, self.get_definition())
