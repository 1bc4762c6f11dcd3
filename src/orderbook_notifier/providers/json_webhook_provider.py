from typing import Any, Dict, Union

from orderbook_notifier.models.webhook import WebhookDefinition
from orderbook_notifier.providers.base import BaseWebhookProvider


class JsonWebhookProvider(BaseWebhookProvider):
    """Serves endpoints from a routing document held in memory."""

    def __init__(self, definition: WebhookDefinition) -> None:
        self._definition = definition

    @classmethod
    def create(cls, document: Union[WebhookDefinition, Dict[str, Any]]) -> 'JsonWebhookProvider':
        if isinstance(document, WebhookDefinition):
            return cls(document)
        return cls(WebhookDefinition.model_validate(document))

    def get_definition(self) -> WebhookDefinition:
        return self._definition
