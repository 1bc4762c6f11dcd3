"""
Resolves the webhooks registered for an order from a routing rule document.
"""

from typing import Iterable, List, Optional

from orderbook_notifier.models.order import CATCH_ALL_ONLY_ORDER_TYPES, OrderFilter
from orderbook_notifier.models.webhook import FilterField, Webhook, WebhookDefinition

# Dimension iteration order decides which duplicate wins
FILTER_FIELD_ORDER = (FilterField.FILLER, FilterField.ORDER_STATUS, FilterField.OFFERER)


def _filter_value(order_filter: OrderFilter, field: FilterField) -> Optional[str]:
    if field is FilterField.FILLER:
        return order_filter.filler
    if field is FilterField.ORDER_STATUS:
        return order_filter.order_status
    return order_filter.offerer


def dedupe_by_url(endpoints: Iterable[Webhook]) -> List[Webhook]:
    """Drop endpoints whose url was already seen, keeping the first occurrence."""
    urls = set()
    unique = []
    for endpoint in endpoints:
        if endpoint.url in urls:
            continue
        urls.add(endpoint.url)
        unique.append(endpoint)
    return unique


def find_endpoints_matching_filter(order_filter: OrderFilter, definition: WebhookDefinition) -> List[Webhook]:
    """
    Get the webhooks to notify for an order.

    Catch-all webhooks always come first. Limit orders and the legacy
    Dutch_V1_V2 type only ever reach the catch-all webhooks. Otherwise each
    dimension (filler, orderStatus, offerer) whose value has registered
    webhooks contributes them in document order.

    Args:
        order_filter: Attributes of the order being notified
        definition: Routing rule document

    Returns:
        Endpoints deduplicated by url, in insertion order
    """
    endpoints: List[Webhook] = list(definition.catch_all)

    if order_filter.order_type not in CATCH_ALL_ONLY_ORDER_TYPES:
        for field in FILTER_FIELD_ORDER:
            value = _filter_value(order_filter, field)
            if not value:
                continue
            registered = definition.filter_rules.rules_for(field).get(value)
            if registered:
                endpoints.extend(registered)

    return dedupe_by_url(endpoints)


def find_exclusive_filler_endpoints(filler: str, definition: WebhookDefinition) -> List[Webhook]:
    """Get the webhooks registered under the filler dimension only, without catch-all webhooks."""
    if not filler:
        return []
    return dedupe_by_url(definition.filter_rules.filler.get(filler, []))
