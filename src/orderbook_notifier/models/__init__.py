"""
Models module for the order notification service.

This module contains the Pydantic models for routing documents, orders,
webhook payloads and stream handler input/output.
"""

from orderbook_notifier.models.input import OrderNotificationInput, StreamRecordInput
from orderbook_notifier.models.order import (
    CATCH_ALL_ONLY_ORDER_TYPES,
    ExclusiveFillerWebhookOrder,
    OrderFilter,
    OrderType,
    ParsedOrder,
    WebhookOrderData,
)
from orderbook_notifier.models.output import BatchFailureResponse, BatchItemFailure
from orderbook_notifier.models.webhook import FilterField, Webhook, WebhookDefinition, WebhookFilterMapping

__all__ = [
    "OrderNotificationInput",
    "StreamRecordInput",
    "CATCH_ALL_ONLY_ORDER_TYPES",
    "ExclusiveFillerWebhookOrder",
    "OrderFilter",
    "OrderType",
    "ParsedOrder",
    "WebhookOrderData",
    "BatchFailureResponse",
    "BatchItemFailure",
    "FilterField",
    "Webhook",
    "WebhookDefinition",
    "WebhookFilterMapping",
]
