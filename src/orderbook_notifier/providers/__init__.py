"""
Webhook endpoint providers.

This module exposes the interface the notification logic uses to resolve the
webhooks to notify, its implementations, and the factory building the
configured one.
"""

from orderbook_notifier.providers.base import BaseWebhookProvider, WebhookEndpointSource
from orderbook_notifier.providers.json_webhook_provider import JsonWebhookProvider
from orderbook_notifier.providers.s3_webhook_provider import S3WebhookProvider, build_webhook_provider

__all__ = [
    "WebhookEndpointSource",
    "BaseWebhookProvider",
    "JsonWebhookProvider",
    "S3WebhookProvider",
    "build_webhook_provider",
]
