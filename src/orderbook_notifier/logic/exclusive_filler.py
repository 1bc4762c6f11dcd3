"""
Immediate notification of an order's exclusive filler.

Called from the order submission path right after an order is stored, so the
exclusive filler hears about it without waiting for the stream. The caller is
latency sensitive: this path never raises.
"""

import time
from typing import Optional

import httpx
from aws_lambda_powertools.metrics import MetricUnit

from orderbook_notifier.handlers.utils.observability import MetricName, WebhookLogger, metrics
from orderbook_notifier.logic.webhook_dispatcher import send_webhook_notifications
from orderbook_notifier.models.order import ExclusiveFillerWebhookOrder, OrderType
from orderbook_notifier.providers.base import WebhookEndpointSource


def send_immediate_exclusive_filler_notification(
    order: ExclusiveFillerWebhookOrder,
    order_type: OrderType | str,
    provider: WebhookEndpointSource,
    log: WebhookLogger,
    client: Optional[httpx.Client] = None,
) -> None:
    """
    Notify the webhooks registered for the order's exclusive filler.

    The caller must only pass orders whose filler is a non-zero address.

    Args:
        order: Order payload with its exclusive filler set
        order_type: Type of the submitted order
        provider: Source of the filler's registered webhooks
        log: Logger for results and errors
        client: HTTP client, the shared client when omitted
    """
    start_time = time.time()
    try:
        endpoints = provider.get_exclusive_filler_endpoints(order.filler)
        if not endpoints:
            return

        type_value = order_type.value if isinstance(order_type, OrderType) else order_type
        payload = order.model_copy(update={'order_type': type_value})
        send_webhook_notifications(endpoints, payload, log, client=client)

        duration_ms = (time.time() - start_time) * 1000
        metrics.add_metric(name=MetricName.IMMEDIATE_NOTIFICATION_DURATION, unit=MetricUnit.Milliseconds, value=duration_ms)
        metrics.add_metric(name=MetricName.IMMEDIATE_NOTIFICATION_ATTEMPT, unit=MetricUnit.Count, value=len(endpoints))

        log.info(
            'Sent immediate webhook notification to exclusive filler',
            extra={
                'orderHash': order.order_hash,
                'filler': order.filler,
                'endpointCount': len(endpoints),
                'durationMs': duration_ms,
            },
        )
    except Exception as e:
        # never fail order submission because of webhook plumbing
        metrics.add_metric(name=MetricName.IMMEDIATE_NOTIFICATION_ERROR, unit=MetricUnit.Count, value=1)
        log.error(
            'Failed to send immediate webhook notification to exclusive filler',
            extra={'orderHash': order.order_hash, 'filler': order.filler, 'error': e},
        )
