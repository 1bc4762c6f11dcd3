"""
Webhook dispatcher.

Fans a single order notification out to every resolved endpoint at once.
Delivery is best effort: every endpoint gets exactly one POST with its own
timeout, failures are logged and counted, and nothing is retried.
"""

import random
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Dict, List, Optional, Sequence

import httpx
from aws_lambda_powertools.metrics import MetricUnit

from orderbook_notifier.constants import WEBHOOK_TIMEOUT_SECONDS
from orderbook_notifier.handlers.utils.observability import MetricName, WebhookLogger, metrics, tracer
from orderbook_notifier.models.order import WebhookOrderData
from orderbook_notifier.models.webhook import Webhook

_http_client: Optional[httpx.Client] = None


def get_http_client() -> httpx.Client:
    """Shared client reused across invocations of a warm Lambda container."""
    global _http_client

    if _http_client is None:
        _http_client = httpx.Client(timeout=WEBHOOK_TIMEOUT_SECONDS)
    return _http_client


def _is_successful_status(status_code: int) -> bool:
    return 200 <= status_code <= 202


def _post_webhook(client: httpx.Client, endpoint: Webhook, body: Dict, timeout_seconds: float) -> httpx.Response:
    return client.post(endpoint.url, json=body, headers=endpoint.headers or {}, timeout=timeout_seconds)


@tracer.capture_method
def send_webhook_notifications(
    endpoints: Sequence[Webhook],
    order: WebhookOrderData,
    log: WebhookLogger,
    client: Optional[httpx.Client] = None,
    timeout_seconds: float = WEBHOOK_TIMEOUT_SECONDS,
) -> None:
    """
    Notify every endpoint about an order.

    Endpoints are shuffled so no filler is systematically notified first. All
    POSTs run concurrently and are awaited together; a slow or failing
    endpoint never blocks or cancels the others. An attempt succeeds when the
    call completes within ``timeout_seconds`` with a status between 200 and
    202. Attempts still running at the deadline are abandoned as failures.

    Args:
        endpoints: Webhooks to notify
        order: Canonical order payload
        log: Logger receiving per-endpoint and aggregate results
        client: HTTP client, the shared client when omitted
        timeout_seconds: Timeout applied to each POST
    """
    if not endpoints:
        return

    shuffled = list(endpoints)
    random.shuffle(shuffled)

    client = client or get_http_client()
    body = order.to_request_body(notified_at=int(time.time() * 1000))

    executor = ThreadPoolExecutor(max_workers=len(shuffled))
    futures: Dict[Future, Webhook] = {
        executor.submit(_post_webhook, client, endpoint, body, timeout_seconds): endpoint
        for endpoint in shuffled
    }
    # httpx timeouts bound each connect/read/write step, the deadline bounds the whole attempt
    done, _ = wait(futures, timeout=timeout_seconds)
    executor.shutdown(wait=False, cancel_futures=True)

    failed_webhooks: List[str] = []
    for future, endpoint in futures.items():
        metrics.add_metric(name=MetricName.attempt(order.chain_id, order.order_type), unit=MetricUnit.Count, value=1)

        response = None
        if future in done and future.exception() is None:
            response = future.result()

        if response is not None and _is_successful_status(response.status_code):
            metrics.add_metric(name=MetricName.success(order.chain_id, order.order_type), unit=MetricUnit.Count, value=1)
            log.info(
                f'Success: New order record sent to registered webhook {endpoint.url}.',
                extra={'orderHash': order.order_hash, 'status': response.status_code},
            )
            continue

        metrics.add_metric(name=MetricName.failure(order.chain_id, order.order_type), unit=MetricUnit.Count, value=1)
        failed_webhooks.append(endpoint.url)

    if failed_webhooks:
        log.error(
            'Error: Failed to notify registered webhooks.',
            extra={'orderHash': order.order_hash, 'failedWebhooks': failed_webhooks},
        )
