"""
Order Notification Handler - DynamoDB stream consumer.

Each change to the orders table arrives as a stream record. For every record
the handler reads the order, emits staleness telemetry, resolves the webhooks
registered for it and notifies them. Records are processed one after another;
a record that fails unexpectedly is reported back to the stream as a batch
item failure while its siblings carry on. Webhook delivery failures are
logged and counted but never fail a record.
"""

import time
from typing import Any, Dict, Optional

import httpx
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.batch import BatchProcessor, EventType, process_partial_response
from aws_lambda_powertools.utilities.data_classes.dynamo_db_stream_event import DynamoDBRecord
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from orderbook_notifier.constants import (
    STALE_ORDER_THRESHOLD_BLOCKS,
    STALE_ORDER_THRESHOLD_SECONDS,
    WEBHOOK_TIMEOUT_SECONDS,
)
from orderbook_notifier.handlers.models.env_vars import get_handler_env_vars
from orderbook_notifier.handlers.utils.errors import BaseServiceError, OrderNotificationInputValidationError
from orderbook_notifier.handlers.utils.observability import MetricName, WebhookLogger, logger, metrics, tracer
from orderbook_notifier.logic.order_parser import event_record_to_order
from orderbook_notifier.logic.staleness import record_order_staleness
from orderbook_notifier.logic.webhook_dispatcher import send_webhook_notifications
from orderbook_notifier.models.input import OrderNotificationInput
from orderbook_notifier.models.output import BatchFailureResponse
from orderbook_notifier.providers import build_webhook_provider
from orderbook_notifier.providers.base import WebhookEndpointSource
from orderbook_notifier.providers.block_number import BlockNumberSource, RpcBlockNumberProvider


def validate_input(event: Dict[str, Any]) -> OrderNotificationInput:
    """
    Check the batch structure before any record is processed.

    Raises:
        OrderNotificationInputValidationError: If the batch is malformed; the whole
            invocation fails and the stream retries the batch
    """
    try:
        return OrderNotificationInput.model_validate(event)
    except ValidationError as e:
        logger.info("Input failed validation", extra={"validation_errors": str(e), "error_count": e.error_count()})
        raise OrderNotificationInputValidationError(f"Input failed validation: {e}") from e


class OrderNotificationRecordHandler:
    """Notifies the registered webhooks about a single stream record."""

    def __init__(
        self,
        webhook_provider: WebhookEndpointSource,
        log: WebhookLogger = logger,
        client: Optional[httpx.Client] = None,
        block_numbers: Optional[BlockNumberSource] = None,
        timeout_seconds: float = WEBHOOK_TIMEOUT_SECONDS,
        stale_threshold_seconds: int = STALE_ORDER_THRESHOLD_SECONDS,
        stale_threshold_blocks: int = STALE_ORDER_THRESHOLD_BLOCKS,
    ) -> None:
        self.webhook_provider = webhook_provider
        self.log = log
        self.client = client
        self.block_numbers = block_numbers
        self.timeout_seconds = timeout_seconds
        self.stale_threshold_seconds = stale_threshold_seconds
        self.stale_threshold_blocks = stale_threshold_blocks

    def __call__(self, record: DynamoDBRecord) -> None:
        sequence_number = record.dynamodb.sequence_number if record.dynamodb else None
        try:
            self._notify(record)
        except Exception as e:
            metrics.add_metric(name=MetricName.HANDLER_FAILURE, unit=MetricUnit.Count, value=1)
            self.log.error(
                "Unexpected failure in handler.",
                extra={
                    "sequenceNumber": sequence_number,
                    "eventName": record.event_name,
                    "error": e.to_dict() if isinstance(e, BaseServiceError) else str(e),
                },
            )
            raise

    @tracer.capture_method
    def _notify(self, record: DynamoDBRecord) -> None:
        order = event_record_to_order(record)

        start_time = time.time()
        endpoints = self.webhook_provider.get_endpoints(order.to_filter())
        metrics.add_metric(
            name=MetricName.GET_ENDPOINTS_LATENCY,
            unit=MetricUnit.Milliseconds,
            value=(time.time() - start_time) * 1000,
        )

        send_webhook_notifications(
            endpoints,
            order.to_webhook_order(),
            self.log,
            client=self.client,
            timeout_seconds=self.timeout_seconds,
        )

        # measured as of dispatch; block lookups must not delay delivery
        record_order_staleness(
            order,
            self.log,
            block_numbers=self.block_numbers,
            clock=lambda: start_time,
            threshold_seconds=self.stale_threshold_seconds,
            threshold_blocks=self.stale_threshold_blocks,
        )


def handle_order_notification_event(
    event: Dict[str, Any],
    context: Optional[LambdaContext],
    record_handler: OrderNotificationRecordHandler,
    processor: Optional[BatchProcessor] = None,
) -> Dict[str, Any]:
    """
    Process a batch of order stream records.

    Args:
        event: DynamoDB stream event
        context: Lambda context
        record_handler: Handler invoked for every record, in order
        processor: Batch processor, a fresh DynamoDB stream processor when omitted

    Returns:
        Partial batch response listing the records to deliver again
    """
    batch = validate_input(event)
    if not batch.Records:
        return BatchFailureResponse().model_dump()

    processor = processor or BatchProcessor(
        event_type=EventType.DynamoDBStreams,
        raise_on_entire_batch_failure=False,
    )
    response = process_partial_response(
        event=event,
        record_handler=record_handler,
        processor=processor,
        context=context,
    )
    result = BatchFailureResponse.model_validate(response)

    logger.info(
        "Processed order notification batch",
        extra={"record_count": len(batch.Records), "failed_records": result.failed_identifiers},
    )
    return result.model_dump()


# Initialize service dependencies once per container
env_vars = get_handler_env_vars()
webhook_provider = build_webhook_provider(env_vars)
record_handler = OrderNotificationRecordHandler(
    webhook_provider=webhook_provider,
    block_numbers=RpcBlockNumberProvider.from_environment(),
    timeout_seconds=env_vars.webhook_timeout_seconds,
    stale_threshold_seconds=env_vars.STALE_ORDER_THRESHOLD_SECONDS,
    stale_threshold_blocks=env_vars.STALE_ORDER_THRESHOLD_BLOCKS,
)


@logger.inject_lambda_context
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda entry point for the orders table stream.

    Args:
        event: DynamoDB stream event
        context: Lambda context object

    Returns:
        Partial batch response dictionary
    """
    return handle_order_notification_event(event, context, record_handler)
