"""
Integration tests for the order notification stream handler.

Stream batches run through the real batch processor, endpoint matching and
dispatcher; only the webhook endpoints themselves are mocked.
"""

import json
from unittest.mock import Mock, patch

import httpx
import pytest

from conftest import make_stream_record
from orderbook_notifier.handlers import order_notification_handler as handler_module
from orderbook_notifier.handlers.order_notification_handler import (
    OrderNotificationRecordHandler,
    handle_order_notification_event,
)
from orderbook_notifier.handlers.utils.errors import OrderNotificationInputValidationError
from orderbook_notifier.providers import JsonWebhookProvider

EXPECTED_URLS = sorted([
    "https://catchall.example.com/0",
    "https://filler.example.com/1",
    "https://status.example.com/open",
    "https://offerer.example.com/4",
])


@pytest.fixture
def webhook_client(make_http_client):
    return make_http_client(lambda request: httpx.Response(200))


@pytest.fixture
def record_handler(webhook_document, webhook_client, mock_logger):
    client, _ = webhook_client
    return OrderNotificationRecordHandler(
        webhook_provider=JsonWebhookProvider.create(webhook_document),
        log=mock_logger,
        client=client,
    )


def stream_event(*records):
    return {"Records": list(records)}


class TestHandleOrderNotificationEvent:
    """Integration tests for handle_order_notification_event."""

    def test_notifies_every_matching_webhook(self, record_handler, webhook_client, stream_record, lambda_context):
        _, transport = webhook_client

        response = handle_order_notification_event(stream_event(stream_record), lambda_context, record_handler)

        assert response == {"batchItemFailures": []}
        assert sorted(transport.urls) == EXPECTED_URLS

        body = json.loads(transport.requests[0].content)
        assert body["orderHash"] == "0xa2444ef606a0d99809e1878f7b819541618f2b7990bb9a7275996b362680cae3"
        assert body["offerer"] == "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
        assert body["type"] == "Dutch_V2"
        assert "notifiedAt" in body

    def test_malformed_record_fails_alone(self, record_handler, webhook_client, order_image, mock_logger, lambda_context):
        _, transport = webhook_client
        event = stream_event(
            make_stream_record(order_image, sequence_number="100"),
            make_stream_record(image=None, sequence_number="200"),
            make_stream_record(order_image, sequence_number="300"),
        )

        response = handle_order_notification_event(event, lambda_context, record_handler)

        assert response == {"batchItemFailures": [{"itemIdentifier": "200"}]}
        assert len(transport.requests) == 2 * len(EXPECTED_URLS)

        args, kwargs = mock_logger.error.call_args
        assert args[0] == "Unexpected failure in handler."
        assert kwargs["extra"]["sequenceNumber"] == "200"
        assert kwargs["extra"]["error"]["message"] == "There is no new order."

    def test_block_staleness_is_measured_after_delivery(self, webhook_document, webhook_client, mock_logger, order_image, lambda_context):
        client, transport = webhook_client
        requests_sent_at_lookup = []

        def get_block_number(chain_id):
            requests_sent_at_lookup.append(len(transport.requests))
            return 110

        block_numbers = Mock()
        block_numbers.get_block_number.side_effect = get_block_number
        handler = OrderNotificationRecordHandler(
            webhook_provider=JsonWebhookProvider.create(webhook_document),
            log=mock_logger,
            client=client,
            block_numbers=block_numbers,
        )
        order_image["type"] = {"S": "Dutch_V3"}
        order_image["cosignerData"] = {"M": {"decayStartBlock": {"N": "100"}}}

        response = handle_order_notification_event(stream_event(make_stream_record(order_image)), lambda_context, handler)

        assert response == {"batchItemFailures": []}
        assert requests_sent_at_lookup == [len(EXPECTED_URLS)]
        assert mock_logger.warning.call_args.args[0] == "Stale order notification"

    def test_unknown_order_type_fails_record(self, record_handler, order_image, lambda_context):
        order_image["type"] = {"S": "Dutch_V9"}

        response = handle_order_notification_event(
            stream_event(make_stream_record(order_image, sequence_number="9")), lambda_context, record_handler,
        )

        assert response == {"batchItemFailures": [{"itemIdentifier": "9"}]}

    def test_delivery_failures_do_not_fail_the_record(self, webhook_document, make_http_client, mock_logger, stream_record, lambda_context):
        client, transport = make_http_client(lambda request: httpx.Response(500))
        handler = OrderNotificationRecordHandler(
            webhook_provider=JsonWebhookProvider.create(webhook_document), log=mock_logger, client=client,
        )

        response = handle_order_notification_event(stream_event(stream_record), lambda_context, handler)

        assert response == {"batchItemFailures": []}
        assert len(transport.requests) == len(EXPECTED_URLS)
        args, kwargs = mock_logger.error.call_args
        assert args[0] == "Error: Failed to notify registered webhooks."
        assert sorted(kwargs["extra"]["failedWebhooks"]) == EXPECTED_URLS

    def test_provider_failure_fails_every_record(self, mock_logger, order_image, lambda_context):
        provider = Mock()
        provider.get_endpoints.side_effect = RuntimeError("routing document unavailable")
        handler = OrderNotificationRecordHandler(webhook_provider=provider, log=mock_logger)
        event = stream_event(
            make_stream_record(order_image, sequence_number="1"),
            make_stream_record(order_image, sequence_number="2"),
        )

        response = handle_order_notification_event(event, lambda_context, handler)

        assert response == {"batchItemFailures": [{"itemIdentifier": "1"}, {"itemIdentifier": "2"}]}
        assert mock_logger.error.call_args.kwargs["extra"]["error"] == "routing document unavailable"

    def test_empty_batch(self, record_handler, webhook_client, lambda_context):
        _, transport = webhook_client

        assert handle_order_notification_event({"Records": []}, lambda_context, record_handler) == {"batchItemFailures": []}
        assert transport.requests == []

    @pytest.mark.parametrize("event", [{}, {"Records": "not-a-list"}, {"Records": [{"dynamodb": {}}]}])
    def test_malformed_batch_raises(self, record_handler, lambda_context, event):
        with pytest.raises(OrderNotificationInputValidationError):
            handle_order_notification_event(event, lambda_context, record_handler)


def test_lambda_handler(record_handler, webhook_client, stream_record, lambda_context):
    _, transport = webhook_client

    with patch.object(handler_module, "record_handler", record_handler):
        response = handler_module.lambda_handler(stream_event(stream_record), lambda_context)

    assert response == {"batchItemFailures": []}
    assert sorted(transport.urls) == EXPECTED_URLS
