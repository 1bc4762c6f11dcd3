"""
Pytest configuration and shared fixtures for the order notification service.

This module provides common test fixtures and configuration used across
unit and integration tests.
"""

import os
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import Mock

import httpx
import pytest

# Test environment configuration, applied at import time because handler
# modules read their configuration when they are first imported
TEST_ENVIRONMENT = {
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "test",
    "AWS_SECRET_ACCESS_KEY": "test",
    "STAGE": "beta",
    "POWERTOOLS_SERVICE_NAME": "test-order-notifier",
    "POWERTOOLS_METRICS_NAMESPACE": "TestOrderNotifier",
    "LOG_LEVEL": "DEBUG",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
}
os.environ.update(TEST_ENVIRONMENT)

from orderbook_notifier.models.webhook import WebhookDefinition  # noqa: E402


@pytest.fixture(autouse=True)
def reset_metrics():
    """Drop metrics buffered by the shared Metrics instance between tests."""
    from orderbook_notifier.handlers.utils.observability import metrics

    metrics.clear_metrics()
    yield
    metrics.clear_metrics()


# Order fixtures, images are in DynamoDB attribute-value encoding
MOCK_ORDER_IMAGE: Dict[str, Any] = {
    "signature": {
        "S": "0x1c33da80f46194b0db3398de4243d695dfa5049c4cc341e80f5b630804a47f2f52b9d16cb65b2a2d8ed073da4b295c7cb3ccc13a49a16a07ad80b796c31b283414",
    },
    "offerer": {"S": "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"},
    "orderStatus": {"S": "open"},
    "encodedOrder": {"S": "0x00000000001325ad66ad5fa02621d3ad52c9323c6c2bff26820000000"},
    "createdAt": {"N": "1670976836865"},
    "filler": {"S": "0x1111111111111111111111111111111111111111"},
    "orderHash": {"S": "0xa2444ef606a0d99809e1878f7b819541618f2b7990bb9a7275996b362680cae3"},
    "chainId": {"N": "1"},
    "type": {"S": "Dutch_V2"},
    "quoteId": {"S": "quote-1"},
}


def make_stream_record(
    image: Optional[Dict[str, Any]] = None,
    sequence_number: str = "1",
    event_name: str = "INSERT",
    approximate_creation_time: Optional[int] = None,
) -> Dict[str, Any]:
    """Build a raw DynamoDB stream record around an order image."""
    dynamodb: Dict[str, Any] = {
        "SequenceNumber": sequence_number,
        "Keys": {"orderHash": {"S": "0x1"}},
        "StreamViewType": "NEW_IMAGE",
    }
    if image is not None:
        dynamodb["NewImage"] = image
    if approximate_creation_time is not None:
        dynamodb["ApproximateCreationDateTime"] = approximate_creation_time
    return {
        "eventID": f"event-{sequence_number}",
        "eventName": event_name,
        "eventSource": "aws:dynamodb",
        "awsRegion": "us-east-1",
        "dynamodb": dynamodb,
    }


@pytest.fixture
def order_image() -> Dict[str, Any]:
    return {key: dict(value) for key, value in MOCK_ORDER_IMAGE.items()}


@pytest.fixture
def stream_record(order_image) -> Dict[str, Any]:
    return make_stream_record(order_image)


@pytest.fixture
def webhook_document() -> Dict[str, Any]:
    """Routing document in the operator's wire format."""
    return {
        "filter": {
            "filler": {"0x1111111111111111111111111111111111111111": [{"url": "https://filler.example.com/1"}]},
            "orderStatus": {"open": [{"url": "https://status.example.com/open"}, {"url": "https://filler.example.com/1"}]},
            "offerer": {"0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045": [{"url": "https://offerer.example.com/4"}]},
        },
        "*": [{"url": "https://catchall.example.com/0"}],
        "registeredWebhook": {},
    }


@pytest.fixture
def webhook_definition(webhook_document) -> WebhookDefinition:
    return WebhookDefinition.model_validate(webhook_document)


@pytest.fixture
def mock_logger() -> Mock:
    """Logger double exposing the methods the webhook components call."""
    return Mock(spec=["info", "warning", "error", "debug", "exception"])


class RecordingTransport:
    """Collects requests sent through an httpx client and answers them."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def urls(self) -> List[str]:
        return [str(request.url) for request in self.requests]


@pytest.fixture
def make_http_client():
    """Build an httpx client whose requests are answered by ``responder``."""
    clients = []

    def factory(responder: Callable[[httpx.Request], httpx.Response]):
        transport = RecordingTransport(responder)
        client = httpx.Client(transport=httpx.MockTransport(transport))
        clients.append(client)
        return client, transport

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock()
    context.function_name = "test-order-notification"
    context.function_version = "1"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-order-notification"
    context.memory_limit_in_mb = "512"
    context.aws_request_id = "test-request-id-123"
    context.log_group_name = "/aws/lambda/test-order-notification"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
