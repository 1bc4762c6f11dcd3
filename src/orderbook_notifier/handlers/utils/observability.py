"""
Centralized observability utilities for the order notification handlers.

This module provides configured instances of AWS Lambda Powertools for logging,
tracing, and metrics collection, plus the metric names emitted by the service.
"""

from typing import Any, Protocol

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

METRICS_NAMESPACE = 'OrderNotifier'

# JSON output format, service name can be set by environment variable "POWERTOOLS_SERVICE_NAME"
logger: Logger = Logger()

# Service name can be set by environment variable "POWERTOOLS_SERVICE_NAME"
# Disabled by setting POWERTOOLS_TRACE_DISABLED to "True"
tracer: Tracer = Tracer()

# Namespace and service name can be set by environment variables:
# - POWERTOOLS_METRICS_NAMESPACE
# - POWERTOOLS_SERVICE_NAME
metrics = Metrics(namespace=METRICS_NAMESPACE)


class WebhookLogger(Protocol):
    """Logging capability consumed by the webhook components."""

    def info(self, msg: object, *args: Any, **kwargs: Any) -> Any: ...

    def warning(self, msg: object, *args: Any, **kwargs: Any) -> Any: ...

    def error(self, msg: object, *args: Any, **kwargs: Any) -> Any: ...


class MetricName:
    """Metric names, dimensioned by chain and order type through the name suffix."""

    HANDLER_FAILURE = 'OrderNotificationHandlerFailure'
    GET_ENDPOINTS_LATENCY = 'GetEndpointsLatency'
    IMMEDIATE_NOTIFICATION_DURATION = 'ImmediateExclusiveFillerNotificationDuration'
    IMMEDIATE_NOTIFICATION_ATTEMPT = 'ImmediateExclusiveFillerNotificationAttempt'
    IMMEDIATE_NOTIFICATION_ERROR = 'ImmediateExclusiveFillerNotificationError'

    @staticmethod
    def _suffix(chain_id: int, order_type: str | None) -> str:
        return f'chain-{chain_id}-type-{order_type or "unknown"}'

    @staticmethod
    def attempt(chain_id: int, order_type: str | None) -> str:
        return f'OrderNotificationAttempt-{MetricName._suffix(chain_id, order_type)}'

    @staticmethod
    def success(chain_id: int, order_type: str | None) -> str:
        return f'OrderNotificationSendSuccess-{MetricName._suffix(chain_id, order_type)}'

    @staticmethod
    def failure(chain_id: int, order_type: str | None) -> str:
        return f'OrderNotificationSendFailure-{MetricName._suffix(chain_id, order_type)}'

    @staticmethod
    def order_staleness(chain_id: int, order_type: str) -> str:
        return f'NotificationOrderStaleness-{MetricName._suffix(chain_id, order_type)}'

    @staticmethod
    def insertion_staleness(chain_id: int, order_type: str) -> str:
        return f'NotificationInsertionStaleness-{MetricName._suffix(chain_id, order_type)}'

    @staticmethod
    def stale_order(chain_id: int, order_type: str) -> str:
        return f'NotificationStaleOrder-{MetricName._suffix(chain_id, order_type)}'
