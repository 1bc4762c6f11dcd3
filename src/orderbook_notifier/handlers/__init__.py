"""
AWS Lambda Handlers Module.

This module contains the Lambda handlers that serve as entry points for the
order notification service:

- order_notification_handler: consumes the orders table DynamoDB stream and
  notifies registered filler webhooks

The handlers use AWS Lambda Powertools for:
- Structured logging with Lambda context
- Distributed tracing with X-Ray
- Custom metrics collection
- Partial batch responses for stream processing
"""

from orderbook_notifier.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
