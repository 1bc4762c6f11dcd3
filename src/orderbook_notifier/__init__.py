"""
Order Notifier Service Module.

This package notifies registered filler webhooks about order book changes:

- handlers: Lambda entry points and observability utilities
- logic: Endpoint matching, webhook dispatch and order telemetry
- providers: Routing document sources and block number lookups
- models: Data models and schemas

The service is designed with serverless best practices including:
- Comprehensive observability with AWS Lambda Powertools
- Input validation with Pydantic models
- Time-bounded caching of externally stored configuration
- Best-effort concurrent webhook delivery
"""

__version__ = "1.0.0"
__description__ = "Order book webhook notification service"

from orderbook_notifier.handlers.utils.observability import logger, metrics, tracer

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
