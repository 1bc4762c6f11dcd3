"""
Business logic for order notifications.

- endpoint_matcher: resolves webhooks for an order from a routing document
- webhook_dispatcher: best-effort concurrent POST fan-out
- order_parser: reads stream records into typed orders
- staleness: auction clock telemetry per order type
- exclusive_filler: immediate notification of an order's exclusive filler
"""
