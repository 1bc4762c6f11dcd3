"""
Order staleness telemetry.

Measures how far behind its auction clock an order is by the time its
notification goes out, and how long the stream took to deliver the record.
Dutch_V2 auctions decay over time; Dutch_V3 and Priority auctions are block
based. These metrics have no effect on notification flow.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional

from aws_lambda_powertools.metrics import MetricUnit

from orderbook_notifier.constants import STALE_ORDER_THRESHOLD_BLOCKS, STALE_ORDER_THRESHOLD_SECONDS
from orderbook_notifier.handlers.utils.observability import MetricName, WebhookLogger, metrics
from orderbook_notifier.models.order import OrderType, ParsedOrder
from orderbook_notifier.providers.block_number import BlockNumberSource


@dataclass
class OrderStaleness:
    """Staleness measured for one order."""

    order_type: OrderType
    auction_lag: Optional[float] = None
    auction_lag_unit: Optional[str] = None
    insertion_lag_seconds: Optional[float] = None
    is_stale: bool = False


def _auction_lag(
    order: ParsedOrder,
    now: float,
    block_numbers: Optional[BlockNumberSource],
) -> tuple[Optional[float], Optional[str]]:
    if order.order_type is OrderType.DUTCH_V2:
        if order.decay_start_time is None:
            return None, None
        return now - order.decay_start_time, 'seconds'

    if order.order_type is OrderType.DUTCH_V3:
        start_block = order.decay_start_block
    elif order.order_type is OrderType.PRIORITY:
        start_block = order.auction_start_block
    else:
        return None, None

    if start_block is None or block_numbers is None:
        return None, None
    return block_numbers.get_block_number(order.chain_id) - start_block, 'blocks'


def measure_order_staleness(
    order: ParsedOrder,
    block_numbers: Optional[BlockNumberSource] = None,
    clock: Callable[[], float] = time.time,
    threshold_seconds: int = STALE_ORDER_THRESHOLD_SECONDS,
    threshold_blocks: int = STALE_ORDER_THRESHOLD_BLOCKS,
) -> Optional[OrderStaleness]:
    """
    Measure staleness for order types with an auction clock.

    Returns:
        The measurement, or None for order types without staleness telemetry
    """
    if order.order_type not in (OrderType.DUTCH_V2, OrderType.DUTCH_V3, OrderType.PRIORITY):
        return None

    now = clock()
    auction_lag, unit = _auction_lag(order, now, block_numbers)
    insertion_lag = None
    if order.approximate_creation_time is not None:
        insertion_lag = now - order.approximate_creation_time

    is_stale = False
    if auction_lag is not None:
        threshold = threshold_seconds if unit == 'seconds' else threshold_blocks
        is_stale = auction_lag > threshold
    if insertion_lag is not None and insertion_lag > threshold_seconds:
        is_stale = True

    return OrderStaleness(
        order_type=order.order_type,
        auction_lag=auction_lag,
        auction_lag_unit=unit,
        insertion_lag_seconds=insertion_lag,
        is_stale=is_stale,
    )


def record_order_staleness(
    order: ParsedOrder,
    log: WebhookLogger,
    block_numbers: Optional[BlockNumberSource] = None,
    clock: Callable[[], float] = time.time,
    threshold_seconds: int = STALE_ORDER_THRESHOLD_SECONDS,
    threshold_blocks: int = STALE_ORDER_THRESHOLD_BLOCKS,
) -> Optional[OrderStaleness]:
    """Measure and emit staleness metrics; measurement errors are logged, never raised."""
    try:
        staleness = measure_order_staleness(
            order,
            block_numbers=block_numbers,
            clock=clock,
            threshold_seconds=threshold_seconds,
            threshold_blocks=threshold_blocks,
        )
    except Exception as e:
        log.warning('Failed to measure order staleness', extra={'orderHash': order.order_hash, 'error': str(e)})
        return None

    if staleness is None:
        return None

    type_value = staleness.order_type.value
    if staleness.auction_lag is not None:
        unit = MetricUnit.Seconds if staleness.auction_lag_unit == 'seconds' else MetricUnit.Count
        metrics.add_metric(
            name=MetricName.order_staleness(order.chain_id, type_value),
            unit=unit,
            value=staleness.auction_lag,
        )
    if staleness.insertion_lag_seconds is not None:
        metrics.add_metric(
            name=MetricName.insertion_staleness(order.chain_id, type_value),
            unit=MetricUnit.Seconds,
            value=staleness.insertion_lag_seconds,
        )
    if staleness.is_stale:
        metrics.add_metric(name=MetricName.stale_order(order.chain_id, type_value), unit=MetricUnit.Count, value=1)
        log.warning(
            'Stale order notification',
            extra={
                'orderHash': order.order_hash,
                'orderType': type_value,
                'auctionLag': staleness.auction_lag,
                'auctionLagUnit': staleness.auction_lag_unit,
                'insertionLagSeconds': staleness.insertion_lag_seconds,
            },
        )
    return staleness
