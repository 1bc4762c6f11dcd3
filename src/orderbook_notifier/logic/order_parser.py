"""
Reads DynamoDB stream records into typed orders.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from aws_lambda_powertools.utilities.data_classes.dynamo_db_stream_event import DynamoDBRecord

from orderbook_notifier.handlers.utils.errors import OrderParseError, UnexpectedOrderTypeError
from orderbook_notifier.models.order import OrderType, ParsedOrder


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    return int(value)


def _optional_str(value: Any) -> Optional[str]:
    return value if value else None


def _order_type(value: Any) -> Optional[OrderType]:
    if not value:
        return None
    try:
        return OrderType(value)
    except ValueError:
        raise UnexpectedOrderTypeError(value)


def image_to_order(image: Dict[str, Any], approximate_creation_time: Optional[int] = None) -> ParsedOrder:
    """
    Build a ParsedOrder from a deserialized order image.

    Args:
        image: Order attributes with DynamoDB types already unwrapped
        approximate_creation_time: Epoch seconds the record was written, if known

    Returns:
        Parsed order

    Raises:
        OrderParseError: If a required attribute is missing or malformed
    """
    try:
        cosigner_data = image.get('cosignerData') or {}
        return ParsedOrder(
            order_hash=image['orderHash'],
            created_at=int(image['createdAt']),
            signature=image['signature'],
            swapper=image['offerer'],
            order_status=image['orderStatus'],
            encoded_order=image['encodedOrder'],
            chain_id=int(image['chainId']),
            order_type=_order_type(image.get('type')),
            quote_id=_optional_str(image.get('quoteId')),
            filler=_optional_str(image.get('filler')),
            decay_start_time=_optional_int(cosigner_data.get('decayStartTime', image.get('decayStartTime'))),
            decay_start_block=_optional_int(cosigner_data.get('decayStartBlock')),
            auction_start_block=_optional_int(cosigner_data.get('auctionTargetBlock', image.get('auctionStartBlock'))),
            approximate_creation_time=approximate_creation_time,
        )
    except OrderParseError:
        raise
    except Exception as e:
        reason = f"missing attribute {e}" if isinstance(e, KeyError) else str(e)
        raise OrderParseError(f"Error parsing new record to order: {reason}") from e


def event_record_to_order(record: DynamoDBRecord) -> ParsedOrder:
    """
    Read the post-change order image of a stream record.

    Raises:
        OrderParseError: If the record carries no new image or the image is malformed
    """
    stream_record = record.dynamodb
    if stream_record is None:
        raise OrderParseError("There is no new order.")

    try:
        image = stream_record.new_image
    except Exception as e:
        raise OrderParseError(f"Error parsing new record to order: {e}") from e

    if not image:
        raise OrderParseError("There is no new order.")

    approximate_creation_time = stream_record.approximate_creation_date_time
    if isinstance(approximate_creation_time, datetime):
        approximate_creation_time = int(approximate_creation_time.timestamp())
    elif approximate_creation_time is not None:
        approximate_creation_time = int(approximate_creation_time)

    return image_to_order(image, approximate_creation_time=approximate_creation_time)
