"""
Order models shared by the notification components.

``ParsedOrder`` is what a stream record is read into. ``WebhookOrderData`` is
the canonical payload sent to fillers; it renames ``swapper`` to ``offerer``
to keep the external webhook contract stable.
"""

from enum import Enum
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderType(str, Enum):
    """Order variants carried on the order book."""

    DUTCH = 'Dutch'
    DUTCH_V2 = 'Dutch_V2'
    DUTCH_V3 = 'Dutch_V3'
    PRIORITY = 'Priority'
    LIMIT = 'Limit'
    # legacy combined label still present on older records
    DUTCH_V1_V2 = 'Dutch_V1_V2'


# Only catch-all webhooks are notified for these
CATCH_ALL_ONLY_ORDER_TYPES = frozenset({OrderType.LIMIT, OrderType.DUTCH_V1_V2})


class OrderFilter(BaseModel):
    """Order attributes used to resolve the webhooks to notify."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    offerer: Optional[str] = None
    order_status: Optional[str] = Field(default=None, alias='orderStatus')
    filler: Optional[str] = None
    order_type: Optional[OrderType] = Field(default=None, alias='orderType')


class ParsedOrder(BaseModel):
    """Typed view of the order image carried by a stream record."""

    order_hash: str
    created_at: int
    signature: str
    swapper: str
    order_status: str
    encoded_order: str
    chain_id: int
    order_type: Optional[OrderType] = None
    quote_id: Optional[str] = None
    filler: Optional[str] = None

    # auction clock attributes, only used for telemetry
    decay_start_time: Optional[int] = None
    decay_start_block: Optional[int] = None
    auction_start_block: Optional[int] = None

    # epoch seconds the record was written to the table
    approximate_creation_time: Optional[int] = None

    def to_filter(self) -> OrderFilter:
        return OrderFilter(
            offerer=self.swapper,
            order_status=self.order_status,
            filler=self.filler,
            order_type=self.order_type,
        )

    def to_webhook_order(self) -> 'WebhookOrderData':
        return WebhookOrderData(
            order_hash=self.order_hash,
            created_at=self.created_at,
            signature=self.signature,
            offerer=self.swapper,
            order_status=self.order_status,
            encoded_order=self.encoded_order,
            chain_id=self.chain_id,
            order_type=self.order_type.value if self.order_type else None,
            quote_id=self.quote_id,
            filler=self.filler,
        )


class WebhookOrderData(BaseModel):
    """Canonical order payload delivered to filler webhooks."""

    order_hash: Annotated[str, Field(description='Order hash', examples=['0xa2444ef6...'])]
    created_at: Annotated[int, Field(description='Creation time in epoch ms')]
    signature: str
    offerer: Annotated[str, Field(description='Address that created and signed the order')]
    order_status: str
    encoded_order: str
    chain_id: int
    order_type: Optional[str] = None
    quote_id: Optional[str] = None
    filler: Optional[str] = None

    def to_request_body(self, notified_at: int) -> Dict[str, Any]:
        """
        Build the JSON body POSTed to a webhook.

        Optional fields that are not set are left out of the body.

        Args:
            notified_at: Epoch ms at which the notification is sent

        Returns:
            Request body dictionary
        """
        body: Dict[str, Any] = {
            'orderHash': self.order_hash,
            'createdAt': self.created_at,
            'signature': self.signature,
            'offerer': self.offerer,
            'orderStatus': self.order_status,
            'encodedOrder': self.encoded_order,
            'chainId': self.chain_id,
        }
        if self.order_type is not None:
            body['type'] = self.order_type
        if self.quote_id is not None:
            body['quoteId'] = self.quote_id
        if self.filler is not None:
            body['filler'] = self.filler
        body['notifiedAt'] = notified_at
        return body


class ExclusiveFillerWebhookOrder(WebhookOrderData):
    """Webhook order whose exclusive filler is guaranteed to be set."""

    filler: str
