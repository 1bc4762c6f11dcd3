"""
Webhook routing models.

The routing document is owned by an operator and stored as JSON in S3. Its wire
format keeps the catch-all list under ``"*"`` and the per-dimension rules under
``"filter"``; the camel-case names are accepted as well.
"""

from enum import Enum
from typing import Annotated, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class FilterField(str, Enum):
    """Order attributes webhooks can subscribe to, in matching order."""

    FILLER = 'filler'
    ORDER_STATUS = 'orderStatus'
    OFFERER = 'offerer'


class Webhook(BaseModel):
    """A registered webhook endpoint. Identity is the url alone."""

    model_config = ConfigDict(frozen=True)

    url: Annotated[str, Field(
        min_length=1,
        description='Endpoint receiving the order notification POST',
        examples=['https://filler.example.com/orders']
    )]

    headers: Annotated[Optional[Dict[str, str]], Field(
        default=None,
        description='Extra headers sent with every notification to this endpoint'
    )] = None


WebhookRules = Dict[str, List[Webhook]]


class WebhookFilterMapping(BaseModel):
    """Dimension value to endpoint lists, one mapping per filter dimension."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    filler: WebhookRules = Field(default_factory=dict)
    order_status: WebhookRules = Field(default_factory=dict, alias='orderStatus')
    offerer: WebhookRules = Field(default_factory=dict)

    def rules_for(self, field: FilterField) -> WebhookRules:
        if field is FilterField.FILLER:
            return self.filler
        if field is FilterField.ORDER_STATUS:
            return self.order_status
        return self.offerer


class WebhookDefinition(BaseModel):
    """Routing rule document: catch-all endpoints plus per-dimension rules."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    catch_all: List[Webhook] = Field(
        default_factory=list,
        validation_alias=AliasChoices('*', 'catchAll', 'catch_all'),
        serialization_alias='*',
        description='Webhooks notified on every order update',
    )

    filter_rules: WebhookFilterMapping = Field(
        default_factory=WebhookFilterMapping,
        validation_alias=AliasChoices('filter', 'filterRules', 'filter_rules'),
        serialization_alias='filter',
        description='Webhooks notified when the filter condition is matched',
    )
