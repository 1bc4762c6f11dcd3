"""
Input models for the order notification stream handler.

Only the batch structure is checked here. Record contents are read later, one
record at a time, so a malformed order fails its own record and not the batch.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class StreamRecordInput(BaseModel):
    """A single DynamoDB stream record."""

    model_config = ConfigDict(extra='allow')

    eventName: str = Field(min_length=1, description='INSERT, MODIFY or REMOVE')
    dynamodb: Dict[str, Any] = Field(description='Stream record body holding the order image')


class OrderNotificationInput(BaseModel):
    """A batch of stream records delivered to the handler."""

    model_config = ConfigDict(extra='allow')

    Records: List[StreamRecordInput]
