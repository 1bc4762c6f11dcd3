"""
Output models for the order notification stream handler.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class BatchItemFailure(BaseModel):
    """A record the stream infrastructure should deliver again."""

    itemIdentifier: Optional[str] = Field(default=None, description='Stream sequence number of the failed record')


class BatchFailureResponse(BaseModel):
    """Partial batch response returned to the stream event source mapping."""

    batchItemFailures: List[BatchItemFailure] = Field(default_factory=list)

    @property
    def failed_identifiers(self) -> List[Optional[str]]:
        return [failure.itemIdentifier for failure in self.batchItemFailures]
