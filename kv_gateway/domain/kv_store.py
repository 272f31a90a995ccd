"""
Key-Value Store Domain Model

Defines KV Store related Data Transfer Objects (DTOs).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class KeyValue(BaseModel):
    """Key-Value Pair"""

    key: str = Field(..., description="Key")
    value: str = Field(..., description="Value")

    model_config = ConfigDict(from_attributes=True)


class KeyValueRecord(KeyValue):
    """Key-Value pair as written, with its expiration"""

    expires_at: datetime = Field(..., description="Expiration Time (UTC)")


class KeyRef(BaseModel):
    """Request body naming a single key"""

    key: str = Field(..., description="Key")


class MessageResponse(BaseModel):
    """Plain acknowledgement"""

    message: str


class KeyStoredResponse(MessageResponse):
    """Acknowledgement of a write"""

    key: str
    expires_at: datetime


class FetchAllResult(BaseModel):
    """
    Full Enumeration Result

    `items` keeps scan order; duplicates reported by the scan are kept.
    Keys omitted during the value fetch are listed in `missing` (gone by the
    time they were read) or `failed` (the read raised a store error).
    """

    items: list[KeyValue] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when every scanned key was returned with its value."""
        return not self.missing and not self.failed
