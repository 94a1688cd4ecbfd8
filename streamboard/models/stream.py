"""Stream payload and publish API models."""

from typing import Optional, Union
from pydantic import BaseModel, Field, ConfigDict


class DataStream(BaseModel):
    """A single encoded record addressed to a stream."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="bytes32 stream id, 0x-prefixed hex")
    schemaId: str = Field(description="bytes32 schema id, 0x-prefixed hex")
    data: bytes = Field(description="ABI-encoded record")


class PublishRequest(BaseModel):
    """
    Body of POST /api/publish.

    Fields are optional so a missing one can be reported with the
    service's own 400 message rather than a framework validation error.
    """
    player: Optional[str] = None
    score: Optional[Union[int, str]] = None
    playTime: Optional[Union[int, str]] = None


class PublishResponse(BaseModel):
    success: bool = True
    txHash: str


class SchemaResponse(BaseModel):
    schemaId: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
