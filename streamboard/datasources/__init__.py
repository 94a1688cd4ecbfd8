from .base import StreamDataSource
from .memory import InMemoryStreamsDataSource
from .somnia import SomniaStreamsDataSource
from .schema import SchemaEncoder, stream_id, ZERO_BYTES32

__all__ = [
    "StreamDataSource",
    "InMemoryStreamsDataSource",
    "SomniaStreamsDataSource",
    "SchemaEncoder",
    "stream_id",
    "ZERO_BYTES32",
]
