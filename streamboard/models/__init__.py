from .record import (
    Record,
    RawValue,
    WrappedValue,
    FieldValue,
    SchemaField,
    field_value_from_payload,
)
from .leaderboard import LeaderboardEntry, LeaderboardResponse
from .stream import (
    DataStream,
    PublishRequest,
    PublishResponse,
    SchemaResponse,
    ErrorResponse,
)

__all__ = [
    "Record",
    "RawValue",
    "WrappedValue",
    "FieldValue",
    "SchemaField",
    "field_value_from_payload",
    "LeaderboardEntry",
    "LeaderboardResponse",
    "DataStream",
    "PublishRequest",
    "PublishResponse",
    "SchemaResponse",
    "ErrorResponse",
]
