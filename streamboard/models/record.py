"""Decoded player score record and the field shapes it is built from."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class RawValue:
    """Field value delivered as a bare scalar."""
    value: Any

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class WrappedValue:
    """Field value delivered inside a ``{"value": ...}`` envelope."""
    value: Any

    def unwrap(self) -> Any:
        return self.value


FieldValue = Union[RawValue, WrappedValue]


def field_value_from_payload(payload: Any) -> FieldValue:
    """
    Classify a decoded field value.

    The streams decoder nests the scalar one level deep
    (``{"name", "type", "value"}``); other producers hand over the bare
    scalar. Only one level is unwrapped.
    """
    if isinstance(payload, (RawValue, WrappedValue)):
        return payload
    if isinstance(payload, Mapping) and "value" in payload:
        return WrappedValue(payload["value"])
    return RawValue(payload)


@dataclass(frozen=True)
class SchemaField:
    """One named, typed field of an encoded record."""
    name: str
    value: FieldValue
    type: str = ""


class Record(BaseModel):
    """
    One decoded player score data point.

    Scores and play times are kept as Python ints so values up to
    uint256 compare without precision loss.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    player: str = Field(default="", description="Player address")
    score: int = Field(default=0, description="Score (uint256)")
    playTime: int = Field(default=0, description="Play time in seconds (uint256)")
