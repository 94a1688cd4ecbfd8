"""Turn decoded schema field lists into Records."""

from collections.abc import Iterable, Mapping
from typing import Any, Union

from streamboard.errors import MalformedRecordError
from streamboard.models import Record, SchemaField, field_value_from_payload

NUMERIC_FIELDS = ("score", "playTime")


def to_uint(value: Any, field_name: str) -> int:
    """
    Read an unsigned integer without passing through float.

    Accepts ints and decimal digit strings. None means the field was
    present but empty and reads as 0.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise MalformedRecordError(f"{field_name} must be an integer, got bool")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if not text.isdigit() or not text.isascii():
            raise MalformedRecordError(f"{field_name} is not a decimal integer: {value!r}")
        number = int(text)
    else:
        raise MalformedRecordError(
            f"{field_name} must be an integer, got {type(value).__name__}"
        )
    if number < 0:
        raise MalformedRecordError(f"{field_name} must be unsigned, got {number}")
    return number


def _to_player(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedRecordError(
            f"player must be an address string, got {type(value).__name__}"
        )
    return value


def _field_parts(field: Union[SchemaField, Mapping]) -> tuple[str, Any]:
    if isinstance(field, SchemaField):
        return field.name, field_value_from_payload(field.value).unwrap()
    if isinstance(field, Mapping) and "name" in field:
        return field["name"], field_value_from_payload(field.get("value")).unwrap()
    raise MalformedRecordError(f"Field is not a name/value mapping: {field!r}")


def normalize_fields(field_list: Iterable) -> Record:
    """
    Build a Record from one decoded field list.

    Recognised names are ``player``, ``score`` and ``playTime``; anything
    else is ignored. Missing fields default to an empty player and zero
    numbers instead of failing, so a partially filled record still reaches
    the caller (the leaderboard later drops records without a player).

    Args:
        field_list: Sequence of ``{name, value, type}`` mappings or
            SchemaField objects

    Returns:
        The decoded Record

    Raises:
        MalformedRecordError: If the list or one of its fields is not
            structurally valid. Nothing is returned for a partially valid list.
    """
    if isinstance(field_list, (str, bytes, bytearray, Mapping)) or not isinstance(
        field_list, Iterable
    ):
        raise MalformedRecordError(
            f"Expected a list of fields, got {type(field_list).__name__}"
        )

    values: dict[str, Any] = {}
    for field in field_list:
        name, value = _field_parts(field)
        if name == "player":
            values["player"] = _to_player(value)
        elif name in NUMERIC_FIELDS:
            values[name] = to_uint(value, name)

    return Record(**values)


def normalize_many(field_lists: Iterable) -> list[Record]:
    """Normalize every field list of a fetch result."""
    return [normalize_fields(fields) for fields in field_lists]
