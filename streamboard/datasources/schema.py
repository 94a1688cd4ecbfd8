"""Schema parsing and ABI encoding of stream records."""

from collections.abc import Mapping
from typing import Any

from eth_abi import decode, encode, is_encodable_type
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import is_address, to_checksum_address

from streamboard.errors import MalformedRecordError, SchemaError

ZERO_BYTES32 = "0x" + "00" * 32


def stream_id(text: str) -> str:
    """Encode text as a right zero-padded bytes32 hex string."""
    raw = text.encode("utf-8")
    if len(raw) > 32:
        raise ValueError(f"Stream id {text!r} is longer than 32 bytes")
    return "0x" + raw.ljust(32, b"\0").hex()


def parse_schema(schema: str) -> list[tuple[str, str]]:
    """
    Split ``"type name, type name"`` into (type, name) pairs.

    Raises:
        SchemaError: On empty schema, unnamed fields, duplicate names or
            types the ABI codec does not know
    """
    fields: list[tuple[str, str]] = []
    seen: set[str] = set()

    for part in schema.split(","):
        tokens = part.split()
        if len(tokens) != 2:
            raise SchemaError(f"Schema field must be 'type name', got {part.strip()!r}")
        abi_type, name = tokens
        if not is_encodable_type(abi_type):
            raise SchemaError(f"Unsupported schema type {abi_type!r} for {name!r}")
        if name in seen:
            raise SchemaError(f"Duplicate schema field {name!r}")
        seen.add(name)
        fields.append((abi_type, name))

    return fields


class SchemaEncoder:
    """
    Encodes and decodes records laid out by a schema string.

    Decoded fields follow the streams SDK shape, with the scalar nested
    one level: ``{"name", "type", "value": {"name", "type", "value"}}``.
    """

    def __init__(self, schema: str):
        self.schema = schema
        self.fields = parse_schema(schema)
        self.types = [abi_type for abi_type, _ in self.fields]

    def encode_data(self, fields: list[Mapping]) -> bytes:
        """
        ABI-encode a list of ``{name, value, type}`` mappings.

        Fields may come in any order; every schema field is required.
        """
        by_name = {field["name"]: field.get("value") for field in fields}

        unknown = set(by_name) - {name for _, name in self.fields}
        if unknown:
            raise SchemaError(f"Fields not in schema: {', '.join(sorted(unknown))}")

        values = []
        for abi_type, name in self.fields:
            if name not in by_name:
                raise SchemaError(f"Missing schema field {name!r}")
            values.append(self._coerce(abi_type, name, by_name[name]))

        try:
            return encode(self.types, values)
        except EncodingError as e:
            raise SchemaError(f"Cannot encode record: {e}") from e

    def decode_data(self, data: bytes) -> list[dict[str, Any]]:
        """Decode one ABI payload into SDK-shaped fields."""
        try:
            values = decode(self.types, bytes(data))
        except DecodingError as e:
            raise MalformedRecordError(f"Cannot decode record: {e}") from e

        decoded = []
        for (abi_type, name), value in zip(self.fields, values):
            if abi_type == "address":
                value = to_checksum_address(value)
            elif isinstance(value, bytes):
                value = "0x" + value.hex()
            decoded.append({
                "name": name,
                "type": abi_type,
                "value": {"name": name, "type": abi_type, "value": value},
            })
        return decoded

    @staticmethod
    def _coerce(abi_type: str, name: str, value: Any) -> Any:
        if abi_type == "address":
            if not isinstance(value, str) or not is_address(value):
                raise SchemaError(f"{name} is not a valid address: {value!r}")
            return to_checksum_address(value)
        if abi_type.startswith(("uint", "int")):
            if isinstance(value, bool):
                raise SchemaError(f"{name} must be an integer")
            if isinstance(value, str):
                try:
                    return int(value.strip(), 10)
                except ValueError as e:
                    raise SchemaError(f"{name} is not an integer: {value!r}") from e
            if not isinstance(value, int):
                raise SchemaError(f"{name} must be an integer, got {type(value).__name__}")
            return value
        if abi_type.startswith("bytes") and isinstance(value, str) and value.startswith("0x"):
            return bytes.fromhex(value[2:])
        return value
