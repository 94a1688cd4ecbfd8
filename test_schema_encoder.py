"""Tests for schema parsing, record encoding and stream ids."""

import pytest
from eth_utils import to_checksum_address

from streamboard.config import PLAYER_SCHEMA
from streamboard.datasources import SchemaEncoder, stream_id
from streamboard.errors import MalformedRecordError, SchemaError
from streamboard.services import normalize_fields

PLAYER = "0x0e09b56ef137f417e424f1265425e93bfff77e17"


def fields(player=PLAYER, score=50, play_time=10):
    return [
        {"name": "player", "value": player, "type": "address"},
        {"name": "score", "value": score, "type": "uint256"},
        {"name": "playTime", "value": play_time, "type": "uint256"},
    ]


def test_parse_player_schema():
    encoder = SchemaEncoder(PLAYER_SCHEMA)
    assert encoder.fields == [("address", "player"), ("uint256", "score"), ("uint256", "playTime")]


@pytest.mark.parametrize("schema", ["", "uint256", "address player, uint256", "foo bar", "uint256 a, uint256 a"])
def test_invalid_schemas(schema):
    with pytest.raises(SchemaError):
        SchemaEncoder(schema)


def test_decoded_fields_use_nested_shape():
    encoder = SchemaEncoder(PLAYER_SCHEMA)
    decoded = encoder.decode_data(encoder.encode_data(fields()))

    assert [f["name"] for f in decoded] == ["player", "score", "playTime"]
    assert decoded[1]["value"] == {"name": "score", "type": "uint256", "value": 50}

    record = normalize_fields(decoded)
    assert record.player.lower() == PLAYER
    assert (record.score, record.playTime) == (50, 10)


def test_encoded_record_is_three_words():
    data = SchemaEncoder(PLAYER_SCHEMA).encode_data(fields(score="80", play_time="20"))
    assert len(data) == 96
    assert int.from_bytes(data[32:64], "big") == 80


def test_field_order_does_not_matter():
    encoder = SchemaEncoder(PLAYER_SCHEMA)
    assert encoder.encode_data(list(reversed(fields()))) == encoder.encode_data(fields())


def test_large_score_survives_encoding():
    encoder = SchemaEncoder(PLAYER_SCHEMA)
    decoded = encoder.decode_data(encoder.encode_data(fields(score="123456789012345678901234")))
    assert str(normalize_fields(decoded).score) == "123456789012345678901234"


@pytest.mark.parametrize("kwargs", [
    {"player": "not-an-address"},
    {"score": -1},
    {"score": "abc"},
    {"score": 2**256},
    {"play_time": 1.5},
])
def test_invalid_values_raise_schema_error(kwargs):
    with pytest.raises(SchemaError):
        SchemaEncoder(PLAYER_SCHEMA).encode_data(fields(**kwargs))


def test_missing_and_unknown_fields():
    encoder = SchemaEncoder(PLAYER_SCHEMA)
    with pytest.raises(SchemaError):
        encoder.encode_data(fields()[:2])
    with pytest.raises(SchemaError):
        encoder.encode_data(fields() + [{"name": "extra", "value": 1, "type": "uint256"}])


def test_truncated_payload_is_malformed():
    with pytest.raises(MalformedRecordError):
        SchemaEncoder(PLAYER_SCHEMA).decode_data(b"\x00" * 40)


def test_stream_id_is_right_padded():
    sid = stream_id("player-1")
    assert sid == "0x" + b"player-1".hex() + "00" * 24
    assert len(sid) == 66


def test_stream_id_too_long():
    with pytest.raises(ValueError):
        stream_id("x" * 33)


def test_decoded_addresses_are_checksummed():
    encoder = SchemaEncoder(PLAYER_SCHEMA)
    decoded = encoder.decode_data(encoder.encode_data(fields()))

    player = decoded[0]["value"]["value"]
    assert player == to_checksum_address(PLAYER)
    assert player != PLAYER
