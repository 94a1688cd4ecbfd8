"""Tests for turning decoded field lists into Records."""

import pytest

from streamboard.errors import MalformedRecordError
from streamboard.models import RawValue, SchemaField, WrappedValue, field_value_from_payload
from streamboard.services import normalize_fields, normalize_many

PLAYER = "0x0e09b56ef137f417e424f1265425e93bfff77e17"


def wrapped(name, value, abi_type):
    return {"name": name, "type": abi_type, "value": {"name": name, "type": abi_type, "value": value}}


def test_wrapped_values_are_unwrapped():
    record = normalize_fields([
        wrapped("player", PLAYER, "address"),
        wrapped("score", 50, "uint256"),
        wrapped("playTime", 10, "uint256"),
    ])

    assert record.player == PLAYER
    assert record.score == 50
    assert record.playTime == 10


def test_bare_values_are_used_directly():
    record = normalize_fields([
        {"name": "player", "value": PLAYER, "type": "address"},
        {"name": "score", "value": "80", "type": "uint256"},
        {"name": "playTime", "value": 20, "type": "uint256"},
    ])

    assert (record.player, record.score, record.playTime) == (PLAYER, 80, 20)


def test_only_one_level_is_unwrapped():
    payload = {"value": {"value": 5}}
    assert field_value_from_payload(payload) == WrappedValue({"value": 5})
    assert field_value_from_payload(7) == RawValue(7)


def test_large_score_keeps_full_precision():
    big = "123456789012345678901234"
    record = normalize_fields([
        {"name": "player", "value": PLAYER},
        {"name": "score", "value": big},
        {"name": "playTime", "value": 2**255},
    ])

    assert str(record.score) == big
    assert record.playTime == 2**255


def test_unknown_fields_are_ignored():
    record = normalize_fields([
        {"name": "player", "value": PLAYER},
        {"name": "message", "value": "hello"},
        {"name": "score", "value": 3},
    ])

    assert record.score == 3


def test_missing_fields_default():
    record = normalize_fields([{"name": "score", "value": 9}])

    assert record.player == ""
    assert record.score == 9
    assert record.playTime == 0


def test_schema_fields_are_accepted():
    record = normalize_fields([
        SchemaField("player", RawValue(PLAYER), "address"),
        SchemaField("score", WrappedValue(12), "uint256"),
    ])

    assert record.player == PLAYER
    assert record.score == 12


@pytest.mark.parametrize("field_list", [42, None, "player", b"raw", {"name": "player"}])
def test_non_list_input_is_malformed(field_list):
    with pytest.raises(MalformedRecordError):
        normalize_fields(field_list)


@pytest.mark.parametrize("field", [42, {"value": 1}, ["score", 1]])
def test_field_without_name_is_malformed(field):
    with pytest.raises(MalformedRecordError):
        normalize_fields([{"name": "score", "value": 1}, field])


@pytest.mark.parametrize("score", [1.5, -1, "12.5", "abc", True, [1]])
def test_bad_numbers_are_malformed(score):
    with pytest.raises(MalformedRecordError):
        normalize_fields([{"name": "player", "value": PLAYER}, {"name": "score", "value": score}])


def test_non_string_player_is_malformed():
    with pytest.raises(MalformedRecordError):
        normalize_fields([{"name": "player", "value": 1234}])


def test_normalize_many_fails_whole_batch():
    good = [{"name": "player", "value": PLAYER}, {"name": "score", "value": 1}]
    bad = [{"name": "score", "value": "x"}]

    assert len(normalize_many([good, good])) == 2
    with pytest.raises(MalformedRecordError):
        normalize_many([good, bad])


def test_schema_fields_with_plain_values():
    record = normalize_fields([
        SchemaField("player", PLAYER, "address"),
        SchemaField("score", 5, "uint256"),
        SchemaField("playTime", {"value": 7}, "uint256"),
    ])

    assert (record.player, record.score, record.playTime) == (PLAYER, 5, 7)


def test_schema_field_with_bad_value_is_malformed():
    with pytest.raises(MalformedRecordError):
        normalize_fields([SchemaField("score", 1.5, "uint256")])
