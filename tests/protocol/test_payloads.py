#!filepath: tests/protocol/test_payloads.py
import pytest

from worldlink.protocol.payloads import (
    PayloadRegistry,
    TilePayload,
    decode_model,
    decode_raw_json,
    default_registry,
)
from worldlink.utils.errors import DecodeError


def test_default_registry_knows_tile():
    registry = default_registry()

    assert registry.is_recognized("tile")
    assert not registry.is_recognized("table")
    assert registry.decode("tile", '{"color": 7}') == TilePayload(color=7)


def test_tile_ignores_extra_fields():
    payload = default_registry().decode("tile", '{"color": 2, "glow": true}')
    assert payload.color == 2


def test_tile_payload_is_frozen():
    payload = TilePayload(color=1)
    with pytest.raises(Exception):
        payload.color = 2


def test_decode_model_wraps_validation_error():
    decoder = decode_model(TilePayload)
    with pytest.raises(DecodeError):
        decoder('{"color": "3"}')


def test_decode_raw_json():
    assert decode_raw_json('{"a": [1, 2]}') == {"a": [1, 2]}
    with pytest.raises(DecodeError):
        decode_raw_json("{")


def test_unregistered_kind_raises_key_error():
    with pytest.raises(KeyError):
        PayloadRegistry().decode("tile", "{}")


def test_copy_is_independent():
    base = default_registry()
    extended = base.copy()
    extended.register("table", decode_raw_json)

    assert extended.is_recognized("table")
    assert not base.is_recognized("table")
    assert set(extended.kinds()) == {"tile", "table"}
