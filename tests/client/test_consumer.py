#!filepath: tests/client/test_consumer.py
import pytest

from worldlink.client.consumer import CallbackConsumer, WorldSyncConsumer
from worldlink.client.state import ConnectionState as S
from worldlink.utils.errors import DecodeError


def test_base_consumer_requires_entity_handler():
    with pytest.raises(NotImplementedError):
        WorldSyncConsumer().on_entity_update("tile", None, (0.0, 0.0, 0.0))


def test_base_consumer_defaults_do_not_raise():
    consumer = WorldSyncConsumer()
    consumer.on_decode_error("{", DecodeError("bad"))
    consumer.on_connection_state_changed(S.DISCONNECTED, S.CONNECTING)


def test_callback_consumer_routes_calls():
    updates, errors, changes = [], [], []
    consumer = CallbackConsumer(
        on_entity_update=lambda k, p, pos: updates.append((k, p, pos)),
        on_decode_error=lambda raw, err: errors.append(raw),
        on_connection_state_changed=lambda old, new: changes.append((old, new)),
    )

    consumer.on_entity_update("tile", 1, (1.0, 2.0, 3.0))
    consumer.on_decode_error("{", DecodeError("bad"))
    consumer.on_connection_state_changed(S.OPEN, S.CLOSED)

    assert updates == [("tile", 1, (1.0, 2.0, 3.0))]
    assert errors == ["{"]
    assert changes == [(S.OPEN, S.CLOSED)]


def test_callback_consumer_optional_callbacks():
    consumer = CallbackConsumer(on_entity_update=lambda *a: None)
    consumer.on_decode_error("{", DecodeError("bad"))
    consumer.on_connection_state_changed(S.OPEN, S.CLOSED)
