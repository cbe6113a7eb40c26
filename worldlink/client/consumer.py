#!filepath: worldlink/client/consumer.py
from __future__ import annotations

from typing import Any, Callable, Optional, Union

from worldlink.client.state import ConnectionState
from worldlink.protocol.decoder import Position
from worldlink.utils.errors import DecodeError
from worldlink.utils.logger import logs

RawFrame = Union[str, bytes]


class WorldSyncConsumer:
    """
    Receives decoded records from the controller. Never feeds back into
    protocol decisions.
    """

    def on_entity_update(self, kind: str, payload: Any, position: Position) -> None:
        raise NotImplementedError

    def on_decode_error(self, raw: RawFrame, error: DecodeError) -> None:
        logs.warning(f"[Sync] dropped malformed message: {error}")

    def on_connection_state_changed(self, old: ConnectionState, new: ConnectionState) -> None:
        pass


class CallbackConsumer(WorldSyncConsumer):
    """Adapter for a plain set of callables."""

    def __init__(
        self,
        on_entity_update: Callable[[str, Any, Position], None],
        on_decode_error: Optional[Callable[[RawFrame, DecodeError], None]] = None,
        on_connection_state_changed: Optional[
            Callable[[ConnectionState, ConnectionState], None]
        ] = None,
    ):
        self._on_entity_update = on_entity_update
        self._on_decode_error = on_decode_error
        self._on_state_changed = on_connection_state_changed

    def on_entity_update(self, kind: str, payload: Any, position: Position) -> None:
        self._on_entity_update(kind, payload, position)

    def on_decode_error(self, raw: RawFrame, error: DecodeError) -> None:
        if self._on_decode_error is None:
            super().on_decode_error(raw, error)
            return
        self._on_decode_error(raw, error)

    def on_connection_state_changed(self, old: ConnectionState, new: ConnectionState) -> None:
        if self._on_state_changed is not None:
            self._on_state_changed(old, new)
