# tests/conftest.py
from __future__ import annotations

import asyncio
from typing import List, Optional

import pytest
from loguru import logger

from worldlink.client.consumer import WorldSyncConsumer
from worldlink.client.controller import ConnectionController
from worldlink.transport.base import (
    Closed,
    MessageReceived,
    Opened,
    Transport,
    TransportErrored,
    TransportEvent,
)
from worldlink.utils.errors import NotConnectedError, TransportError

ADDRESS = "ws://test.invalid:2567"

TILE_MSG = '{"blocks":[{"block_type":"tile","block_json":"{\\"color\\":3}","block_coords":[1,0,2]}]}'
UNKNOWN_MSG = '{"blocks":[{"block_type":"unknown_future_kind","block_json":"{}","block_coords":[0,0,0]}]}'
MISSING_COORDS_MSG = '{"blocks":[{"block_type":"tile"}]}'


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


class FakeTransport(Transport):
    """
    内存 transport：测试里手动注入事件
    """

    def __init__(self, connect_error: Optional[Exception] = None, gated: bool = False):
        self.connect_error = connect_error
        self.gate: Optional[asyncio.Event] = asyncio.Event() if gated else None
        self.send_error: Optional[Exception] = None
        self.connect_calls: List[str] = []
        self.close_calls = 0
        self.sent: List = []
        self._queue: "asyncio.Queue[TransportEvent]" = asyncio.Queue()
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    async def connect(self, address: str) -> None:
        self.connect_calls.append(address)
        if self.gate is not None:
            await self.gate.wait()
        if self.connect_error is not None:
            raise self.connect_error
        self._open = True
        self._queue.put_nowait(Opened(address))

    async def send(self, data) -> None:
        if not self._open:
            raise NotConnectedError("fake transport not open")
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)

    async def close(self) -> None:
        self.close_calls += 1
        if self._open:
            self._open = False
            self._queue.put_nowait(Closed(1000, "client close"))

    def pump(self) -> List[TransportEvent]:
        out = []
        while not self._queue.empty():
            out.append(self._queue.get_nowait())
        return out

    async def next_event(self) -> TransportEvent:
        return await self._queue.get()

    # ---------- server side helpers ----------
    def feed(self, data) -> None:
        self._queue.put_nowait(MessageReceived(data))

    def fail(self, message: str = "connection reset") -> None:
        self._queue.put_nowait(TransportErrored(TransportError(message)))

    def server_close(self, code: int = 1000, reason: str = "bye") -> None:
        self._open = False
        self._queue.put_nowait(Closed(code, reason))


class RecordingConsumer(WorldSyncConsumer):
    def __init__(self):
        self.updates: List = []
        self.errors: List = []
        self.transitions: List = []

    def on_entity_update(self, kind, payload, position) -> None:
        self.updates.append((kind, payload, position))

    def on_decode_error(self, raw, error) -> None:
        self.errors.append((raw, error))

    def on_connection_state_changed(self, old, new) -> None:
        self.transitions.append((old, new))


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def consumer() -> RecordingConsumer:
    return RecordingConsumer()


@pytest.fixture
def make_controller(consumer):
    """
    Usage:
        controller = make_controller(transport)
    """

    def _make(transport: Transport) -> ConnectionController:
        return ConnectionController(ADDRESS, transport, consumer)

    return _make
