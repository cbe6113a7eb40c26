#!filepath: worldlink/transport/websocket_transport.py
from __future__ import annotations

import asyncio
from typing import List, Optional

from websockets.asyncio.client import ClientConnection, connect as ws_connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedError, WebSocketException

from worldlink.transport.base import (
    Closed,
    Frame,
    MessageReceived,
    Opened,
    Transport,
    TransportErrored,
    TransportEvent,
)
from worldlink.utils.errors import ConnectionFailedError, NotConnectedError, TransportError
from worldlink.utils.logger import logs


class WebSocketTransport(Transport):
    """
    websockets asyncio client 的 Transport 实现
    ---------------------------------------------------
    - connect: 握手完成前协作式挂起
    - 后台 reader task 把帧按到达顺序放入队列
    - pump() 非阻塞排空队列；next_event() 等待下一个事件
    ---------------------------------------------------
    """

    def __init__(self, open_timeout: Optional[float] = 10.0):
        self.open_timeout = open_timeout
        self._ws: Optional[ClientConnection] = None
        self._reader: Optional[asyncio.Task] = None
        self._events: "asyncio.Queue[TransportEvent]" = asyncio.Queue()
        self._open = False
        self.address: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self._open

    async def connect(self, address: str) -> None:
        if self._ws is not None:
            raise ConnectionFailedError(f"transport already used for {self.address}")

        logs.info(f"[WS] connecting: {address}")
        try:
            ws = await ws_connect(address, open_timeout=self.open_timeout)
        except (WebSocketException, OSError, asyncio.TimeoutError) as e:
            raise ConnectionFailedError(f"cannot connect to {address}: {e}") from e

        self._ws = ws
        self.address = address
        self._open = True
        self._events.put_nowait(Opened(address))
        self._reader = asyncio.get_running_loop().create_task(self._read_loop(ws))
        logs.info(f"[WS] open: {address}")

    async def _read_loop(self, ws: ClientConnection) -> None:
        try:
            async for frame in ws:
                self._events.put_nowait(MessageReceived(frame))
        except ConnectionClosedError as e:
            logs.warning(f"[WS] connection lost: {e}")
            self._events.put_nowait(TransportErrored(TransportError(f"connection lost: {e}")))
        except Exception as e:
            logs.exception(f"[WS] reader failed: {e}")
            self._events.put_nowait(TransportErrored(TransportError(f"reader failed: {e}")))
        else:
            logs.info(f"[WS] closed code={ws.close_code} reason={ws.close_reason!r}")
            self._events.put_nowait(Closed(code=ws.close_code, reason=ws.close_reason or ""))
        finally:
            self._open = False

    async def send(self, data: Frame) -> None:
        if not self._open or self._ws is None:
            raise NotConnectedError("transport is not open")
        try:
            await self._ws.send(data)
        except ConnectionClosed as e:
            raise TransportError(f"send failed: {e}") from e

    async def close(self) -> None:
        ws = self._ws
        if ws is None:
            return

        self._open = False
        await ws.close()
        if self._reader is not None:
            await self._reader
            self._reader = None

    def pump(self) -> List[TransportEvent]:
        drained: List[TransportEvent] = []
        while True:
            try:
                drained.append(self._events.get_nowait())
            except asyncio.QueueEmpty:
                break
        return drained

    async def next_event(self) -> TransportEvent:
        return await self._events.get()
