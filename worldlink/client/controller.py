#!filepath: worldlink/client/controller.py
from __future__ import annotations

import asyncio
from collections import deque
from typing import Deque, Optional

from worldlink.client.consumer import RawFrame, WorldSyncConsumer
from worldlink.client.state import Connection, ConnectionState
from worldlink.observability.metrics import MetricRecorder
from worldlink.protocol.decoder import MessageDecoder
from worldlink.protocol.messages import ClientMessage, Login, Move, encode_client_message
from worldlink.transport.base import (
    Closed,
    MessageReceived,
    Opened,
    Transport,
    TransportErrored,
    TransportEvent,
)
from worldlink.utils.errors import (
    ConnectionFailedError,
    DecodeError,
    InvalidStateError,
    NotConnectedError,
    TransportError,
)
from worldlink.utils.logger import logs

S = ConnectionState


class ConnectionController:
    """
    Connection 生命周期 + 消息分发
    ---------------------------------------------------
    Disconnected → Connecting → Open → Closing → Closed
    Connecting / Open → Errored（吸收态，不自动重连）
    Open → Closed（服务端主动关闭，不经过 Closing）

    驱动方式二选一：
      - tick():  每个调度 tick 调一次，排空 transport 队列
      - run():   事件驱动，直到离开 Open
    同一连接的消息严格按到达顺序处理，一条消息的 decode+dispatch
    完成后才处理下一条。
    ---------------------------------------------------
    """

    def __init__(
        self,
        address: str,
        transport: Transport,
        consumer: WorldSyncConsumer,
        decoder: Optional[MessageDecoder] = None,
        metrics: Optional[MetricRecorder] = None,
    ):
        self.connection = Connection(address=address)
        self.transport = transport
        self.consumer = consumer
        self.decoder = decoder if decoder is not None else MessageDecoder()
        self.metrics = metrics if metrics is not None else MetricRecorder()

        self._connect_task: Optional[asyncio.Future] = None
        self._shutdown_requested = False
        self._left_open = asyncio.Event()
        # pump() 取出但尚未处理的事件；回调抛错时剩余事件留到下一次
        self._pending: Deque[TransportEvent] = deque()

    @property
    def state(self) -> ConnectionState:
        return self.connection.state

    # --------------------------------------------------
    # Lifecycle
    # --------------------------------------------------
    async def start(self) -> None:
        if self.state is not S.DISCONNECTED:
            raise InvalidStateError(f"start() requires Disconnected, got {self.state.value}")

        self._transition(S.CONNECTING)
        self._connect_task = asyncio.ensure_future(
            self.transport.connect(self.connection.address)
        )
        try:
            await self._connect_task
        except asyncio.CancelledError:
            # shutdown() cancelled the connect and owns the remaining transitions
            if self._shutdown_requested and self._connect_task.cancelled():
                return
            raise
        except ConnectionFailedError as e:
            if self._shutdown_requested:
                return
            self._fail(e)
            raise
        finally:
            self._connect_task = None

        if self.state is S.CONNECTING:
            self._transition(S.OPEN)

    async def shutdown(self) -> None:
        state = self.state
        if state in (S.CLOSING, S.CLOSED):
            return

        self._shutdown_requested = True

        if state is S.DISCONNECTED:
            self._transition(S.CLOSED)
            return

        if state is S.ERRORED:
            # 只释放资源，状态保持 Errored
            await self.transport.close()
            return

        self._transition(S.CLOSING)

        task = self._connect_task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        try:
            await self.transport.close()
        finally:
            self._transition(S.CLOSED)

    # --------------------------------------------------
    # Event pumping
    # --------------------------------------------------
    def tick(self) -> int:
        """
        One scheduler step: drain queued transport events and handle them in
        order. Raises the transport error once if the connection errors.
        If a consumer callback raises, the events behind it stay queued and
        are handled by the next tick.
        """
        self._pending.extend(self.transport.pump())
        handled = 0
        while self._pending:
            self._handle(self._pending.popleft())
            handled += 1
        return handled

    async def run_polling(self, interval: float) -> None:
        while self.state is S.OPEN:
            self.tick()
            await asyncio.sleep(interval)

    async def run(self) -> None:
        """Handle events as they arrive until the connection leaves Open."""
        while self.state is S.OPEN:
            if self._pending:
                self._handle(self._pending.popleft())
                continue

            getter = asyncio.ensure_future(self.transport.next_event())
            stopper = asyncio.ensure_future(self._left_open.wait())
            try:
                await asyncio.wait({getter, stopper}, return_when=asyncio.FIRST_COMPLETED)
            finally:
                stopper.cancel()
                if not getter.done():
                    getter.cancel()

            if getter.done() and not getter.cancelled():
                self._handle(getter.result())

    def _handle(self, event: TransportEvent) -> None:
        state = self.state

        if isinstance(event, Opened):
            if state is S.CONNECTING:
                self._transition(S.OPEN)
            return

        if state is not S.OPEN:
            logs.debug(f"[Conn] drop {type(event).__name__} in state {state.value}")
            return

        if isinstance(event, MessageReceived):
            self._dispatch(event.data)
        elif isinstance(event, TransportErrored):
            error = event.error
            if not isinstance(error, TransportError):
                error = TransportError(str(error))
            self._fail(error)
            raise error
        elif isinstance(event, Closed):
            logs.info(f"[Conn] server closed code={event.code} reason={event.reason!r}")
            self._transition(S.CLOSED)
        else:
            logs.debug(f"[Conn] unknown transport event: {event!r}")

    def _dispatch(self, raw: RawFrame) -> None:
        self.metrics.incr("messages")
        try:
            envelope = self.decoder.decode(raw)
        except DecodeError as e:
            self.metrics.incr("decode_errors")
            logs.warning(f"[Conn] decode error: {e}")
            self.consumer.on_decode_error(raw, e)
            return

        for update in envelope:
            self.consumer.on_entity_update(update.kind, update.payload, update.position)

        self.metrics.incr("updates", len(envelope))
        if envelope.skipped:
            self.metrics.incr("skipped", envelope.skipped)
            logs.debug(f"[Conn] skipped {envelope.skipped} unrecognized block(s)")

    # --------------------------------------------------
    # Outgoing
    # --------------------------------------------------
    async def send(self, message: ClientMessage) -> None:
        if self.state is not S.OPEN:
            raise NotConnectedError(f"cannot send in state {self.state.value}")
        try:
            await self.transport.send(encode_client_message(message))
        except TransportError as e:
            self._fail(e)
            raise

    async def login(self, nickname: str) -> None:
        await self.send(Login(nickname=nickname))

    async def move(self, x: float, y: float, z: float) -> None:
        await self.send(Move(x, y, z))

    # --------------------------------------------------
    # State
    # --------------------------------------------------
    def _fail(self, error: Exception) -> None:
        self.connection.last_error = error
        logs.error(f"[Conn] {type(error).__name__}: {error}")
        self._transition(S.ERRORED)

    def _transition(self, new: ConnectionState) -> None:
        old = self.connection.state
        if old is new:
            return
        self.connection.state = new
        if old is S.OPEN:
            self._left_open.set()
        logs.info(f"[Conn] {old.value} -> {new.value}")
        self.consumer.on_connection_state_changed(old, new)
