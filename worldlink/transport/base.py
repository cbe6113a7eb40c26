#!filepath: worldlink/transport/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

Frame = Union[str, bytes]


# -------------------------
# Base
# -------------------------
class TransportEvent:
    pass


# -------------------------
# Lifecycle events
# -------------------------
@dataclass(frozen=True)
class Opened(TransportEvent):
    address: str


@dataclass(frozen=True)
class MessageReceived(TransportEvent):
    data: Frame


@dataclass(frozen=True)
class TransportErrored(TransportEvent):
    error: Exception


@dataclass(frozen=True)
class Closed(TransportEvent):
    code: Optional[int] = None
    reason: str = ""


# -------------------------
# Contract
# -------------------------
class Transport:
    """
    Raw bidirectional frame stream.

    Events are queued by the transport and drained by its owner, either
    non-blocking via ``pump()`` (one call per scheduler tick) or by awaiting
    ``next_event()``. Queue order is arrival order.
    """

    @property
    def is_open(self) -> bool:
        raise NotImplementedError

    async def connect(self, address: str) -> None:
        raise NotImplementedError

    async def send(self, data: Frame) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        raise NotImplementedError

    def pump(self) -> List[TransportEvent]:
        raise NotImplementedError

    async def next_event(self) -> TransportEvent:
        raise NotImplementedError
