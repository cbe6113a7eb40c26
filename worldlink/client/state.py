#!filepath: worldlink/client/state.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ConnectionState(str, Enum):
    DISCONNECTED = "Disconnected"
    CONNECTING = "Connecting"
    OPEN = "Open"
    CLOSING = "Closing"
    CLOSED = "Closed"
    ERRORED = "Errored"

    @property
    def is_terminal(self) -> bool:
        return self in (ConnectionState.CLOSED, ConnectionState.ERRORED)


@dataclass
class Connection:
    """
    One logical session to the server. Owned by ConnectionController only.
    """
    address: str
    state: ConnectionState = ConnectionState.DISCONNECTED
    last_error: Optional[Exception] = None
