#!filepath: worldlink/transport/__init__.py

from .base import (
    Closed,
    Frame,
    MessageReceived,
    Opened,
    Transport,
    TransportErrored,
    TransportEvent,
)
from .websocket_transport import WebSocketTransport

__all__ = [
    "Transport", "TransportEvent", "Frame",
    "Opened", "MessageReceived", "TransportErrored", "Closed",
    "WebSocketTransport",
]
