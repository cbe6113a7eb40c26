#!filepath: worldlink/__init__.py

__version__ = "0.1.0"

from .utils.logger import Logging, logs, init_logging
from .utils.errors import (
    WorldLinkError,
    ConnectionFailedError,
    TransportError,
    NotConnectedError,
    InvalidStateError,
    DecodeError,
)
from .config.app_config import AppConfig
from .protocol import EntityUpdate, UpdateEnvelope, MessageDecoder, TilePayload, decode
from .client import ConnectionController, ConnectionState, WorldSyncConsumer, CallbackConsumer
from .transport import WebSocketTransport

__all__ = [
    "__version__",
    "logs", "Logging", "init_logging",
    "WorldLinkError", "ConnectionFailedError", "TransportError",
    "NotConnectedError", "InvalidStateError", "DecodeError",
    "AppConfig",
    "EntityUpdate", "UpdateEnvelope", "MessageDecoder", "TilePayload", "decode",
    "ConnectionController", "ConnectionState", "WorldSyncConsumer", "CallbackConsumer",
    "WebSocketTransport",
]
