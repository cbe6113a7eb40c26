#!filepath: worldlink/client/__init__.py

from .consumer import CallbackConsumer, WorldSyncConsumer
from .controller import ConnectionController
from .state import Connection, ConnectionState

__all__ = [
    "ConnectionController",
    "Connection", "ConnectionState",
    "WorldSyncConsumer", "CallbackConsumer",
]
