#!filepath: worldlink/protocol/__init__.py

from .decoder import EntityUpdate, MessageDecoder, UpdateEnvelope, decode
from .messages import ClientMessage, Login, Move, encode_client_message
from .payloads import PayloadRegistry, TilePayload, default_registry

__all__ = [
    "EntityUpdate", "UpdateEnvelope", "MessageDecoder", "decode",
    "ClientMessage", "Login", "Move", "encode_client_message",
    "PayloadRegistry", "TilePayload", "default_registry",
]
