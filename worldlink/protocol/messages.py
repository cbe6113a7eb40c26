#!filepath: worldlink/protocol/messages.py
"""
Outgoing client frames.

The server expects an externally tagged object per message::

    {"Login": {"nickname": "killer"}}
    {"Move": [1.0, 0.0, 2.0]}
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Login:
    nickname: str


@dataclass(frozen=True)
class Move:
    x: float
    y: float
    z: float


ClientMessage = Union[Login, Move]


def encode_client_message(message: ClientMessage) -> str:
    if isinstance(message, Login):
        if not message.nickname:
            raise ValueError("nickname must not be empty")
        body = {"Login": {"nickname": message.nickname}}
    elif isinstance(message, Move):
        body = {"Move": [float(message.x), float(message.y), float(message.z)]}
    else:
        raise TypeError(f"Unsupported client message: {type(message).__name__}")
    return json.dumps(body, separators=(",", ":"))
