#!filepath: worldlink/protocol/payloads.py
"""
Per-discriminator payload schemas.

The envelope decoder never looks inside ``block_json``; it asks the registry
for a decode function keyed by ``block_type`` and calls it only when one is
registered. New discriminators are added with ``register_payload`` without
touching the envelope decoder.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, Optional

from pydantic import BaseModel, ConfigDict, StrictInt, ValidationError

from worldlink.utils.errors import DecodeError

PayloadDecoder = Callable[[str], Any]


class TilePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    color: StrictInt


def decode_model(model: type[BaseModel]) -> PayloadDecoder:
    """Build a decode function that parses JSON text into ``model``."""

    def _decode(text: str) -> BaseModel:
        try:
            return model.model_validate_json(text)
        except ValidationError as e:
            raise DecodeError(f"invalid {model.__name__}: {e.errors(include_url=False)}") from e

    _decode.__name__ = f"decode_{model.__name__}"
    return _decode


def decode_raw_json(text: str) -> Any:
    """Decode function for kinds that carry arbitrary JSON."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid payload json: {e}") from e


class PayloadRegistry:
    """
    discriminator → payload decode function
    """

    def __init__(self, decoders: Optional[Dict[str, PayloadDecoder]] = None):
        self._decoders: Dict[str, PayloadDecoder] = dict(decoders or {})

    def register(self, kind: str, decoder: PayloadDecoder) -> None:
        self._decoders[kind] = decoder

    def is_recognized(self, kind: str) -> bool:
        return kind in self._decoders

    def kinds(self) -> Iterable[str]:
        return tuple(self._decoders)

    def decode(self, kind: str, text: str) -> Any:
        try:
            decoder = self._decoders[kind]
        except KeyError:
            raise KeyError(f"Payload kind not registered: {kind}") from None
        return decoder(text)

    def copy(self) -> "PayloadRegistry":
        return PayloadRegistry(self._decoders)


def default_registry() -> PayloadRegistry:
    return PayloadRegistry({"tile": decode_model(TilePayload)})
