#!filepath: worldlink/protocol/decoder.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr, ValidationError

from worldlink.protocol.payloads import PayloadRegistry, default_registry
from worldlink.utils.errors import DecodeError

Position = Tuple[float, float, float]
Coordinate = Union[StrictInt, StrictFloat]


# ============================
# Wire schema（外层，不解析 block_json）
# ============================
class _BlockModel(BaseModel):
    block_type: StrictStr
    block_json: StrictStr
    block_coords: Tuple[Coordinate, Coordinate, Coordinate]


class _EnvelopeModel(BaseModel):
    blocks: List[_BlockModel]


# ============================
# Decoded records
# ============================
@dataclass(frozen=True)
class EntityUpdate:
    kind: str
    payload: Any
    position: Position


@dataclass(frozen=True)
class UpdateEnvelope:
    updates: Tuple[EntityUpdate, ...] = ()
    skipped: int = 0          # 未识别 block_type 的数量

    def __iter__(self):
        return iter(self.updates)

    def __len__(self) -> int:
        return len(self.updates)


def _describe(err: ValidationError) -> str:
    first = err.errors(include_url=False)[0]
    loc = ".".join(str(p) for p in first["loc"]) or "<root>"
    more = f" (+{err.error_count() - 1} more)" if err.error_count() > 1 else ""
    return f"{loc}: {first['msg']}{more}"


def _to_position(coords: Tuple[Coordinate, Coordinate, Coordinate]) -> Position:
    # JSON 整数无上限，float() 可能溢出
    try:
        x, y, z = (float(c) for c in coords)
    except OverflowError as e:
        raise ValueError("coordinate out of float range") from e
    if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
        raise ValueError("coordinate is not finite")
    return x, y, z


class MessageDecoder:
    """
    raw frame → UpdateEnvelope

    三段式：
      1) envelope：顶层必须是含 ``blocks`` 列表的对象
      2) block：block_type / block_json 为字符串，block_coords 恰好 3 个数字
      3) payload：仅对已注册的 block_type 解析 block_json

    任何一段失败 → 整条消息 DecodeError（不产生部分 envelope）。
    未注册的 block_type 只计数跳过，不是错误。
    """

    def __init__(self, registry: Optional[PayloadRegistry] = None):
        self.registry = registry if registry is not None else default_registry()

    def decode(self, raw: Union[bytes, bytearray, str]) -> UpdateEnvelope:
        text = self._to_text(raw)

        try:
            envelope = _EnvelopeModel.model_validate_json(text)
        except ValidationError as e:
            raise DecodeError(f"malformed envelope: {_describe(e)}", raw=raw) from e

        updates: List[EntityUpdate] = []
        skipped = 0
        for index, block in enumerate(envelope.blocks):
            try:
                position = _to_position(block.block_coords)
            except ValueError as e:
                raise DecodeError(f"blocks.{index}.block_coords: {e}", raw=raw) from e

            if not self.registry.is_recognized(block.block_type):
                skipped += 1
                continue

            try:
                payload = self.registry.decode(block.block_type, block.block_json)
            except DecodeError as e:
                raise DecodeError(
                    f"blocks.{index} ({block.block_type}): {e}", raw=raw
                ) from e

            updates.append(EntityUpdate(kind=block.block_type, payload=payload, position=position))

        return UpdateEnvelope(updates=tuple(updates), skipped=skipped)

    @staticmethod
    def _to_text(raw: Union[bytes, bytearray, str]) -> str:
        if isinstance(raw, str):
            return raw
        if isinstance(raw, (bytes, bytearray)):
            try:
                return bytes(raw).decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(f"payload is not valid UTF-8: {e}", raw=raw) from e
        raise DecodeError(f"unsupported frame type: {type(raw).__name__}", raw=raw)


_default_decoder = MessageDecoder()


def decode(raw: Union[bytes, bytearray, str]) -> UpdateEnvelope:
    """Decode with the default registry."""
    return _default_decoder.decode(raw)
