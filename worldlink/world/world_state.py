#!filepath: worldlink/world/world_state.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from worldlink.client.consumer import RawFrame, WorldSyncConsumer
from worldlink.client.state import ConnectionState
from worldlink.protocol.decoder import Position
from worldlink.protocol.payloads import TilePayload
from worldlink.utils.errors import DecodeError
from worldlink.utils.logger import logs


@dataclass(frozen=True)
class Tile:
    position: Position      # 本地坐标（已乘 scale）
    color: int


class WorldState(WorldSyncConsumer):
    """
    本地世界状态（纯数据，不做渲染）

    - tile：按缩放后的坐标存放，同一坐标后到的覆盖先到的
    - 其他 kind：只保留最后一次 payload
    """

    def __init__(self, scale: float = 10.0):
        self.scale = scale
        self.tiles: Dict[Position, Tile] = {}
        self.entities: Dict[Tuple[str, Position], Any] = {}
        self.kind_counts: Counter = Counter()
        self.decode_errors = 0
        self.connection_state: Optional[ConnectionState] = None

    def to_local(self, position: Position) -> Position:
        x, y, z = position
        return (x * self.scale, y * self.scale, z * self.scale)

    def on_entity_update(self, kind: str, payload: Any, position: Position) -> None:
        local = self.to_local(position)
        self.kind_counts[kind] += 1

        if isinstance(payload, TilePayload):
            self.tiles[local] = Tile(position=local, color=payload.color)
            return
        self.entities[(kind, local)] = payload

    def on_decode_error(self, raw: RawFrame, error: DecodeError) -> None:
        self.decode_errors += 1
        super().on_decode_error(raw, error)

    def on_connection_state_changed(self, old: ConnectionState, new: ConnectionState) -> None:
        self.connection_state = new
        logs.debug(f"[World] connection {old.value} -> {new.value}")

    def tile_at(self, x: float, y: float, z: float) -> Optional[Tile]:
        """Lookup by server coordinates."""
        return self.tiles.get(self.to_local((x, y, z)))

    def summary(self) -> Dict[str, Any]:
        return {
            "tiles": len(self.tiles),
            "entities": len(self.entities),
            "updates": sum(self.kind_counts.values()),
            "decode_errors": self.decode_errors,
        }
