# worldlink/config/world_config.py
from typing import Optional

from pydantic import BaseModel, Field


class WorldConfig(BaseModel):
    # server units -> local units
    scale: float = Field(default=10.0, gt=0)


class PlayerConfig(BaseModel):
    nickname: Optional[str] = None
