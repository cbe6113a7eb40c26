# worldlink/config/connection_config.py
from pydantic import BaseModel, Field


class ConnectionConfig(BaseModel):
    url: str = "ws://localhost:2567"
    # websockets 握手超时（秒）
    open_timeout: float = Field(default=10.0, gt=0)
    # 轮询式驱动时每个 tick 的间隔（秒）
    tick_interval: float = Field(default=0.02, gt=0)
