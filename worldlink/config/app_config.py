#!filepath: worldlink/config/app_config.py
import os
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .connection_config import ConnectionConfig
from .log_config import LogConfig
from .world_config import PlayerConfig, WorldConfig

# 环境变量 -> (section, key)
ENV_OVERRIDES = {
    "WORLDLINK_URL": ("connection", "url"),
    "WORLDLINK_NICKNAME": ("player", "nickname"),
    "WORLDLINK_LOG_LEVEL": ("log", "level"),
}


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    worldlink/config/app_config.py → worldlink/config → worldlink → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    connection: ConnectionConfig = Field(default_factory=ConnectionConfig)
    world: WorldConfig = Field(default_factory=WorldConfig)
    player: PlayerConfig = Field(default_factory=PlayerConfig)

    @classmethod
    def load(cls, path: Optional[str] = None, env_file: Optional[str] = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 worldlink/config/base.yml
        - 环境变量（WORLDLINK_*）覆盖 YAML
        - 不依赖当前工作目录
        """
        # 1) 先加载 .env（默认在项目根目录下，不覆盖已有环境变量）
        load_dotenv(env_file or os.path.join(project_root(), ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env 覆盖
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                raw.setdefault(section, {})
                if raw[section] is None:
                    raw[section] = {}
                raw[section][key] = value

        return cls(**raw)
