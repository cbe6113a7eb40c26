#!filepath: worldlink/session.py
from __future__ import annotations

from typing import Optional

from worldlink.client.controller import ConnectionController
from worldlink.config.app_config import AppConfig
from worldlink.transport.websocket_transport import WebSocketTransport
from worldlink.world.world_state import WorldState
from worldlink.utils.logger import logs


def build_controller(
    cfg: AppConfig,
    world: WorldState,
    url: Optional[str] = None,
) -> ConnectionController:
    """
    按配置装配 transport + controller
    """
    transport = WebSocketTransport(open_timeout=cfg.connection.open_timeout)
    return ConnectionController(url or cfg.connection.url, transport, world)


@logs.catch("session aborted")
async def run_session(
    cfg: AppConfig,
    world: WorldState,
    url: Optional[str] = None,
    nickname: Optional[str] = None,
    poll: bool = False,
) -> ConnectionController:
    """
    连接 → （可选）登录 → 收消息直到服务端关闭 → shutdown

    ConnectionFailedError / TransportError 直接抛给调用方，不重试。
    """
    controller = build_controller(cfg, world, url)
    await controller.start()

    try:
        nickname = nickname or cfg.player.nickname
        if nickname:
            await controller.login(nickname)
            logs.info(f"[Session] login sent: {nickname}")

        if poll:
            await controller.run_polling(cfg.connection.tick_interval)
        else:
            await controller.run()
    finally:
        await controller.shutdown()
        logs.info(f"[Session] done: {controller.metrics.summary()}")

    return controller
