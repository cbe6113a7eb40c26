#!filepath: worldlink/utils/logger.py
import inspect
import os
import sys
from functools import wraps
from time import perf_counter
from loguru import logger
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from worldlink.config.log_config import LogConfig


class Logging:
    """
    客户端日志模块
    ---------------------------------------
    - 文件日志按日期切割，保留周期可配
    - 控制台输出（stderr）
    - 包含函数级日志装饰器
    ---------------------------------------
    """

    def __init__(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        console: bool = True,
    ):
        self.reconfigure(log_dir, rotation, retention, log_level, console)

    def reconfigure(
        self,
        log_dir: str = "logs",
        rotation: str = "1 day",
        retention: str = "30 days",
        log_level: str = "INFO",
        console: bool = True,
    ) -> None:
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.level = log_level
        self.console = console

        self._configure()

    def _configure(self) -> None:
        """
        配置全局 logger（重复调用会替换之前的 sink）
        """
        logger.remove()

        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
                enqueue=True,
                backtrace=True,
                diagnose=True,
            )

        if self.console:
            logger.add(
                sys.stderr,
                level=self.level,
                format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | {message}",
            )

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- 日志装饰器 ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_time: bool = False,
    ) -> Callable:
        """
        记录异常后继续抛出；同步/异步函数都适用。
        """

        def decorator(func: Callable):
            if inspect.iscoroutinefunction(func):

                @wraps(func)
                async def async_wrapper(*args, **kwargs):
                    start = perf_counter()
                    try:
                        result = await func(*args, **kwargs)
                    except Exception:
                        logger.exception(f"[ERROR] {func.__name__}: {msg}")
                        raise
                    if log_time:
                        logger.info(f"[TIME] {func.__name__} took {perf_counter() - start:.4f}s")
                    return result

                return async_wrapper

            @wraps(func)
            def wrapper(*args, **kwargs):
                start = perf_counter()
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise
                if log_time:
                    logger.info(f"[TIME] {func.__name__} took {perf_counter() - start:.4f}s")
                return result

            return wrapper

        return decorator


def init_logging(cfg: Optional["LogConfig"] = None) -> Logging:
    """
    按配置原地重配全局 logs（CLI 启动时调用）
    各模块 import 的是同一个实例，无需重新 import
    """
    if cfg is None:
        logs.reconfigure()
    else:
        logs.reconfigure(
            log_dir=cfg.dir,
            rotation=cfg.rotation,
            retention=cfg.retention,
            log_level=cfg.level,
        )
    return logs


# 默认全局 logs：仅控制台，文件 sink 由 init_logging 按配置开启
logs = Logging(log_dir="")
