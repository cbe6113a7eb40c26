#!filepath: tests/utils/test_logger.py
import asyncio

import pytest
from loguru import logger

from worldlink.config.log_config import LogConfig
from worldlink.utils.logger import Logging, init_logging


@pytest.fixture
def captured():
    lines = []
    logger.remove()
    logger.add(lambda msg: lines.append(msg.record["message"]), level="DEBUG")
    yield lines


def test_catch_logs_and_reraises(captured):
    logs = Logging(log_dir="", console=False)
    logger.add(lambda msg: captured.append(msg.record["message"]), level="DEBUG")

    @logs.catch("boom")
    def explode():
        raise RuntimeError("bad")

    with pytest.raises(RuntimeError):
        explode()

    assert any("[ERROR] explode: boom" in line for line in captured)


def test_catch_async(captured):
    logs = Logging(log_dir="", console=False)
    logger.add(lambda msg: captured.append(msg.record["message"]), level="DEBUG")

    @logs.catch("async boom")
    async def explode():
        raise ValueError("bad")

    @logs.catch()
    async def fine():
        return 42

    with pytest.raises(ValueError):
        asyncio.run(explode())
    assert asyncio.run(fine()) == 42
    assert any("async boom" in line for line in captured)


def test_init_logging_creates_file_sink(tmp_path):
    log_dir = tmp_path / "logs"
    logs = init_logging(LogConfig(dir=str(log_dir), level="DEBUG"))
    logs.info("hello file")
    logger.complete()
    logger.remove()

    files = list(log_dir.glob("*.log"))
    assert len(files) == 1
    assert "hello file" in files[0].read_text(encoding="utf-8")


def test_init_logging_reconfigures_shared_instance(tmp_path):
    from worldlink import session
    from worldlink.utils import logger as logger_module

    before = logger_module.logs
    logs = init_logging(LogConfig(dir=str(tmp_path / "logs"), level="WARNING"))
    logger.remove()

    assert logs is before
    assert session.logs is logs
    assert logs.level == "WARNING"
    assert logs.log_dir == str(tmp_path / "logs")
