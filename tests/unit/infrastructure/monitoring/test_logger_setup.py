import logging
from pathlib import Path

import pytest

from kvcache.infrastructure.monitoring.logger_setup import parse_log_level, setup_logging


@pytest.fixture
def restore_root_logger():
    """Puts back the root logger's handlers and level after the test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def test_setup_logging_replaces_handlers(restore_root_logger: logging.Logger):
    setup_logging(log_level=logging.DEBUG)

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0], logging.StreamHandler)


def test_setup_logging_writes_to_file(restore_root_logger: logging.Logger, tmp_path: Path):
    log_file = tmp_path / "kvcache.log"

    setup_logging(log_level=logging.INFO, log_file=str(log_file))
    logging.getLogger("kvcache.test").info("hello from the test")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert "hello from the test" in log_file.read_text()


@pytest.mark.parametrize("name, expected", [
    ("debug", logging.DEBUG),
    ("INFO", logging.INFO),
    ("nonsense", logging.WARNING),
])
def test_parse_log_level(name, expected):
    assert parse_log_level(name) == expected
