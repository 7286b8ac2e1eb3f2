"""Tests for CLI logging setup."""

import logging

import pytest

from storyboard_toolkit.logging_utils import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_levels():
    setup_logging(verbose=False)
    assert logging.getLogger().level == logging.INFO
    setup_logging(verbose=True)
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_log_file(tmp_path):
    path = tmp_path / "logs" / "run.log"
    setup_logging(log_path=path)
    logging.getLogger("storyboard_toolkit.test").info("hello file")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "[INFO] hello file" in path.read_text()
