import logging

import pytest

from flowcheck.utils.logger import get_logger, init_logger, parse_level


@pytest.fixture
def restore_logger():
    yield
    init_logger()


def test_parse_level():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level(" Error ") == logging.ERROR
    assert parse_level(None) == logging.WARNING
    assert parse_level("chatty", default=logging.INFO) == logging.INFO


def test_env_level(restore_logger, monkeypatch):
    monkeypatch.setenv("FLOWCHECK_LOG_LEVEL", "debug")
    assert init_logger().level == logging.DEBUG


def test_child_loggers_write_to_file(tmp_path, restore_logger):
    init_logger(level=logging.DEBUG, log_dir=tmp_path)
    get_logger("structural.nodes").debug("checked %d node(s)", 3)
    for h in logging.getLogger("flowcheck").handlers:
        h.flush()
    text = (tmp_path / "flowcheck.log").read_text(encoding="utf-8")
    assert "flowcheck.structural.nodes" in text
    assert "checked 3 node(s)" in text
