"""
Tests for logging setup.
"""
import json
import logging

import pytest

from samanage.utils.logging import JsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def test_json_formatter():
    record = logging.LogRecord("samanage.client", logging.INFO, __file__, 10, "hello %s", ("world",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["name"] == "samanage.client"
    assert payload["time"].endswith("+00:00")


def test_setup_logging_console_and_file(restore_root_logger, tmp_path):
    log_file = tmp_path / "logs" / "samanage.log"
    setup_logging("debug", log_file=str(log_file), log_json=True)

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 2
    assert all(isinstance(handler.formatter, JsonFormatter) for handler in root.handlers)

    logging.getLogger("samanage.test").info("written")
    for handler in root.handlers:
        handler.flush()
    assert "written" in log_file.read_text()
    assert logging.getLogger("httpx").level == logging.WARNING
