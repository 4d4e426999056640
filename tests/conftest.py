"""Shared pytest fixtures for the stockroom test suite."""

import json
import logging
from io import StringIO

import pytest

from stockroom.logging_config import LogContext, StructuredFormatter, reset_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    """Start every test with an unconfigured stockroom logger.

    CLI tests configure logging against the runner's stderr; later tests
    must not keep writing to that closed stream.
    """
    reset_logging()
    LogContext.clear()
    yield
    reset_logging()
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """Capture stockroom logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            coordinator.record_borrow(...)
            logs = captured_logs()
            assert any(r["message"] == "activity_recorded" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("stockroom")
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
