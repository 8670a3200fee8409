"""Pytest configuration and shared fixtures."""

import logging
from io import StringIO

import pytest

from multiwriter import FuncFormatter


class BrokenSink(StringIO):
    """Sink whose writes always fail, like a closed pipe."""

    def __init__(self, message: str = "broken pipe"):
        super().__init__()
        self.message = message
        self.attempts = 0

    def write(self, s: str) -> int:
        self.attempts += 1
        raise OSError(self.message)


class FailingFlushSink(StringIO):
    """Sink that accepts writes but fails when flushed."""

    def flush(self) -> None:
        raise OSError("disk full")


@pytest.fixture
def sink() -> StringIO:
    """In-memory text sink."""
    return StringIO()


@pytest.fixture
def broken_sink() -> BrokenSink:
    """Sink that rejects every write."""
    return BrokenSink()


@pytest.fixture
def failing_flush_sink() -> FailingFlushSink:
    """Sink that rejects flushes."""
    return FailingFlushSink()


@pytest.fixture
def double() -> FuncFormatter:
    """Formatter doubling integer strings, leaving anything else alone."""

    def _double(value: str) -> str:
        try:
            return str(int(value) * 2)
        except ValueError:
            return value

    return FuncFormatter(_double)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers and levels set by configure_logging() during a test."""
    yield
    logger = logging.getLogger("multiwriter")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_settings():
    """Start every test without a cached global settings instance."""
    import multiwriter.config as config_module

    config_module._settings = None
    yield
    config_module._settings = None
