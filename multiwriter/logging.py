"""
Rich-enhanced logging configuration for multiwriter.

Provides centralized logging setup with rich console output and optional
file output. Formatter parse failures and recorded writer errors are
reported on these loggers.

.. warning::
    With ``rich_tracebacks=True`` (the default), ``configure_logging()``
    installs a **global traceback handler** via Rich. Pass
    ``rich_tracebacks=False`` when using multiwriter as a library.

Usage:
    from multiwriter.logging import configure_logging, get_logger

    configure_logging(level="info", use_rich=True, rich_tracebacks=False)

    logger = get_logger("demo")
    logger.info("[green]✓[/green] Records written")
"""

import logging
import sys
from pathlib import Path
from typing import Literal

from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from .utils.ui import console as rich_console

# All package loggers live under this name
MODULE_LOGGER_NAME = "multiwriter"

LogLevel = Literal["debug", "info", "warning", "error", "critical"]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _get_log_level(level: LogLevel | str | int) -> int:
    """Convert level string to logging constant."""
    if isinstance(level, int):
        return level

    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    return level_map.get(level.lower(), logging.INFO)


def configure_logging(
    level: LogLevel | str | int = "info",
    console: bool = True,
    file_path: str | Path | None = None,
    file_log_level: LogLevel | str | int | None = None,
    format_string: str | None = None,
    use_rich: bool = True,
    rich_tracebacks: bool = True,
    show_path: bool = False,
    show_time: bool = True,
    markup: bool = True,
) -> logging.Logger:
    """
    Configure logging for the multiwriter package.

    Args:
        level: Log level for console output
        console: Whether to enable console logging
        file_path: Optional file path for file logging
        file_log_level: Log level for file output (defaults to level)
        format_string: Custom format string for plain and file logging
        use_rich: Use RichHandler for console output
        rich_tracebacks: Install Rich's global traceback hook
        show_path: Show file path in console logs
        show_time: Show timestamp in console logs
        markup: Enable rich markup in log messages

    Returns:
        Configured package logger
    """
    log_level = _get_log_level(level)
    file_level = _get_log_level(file_log_level) if file_log_level else log_level

    if use_rich and rich_tracebacks:
        install_rich_traceback(
            console=rich_console,
            show_locals=False,
            width=rich_console.width,
            extra_lines=3,
            word_wrap=True,
        )

    logger = logging.getLogger(MODULE_LOGGER_NAME)
    logger.setLevel(min(log_level, file_level) if file_path else log_level)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    if console:
        console_handler: logging.Handler
        if use_rich:
            console_handler = RichHandler(
                level=log_level,
                console=rich_console,
                show_time=show_time,
                show_path=show_path,
                rich_tracebacks=rich_tracebacks,
                markup=markup,
                log_time_format="[%X]",
                keywords=["csv", "table", "text", "flush", "formatter"],
            )
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
        logger.addHandler(console_handler)

    # File handler - always plain formatting for parseable logs
    if file_path:
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger under the multiwriter namespace.

    Example:
        logger = get_logger("demo")  # Returns multiwriter.demo logger
    """
    if name:
        return logging.getLogger(f"{MODULE_LOGGER_NAME}.{name}")
    return logging.getLogger(MODULE_LOGGER_NAME)


def set_level(level: LogLevel | str | int) -> None:
    """Change the log level of the package logger and its handlers."""
    log_level = _get_log_level(level)
    logger = logging.getLogger(MODULE_LOGGER_NAME)
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)


def enable_debug_logging() -> None:
    """Enable debug logging with rich output for troubleshooting."""
    configure_logging(level="debug", use_rich=True, rich_tracebacks=True)


class LogContext:
    """
    Context manager for temporarily changing log level.

    Example:
        with LogContext("debug"):
            writer.flush()
    """

    def __init__(self, level: LogLevel | str | int):
        self._target_level = _get_log_level(level)
        self._original_level: int | None = None

    def __enter__(self) -> "LogContext":
        logger = logging.getLogger(MODULE_LOGGER_NAME)
        self._original_level = logger.level
        logger.setLevel(self._target_level)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._original_level is not None:
            logging.getLogger(MODULE_LOGGER_NAME).setLevel(self._original_level)


__all__ = [
    "configure_logging",
    "enable_debug_logging",
    "get_logger",
    "LogContext",
    "set_level",
]
