"""Centralized logging configuration for p4shell.

Library modules only create loggers (``logging.getLogger(__name__)``).
Frontends call ``configure_logging`` once at startup.

Usage:
    from p4shell.core.logging_config import configure_logging

    configure_logging(level="DEBUG")

Environment Variables:
    P4SHELL_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    P4SHELL_LOG_FORMAT: Output format ("text" or "json")
    P4SHELL_LOG_FILE: Optional log file path
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Literal

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
TEXT_FORMAT_WITH_MS = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord carries; anything else was passed via extra=
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)

_configured = False


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Outputs one object per record:
    {
        "timestamp": "2025-12-28T14:30:00.123000",
        "level": "DEBUG",
        "logger": "p4shell.core.commands",
        "message": "execute: command=changes, args=3",
        "extra": {...}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


def configure_logging(
    level: str | None = None,
    format: Literal["text", "json"] | None = None,
    file_path: str | None = None,
    include_ms: bool = True,
    force: bool = False,
) -> None:
    """Configure logging for the application.

    Subsequent calls are ignored unless force=True. Arguments left as None
    fall back to the P4SHELL_LOG_* environment variables, then to
    WARNING/text/no file. The default level is WARNING so that log lines
    do not interleave with records printed to the terminal.

    Args:
        level: Log level name.
        format: Output format.
        file_path: Optional log file.
        include_ms: Include milliseconds in timestamp.
        force: Force reconfiguration even if already configured.
    """
    global _configured
    if _configured and not force:
        return

    level = level or os.environ.get("P4SHELL_LOG_LEVEL", "WARNING")
    format = format or os.environ.get("P4SHELL_LOG_FORMAT", "text")  # type: ignore
    file_path = file_path or os.environ.get("P4SHELL_LOG_FILE")

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    if format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        fmt = TEXT_FORMAT_WITH_MS if include_ms else TEXT_FORMAT
        formatter = logging.Formatter(fmt, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _configured = True
