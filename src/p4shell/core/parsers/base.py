"""Base parser protocol and shared field helpers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from p4shell.core.types import CommandInvocation, ExecutionResult

logger = logging.getLogger(__name__)

# p4 prints dates as YYYY/MM/DD, and adds HH:MM:SS with -t
DATE_FORMAT = "%Y/%m/%d"
DATE_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"

# Shared regex fragments
DATE_PATTERN = r"(?P<date>\d+/\d+/\d+)(?:\s(?P<time>\d+:\d+:\d+))?"
USER_CLIENT_PATTERN = r"(?P<user>[\w\-.]+)@(?P<client>[\w\-.]+)"


class Parser(ABC):
    """Abstract base class for p4 output parsers.

    Parsers are pure - they take an execution result and return records.
    They never invoke p4 and never touch session state.

    Lines a parser does not recognize are skipped, never raised on: p4's
    text output is not a contract this package controls.
    """

    @abstractmethod
    def parse(self, result: ExecutionResult) -> Any:
        """Parse p4 output into structured records.

        Args:
            result: The invocation and the lines p4 printed.

        Returns:
            The parsed records.
        """
        ...


def is_long_format(invocation: CommandInvocation) -> bool:
    """True when the command was run with -l or -L."""
    return invocation.has_flag("-l")


def parse_timestamp(date: str, time: str | None = None) -> datetime | None:
    """Best-effort parse of a p4 date, optionally with a time.

    Returns:
        The datetime, or None when the text is not a valid date.
    """
    try:
        if time:
            return datetime.strptime(f"{date} {time}", DATE_TIME_FORMAT)
        return datetime.strptime(date, DATE_FORMAT)
    except ValueError:
        logger.debug("unparsable_date: date=%r, time=%r", date, time)
        return None
