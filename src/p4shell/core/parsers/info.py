"""``p4 info`` parser.

``p4 info`` prints one ``Label: value`` pair per line:

    User name: bob
    Client name: bob-ws
    Client host: buildbox
    Client root: /home/bob/ws
    Current directory: /home/bob/ws/src
    Client stream: //stream/main
    Client address: 10.0.0.7:50312
    Server address: perforce:1666
    Server version: P4D/LINUX26X86_64/2023.1/2468153

Only the labels below are read. Order does not matter and unknown labels
are ignored, since p4 adds labels between releases.
"""

from __future__ import annotations

import logging
import re

from p4shell.core.parsers.base import Parser
from p4shell.core.types import ClientInfo, ExecutionResult

logger = logging.getLogger(__name__)

# (field, pattern) - a line is assigned to the first matching field
_FIELD_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("user_name", re.compile(r"^user\sname:\s*([\w\-.@]*)", re.IGNORECASE)),
    ("client_name", re.compile(r"^client\sname:\s*([\w\-.@]*)", re.IGNORECASE)),
    ("client_host", re.compile(r"^client\shost:\s*([\w\-.@]*)", re.IGNORECASE)),
    ("client_root", re.compile(r"^client\sroot:\s*(.*?)\s*$", re.IGNORECASE)),
    ("client_stream", re.compile(r"^client\sstream:\s*([\w\-./]*)", re.IGNORECASE)),
    ("client_address", re.compile(r"^client\saddress:\s*(.*?)\s*$", re.IGNORECASE)),
    ("server_address", re.compile(r"^server\saddress:\s*(.*?)\s*$", re.IGNORECASE)),
)


def parse_client_info(lines: list[str] | tuple[str, ...]) -> ClientInfo:
    """Extract client info from ``p4 info`` lines.

    Missing labels leave the field empty.

    Args:
        lines: Raw output lines.

    Returns:
        The populated ClientInfo.
    """
    fields: dict[str, str] = {}

    for line in lines:
        if not line:
            continue
        for name, pattern in _FIELD_PATTERNS:
            match = pattern.match(line)
            if match:
                fields[name] = match.group(1)
                break

    logger.debug("client_info_parsed: fields=%s", sorted(fields))
    return ClientInfo(**fields)


class ClientInfoParser(Parser):
    """Parser for ``p4 info`` output.

    Example:
        >>> info = ClientInfoParser().parse(result)
        >>> info.client_stream
        '//stream/main'
    """

    def parse(self, result: ExecutionResult) -> ClientInfo:
        return parse_client_info(result.output)
