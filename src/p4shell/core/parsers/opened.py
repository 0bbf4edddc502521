"""``p4 opened`` parser.

    //stream/main/src/loader.cpp#3 - edit default change (text)
    //stream/main/src/manifest.h#1 - add change 1234 (text)
    //stream/main/docs/old.md#7 - delete change 1234 (text) *locked*

Depot paths are rewritten into the syntax the caller asked for, using the
session's client info.
"""

from __future__ import annotations

import logging
import re

from p4shell.core.errors import PathNotUnderStreamError
from p4shell.core.parsers.base import Parser
from p4shell.core.paths import translate_path
from p4shell.core.types import (
    DEFAULT_CHANGE,
    ClientInfo,
    ExecutionResult,
    FileSyntax,
    OpenedFile,
)

logger = logging.getLogger(__name__)

OPENED_PATTERN = re.compile(
    r"^(?P<path>//[^#]+)#(?P<revision>\d+)\s-\s(?P<action>[\w/]+)\s"
    r"(?:(?P<default>default)\schange|change\s(?P<change>\d+))"
    r"(?:\s\((?P<type>[^)]*)\))?",
    re.IGNORECASE,
)


def _rewrite(depot_path: str, syntax: FileSyntax, client_info: ClientInfo) -> str:
    try:
        return translate_path(depot_path, syntax, client_info)
    except PathNotUnderStreamError as err:
        logger.warning("path_not_rewritten: %s, keeping depot syntax", err)
        return depot_path


def parse_opened(
    lines: list[str] | tuple[str, ...],
    syntax: FileSyntax,
    client_info: ClientInfo,
) -> list[OpenedFile]:
    """Parse ``p4 opened`` lines into OpenedFile records.

    Args:
        lines: Raw output lines.
        syntax: Syntax to rewrite depot paths into.
        client_info: Workspace metadata used for rewriting.

    Returns:
        One record per recognized line. A file outside the client stream
        keeps its depot path and a warning is logged.
    """
    opened = []
    for line in lines:
        match = OPENED_PATTERN.match(line)
        if match is None:
            continue

        if match.group("default"):
            change_list = DEFAULT_CHANGE
        else:
            change_list = int(match.group("change"))

        opened.append(
            OpenedFile(
                file_path=_rewrite(match.group("path"), syntax, client_info),
                revision=int(match.group("revision")),
                change_list=change_list,
                action=match.group("action"),
                file_type=match.group("type") or "",
            )
        )
    return opened


class OpenedParser(Parser):
    """Parser for ``p4 opened`` output."""

    def parse(self, result: ExecutionResult) -> list[OpenedFile]:
        opened = parse_opened(result.output, result.invocation.syntax, result.client_info)
        logger.debug(
            "opened_parsed: lines=%d, files=%d, syntax=%s",
            len(result.output),
            len(opened),
            result.invocation.syntax.value,
        )
        return opened
