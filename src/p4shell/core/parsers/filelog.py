"""``p4 filelog`` parser.

Default output lists each file followed by one line per revision:

    //stream/main/src/loader.cpp
    ... #3 change 1234 edit on 2023/05/01 by alice@alice-ws (text) 'Fix crash in loader '
    ... ... copy into //stream/dev/src/loader.cpp#2
    ... #2 change 1100 edit on 2023/03/12 by bob@bob-ws (text+k) 'Add manifest check '

Long form (``-l``/``-L``) is not modeled; its lines are returned unchanged.
"""

from __future__ import annotations

import logging
import re

from p4shell.core.parsers.base import (
    DATE_PATTERN,
    USER_CLIENT_PATTERN,
    Parser,
    is_long_format,
    parse_timestamp,
)
from p4shell.core.types import ExecutionResult, FileLogItem

logger = logging.getLogger(__name__)

REVISION_PATTERN = re.compile(
    r".*?#(?P<revision>\d+)\schange\s(?P<change>\d+)\s(?P<action>[\w/]+)"
    rf"\son\s{DATE_PATTERN}\sby\s{USER_CLIENT_PATTERN}"
    r"\s\((?P<type>[\w+]+)\)\s(?P<description>.*)",
    re.IGNORECASE,
)


def parse_filelog(lines: list[str] | tuple[str, ...]) -> list[FileLogItem]:
    """Parse default-form filelog output into revision records.

    Lines that are neither a depot file header nor a revision line
    (integration history, blanks) are skipped.
    """
    items = []
    depot_file = ""

    for line in lines:
        if line.startswith("//"):
            depot_file = line.strip()
            continue

        match = REVISION_PATTERN.match(line)
        if match is None:
            continue

        items.append(
            FileLogItem(
                revision=int(match.group("revision")),
                change_list=int(match.group("change")),
                action=match.group("action"),
                timestamp=parse_timestamp(match.group("date"), match.group("time")),
                user_name=match.group("user"),
                client_name=match.group("client"),
                description=match.group("description"),
                file_type=match.group("type"),
                depot_file=depot_file,
            )
        )

    return items


class FileLogParser(Parser):
    """Parser for ``p4 filelog`` output.

    Returns FileLogItem records, or the raw lines for long form.
    """

    def parse(self, result: ExecutionResult) -> list[FileLogItem] | list[str]:
        if is_long_format(result.invocation):
            logger.debug("filelog_passthrough: lines=%d", len(result.output))
            return list(result.output)

        items = parse_filelog(result.output)
        logger.debug("filelog_parsed: lines=%d, revisions=%d", len(result.output), len(items))
        return items
