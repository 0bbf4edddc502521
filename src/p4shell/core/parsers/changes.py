"""``p4 changes`` parser.

Short form prints one change per line, with the description truncated:

    Change 1234 on 2023/05/01 by alice@alice-ws *pending* 'Fix crash in loader '

Long form (``-l``/``-L``) prints a header per change followed by the full
description, indented, until the next header:

    Change 1234 on 2023/05/01 by alice@alice-ws *pending*

    	Fix crash in loader.
    	Loader no longer dereferences empty manifests.

    Change 1233 on 2023/04/30 by bob@bob-ws
    ...

``-t`` adds a time after the date; both forms accept it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace

from p4shell.core.parsers.base import (
    DATE_PATTERN,
    USER_CLIENT_PATTERN,
    Parser,
    is_long_format,
    parse_timestamp,
)
from p4shell.core.types import ChangeListItem, ExecutionResult

logger = logging.getLogger(__name__)

_HEADER = rf"^(?P<word>\w+)\s(?P<change>\d+)\son\s{DATE_PATTERN}\sby\s{USER_CLIENT_PATTERN}"

SHORT_PATTERN = re.compile(
    _HEADER + r"(?:\s(?P<status>\*\w+\*)?\s?(?P<description>.*))?",
    re.IGNORECASE,
)
LONG_HEADER_PATTERN = re.compile(
    _HEADER + r"(?:\s(?P<status>\*\w+\*))?",
    re.IGNORECASE,
)


def _item_from_match(match: re.Match[str], description: str = "") -> ChangeListItem:
    return ChangeListItem(
        change_list=int(match.group("change")),
        timestamp=parse_timestamp(match.group("date"), match.group("time")),
        user_name=match.group("user"),
        client_name=match.group("client"),
        status=match.group("status") or "",
        description=description,
    )


def parse_short_changes(lines: list[str] | tuple[str, ...]) -> list[ChangeListItem]:
    """Parse one-change-per-line output. Non-matching lines are skipped."""
    changes = []
    for line in lines:
        if not line:
            continue
        match = SHORT_PATTERN.match(line)
        if match is None:
            continue
        changes.append(_item_from_match(match, match.group("description") or ""))
    return changes


@dataclass
class _LongFormState:
    """Fold accumulator for long-form output.

    ``current`` is the change whose description is being collected,
    ``buffer`` the lines collected for it so far.
    """

    finished: list[ChangeListItem] = field(default_factory=list)
    current: ChangeListItem | None = None
    buffer: list[str] = field(default_factory=list)

    def finalize(self) -> None:
        if self.current is not None:
            description = "".join(f"{line}\n" for line in self.buffer)
            self.finished.append(replace(self.current, description=description))
        self.current = None
        self.buffer = []

    def feed(self, line: str) -> None:
        match = LONG_HEADER_PATTERN.match(line)
        if match is not None:
            self.finalize()
            self.current = _item_from_match(match)
        elif self.current is not None:
            self.buffer.append(line)


def parse_long_changes(lines: list[str] | tuple[str, ...]) -> list[ChangeListItem]:
    """Parse long-form output into one record per header line.

    Every line after a header, blank ones included, belongs to that
    header's description, each followed by a newline. Lines before the
    first header are dropped.
    """
    state = _LongFormState()
    for line in lines:
        state.feed(line)
    state.finalize()
    return state.finished


class ChangesParser(Parser):
    """Parser for ``p4 changes`` output, short or long form.

    Example:
        >>> changes = ChangesParser().parse(result)
        >>> changes[0].change_list, changes[0].status
        (1234, '*pending*')
    """

    def parse(self, result: ExecutionResult) -> list[ChangeListItem]:
        if is_long_format(result.invocation):
            changes = parse_long_changes(result.output)
        else:
            changes = parse_short_changes(result.output)

        logger.debug(
            "changes_parsed: long=%s, lines=%d, changes=%d",
            is_long_format(result.invocation),
            len(result.output),
            len(changes),
        )
        return changes
