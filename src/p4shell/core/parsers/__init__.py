"""p4 output parsers.

Pure parsing logic - takes an ExecutionResult, returns typed records.
No process knowledge, no session mutation.

Classes:
    Parser: Abstract base for parsers.
    ClientInfoParser: ``p4 info`` -> ClientInfo.
    ChangesParser: ``p4 changes`` -> list[ChangeListItem].
    FileLogParser: ``p4 filelog`` -> list[FileLogItem] (raw lines for -l).
    OpenedParser: ``p4 opened`` -> list[OpenedFile].
    RawParser: Any other command -> list[str].

Functions:
    get_parser: Get parser instance for a command kind.

Example:
    >>> from p4shell.core.parsers import get_parser
    >>> from p4shell.core.types import CommandKind
    >>>
    >>> parser = get_parser(CommandKind.from_name("changes"))
    >>> for change in parser.parse(result):
    ...     print(change.change_list, change.summary)
"""

from p4shell.core.parsers.base import Parser
from p4shell.core.parsers.changes import ChangesParser
from p4shell.core.parsers.filelog import FileLogParser
from p4shell.core.parsers.info import ClientInfoParser
from p4shell.core.parsers.opened import OpenedParser
from p4shell.core.parsers.raw import RawParser
from p4shell.core.types import CommandKind

_PARSERS: dict[CommandKind, type[Parser]] = {
    CommandKind.INFO: ClientInfoParser,
    CommandKind.CHANGES: ChangesParser,
    CommandKind.FILELOG: FileLogParser,
    CommandKind.OPENED: OpenedParser,
    CommandKind.RAW: RawParser,
}


def get_parser(kind: CommandKind) -> Parser:
    """Get parser instance for a command kind.

    Args:
        kind: The command kind.

    Returns:
        A parser instance.

    Raises:
        ValueError: If no parser is registered for the kind.
    """
    parser_class = _PARSERS.get(kind)
    if parser_class is None:
        raise ValueError(f"No parser for command kind: {kind}")

    return parser_class()


__all__ = [
    "Parser",
    "ClientInfoParser",
    "ChangesParser",
    "FileLogParser",
    "OpenedParser",
    "RawParser",
    "get_parser",
]
