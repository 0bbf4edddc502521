"""p4shell - structured records from Perforce command output.

p4shell runs ``p4`` commands and turns their human-readable output into
typed records a shell or script can filter and sort.

Layers:
    core/       Parsers, path rewriting, sessions, command dispatch
    frontends/  User interfaces (CLI, interactive shell)

Quick Start:
    >>> from p4shell import Session, run
    >>>
    >>> session = Session(cwd="/home/me/ws")
    >>> for change in run("changes", ["-my", "-s", "pending"], session):
    ...     print(change.change_list, change.summary)
"""

from p4shell.__version__ import __version__
from p4shell.core import (
    DEFAULT_CHANGE,
    ChangeListItem,
    ClientInfo,
    CommandKind,
    ExecutionResult,
    FileLogItem,
    FileSyntax,
    OpenedFile,
    P4ShellError,
    Session,
    execute,
    parse_structured,
    run,
)

__all__ = [
    "__version__",
    "Session",
    "execute",
    "parse_structured",
    "run",
    "DEFAULT_CHANGE",
    "ChangeListItem",
    "ClientInfo",
    "CommandKind",
    "ExecutionResult",
    "FileLogItem",
    "FileSyntax",
    "OpenedFile",
    "P4ShellError",
]
