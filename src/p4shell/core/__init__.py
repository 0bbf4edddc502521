"""Core - pure logic for turning p4 output into records.

This module contains no knowledge of:
- Terminals, prompts or rendering
- How results will be displayed

Architecture:
    parsers/    Output parsers (info, changes, filelog, opened, raw)
    session/    Per-session state (cwd, invoker, cached client info)
    commands    Argument rewriting, invocation and dispatch to parsers
    paths       Depot path rewriting
    invoke      p4 subprocess invoker
    types       Pure data types

Example:
    >>> from p4shell.core import FileSyntax, Session, run
    >>>
    >>> session = Session(cwd="/home/me/ws")
    >>> for opened in run("opened", [], session, FileSyntax.LOCAL):
    ...     print(opened.file_path, opened.change_list)
"""

from p4shell.core.commands import execute, initialize_session, parse_structured, run
from p4shell.core.errors import (
    P4CommandError,
    P4InvocationError,
    P4NotFoundError,
    P4ShellError,
    P4TimeoutError,
    PathNotUnderStreamError,
)
from p4shell.core.invoke import Invoker, P4Invoker
from p4shell.core.parsers import get_parser
from p4shell.core.paths import translate_path
from p4shell.core.session import Session
from p4shell.core.types import (
    DEFAULT_CHANGE,
    ChangeListItem,
    ClientInfo,
    CommandInvocation,
    CommandKind,
    ExecutionResult,
    FileLogItem,
    FileSyntax,
    OpenedFile,
)

__all__ = [
    # Dispatch
    "execute",
    "parse_structured",
    "initialize_session",
    "run",
    "get_parser",
    "translate_path",
    # Session / invocation
    "Session",
    "Invoker",
    "P4Invoker",
    # Types
    "DEFAULT_CHANGE",
    "ChangeListItem",
    "ClientInfo",
    "CommandInvocation",
    "CommandKind",
    "ExecutionResult",
    "FileLogItem",
    "FileSyntax",
    "OpenedFile",
    # Errors
    "P4ShellError",
    "PathNotUnderStreamError",
    "P4InvocationError",
    "P4NotFoundError",
    "P4TimeoutError",
    "P4CommandError",
]
