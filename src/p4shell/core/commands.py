"""Command dispatch: argument rewriting, invocation and structured output.

Flow for one host command:

    run("changes", ["-my", "-m", "5"], session)
      -> initialize_session()     p4 info, once per session
      -> execute()                rewrite args, invoke p4
      -> parse_structured()       pick the parser for the command kind

Example:
    >>> from p4shell.core.commands import execute, parse_structured
    >>> from p4shell.core.types import FileSyntax
    >>> from p4shell.core.session import Session
    >>>
    >>> session = Session(cwd="/home/me/ws")
    >>> result = execute("opened", [], session, FileSyntax.LOCAL)
    >>> for opened in parse_structured(result):
    ...     print(opened.file_path, opened.action)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from p4shell.core.parsers import get_parser
from p4shell.core.session import Session
from p4shell.core.types import (
    ClientInfo,
    CommandInvocation,
    CommandKind,
    ExecutionResult,
    FileSyntax,
)

logger = logging.getLogger(__name__)

# Pseudo-command that drops the cached client info and re-reads it
RESET_COMMAND = "reset"

# Convenience flag for "my changes": -u <user> -c <client>
MY_FLAG = "-my"

# Rewrites a command's arguments before invocation
RewriteRule = Callable[[tuple[str, ...], Session], tuple[str, ...]]


def _verbatim(arguments: tuple[str, ...], session: Session) -> tuple[str, ...]:
    return arguments


def rewrite_changes(arguments: tuple[str, ...], session: Session) -> tuple[str, ...]:
    """Expand ``-my`` into ``-u <user> -c <client>`` from the client info.

    Only the first ``-my`` is replaced. Reads p4 info first if the session
    has not cached it yet.
    """
    if MY_FLAG not in arguments:
        return arguments

    client_info = initialize_session(session)
    remaining = list(arguments)
    remaining.remove(MY_FLAG)
    return (*remaining, "-u", client_info.user_name, "-c", client_info.client_name)


_REWRITE_RULES: dict[CommandKind, RewriteRule] = {
    CommandKind.INFO: _verbatim,
    CommandKind.CHANGES: rewrite_changes,
    CommandKind.FILELOG: _verbatim,
    CommandKind.OPENED: _verbatim,
    CommandKind.RAW: _verbatim,
}


def execute(
    command: str,
    arguments: Sequence[str],
    session: Session,
    syntax: FileSyntax = FileSyntax.CLIENT_RELATIVE,
) -> ExecutionResult:
    """Rewrite arguments for the command, invoke p4 and collect its output.

    The caller's argument sequence is never modified.

    Args:
        command: p4 command name.
        arguments: Argument tokens after the command name.
        session: Session supplying the working directory, invoker and cache.
        syntax: Path syntax the output should be presented in.

    Returns:
        The invocation as run, with p4's stdout lines.

    Raises:
        P4InvocationError: If the invoker fails.
    """
    kind = CommandKind.from_name(command)
    rule = _REWRITE_RULES.get(kind, _verbatim)
    rewritten = rule(tuple(arguments), session)

    if kind.needs_client_info:
        initialize_session(session)

    logger.debug(
        "execute: command=%s, kind=%s, args=%s, syntax=%s",
        command,
        kind.value,
        rewritten,
        syntax.value,
    )
    output = session.invoke(command, rewritten)

    invocation = CommandInvocation(
        command=command,
        arguments=rewritten,
        syntax=syntax,
        session=session,
    )
    return ExecutionResult(invocation=invocation, output=tuple(output))


def parse_structured(result: ExecutionResult) -> Any:
    """Convert an execution result into typed records.

    ``info`` returns the session's cached ClientInfo when there is one,
    otherwise parses the output and caches it. Commands without a
    registered model return their raw lines.

    Returns:
        ClientInfo, list[ChangeListItem], list[FileLogItem],
        list[OpenedFile] or list[str].
    """
    kind = result.invocation.kind
    session = result.session

    if kind is CommandKind.INFO and session is not None and session.client_info is not None:
        logger.debug("client_info_cached: session=%s", session.name)
        return session.client_info

    parsed = get_parser(kind).parse(result)

    if kind is CommandKind.INFO and session is not None:
        session.client_info = parsed
        logger.info(
            "client_info_loaded: session=%s, client=%s, stream=%s",
            session.name,
            parsed.client_name,
            parsed.client_stream,
        )

    return parsed


def initialize_session(session: Session, reset: bool = False) -> ClientInfo:
    """Make sure the session has client info, running ``p4 info`` if needed.

    Args:
        session: Session to initialize.
        reset: Drop any cached client info first.

    Returns:
        The session's client info.
    """
    if reset:
        session.reset()

    if session.client_info is None:
        parse_structured(execute(CommandKind.INFO.value, [], session))

    assert session.client_info is not None
    return session.client_info


def run(
    command: str,
    arguments: Sequence[str],
    session: Session,
    syntax: FileSyntax = FileSyntax.CLIENT_RELATIVE,
) -> Any:
    """Run one host-level command end to end.

    ``reset`` re-reads the client info and returns it, ``info`` returns the
    cached client info. Any other command is executed after the session is
    initialized and its output is parsed.
    """
    if command.strip().lower() == RESET_COMMAND:
        return initialize_session(session, reset=True)

    client_info = initialize_session(session)
    if CommandKind.from_name(command) is CommandKind.INFO:
        return client_info

    return parse_structured(execute(command, arguments, session, syntax))
