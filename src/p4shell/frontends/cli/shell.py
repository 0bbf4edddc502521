"""Interactive p4shell session.

One Session lives for the whole loop, so ``p4 info`` runs once and is
reused until ``reset``.

Syntax flags are host flags, not p4 flags, and are removed from the
argument list before p4 sees it:

    p4> opened -localsyntax
    p4> opened -depotsyntax -c 1234
    p4> changes -my -s pending
    p4> reset
"""

from __future__ import annotations

import logging
import os
import shlex
from enum import Enum, auto

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
from rich.console import Console

from p4shell.core.commands import run
from p4shell.core.config import get_config
from p4shell.core.errors import P4ShellError
from p4shell.core.session import Session
from p4shell.core.types import FileSyntax
from p4shell.frontends.cli.output import render_records

logger = logging.getLogger(__name__)

SYNTAX_FLAGS: dict[str, FileSyntax] = {
    "-localsyntax": FileSyntax.LOCAL,
    "-depotsyntax": FileSyntax.DEPOT,
    "-clientsyntax": FileSyntax.CLIENT,
}

EXIT_COMMANDS = frozenset({"exit", "quit"})


class ShellAction(Enum):
    """Control flow after a shell line."""

    CONTINUE = auto()
    BREAK = auto()


def extract_syntax_flags(
    tokens: list[str],
    default: FileSyntax,
) -> tuple[FileSyntax, list[str]]:
    """Split host syntax flags out of the argument tokens.

    When several syntax flags are given, the last one wins.

    Returns:
        (syntax, remaining tokens)
    """
    syntax = default
    remaining = []
    for token in tokens:
        flag = SYNTAX_FLAGS.get(token.lower())
        if flag is None:
            remaining.append(token)
        else:
            syntax = flag
    return syntax, remaining


def handle_line(
    line: str,
    session: Session,
    console: Console,
    default_syntax: FileSyntax = FileSyntax.CLIENT_RELATIVE,
    json_output: bool = False,
) -> ShellAction:
    """Run one line typed at the prompt.

    Errors from p4 are printed, never raised, so the loop keeps going.
    """
    try:
        tokens = shlex.split(line)
    except ValueError as e:
        console.print(f"[red]Parse error: {e}[/]")
        return ShellAction.CONTINUE

    if tokens and tokens[0] == "p4":
        tokens = tokens[1:]
    if not tokens:
        return ShellAction.CONTINUE

    command, arguments = tokens[0], tokens[1:]
    if command.lower() in EXIT_COMMANDS:
        return ShellAction.BREAK

    syntax, arguments = extract_syntax_flags(arguments, default_syntax)
    try:
        parsed = run(command, arguments, session, syntax)
    except P4ShellError as e:
        console.print(f"[red]Error: {e}[/]")
        return ShellAction.CONTINUE

    render_records(parsed, json_output)
    return ShellAction.CONTINUE


def run_shell(session: Session, json_output: bool = False) -> None:
    """Read commands from the terminal until exit or EOF."""
    config = get_config()
    console = Console()
    prompt_session: PromptSession[str] = PromptSession(
        history=FileHistory(os.path.expanduser(config.history_file)),
    )

    console.print(f"[bold]p4shell[/] in {session.cwd} - type [cyan]exit[/] to leave")
    while True:
        try:
            line = prompt_session.prompt("p4> ")
        except KeyboardInterrupt:
            continue
        except EOFError:
            break

        action = handle_line(line, session, console, config.default_syntax, json_output)
        if action is ShellAction.BREAK:
            break

    logger.debug("shell_exit: session=%s", session.name)
