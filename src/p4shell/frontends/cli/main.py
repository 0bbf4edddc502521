"""CLI entry point."""

from __future__ import annotations

import os
from collections.abc import Sequence

import rich_click as click

from p4shell.core.commands import parse_structured, run
from p4shell.core.config import get_config
from p4shell.core.errors import P4ShellError
from p4shell.core.invoke import OUTPUT_ENCODING, split_lines
from p4shell.core.logging_config import configure_logging
from p4shell.core.session import Session
from p4shell.core.types import ClientInfo, CommandInvocation, ExecutionResult, FileSyntax
from p4shell.frontends.cli.output import error_exit, render_records

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
click.rich_click.ERRORS_EPILOGUE = ""
click.rich_click.MAX_WIDTH = 100

SYNTAX_CHOICES = [syntax.value for syntax in FileSyntax]

# Everything after COMMAND belongs to p4, including its own flags
P4_PASSTHROUGH = {"ignore_unknown_options": True, "allow_interspersed_args": False}


def _resolve_syntax(value: str | None) -> FileSyntax:
    if value is None:
        return get_config().default_syntax
    return FileSyntax.from_name(value)


# =========================================================================
# Root CLI
# =========================================================================
@click.group()
@click.version_option(package_name="p4shell")
@click.option("--log-level", default=None, help="Log level (default: P4SHELL_LOG_LEVEL or WARNING)")
def cli(log_level: str | None) -> None:
    """p4shell - structured records from Perforce output.

    **Commands:**

        p4shell run      Run a p4 command and print its records

        p4shell parse    Parse captured p4 output without running p4

        p4shell shell    Interactive session with a cached workspace
    """
    configure_logging(level=log_level)


@cli.command("run", context_settings=P4_PASSTHROUGH)
@click.argument("command")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
@click.option(
    "--syntax",
    type=click.Choice(SYNTAX_CHOICES),
    default=None,
    help="Path syntax for file records (default: P4SHELL_SYNTAX or client-relative)",
)
@click.option("--cwd", default=None, help="Directory to run p4 in (default: current)")
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
def run_command(
    command: str,
    arguments: tuple[str, ...],
    syntax: str | None,
    cwd: str | None,
    json_output: bool,
) -> None:
    """Run a p4 command and print structured output.

    Options go before COMMAND; everything after it is passed to p4.
    `-my` on `changes` expands to your user and client.

    **Examples:**

        p4shell run changes -m 10 -my

        p4shell --log-level DEBUG run opened

        p4shell run --syntax local --json opened -c default
    """
    session = Session(cwd=cwd or os.getcwd())
    try:
        parsed = run(command, arguments, session, _resolve_syntax(syntax))
    except P4ShellError as e:
        error_exit(str(e))
    render_records(parsed, json_output)


@cli.command("parse")
@click.argument("command")
@click.argument("file", required=False)
@click.option("--long", "-l", "long_format", is_flag=True, help="Output was produced with -l")
@click.option(
    "--syntax",
    type=click.Choice(SYNTAX_CHOICES),
    default="depot",
    help=(
        "Path syntax (default: depot). P4SHELL_SYNTAX is not used: captured"
        " output carries no workspace, so other syntaxes need --stream"
    ),
)
@click.option("--stream", default="", help="Client stream, for rewriting opened paths")
@click.option("--root", default="", help="Client root, for local syntax")
@click.option("--client", "client_name", default="", help="Client name, for client syntax")
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
def parse_command(
    command: str,
    file: str | None,
    long_format: bool,
    syntax: str,
    stream: str,
    root: str,
    client_name: str,
    json_output: bool,
) -> None:
    """Parse captured p4 output (FILE or stdin) without running p4.

    **Examples:**

        p4 changes -l -m 5 > changes.txt && p4shell parse changes changes.txt --long

        p4 opened | p4shell parse opened --stream //stream/main --syntax client-relative
    """
    try:
        if file:
            with open(file, "rb") as f:
                data = f.read()
        else:
            data = click.get_binary_stream("stdin").read()
    except OSError as e:
        error_exit(f"reading input: {e}")

    content = data.decode(OUTPUT_ENCODING, errors="replace")

    session = Session(name="parse", invoker=_no_invoke)
    if command.strip().lower() != "info":
        session.client_info = ClientInfo(
            client_name=client_name,
            client_root=root,
            client_stream=stream,
        )

    invocation = CommandInvocation(
        command=command,
        arguments=("-l",) if long_format else (),
        syntax=FileSyntax.from_name(syntax),
        session=session,
    )
    result = ExecutionResult(invocation=invocation, output=tuple(split_lines(content)))
    render_records(parse_structured(result), json_output)


def _no_invoke(working_directory: str, command: str, arguments: Sequence[str]) -> list[str]:
    raise P4ShellError("p4shell parse does not run p4")


@cli.command("shell")
@click.option("--cwd", default=None, help="Directory to run p4 in (default: current)")
@click.option("--json", "-j", "json_output", is_flag=True, help="Print records as JSON")
def shell_command(cwd: str | None, json_output: bool) -> None:
    """Interactive session that keeps the workspace info between commands.

    Type p4 commands without the `p4` prefix. `-localsyntax`,
    `-depotsyntax` and `-clientsyntax` pick the path syntax per command;
    `reset` re-reads the workspace.
    """
    from p4shell.frontends.cli.shell import run_shell

    run_shell(Session(cwd=cwd or os.getcwd()), json_output=json_output)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
