"""Tests for the interactive shell."""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from p4shell.core.errors import P4CommandError
from p4shell.core.types import FileSyntax
from p4shell.frontends.cli.shell import (
    ShellAction,
    extract_syntax_flags,
    handle_line,
    run_shell,
)


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


class TestExtractSyntaxFlags:
    """Tests for extract_syntax_flags()."""

    def test_no_flags(self):
        syntax, remaining = extract_syntax_flags(["-c", "1234"], FileSyntax.CLIENT_RELATIVE)
        assert syntax is FileSyntax.CLIENT_RELATIVE
        assert remaining == ["-c", "1234"]

    def test_flag_removed(self):
        syntax, remaining = extract_syntax_flags(["-LocalSyntax", "-a"], FileSyntax.DEPOT)
        assert syntax is FileSyntax.LOCAL
        assert remaining == ["-a"]

    def test_last_flag_wins(self):
        syntax, remaining = extract_syntax_flags(
            ["-localsyntax", "-depotsyntax", "-clientsyntax"], FileSyntax.CLIENT_RELATIVE
        )
        assert syntax is FileSyntax.CLIENT
        assert remaining == []


class TestHandleLine:
    """Tests for handle_line()."""

    def test_exit(self, session, console):
        assert handle_line("exit", session, console) is ShellAction.BREAK
        assert handle_line("QUIT", session, console) is ShellAction.BREAK

    def test_blank_line(self, session, console, fake_invoker):
        assert handle_line("   ", session, console) is ShellAction.CONTINUE
        assert fake_invoker.calls == []

    def test_p4_prefix_dropped(self, session, console, fake_invoker, capsys):
        fake_invoker.outputs["where"] = ["//stream/main/a //alice-ws/a /home/alice/ws/a"]

        handle_line("p4 where a", session, console)

        assert fake_invoker.calls[-1][1:] == ("where", ["a"])
        assert "//alice-ws/a" in capsys.readouterr().out

    def test_syntax_flag_not_passed_to_p4(self, session, console, fake_invoker, opened_lines,
                                          capsys):
        fake_invoker.outputs["opened"] = opened_lines

        handle_line("opened -depotsyntax -c 1234", session, console)

        assert fake_invoker.calls[-1][1:] == ("opened", ["-c", "1234"])
        assert "//stream/main/src/manifest.h" in capsys.readouterr().out

    def test_info_runs_once_per_session(self, session, console, fake_invoker):
        handle_line("opened", session, console)
        handle_line("changes -my", session, console)
        handle_line("info", session, console)

        assert fake_invoker.commands() == ["info", "opened", "changes"]

    def test_reset(self, session, console, fake_invoker):
        handle_line("info", session, console)
        handle_line("reset", session, console)
        assert fake_invoker.commands() == ["info", "info"]

    def test_quoted_arguments(self, session, console, fake_invoker):
        handle_line('changes -m 1 "//stream/main/my dir/..."', session, console)
        assert fake_invoker.calls[-1][2] == ["-m", "1", "//stream/main/my dir/..."]

    def test_unbalanced_quotes(self, session, console, fake_invoker):
        action = handle_line('changes "//stream/main', session, console)

        assert action is ShellAction.CONTINUE
        assert fake_invoker.calls == []
        assert "Parse error" in console.file.getvalue()

    def test_p4_error_printed(self, session, console):
        def failing_invoker(working_directory, command, arguments):
            raise P4CommandError(command, 1, "Connect to server failed")

        session.invoker = failing_invoker

        action = handle_line("info", session, console)

        assert action is ShellAction.CONTINUE
        assert "Connect to server failed" in console.file.getvalue()


class TestRunShell:
    """Tests for the prompt loop."""

    def test_runs_until_exit(self, session, fake_invoker, tmp_path):
        lines = iter(["info", "exit", "never reached"])

        with (
            patch("p4shell.frontends.cli.shell.get_config") as mock_config,
            patch("p4shell.frontends.cli.shell.PromptSession") as MockPrompt,
        ):
            mock_config.return_value.history_file = str(tmp_path / "history")
            mock_config.return_value.default_syntax = FileSyntax.CLIENT_RELATIVE
            MockPrompt.return_value.prompt.side_effect = lambda _: next(lines)

            run_shell(session)

        assert fake_invoker.commands() == ["info"]
        assert next(lines) == "never reached"

    def test_eof_and_interrupt(self, session, fake_invoker, tmp_path):
        with (
            patch("p4shell.frontends.cli.shell.get_config") as mock_config,
            patch("p4shell.frontends.cli.shell.PromptSession") as MockPrompt,
        ):
            mock_config.return_value.history_file = str(tmp_path / "history")
            mock_config.return_value.default_syntax = FileSyntax.CLIENT_RELATIVE
            MockPrompt.return_value.prompt.side_effect = [KeyboardInterrupt(), "info", EOFError()]

            run_shell(session)

        assert fake_invoker.commands() == ["info"]
