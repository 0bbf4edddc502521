"""Tests for the subprocess-backed p4 invoker."""

import subprocess
import sys

import pytest

from p4shell.core.config import ShellConfig
from p4shell.core.errors import P4CommandError, P4NotFoundError, P4TimeoutError
from p4shell.core.invoke import P4Invoker, split_lines
from p4shell.core.parsers.changes import parse_long_changes


class RecordingRun:
    """Stand-in for subprocess.run that records its arguments."""

    def __init__(self, stdout="", stderr="", returncode=0, raises=None):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.raises = raises
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


@pytest.fixture
def fake_run(monkeypatch):
    def _install(**kwargs):
        run = RecordingRun(**kwargs)
        monkeypatch.setattr(subprocess, "run", run)
        return run

    return _install


class TestP4Invoker:
    """Tests for P4Invoker.__call__."""

    def test_builds_command_line(self, fake_run):
        run = fake_run(stdout="a\nb\n")
        invoke = P4Invoker(executable="/opt/p4", timeout=5.0)

        lines = invoke("/home/alice/ws", "changes", ["-m", "5"])

        assert lines == ["a", "b"]
        cmd, kwargs = run.calls[0]
        assert cmd == ["/opt/p4", "changes", "-m", "5"]
        assert kwargs["cwd"] == "/home/alice/ws"
        assert kwargs["timeout"] == 5.0
        assert kwargs["capture_output"] is True
        assert kwargs["encoding"] == "utf-8"
        assert kwargs["errors"] == "replace"
        assert kwargs["env"] is None

    def test_crlf_line_endings_stripped(self, fake_run):
        fake_run(stdout="first\r\nsecond\r\n")
        assert P4Invoker()("/ws", "info", []) == ["first", "second"]

    def test_empty_output(self, fake_run):
        fake_run(stdout="")
        assert P4Invoker()("/ws", "opened", []) == []

    def test_extra_env_merged_with_process_env(self, fake_run, monkeypatch):
        monkeypatch.setenv("P4PORT", "perforce:1666")
        run = fake_run()

        P4Invoker(env={"P4CLIENT": "alice-ws"})("/ws", "info", [])

        env = run.calls[0][1]["env"]
        assert env["P4CLIENT"] == "alice-ws"
        assert env["P4PORT"] == "perforce:1666"

    def test_missing_executable(self, fake_run):
        fake_run(raises=FileNotFoundError("p4"))
        with pytest.raises(P4NotFoundError, match="not found"):
            P4Invoker(executable="p4-missing")("/ws", "info", [])

    def test_timeout(self, fake_run):
        fake_run(raises=subprocess.TimeoutExpired(["p4"], 1.0))
        with pytest.raises(P4TimeoutError, match="timed out"):
            P4Invoker(timeout=1.0)("/ws", "changes", [])

    def test_nonzero_exit_raises(self, fake_run):
        fake_run(stdout="partial\n", stderr="Perforce password (P4PASSWD) invalid or unset.\n",
                 returncode=1)

        with pytest.raises(P4CommandError) as exc_info:
            P4Invoker()("/ws", "opened", [])

        err = exc_info.value
        assert err.returncode == 1
        assert err.command == "opened"
        assert err.output == ["partial"]
        assert "P4PASSWD" in str(err)

    def test_nonzero_exit_without_stderr(self, fake_run):
        fake_run(returncode=2)
        with pytest.raises(P4CommandError, match="exit status 2"):
            P4Invoker()("/ws", "opened", [])

    def test_nonzero_exit_unchecked(self, fake_run):
        fake_run(stdout="file(s) not opened on this client.\n", returncode=1)
        lines = P4Invoker(check=False)("/ws", "opened", [])
        assert lines == ["file(s) not opened on this client."]

    def test_stderr_logged_not_returned(self, fake_run, caplog):
        fake_run(stdout="ok\n", stderr="warning: slow server\n")

        with caplog.at_level("INFO", logger="p4shell.core.invoke"):
            lines = P4Invoker()("/ws", "info", [])

        assert lines == ["ok"]
        assert "slow server" in caplog.text

    def test_from_config(self, monkeypatch):
        monkeypatch.setattr(
            "p4shell.core.invoke.get_config",
            lambda: ShellConfig(p4_executable="p4.exe", timeout=12.5),
        )

        invoke = P4Invoker.from_config()

        assert invoke.executable == "p4.exe"
        assert invoke.timeout == 12.5


class TestSplitLines:
    """Tests for split_lines()."""

    def test_line_feeds_and_crlf(self):
        assert split_lines("one\r\ntwo\nthree") == ["one", "two", "three"]

    def test_trailing_newline_adds_no_empty_line(self):
        assert split_lines("one\n\n") == ["one", ""]
        assert split_lines("") == []

    def test_other_line_boundaries_kept(self):
        """Form feeds, vertical tabs and U+2028 stay inside the line."""
        text = "\tpage one\x0cpage two\n\tcol\x0bumn\u2028end\n"
        assert split_lines(text) == ["\tpage one\x0cpage two", "\tcol\x0bumn\u2028end"]


def _python_printing(data: bytes) -> tuple[P4Invoker, str, list[str]]:
    """Invoker running the current interpreter as a stand-in p4 that writes data."""
    script = f"import sys; sys.stdout.buffer.write({data!r})"
    return P4Invoker(executable=sys.executable, timeout=30.0), "-c", [script]


class TestP4InvokerOutputDecoding:
    """Decoding of real process output."""

    def test_invalid_utf8_replaced(self, tmp_path):
        invoke, command, arguments = _python_printing(
            b"Change 1 on 2023/05/01 by a@b 'caf\xe9 fix '\n"
        )

        lines = invoke(str(tmp_path), command, arguments)

        assert lines == ["Change 1 on 2023/05/01 by a@b 'caf\ufffd fix '"]

    def test_form_feed_in_long_description(self, tmp_path):
        invoke, command, arguments = _python_printing(
            b"Change 7 on 2023/05/01 by a@b\n\n\tpage one\x0cpage two\n\n"
        )

        changes = parse_long_changes(invoke(str(tmp_path), command, arguments))

        assert len(changes) == 1
        assert changes[0].description == "\n\tpage one\x0cpage two\n\n"
