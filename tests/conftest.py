"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from p4shell.core.session import Session
from p4shell.core.types import ClientInfo, CommandInvocation, ExecutionResult, FileSyntax

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent / "core" / "fixtures"


def load_fixture(filename: str) -> str:
    """Load a fixture file by name."""
    return (FIXTURES_DIR / filename).read_text()


def load_lines(filename: str) -> list[str]:
    """Load a fixture file as output lines, the way the invoker returns them."""
    return load_fixture(filename).splitlines()


class FakeInvoker:
    """Invoker returning canned output per command and recording calls."""

    def __init__(self, outputs: dict[str, list[str]] | None = None):
        self.outputs = outputs or {}
        self.calls: list[tuple[str, str, list[str]]] = []

    def __call__(self, working_directory, command, arguments):
        self.calls.append((working_directory, command, list(arguments)))
        return list(self.outputs.get(command, []))

    def commands(self) -> list[str]:
        return [command for _, command, _ in self.calls]


@pytest.fixture
def info_lines():
    """Captured ``p4 info`` output for a stream workspace."""
    return load_lines("p4_info.txt")


@pytest.fixture
def changes_lines():
    """Captured short-form ``p4 changes`` output."""
    return load_lines("p4_changes.txt")


@pytest.fixture
def changes_long_lines():
    """Captured ``p4 changes -l`` output.

    Contains:
    - Three changes, the first pending
    - Tab-indented descriptions surrounded by blank lines
    """
    return load_lines("p4_changes_long.txt")


@pytest.fixture
def filelog_lines():
    """Captured ``p4 filelog`` output for two files, with integration history."""
    return load_lines("p4_filelog.txt")


@pytest.fixture
def opened_lines():
    """Captured ``p4 opened`` output.

    Contains:
    - A file in the default change
    - Two files in change 1234 (one locked)
    - A file outside the client stream
    """
    return load_lines("p4_opened.txt")


@pytest.fixture
def client_info():
    """Client info matching the captured ``p4 info`` output."""
    return ClientInfo(
        user_name="alice",
        client_name="alice-ws",
        client_host="buildbox",
        client_root="/home/alice/ws",
        client_stream="//stream/main",
        client_address="10.0.0.7",
        server_address="perforce.example.com:1666",
    )


@pytest.fixture
def fake_invoker(info_lines):
    """Invoker that already knows ``p4 info``."""
    return FakeInvoker({"info": info_lines})


@pytest.fixture
def session(fake_invoker):
    """Session in /home/alice/ws/src backed by the fake invoker."""
    return Session(name="test", cwd="/home/alice/ws/src", invoker=fake_invoker)


@pytest.fixture
def make_result():
    """Build an ExecutionResult without running anything."""

    def _make(
        command: str,
        lines: list[str],
        arguments: tuple[str, ...] = (),
        syntax: FileSyntax = FileSyntax.CLIENT_RELATIVE,
        session: Session | None = None,
    ) -> ExecutionResult:
        invocation = CommandInvocation(
            command=command,
            arguments=arguments,
            syntax=syntax,
            session=session,
        )
        return ExecutionResult(invocation=invocation, output=tuple(lines))

    return _make
