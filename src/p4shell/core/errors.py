"""p4shell error types.

Malformed p4 output is never an error: parsers skip what they cannot read.
These exceptions cover precondition violations and failures of the p4
process itself.
"""

from __future__ import annotations


class P4ShellError(Exception):
    """Base error for p4shell operations."""


class PathNotUnderStreamError(P4ShellError):
    """A depot path does not start with the client stream.

    Raised by path translation instead of stripping an unrelated prefix.
    """

    def __init__(self, depot_path: str, client_stream: str) -> None:
        self.depot_path = depot_path
        self.client_stream = client_stream
        stream = client_stream or "<no client stream>"
        super().__init__(f"Path {depot_path!r} is not under client stream {stream!r}")


class P4InvocationError(P4ShellError):
    """Error running the p4 executable."""


class P4NotFoundError(P4InvocationError):
    """The p4 executable could not be found."""


class P4TimeoutError(P4InvocationError):
    """p4 did not exit within the configured timeout."""


class P4CommandError(P4InvocationError):
    """p4 exited with a non-zero status.

    Attributes:
        returncode: Process exit status.
        stderr: Text p4 wrote to stderr.
        output: Lines p4 wrote to stdout before failing.
    """

    def __init__(
        self,
        command: str,
        returncode: int,
        stderr: str = "",
        output: list[str] | None = None,
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.output = output or []
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"p4 {command} failed: {detail}")
