"""Running the p4 executable.

The rest of p4shell only depends on the ``Invoker`` signature:
``invoke(working_directory, command, arguments) -> list[str]``. Tests and
embedders can pass any callable with that shape.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from p4shell.core.config import get_config
from p4shell.core.errors import P4CommandError, P4NotFoundError, P4TimeoutError

logger = logging.getLogger(__name__)

Invoker = Callable[[str, str, Sequence[str]], list[str]]

# Bytes that do not decode are replaced with U+FFFD
OUTPUT_ENCODING = "utf-8"


def split_lines(text: str) -> list[str]:
    """Split p4 output on line feeds only, dropping a trailing CR per line.

    Unlike ``str.splitlines``, form feeds and other Unicode line boundaries
    inside a description stay part of the line.
    """
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


@dataclass
class P4Invoker:
    """Invoke p4 as a subprocess and return its stdout as lines.

    Blocks until p4 exits. Stdout is decoded as UTF-8, replacing bytes that
    do not decode, and split into lines without line endings. Stderr is
    logged and never mixed into the output.

    Args:
        executable: p4 binary name or path.
        timeout: Seconds to wait before giving up.
        check: Raise P4CommandError on a non-zero exit status.
        env: Extra environment variables (e.g. P4CLIENT) for the process.

    Example:
        >>> invoke = P4Invoker(executable="p4", timeout=30.0)
        >>> lines = invoke("/home/me/ws", "opened", ["-c", "default"])
    """

    executable: str = "p4"
    timeout: float = 60.0
    check: bool = True
    env: dict[str, str] | None = None

    @classmethod
    def from_config(cls) -> P4Invoker:
        config = get_config()
        return cls(executable=config.p4_executable, timeout=config.timeout)

    def __call__(
        self,
        working_directory: str,
        command: str,
        arguments: Sequence[str],
    ) -> list[str]:
        """Run ``p4 <command> <arguments...>`` in working_directory.

        Raises:
            P4NotFoundError: The executable does not exist.
            P4TimeoutError: p4 did not exit in time.
            P4CommandError: p4 exited non-zero and ``check`` is set.
        """
        cmd = [self.executable, command, *arguments]

        env = None
        if self.env:
            env = os.environ.copy()
            env.update(self.env)

        logger.debug("p4_start: cmd=%s, cwd=%s", cmd, working_directory)
        start = time.monotonic()
        try:
            proc = subprocess.run(
                cmd,
                cwd=working_directory,
                env=env,
                capture_output=True,
                encoding=OUTPUT_ENCODING,
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as err:
            raise P4NotFoundError(
                f"p4 executable not found: {self.executable!r}. Is Perforce installed?"
            ) from err
        except subprocess.TimeoutExpired as err:
            raise P4TimeoutError(f"p4 {command} timed out after {self.timeout}s") from err

        lines = split_lines(proc.stdout or "")
        logger.debug(
            "p4_complete: command=%s, exit_code=%d, lines=%d, duration=%.3fs",
            command,
            proc.returncode,
            len(lines),
            time.monotonic() - start,
        )
        if proc.stderr:
            logger.info("p4_stderr: command=%s, stderr=%s", command, proc.stderr.strip())

        if self.check and proc.returncode != 0:
            raise P4CommandError(command, proc.returncode, proc.stderr, lines)

        return lines
