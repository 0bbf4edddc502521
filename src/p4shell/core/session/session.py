"""Session - per-host-session state for p4 commands.

A Session holds what survives between commands issued from one host
session: the working directory p4 runs in, the invoker, and the cached
``p4 info`` result.

Example:
    >>> from p4shell.core.session import Session
    >>> from p4shell.core.commands import run
    >>>
    >>> session = Session(name="main", cwd="/home/me/ws")
    >>> changes = run("changes", ["-m", "5", "-my"], session)
    >>> session.client_info.client_name
    'me-ws'
    >>> session.reset()  # next command re-reads p4 info
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from p4shell.core.invoke import Invoker, P4Invoker
from p4shell.core.types import ClientInfo

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Per-session context passed explicitly into every command.

    Attributes:
        name: Session name, for display.
        cwd: Directory p4 is invoked in. Defaults to the process cwd.
        invoker: Callable running p4 (see p4shell.core.invoke).
        client_info: Cached ``p4 info`` result, None until first use.
        created_at: Session creation timestamp.
        metadata: Additional session metadata.
    """

    name: str = "default"
    cwd: str = field(default_factory=os.getcwd)
    invoker: Invoker = field(default_factory=P4Invoker.from_config, repr=False)
    client_info: ClientInfo | None = None
    created_at: datetime = field(default_factory=datetime.now)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def client_name(self) -> str:
        """Cached client name, empty before the first ``p4 info``."""
        return self.client_info.client_name if self.client_info else ""

    def invoke(self, command: str, arguments: Sequence[str]) -> list[str]:
        """Run a p4 command in the session's working directory."""
        return self.invoker(self.cwd, command, list(arguments))

    def reset(self) -> None:
        """Drop the cached client info."""
        logger.debug("session_reset: name=%s", self.name)
        self.client_info = None

    def __repr__(self) -> str:
        client = self.client_name or "-"
        return f"Session(name={self.name!r}, cwd={self.cwd!r}, client={client!r})"
