"""Pure data types for p4shell.core.

These are simple dataclasses with no behavior coupling.
They can be serialized, passed around, and used anywhere.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from p4shell.core.session import Session

# Change list number p4 reports as "default change"
DEFAULT_CHANGE = -1


class FileSyntax(Enum):
    """Presentation syntax for file paths reported in depot form."""

    DEPOT = "depot"  # //stream/dir/file.cpp
    CLIENT_RELATIVE = "client-relative"  # dir/file.cpp
    LOCAL = "local"  # /abs/client/root/dir/file.cpp
    CLIENT = "client"  # //client-name/dir/file.cpp

    @classmethod
    def from_name(cls, name: str) -> FileSyntax:
        """Resolve a syntax from its value, accepting underscores and any case.

        Raises:
            ValueError: If the name is not a known syntax.
        """
        normalized = name.strip().lower().replace("_", "-")
        for syntax in cls:
            if syntax.value == normalized:
                return syntax
        raise ValueError(f"Unknown file syntax: {name!r}")


class CommandKind(Enum):
    """p4 commands whose output has a structured model.

    Every other command maps to RAW and its output is passed through.
    """

    INFO = "info"
    CHANGES = "changes"
    FILELOG = "filelog"
    OPENED = "opened"
    RAW = "raw"

    @classmethod
    def from_name(cls, command: str) -> CommandKind:
        """Map a p4 command name (any case) to its kind."""
        name = command.strip().lower()
        for kind in cls:
            if kind is not cls.RAW and kind.value == name:
                return kind
        return cls.RAW

    @property
    def needs_client_info(self) -> bool:
        """Whether parsing this command's output consults the client info."""
        return self is CommandKind.OPENED


@dataclass(frozen=True)
class ClientInfo:
    """Workspace metadata reported by ``p4 info``.

    Attributes:
        user_name: Perforce user.
        client_name: Workspace (client) name.
        client_host: Host the workspace is bound to.
        client_root: Local directory of the workspace.
        client_stream: Depot path prefix of the workspace's stream.
        client_address: Network address of this client.
        server_address: Network address of the server.
    """

    user_name: str = ""
    client_name: str = ""
    client_host: str = ""
    client_root: str = ""
    client_stream: str = ""
    client_address: str = ""
    server_address: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "user_name": self.user_name,
            "client_name": self.client_name,
            "client_host": self.client_host,
            "client_root": self.client_root,
            "client_stream": self.client_stream,
            "client_address": self.client_address,
            "server_address": self.server_address,
        }


@dataclass(frozen=True)
class ChangeListItem:
    """A change list as listed by ``p4 changes``.

    Attributes:
        change_list: Change list number.
        timestamp: When the change was created or submitted, None if unparsable.
        user_name: Owner of the change.
        client_name: Workspace the change belongs to.
        status: Status marker such as "*pending*", empty for submitted changes.
        description: Description text. Multi-line in long form.
    """

    change_list: int
    timestamp: datetime | None = None
    user_name: str = ""
    client_name: str = ""
    status: str = ""
    description: str = ""

    @property
    def summary(self) -> str:
        """First non-blank description line."""
        for line in self.description.splitlines():
            if line.strip():
                return line.strip()
        return ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, timestamp as ISO string."""
        return {
            "change_list": self.change_list,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "user_name": self.user_name,
            "client_name": self.client_name,
            "status": self.status,
            "description": self.description,
        }

    def __repr__(self) -> str:
        """Compact representation for REPL display."""
        return (
            f"ChangeListItem(change_list={self.change_list}, "
            f"user={self.user_name}@{self.client_name}, summary={self.summary[:60]!r})"
        )


@dataclass(frozen=True)
class FileLogItem:
    """One revision line from ``p4 filelog``."""

    revision: int
    change_list: int
    action: str = ""
    timestamp: datetime | None = None
    user_name: str = ""
    client_name: str = ""
    description: str = ""
    file_type: str = ""
    depot_file: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, timestamp as ISO string."""
        return {
            "revision": self.revision,
            "change_list": self.change_list,
            "action": self.action,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "user_name": self.user_name,
            "client_name": self.client_name,
            "description": self.description,
            "file_type": self.file_type,
            "depot_file": self.depot_file,
        }


@dataclass(frozen=True)
class OpenedFile:
    """A file opened in the workspace, from ``p4 opened``.

    ``change_list`` is DEFAULT_CHANGE when the file is in the default change.
    """

    file_path: str
    revision: int
    change_list: int = DEFAULT_CHANGE
    action: str = ""
    file_type: str = ""

    @property
    def in_default_change(self) -> bool:
        return self.change_list == DEFAULT_CHANGE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "file_path": self.file_path,
            "revision": self.revision,
            "change_list": self.change_list,
            "action": self.action,
            "file_type": self.file_type,
        }


@dataclass(frozen=True)
class CommandInvocation:
    """A p4 command as it will be (or was) invoked.

    Attributes:
        command: p4 command name, e.g. "changes".
        arguments: Argument tokens passed after the command name.
        syntax: Requested presentation syntax for file paths.
        session: Session the command runs in. Not part of equality.
    """

    command: str
    arguments: tuple[str, ...] = ()
    syntax: FileSyntax = FileSyntax.CLIENT_RELATIVE
    session: Session | None = field(default=None, compare=False, repr=False)

    @property
    def kind(self) -> CommandKind:
        return CommandKind.from_name(self.command)

    def has_flag(self, flag: str) -> bool:
        """Check for a flag among the arguments, ignoring case."""
        flag = flag.lower()
        return any(arg.lower() == flag for arg in self.arguments)

    def __str__(self) -> str:
        return f"Command: {self.command}, Arguments: {' '.join(self.arguments)}"


@dataclass(frozen=True)
class ExecutionResult:
    """A command invocation together with the raw lines p4 printed."""

    invocation: CommandInvocation
    output: tuple[str, ...] = ()

    @property
    def session(self) -> Session | None:
        return self.invocation.session

    @property
    def client_info(self) -> ClientInfo:
        """Client info cached on the session, or an empty one."""
        session = self.invocation.session
        if session is None or session.client_info is None:
            return ClientInfo()
        return session.client_info
