"""Runtime configuration.

Settings come from the environment. A ``.env.local`` file in the working
directory is loaded first (without overriding variables already set), so
per-workspace defaults can live next to the workspace.

Environment Variables:
    P4SHELL_P4_EXECUTABLE: p4 binary to run (default "p4")
    P4SHELL_TIMEOUT: Seconds to wait for p4 to exit (default 60)
    P4SHELL_SYNTAX: Default path syntax (depot, client-relative, local, client)
    P4SHELL_HISTORY_FILE: History file for the interactive shell
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from p4shell.core.types import FileSyntax

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "p4"
DEFAULT_TIMEOUT = 60.0
DEFAULT_HISTORY_FILE = "~/.p4shell_history"


@dataclass(frozen=True)
class ShellConfig:
    """Resolved p4shell settings.

    Attributes:
        p4_executable: p4 binary name or path.
        timeout: Seconds before a p4 invocation is abandoned.
        default_syntax: Path syntax used when none is requested.
        history_file: Interactive shell history location.
    """

    p4_executable: str = DEFAULT_EXECUTABLE
    timeout: float = DEFAULT_TIMEOUT
    default_syntax: FileSyntax = FileSyntax.CLIENT_RELATIVE
    history_file: str = DEFAULT_HISTORY_FILE


def _load_env_file(directory: Path) -> None:
    from dotenv import load_dotenv

    env_local = directory / ".env.local"
    if env_local.exists():
        load_dotenv(env_local)
        logger.debug("env_loaded: path=%s", env_local)


def _env_timeout() -> float:
    raw = os.getenv("P4SHELL_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning("invalid_timeout: value=%r, using=%s", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT


def _env_syntax() -> FileSyntax:
    raw = os.getenv("P4SHELL_SYNTAX")
    if not raw:
        return FileSyntax.CLIENT_RELATIVE
    try:
        return FileSyntax.from_name(raw)
    except ValueError:
        logger.warning("invalid_syntax: value=%r, using=client-relative", raw)
        return FileSyntax.CLIENT_RELATIVE


def load_config(directory: Path | str | None = None) -> ShellConfig:
    """Build the configuration from the environment.

    Args:
        directory: Where to look for ``.env.local``. Defaults to the cwd.

    Returns:
        The resolved configuration.
    """
    _load_env_file(Path(directory) if directory else Path.cwd())

    return ShellConfig(
        p4_executable=os.getenv("P4SHELL_P4_EXECUTABLE", DEFAULT_EXECUTABLE),
        timeout=_env_timeout(),
        default_syntax=_env_syntax(),
        history_file=os.getenv("P4SHELL_HISTORY_FILE", DEFAULT_HISTORY_FILE),
    )


@lru_cache(maxsize=1)
def get_config() -> ShellConfig:
    """Process-wide configuration, loaded once."""
    return load_config()
