"""Session management.

A Session carries the working directory, the p4 invoker and the cached
client info for one host session. Every command takes the session
explicitly; there is no ambient global state.

Example:
    >>> from p4shell.core.session import Session
    >>> session = Session(name="main", cwd="/home/me/ws")
    >>> session.client_info is None
    True
"""

from p4shell.core.session.session import Session

__all__ = ["Session"]
