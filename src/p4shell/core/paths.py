"""Depot path rewriting.

p4 reports files in depot syntax (``//stream/main/src/app.cpp``). The host
usually wants them relative to the workspace, as local absolute paths, or in
client syntax (``//my-client/src/app.cpp``).
"""

from __future__ import annotations

import os

from p4shell.core.errors import PathNotUnderStreamError
from p4shell.core.types import ClientInfo, FileSyntax


def stream_relative(depot_path: str, client_stream: str) -> str:
    """Strip the client stream and its separator from a depot path.

    Args:
        depot_path: Path in depot syntax.
        client_stream: Stream the workspace is bound to.

    Returns:
        The remainder, still slash separated.

    Raises:
        PathNotUnderStreamError: If the path is not inside the stream.
    """
    prefix = client_stream.rstrip("/") + "/"
    if not client_stream or not depot_path.startswith(prefix):
        raise PathNotUnderStreamError(depot_path, client_stream)
    return depot_path[len(prefix) :]


def translate_path(depot_path: str, syntax: FileSyntax, client_info: ClientInfo) -> str:
    """Rewrite a depot path into the requested syntax.

    Args:
        depot_path: Path in depot syntax, prefixed by the client stream.
        syntax: Target syntax.
        client_info: Workspace metadata (stream, root, client name).

    Returns:
        The rewritten path.

    Raises:
        PathNotUnderStreamError: For any syntax other than DEPOT when the
            path is not under ``client_info.client_stream``.

    Example:
        >>> info = ClientInfo(client_stream="//stream/main", client_root="/ws")
        >>> translate_path("//stream/main/src/a.c", FileSyntax.LOCAL, info)
        '/ws/src/a.c'
    """
    if syntax is FileSyntax.DEPOT:
        return depot_path

    relative = stream_relative(depot_path, client_info.client_stream)

    if syntax is FileSyntax.CLIENT_RELATIVE:
        return relative.replace("/", os.sep)
    if syntax is FileSyntax.LOCAL:
        return os.path.abspath(os.path.join(client_info.client_root, *relative.split("/")))
    if syntax is FileSyntax.CLIENT:
        return f"//{client_info.client_name}/{relative}"

    raise ValueError(f"Unsupported file syntax: {syntax}")
