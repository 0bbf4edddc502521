"""Passthrough parser for commands without a structured model.

Not every p4 command's output is modeled; those commands stay usable by
returning their lines unchanged.
"""

from p4shell.core.parsers.base import Parser
from p4shell.core.types import ExecutionResult


class RawParser(Parser):
    """No-op parser that returns raw output lines.

    Example:
        >>> RawParser().parse(result)
        ['//stream/main/src/loader.cpp#3 - file(s) up-to-date.']
    """

    def parse(self, result: ExecutionResult) -> list[str]:
        return list(result.output)
