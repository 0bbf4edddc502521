"""CLI frontend for p4shell.

Commands:
    p4shell run      Run a p4 command and print its records
    p4shell parse    Parse captured p4 output
    p4shell shell    Interactive session

Example:
    $ p4shell run changes -m 5 -my
    $ p4 opened | p4shell parse opened --stream //stream/main
"""

from p4shell.frontends.cli.main import main

__all__ = ["main"]
