"""Payload parser for the ``-v`` / ``-c`` / ``-o`` grammar.

The argument list is split at the first ``--``.  Everything before the
separator belongs to the front end and is never inspected here; the
payload after it is walked left to right with a *current switch* that
decides what a plain token means.

Grammar
-------
* ``-v``  — enable verbose mode; the current switch is unchanged.
* ``-c``  — following tokens are input files (any number, in order).
* ``-o``  — the following token is the output file (at most one).
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from plbuild.core.models import ParsedCommand
from plbuild.exceptions import UsageError

SEPARATOR: str = "--"

DUPLICATE_OUTPUT_MESSAGE: str = "cannot have more than 1 output file."


def split_at_separator(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Return ``(options, payload)`` split at the first :data:`SEPARATOR`.

    When no separator is present the whole list is options and the
    payload is empty.
    """
    args = list(argv)
    if SEPARATOR not in args:
        return args, []
    index = args.index(SEPARATOR)
    return args[:index], args[index + 1:]


def parse_command_line(argv: Sequence[str]) -> ParsedCommand:
    """Extract verbose flag, inputs and output from *argv*.

    Raises
    ------
    UsageError
        When a second output path is given.
    """
    _, payload = split_at_separator(argv)

    verbose = False
    inputs: list[Path] = []
    output: Path | None = None
    switch: str | None = None

    for token in payload:
        if token == "-v":
            verbose = True
        elif token in ("-c", "-o"):
            switch = token
        elif switch == "-c":
            inputs.append(Path(token))
        elif switch == "-o":
            if output is not None:
                raise UsageError(DUPLICATE_OUTPUT_MESSAGE)
            output = Path(token)
        # Tokens before the first switch are ignored.

    return ParsedCommand(verbose=verbose, inputs=tuple(inputs), output=output)
