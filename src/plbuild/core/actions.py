"""The two terminal actions: syntax check and precompile.

Both actions parse nothing themselves — they receive an already parsed
:class:`~plbuild.core.models.ParsedCommand` — and both are fatal on the
first error: a failed load surfaces as
:class:`~plbuild.exceptions.CompileError` before any success path runs.
"""

from __future__ import annotations

from pathlib import Path

from plbuild.core.loader import InputLoader
from plbuild.core.models import ParsedCommand, SaveOptions
from plbuild.core.protocols import PrologBackend
from plbuild.exceptions import CompileError, UsageError

MISSING_OUTPUT_MESSAGE: str = "precompile requires an output file (-o)."


def _load_or_raise(loader: InputLoader, command: ParsedCommand) -> None:
    failure = loader.load_all(command.inputs, verbose=command.verbose)
    if failure is not None and failure.diagnostic is not None:
        raise CompileError(failure.diagnostic)


def run_syntax_check(command: ParsedCommand, loader: InputLoader) -> None:
    """Load every input; any output path is ignored.

    Raises
    ------
    CompileError
        When an input fails to load.
    """
    _load_or_raise(loader, command)


def run_precompile(
    command: ParsedCommand,
    loader: InputLoader,
    backend: PrologBackend,
    options: SaveOptions | None = None,
) -> Path:
    """Load every input and save the program image.

    Returns the path of the written image.

    Raises
    ------
    UsageError
        When no output path was given.
    CompileError
        When an input fails to load, during loading or while saving.
    """
    if command.output is None:
        raise UsageError(MISSING_OUTPUT_MESSAGE, hint="Pass -o <output> after the inputs.")

    _load_or_raise(loader, command)

    diagnostic = backend.save_image(
        loader.loaded,
        command.output,
        options or SaveOptions(),
        verbose=command.verbose,
    )
    if diagnostic is not None:
        raise CompileError(diagnostic)
    return command.output
