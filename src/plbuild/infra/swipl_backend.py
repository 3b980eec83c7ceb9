"""``swipl`` subprocess implementation of :class:`~plbuild.core.protocols.PrologBackend`.

This module is the **only** place in the codebase that runs the
interpreter to load or save programs.  Every call starts a fresh
``swipl`` with ``--on-error=halt`` so that the first error message
stops the interpreter instead of letting it carry on with a partially
loaded program.  Raw ``subprocess`` exceptions are re-raised as
:class:`~plbuild.exceptions.InterpreterError`.
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from plbuild.core.diagnostics import parse_diagnostic
from plbuild.core.models import CompileDiagnostic, SaveOptions
from plbuild.exceptions import InterpreterError
from plbuild.infra.swipl_detector import require_swipl


def quote_atom(text: str) -> str:
    """Return *text* as a quoted Prolog atom."""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def _atom_list(paths: Sequence[Path]) -> str:
    return "[" + ",".join(quote_atom(path.resolve().as_posix()) for path in paths) + "]"


class SwiplBackend:
    """Concrete :class:`PrologBackend` driving the ``swipl`` executable.

    Usage::

        backend = SwiplBackend(explicit="/opt/swipl/bin/swipl")
        diagnostic = backend.consult([Path("lib.pl"), Path("main.pl")])

    Parameters
    ----------
    executable:
        Path to the ``swipl`` binary.  When ``None`` it is resolved via
        :func:`~plbuild.infra.swipl_detector.require_swipl` the first
        time the interpreter is needed.
    explicit:
        Executable name or path handed to the resolver.
    timeout:
        Optional limit in seconds for each interpreter run.
    """

    def __init__(
        self,
        executable: Path | None = None,
        *,
        explicit: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._executable: Path | None = executable
        self._explicit: str | None = explicit
        self._timeout: float | None = timeout

    @property
    def executable(self) -> Path:
        """The interpreter binary, resolved on first use."""
        if self._executable is None:
            self._executable = require_swipl(self._explicit)
        return self._executable

    # ------------------------------------------------------------------
    # Command construction (pure)
    # ------------------------------------------------------------------

    def _base_command(self, *, verbose: bool) -> list[str]:
        command = [str(self.executable), "--on-error=halt"]
        if not verbose:
            command.append("-q")
        return command

    def build_consult_command(
        self,
        sources: Sequence[Path],
        *,
        verbose: bool = False,
    ) -> list[str]:
        """Return the argv that loads *sources* and halts."""
        return [
            *self._base_command(verbose=verbose),
            "-g", f"consult({_atom_list(sources)})",
            "-t", "halt",
        ]

    def build_save_command(
        self,
        sources: Sequence[Path],
        output: Path,
        options: SaveOptions,
        *,
        verbose: bool = False,
    ) -> list[str]:
        """Return the argv that loads *sources* and saves an image to *output*."""
        stand_alone = "true" if options.stand_alone else "false"
        save_goal = (
            f"qsave_program({quote_atom(output.resolve().as_posix())}, "
            f"[goal({options.goal}), toplevel({options.toplevel}), "
            f"stand_alone({stand_alone})])"
        )
        return [
            *self._base_command(verbose=verbose),
            "-g", f"consult({_atom_list(sources)})",
            "-g", save_goal,
            "-t", "halt",
        ]

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def consult(
        self,
        sources: Sequence[Path],
        *,
        verbose: bool = False,
    ) -> CompileDiagnostic | None:
        """Load *sources* in a fresh interpreter.

        Returns the first reported error, or ``None``.
        """
        missing = _first_missing(sources)
        if missing is not None:
            return missing

        completed = self._run(self.build_consult_command(sources, verbose=verbose))
        return _diagnostic_from(completed)

    def save_image(
        self,
        sources: Sequence[Path],
        output: Path,
        options: SaveOptions,
        *,
        verbose: bool = False,
    ) -> CompileDiagnostic | None:
        """Load *sources* and write the program image to *output*.

        Raises
        ------
        InterpreterError
            When the interpreter exits cleanly but no image was written.
        """
        missing = _first_missing(sources)
        if missing is not None:
            return missing

        completed = self._run(
            self.build_save_command(sources, output, options, verbose=verbose)
        )
        diagnostic = _diagnostic_from(completed)
        if diagnostic is not None:
            return diagnostic
        if not output.exists():
            raise InterpreterError(
                f"swipl finished but no image was written to {output}.",
                hint="Check that the output directory exists and is writable.",
            )
        return None

    # ------------------------------------------------------------------
    # Process execution
    # ------------------------------------------------------------------

    def _run(self, command: list[str]) -> subprocess.CompletedProcess[str]:
        logger.debug(f"Running: {shlex.join(command)}")
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise InterpreterError(
                f"swipl did not finish within {self._timeout} seconds.",
                hint="Raise --timeout or check the inputs for non-terminating directives.",
            ) from exc
        except OSError as exc:
            raise InterpreterError(f"Could not run {self.executable}: {exc}") from exc

        logger.debug(f"swipl exited with status {completed.returncode}")
        if completed.stderr:
            logger.debug(f"swipl stderr:\n{completed.stderr.rstrip()}")
        return completed


def _first_missing(sources: Sequence[Path]) -> CompileDiagnostic | None:
    for source in sources:
        if not source.exists():
            message = f"source file {source} does not exist"
        elif not source.is_file():
            message = f"source file {source} is not a regular file"
        else:
            continue
        return CompileDiagnostic(message=message, raw=message)
    return None


def _diagnostic_from(completed: subprocess.CompletedProcess[str]) -> CompileDiagnostic | None:
    diagnostic = parse_diagnostic(completed.stderr or "")
    if diagnostic is not None:
        return diagnostic
    if completed.returncode != 0:
        message = f"swipl exited with status {completed.returncode}"
        return CompileDiagnostic(message=message, raw=message)
    return None
