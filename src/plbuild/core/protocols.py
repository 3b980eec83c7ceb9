"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from plbuild.core.models import CompileDiagnostic, SaveOptions


class PrologBackend(Protocol):
    """Contract for interpreter backends.

    A backend starts from an empty program for every call; the order
    of *sources* is the order in which files are consulted.
    """

    def consult(
        self,
        sources: Sequence[Path],
        *,
        verbose: bool = False,
    ) -> CompileDiagnostic | None:
        """Load *sources* in order and report the first error, if any.

        Returns ``None`` when every file loaded cleanly.  Load errors
        are returned, never raised.

        Raises
        ------
        InterpreterError
            When the interpreter itself cannot be run.
        """
        ...  # pragma: no cover

    def save_image(
        self,
        sources: Sequence[Path],
        output: Path,
        options: SaveOptions,
        *,
        verbose: bool = False,
    ) -> CompileDiagnostic | None:
        """Load *sources* and save the resulting program image to *output*.

        Returns a diagnostic when loading fails during the save, ``None``
        when the image was written.

        Raises
        ------
        InterpreterError
            When the interpreter cannot be run or writes no image.
        """
        ...  # pragma: no cover
