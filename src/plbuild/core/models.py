"""Domain models for plbuild.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependencies
on external packages.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class Action(enum.Enum):
    """Terminal actions selectable as a CLI subcommand."""

    PRECOMPILE = "precompile"
    SYNTAX_CHECK = "syntax_check"


# ---------------------------------------------------------------------------
# Parsed payload
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """Result of parsing the payload segment of the argument list."""

    verbose: bool = False
    """Whether the interpreter should run in verbose mode."""

    inputs: tuple[Path, ...] = ()
    """Source files to load, in the order given after ``-c``."""

    output: Path | None = None
    """Image path given after ``-o``, or ``None``."""


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CompileDiagnostic:
    """A single error reported while loading a source file."""

    message: str
    """Human-readable error message."""

    file: str | None = None
    """Source file the error was detected in, when known."""

    line: int | None = None
    """1-based line number, when known."""

    raw: str = ""
    """The unparsed error text as emitted by the interpreter."""

    @property
    def structured(self) -> bool:
        return self.file is not None and self.line is not None


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of loading one input file."""

    path: Path
    diagnostic: CompileDiagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


# ---------------------------------------------------------------------------
# Image options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SaveOptions:
    """Options used when saving a program image.

    The defaults produce an image that runs a no-op goal, starts the
    interactive toplevel, and still needs the ``swipl`` runtime.
    """

    goal: str = "true"
    toplevel: str = "prolog"
    stand_alone: bool = False
