"""Custom exception hierarchy for plbuild.

All exceptions that cross layer boundaries must inherit from
:class:`PlbuildError`.  Raw ``subprocess`` and ``OSError`` exceptions
must NEVER propagate beyond the infrastructure layer — they are caught
and re-raised as a typed subclass defined here.

Hierarchy
---------
PlbuildError
├── UsageError
├── CompileError
├── InterpreterError
└── EnvironmentError
    └── InterpreterNotFoundError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plbuild.core.models import CompileDiagnostic


class PlbuildError(Exception):
    """Base exception for all plbuild errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    and exit with status 1.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class UsageError(PlbuildError):
    """Raised when the payload arguments are malformed."""


# --- Loading / compilation -------------------------------------------------

class CompileError(PlbuildError):
    """Raised when an input file fails to load.

    The attached :attr:`diagnostic` keeps the structured location so
    the CLI can render the multi-line report.
    """

    def __init__(self, diagnostic: CompileDiagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic: CompileDiagnostic = diagnostic


class InterpreterError(PlbuildError):
    """Raised when the interpreter cannot be run or a save step fails."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(PlbuildError):
    """Raised when a required runtime dependency is not available."""


class InterpreterNotFoundError(EnvironmentError):
    """Raised when ``swipl`` cannot be located."""
