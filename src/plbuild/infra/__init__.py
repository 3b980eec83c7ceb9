"""Infrastructure layer — external system integration.

This layer wraps all interaction with the ``swipl`` interpreter and the
operating system.  Every raw ``subprocess`` or ``OSError`` exception
must be caught here and re-raised as a
:class:`~plbuild.exceptions.PlbuildError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from plbuild.infra.swipl_backend import SwiplBackend, quote_atom
from plbuild.infra.swipl_detector import SwiplStatus, detect_swipl, probe_version, require_swipl

__all__: list[str] = [
    "SwiplBackend",
    "SwiplStatus",
    "detect_swipl",
    "probe_version",
    "quote_atom",
    "require_swipl",
]
