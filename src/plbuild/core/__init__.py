"""Core / service layer — pure logic and orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem or subprocess I/O.
* No imports from ``cli`` or ``infra``.
"""

from plbuild.core.actions import run_precompile, run_syntax_check
from plbuild.core.command_line import parse_command_line, split_at_separator
from plbuild.core.diagnostics import format_diagnostic, parse_diagnostic
from plbuild.core.loader import InputLoader
from plbuild.core.models import (
    Action,
    CompileDiagnostic,
    LoadResult,
    ParsedCommand,
    SaveOptions,
)
from plbuild.core.protocols import PrologBackend

__all__: list[str] = [
    "Action",
    "CompileDiagnostic",
    "InputLoader",
    "LoadResult",
    "ParsedCommand",
    "PrologBackend",
    "SaveOptions",
    "format_diagnostic",
    "parse_command_line",
    "parse_diagnostic",
    "run_precompile",
    "run_syntax_check",
    "split_at_separator",
]
