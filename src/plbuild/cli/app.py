"""CLI application entry point and command routing for plbuild.

This module is the **sole error boundary** for the entire application.
It catches :class:`~plbuild.exceptions.PlbuildError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, prints the ``ERROR:`` report and
returns well-defined exit codes.  Nothing else in the codebase ends the
process.

Invocation
----------
::

    plbuild [--swipl PATH] [--timeout S] [--log-level L] precompile -- [-v] -c <input>... -o <output>
    plbuild [--swipl PATH] [--timeout S] [--log-level L] syntax_check -- [-v] -c <input>...
    plbuild doctor

Everything before ``--`` is parsed by argparse; the payload after it is
parsed by :func:`~plbuild.core.command_line.parse_command_line`.  argparse
errors are raised as :class:`~plbuild.exceptions.UsageError` so they
reach the same boundary; only ``--help`` and ``--version`` exit 0
without running an action.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from plbuild.cli import exit_codes
from plbuild.cli.console import console, err_console
from plbuild.cli.logging_setup import DEFAULT_LOG_LEVEL, LOG_LEVELS, configure_logging
from plbuild.core.command_line import parse_command_line, split_at_separator
from plbuild.core.diagnostics import format_diagnostic
from plbuild.core.models import Action, ParsedCommand
from plbuild.exceptions import CompileError, PlbuildError, UsageError
from plbuild.version import __version__

SYNTAX_OK_MESSAGE: str = "Syntax check passed."


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Parser whose errors go through the CLI error boundary."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(
            message,
            hint="Run 'plbuild --help' for usage; payload arguments go after '--'.",
        )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the front-end parser for everything before ``--``."""
    parser = _ArgumentParser(
        prog="plbuild",
        description="Syntax-check or precompile SWI-Prolog programs.",
        epilog="Payload after '--': [-v] -c <input>... -o <output>",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--swipl",
        metavar="PATH",
        default=None,
        help="SWI-Prolog executable (default: $PLBUILD_SWIPL or 'swipl' on PATH).",
    )
    parser.add_argument(
        "--timeout",
        metavar="SECONDS",
        type=float,
        default=None,
        help="Abort an interpreter run after this many seconds.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL,
        type=str.upper,
        help="Diagnostic log level on stderr (default: %(default)s).",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command", required=True)
    subparsers.add_parser(
        Action.PRECOMPILE.value,
        help="Load the inputs and save a program image to the -o path.",
    )
    subparsers.add_parser(
        Action.SYNTAX_CHECK.value,
        help="Load the inputs and report the first error.",
    )
    subparsers.add_parser("doctor", help="Show environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _report_loading(path: Path) -> None:
    console.print(f"Loading {path} ...")


def _handle_action(
    action: Action,
    command: ParsedCommand,
    *,
    swipl: str | None,
    timeout: float | None,
) -> int:
    """Run *action* against the ``swipl`` backend.

    Flow:
    1. Build the backend (interpreter resolved lazily) and the loader.
    2. Load the inputs in order, printing one line per file.
    3. For ``precompile``, save the image.
    """
    from plbuild.core.actions import run_precompile, run_syntax_check
    from plbuild.core.loader import InputLoader
    from plbuild.infra.swipl_backend import SwiplBackend

    backend = SwiplBackend(explicit=swipl, timeout=timeout)
    loader = InputLoader(backend, reporter=_report_loading)

    if action is Action.SYNTAX_CHECK:
        run_syntax_check(command, loader)
        console.print(SYNTAX_OK_MESSAGE)
        return exit_codes.SUCCESS

    output = run_precompile(command, loader, backend)
    console.print(f"Saved program image to {output}.")
    return exit_codes.SUCCESS


def _handle_doctor(swipl: str | None) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from plbuild.cli.doctor import run_doctor

    return run_doctor(swipl)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the plbuild CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    PlbuildError
        For usage and compile errors; rendered by :func:`cli`.
    """
    if argv is None:
        argv = sys.argv[1:]

    options, _ = split_at_separator(argv)
    parser = _build_parser()
    args = parser.parse_args(options)
    configure_logging(args.log_level)

    if args.command == "doctor":
        return _handle_doctor(args.swipl)

    command = parse_command_line(argv)
    return _handle_action(
        Action(args.command),
        command,
        swipl=args.swipl,
        timeout=args.timeout,
    )


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def report_error(exc: PlbuildError) -> None:
    """Print the ``ERROR:`` report for *exc*, then its hint on stderr."""
    if isinstance(exc, CompileError):
        for line in format_diagnostic(exc.diagnostic):
            console.print(line)
    else:
        console.print(f"ERROR: {exc}")
    if exc.hint:
        err_console.print(f"[yellow]Hint:[/yellow] {exc.hint}")


def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main`; every failure, including ones raised while
    saving the image, ends with a non-zero status.
    """
    try:
        code = main(argv)
        sys.exit(code)
    except PlbuildError as exc:
        report_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(f"ERROR: unexpected failure: {type(exc).__name__}: {exc}")
        sys.exit(exit_codes.GENERAL_ERROR)
