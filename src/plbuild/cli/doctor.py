"""``plbuild doctor`` — environment diagnostics command.

Gathers system information and renders a table summarising whether the
runtime environment can run the build actions.  Rich is used when it is
installed; otherwise a plain-text table is printed to stderr.
"""

from __future__ import annotations

import platform
import sys

from plbuild.cli import exit_codes
from plbuild.cli.console import err_console
from plbuild.infra.swipl_detector import SwiplStatus, detect_swipl, probe_version
from plbuild.version import __version__

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _plbuild_version_check() -> Check:
    return "plbuild", __version__, "[green]OK[/green]"


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _swipl_check(status: SwiplStatus) -> Check:
    """Return (label, value, status) for the interpreter row."""
    if status.found:
        return "swipl", str(status.path) if status.path else "found", "[green]OK[/green]"
    return "swipl", "not found", "[red]FAIL[/red]"


def _swipl_version_check(status: SwiplStatus) -> Check:
    """Return (label, value, status) for the interpreter version row."""
    if not status.found or status.path is None:
        return "version", "unknown", "[yellow]WARN[/yellow]"
    version = probe_version(status.path)
    if version is None:
        return "version", "unknown", "[yellow]WARN[/yellow]"
    return "version", version, "[green]OK[/green]"


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_table(checks: list[Check]) -> None:
    print("\nplbuild doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_table(checks: list[Check]) -> bool:
    """Render *checks* with Rich; return ``False`` when Rich is missing."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return False

    table = Table(
        title="plbuild doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    err_console.print()
    err_console.print(table)
    err_console.print()
    return True


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(swipl: str | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    swipl_status = detect_swipl(swipl)
    checks = [
        _plbuild_version_check(),
        _python_version_check(),
        _swipl_check(swipl_status),
        _swipl_version_check(swipl_status),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    if not _print_rich_table(checks):
        _print_plain_table(checks)

    if not swipl_status.found and swipl_status.install_commands:
        err_console.print("[yellow]SWI-Prolog is not installed.[/yellow]")
        err_console.print("Install using one of the following commands:\n")
        for cmd in swipl_status.install_commands:
            err_console.print(f"  [bold]{cmd}[/bold]")
        err_console.print()

    if has_failure:
        err_console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    err_console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
