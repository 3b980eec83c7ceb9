"""Infrastructure: ``swipl`` detection and platform guidance.

Locates the SWI-Prolog executable and provides platform-specific
installation guidance when it is missing.

Resolution order
----------------
1. An explicit path passed by the caller (``--swipl``).
2. The :data:`SWIPL_ENV_VAR` environment variable.
3. ``swipl`` on the system PATH.

Rules
-----
* No permanent PATH modification.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
import platform
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from plbuild.exceptions import InterpreterNotFoundError

SWIPL_ENV_VAR: str = "PLBUILD_SWIPL"
"""Environment variable naming the interpreter executable."""

DEFAULT_EXECUTABLE: str = "swipl"


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SwiplStatus:
    """Result of a ``swipl`` detection probe.

    Attributes
    ----------
    found : bool
        Whether an executable was located.
    path : Path | None
        Absolute path to the executable, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing SWI-Prolog on the
        current platform.  Empty when the executable is present.
    """

    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_swipl(explicit: str | None = None) -> SwiplStatus:
    """Probe for a ``swipl`` executable.

    Returns a :class:`SwiplStatus` regardless of whether the executable
    is present — the caller decides whether to abort or merely warn.
    """
    candidate = explicit or os.environ.get(SWIPL_ENV_VAR) or DEFAULT_EXECUTABLE
    result = shutil.which(candidate)
    logger.debug(f"Resolved interpreter {candidate!r} to {result!r}")

    if result is not None:
        resolved = Path(result).resolve()
        return SwiplStatus(
            found=True,
            path=resolved,
            version_hint=f"found at {resolved}",
            install_commands=(),
        )

    return SwiplStatus(
        found=False,
        path=None,
        version_hint="not found",
        install_commands=_platform_install_commands(),
    )


def require_swipl(explicit: str | None = None) -> Path:
    """Locate ``swipl`` or raise :class:`InterpreterNotFoundError`."""
    status = detect_swipl(explicit)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append("Install SWI-Prolog using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        hint_lines.append(f"Or point {SWIPL_ENV_VAR} / --swipl at the executable.")
        raise InterpreterNotFoundError(
            "swipl is not installed or not on PATH.",
            hint="\n".join(hint_lines),
        )
    return status.path


def probe_version(executable: Path) -> str | None:
    """Return the first line of ``swipl --version``, or ``None``."""
    try:
        completed = subprocess.run(
            [str(executable), "--version"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug(f"Version probe failed: {exc}")
        return None
    first_line = completed.stdout.strip().splitlines()
    return first_line[0] if first_line else None


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands() -> tuple[str, ...]:
    """Return install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install SWI-Prolog.SWI-Prolog",
            "choco install swi-prolog",
        )
    if system == "linux":
        return (
            "sudo apt install swi-prolog-nox",
            "sudo dnf install pl",
            "sudo pacman -S swi-prolog",
        )
    if system == "darwin":
        return ("brew install swi-prolog",)
    return ("Please install SWI-Prolog from https://www.swi-prolog.org/download/stable",)
