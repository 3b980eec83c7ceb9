"""Exit-code constants used by the CLI layer.

Build orchestrators only distinguish zero from non-zero, so every
failure kind shares :data:`GENERAL_ERROR`.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — the action completed; for ``precompile`` the image exists."""

GENERAL_ERROR: int = 1
"""Usage error, compile error, interpreter failure, or unexpected error."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
