"""Extraction and rendering of interpreter error reports.

``swipl`` prints every message of severity *error* on stderr with an
``ERROR:`` prefix.  A located error looks like either of::

    ERROR: /src/app.pl:3:8: Syntax error: Operator expected

    ERROR: /src/app.pl:2:
    ERROR:    catch/3: Unknown procedure: helper/0

Lines whose text after the prefix is indented are continuations of the
preceding block.  Warnings and informational output are ignored.
"""

from __future__ import annotations

import re

from plbuild.core.models import CompileDiagnostic

ERROR_PREFIX: str = "ERROR:"

_LOCATION_RE = re.compile(
    r"^(?P<file>.+?):(?P<line>\d+):(?:(?P<column>\d+):)?\s*(?P<message>.*)$"
)


def error_blocks(stderr: str) -> list[list[str]]:
    """Group ``ERROR:`` lines of *stderr* into blocks, prefix removed."""
    blocks: list[list[str]] = []
    current: list[str] | None = None

    for line in stderr.splitlines():
        if not line.startswith(ERROR_PREFIX):
            current = None
            continue
        body = line[len(ERROR_PREFIX):]
        if current is not None and body.startswith("  "):
            current.append(body.strip())
            continue
        current = [body.strip()]
        blocks.append(current)

    return blocks


def parse_diagnostic(stderr: str) -> CompileDiagnostic | None:
    """Return the first error reported in *stderr*, or ``None``."""
    blocks = error_blocks(stderr)
    if not blocks:
        return None

    header, *rest = blocks[0]
    details = [part for part in rest if part]
    raw = " ".join([header, *details]).strip()

    match = _LOCATION_RE.match(header)
    if match is None:
        return CompileDiagnostic(message=raw, raw=raw)

    message = " ".join(
        part for part in (match.group("message"), *details) if part
    )
    return CompileDiagnostic(
        message=message or raw,
        file=match.group("file"),
        line=int(match.group("line")),
        raw=raw,
    )


def format_diagnostic(diagnostic: CompileDiagnostic) -> list[str]:
    """Render *diagnostic* as the lines printed before exiting."""
    if diagnostic.structured:
        return [
            f"ERROR: {diagnostic.message}",
            f"  in file {diagnostic.file}",
            f"  detected on line {diagnostic.line}",
        ]
    return [f"ERROR: {diagnostic.raw or diagnostic.message}"]
