"""Allow ``python -m plbuild`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m plbuild`` behaves identically to the ``plbuild`` console
script.
"""

from __future__ import annotations

from plbuild.cli.app import cli

if __name__ == "__main__":
    cli()
