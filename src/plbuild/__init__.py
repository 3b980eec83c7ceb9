"""plbuild — syntax-check and precompile SWI-Prolog programs.

Drives the ``swipl`` interpreter with a strict layered architecture and
a fatal-on-first-error contract suitable for build orchestrators.
"""

from plbuild.version import __version__

__all__: list[str] = ["__version__"]
