"""Sequential, fail-fast loading of input files.

Each file is loaded on top of the program built from the files before
it, so a file whose directives depend on a later file fails to load.
Loading stops at the first failure; there is no partial-success mode.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from plbuild.core.models import LoadResult
from plbuild.core.protocols import PrologBackend


class InputLoader:
    """Load input files one by one through a :class:`PrologBackend`.

    Every step reloads the earlier files, so their directives run again
    once per later file, and once more in ``save_image``.

    Parameters
    ----------
    backend:
        Any object satisfying the :class:`PrologBackend` protocol.
    reporter:
        Optional callable invoked with each path just before it is
        loaded.  The CLI uses it to print progress lines.
    """

    def __init__(
        self,
        backend: PrologBackend,
        *,
        reporter: Callable[[Path], None] | None = None,
    ) -> None:
        self._backend: PrologBackend = backend
        self._reporter = reporter
        self._loaded: list[Path] = []

    @property
    def loaded(self) -> tuple[Path, ...]:
        """Files loaded successfully so far, in load order."""
        return tuple(self._loaded)

    def load(self, path: Path, *, verbose: bool = False) -> LoadResult:
        """Load *path* on top of the already loaded files."""
        if self._reporter is not None:
            self._reporter(path)
        diagnostic = self._backend.consult([*self._loaded, path], verbose=verbose)
        if diagnostic is None:
            self._loaded.append(path)
        return LoadResult(path=path, diagnostic=diagnostic)

    def load_all(
        self,
        paths: Sequence[Path],
        *,
        verbose: bool = False,
    ) -> LoadResult | None:
        """Load *paths* in order.

        Returns the first failing :class:`LoadResult`, or ``None`` when
        every file loaded.
        """
        for path in paths:
            result = self.load(path, verbose=verbose)
            if not result.ok:
                return result
        return None
