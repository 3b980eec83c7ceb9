"""CLI console helpers with optional Rich support.

This module avoids module-level imports of Rich so bootstrap paths
(``--help``, ``--version``) and the build actions keep working even when
Rich is not installed.

Two proxies are exported:

* :data:`console` writes to stdout and carries the contract lines
  (progress, success, ``ERROR:`` reports).  Text is printed literally:
  no markup, no emoji codes, no highlighting, no soft wrapping.
* :data:`err_console` writes to stderr and is used for hints and the
  ``doctor`` report, where Rich markup is allowed.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from plbuild.exceptions import EnvironmentError

_MARKUP_TAG_RE = re.compile(r"\[/?[a-z ]+\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = False) -> Any:
	"""Create a Rich console instance targeting stdout or stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr)


def strip_markup(text: str) -> str:
	"""Remove simple Rich markup tags such as ``[bold red]`` from *text*."""
	return _MARKUP_TAG_RE.sub("", text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def __init__(self, *, stderr: bool, markup: bool) -> None:
		self._stderr = stderr
		self._markup = markup

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain ``print``."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			stream = sys.stderr if self._stderr else sys.stdout
			if self._markup:
				objects = tuple(strip_markup(str(obj)) for obj in objects)
			print(*objects, file=stream)
			return
		rich_console.print(
			*objects,
			markup=self._markup,
			emoji=self._markup,
			highlight=False,
			soft_wrap=True,
		)


console = _ConsoleProxy(stderr=False, markup=False)
err_console = _ConsoleProxy(stderr=True, markup=True)
