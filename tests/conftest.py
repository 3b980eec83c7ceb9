"""Shared pytest fixtures and configuration for the plbuild test suite.

Guidelines
----------
* No real ``swipl`` is required by any test.
* The interpreter is mocked at the infra boundary (``subprocess.run``)
  or replaced by :class:`~fakes.FakeBackend` at the protocol boundary.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from fakes import FakeBackend


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def sources(tmp_path: Path) -> dict[str, Path]:
    """Three small Prolog files on disk."""
    files = {
        "a.pl": ":- initialization(b_fact).\n",
        "b.pl": "b_fact.\n",
        "c.pl": "c_fact(1).\n",
    }
    paths: dict[str, Path] = {}
    for name, text in files.items():
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        paths[name] = path
    return paths
