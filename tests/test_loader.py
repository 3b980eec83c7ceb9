"""Tests for sequential loading and the two actions (core/loader.py, core/actions.py).

All tests use :class:`FakeBackend` — no interpreter is involved.

Coverage:
* Progress reporting happens before each load, in order.
* Loading stops at the first failure.
* Order sensitivity: a file depending on a later file fails.
* ``run_syntax_check`` / ``run_precompile`` success and failure paths.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from plbuild.core.actions import run_precompile, run_syntax_check
from plbuild.core.loader import InputLoader
from plbuild.core.models import CompileDiagnostic, ParsedCommand, SaveOptions
from plbuild.exceptions import CompileError, UsageError
from fakes import FakeBackend


BROKEN = CompileDiagnostic(
    message="Syntax error: Operator expected",
    file="b.pl",
    line=2,
    raw="b.pl:2:1: Syntax error: Operator expected",
)


# ---------------------------------------------------------------------------
# InputLoader
# ---------------------------------------------------------------------------

class TestInputLoader:
    def test_reports_each_file_before_loading(self, fake_backend: FakeBackend) -> None:
        events: list[str] = []

        def reporter(path: Path) -> None:
            events.append(f"report {path.name} after {len(fake_backend.consulted)} loads")

        loader = InputLoader(fake_backend, reporter=reporter)
        assert loader.load_all([Path("a.pl"), Path("b.pl")]) is None
        assert events == ["report a.pl after 0 loads", "report b.pl after 1 loads"]

    def test_each_step_loads_accumulated_program(self, fake_backend: FakeBackend) -> None:
        loader = InputLoader(fake_backend)
        loader.load_all([Path("a.pl"), Path("b.pl"), Path("c.pl")])
        assert fake_backend.consulted == [
            (Path("a.pl"),),
            (Path("a.pl"), Path("b.pl")),
            (Path("a.pl"), Path("b.pl"), Path("c.pl")),
        ]
        assert loader.loaded == (Path("a.pl"), Path("b.pl"), Path("c.pl"))

    def test_stops_at_first_failure(self) -> None:
        backend = FakeBackend(failures={"b.pl": BROKEN})
        reported: list[Path] = []
        loader = InputLoader(backend, reporter=reported.append)

        result = loader.load_all([Path("a.pl"), Path("b.pl"), Path("c.pl")])

        assert result is not None
        assert not result.ok
        assert result.path == Path("b.pl")
        assert result.diagnostic == BROKEN
        assert reported == [Path("a.pl"), Path("b.pl")]
        assert loader.loaded == (Path("a.pl"),)

    def test_empty_input_list(self, fake_backend: FakeBackend) -> None:
        assert InputLoader(fake_backend).load_all([]) is None
        assert fake_backend.consulted == []

    def test_verbose_is_forwarded(self, fake_backend: FakeBackend) -> None:
        InputLoader(fake_backend).load_all([Path("a.pl")], verbose=True)
        assert fake_backend.verbose_flags == [True]


class TestLoadOrder:
    def test_dependent_first_fails(self) -> None:
        backend = FakeBackend(requires={"a.pl": "b.pl"})
        result = InputLoader(backend).load_all([Path("a.pl"), Path("b.pl")])
        assert result is not None
        assert result.path == Path("a.pl")

    def test_dependency_first_succeeds(self) -> None:
        backend = FakeBackend(requires={"a.pl": "b.pl"})
        assert InputLoader(backend).load_all([Path("b.pl"), Path("a.pl")]) is None


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class TestRunSyntaxCheck:
    def test_success_ignores_output(self, fake_backend: FakeBackend) -> None:
        cmd = ParsedCommand(inputs=(Path("a.pl"),), output=Path("ignored.img"))
        run_syntax_check(cmd, InputLoader(fake_backend))
        assert fake_backend.saved == []

    def test_failure_raises_compile_error(self) -> None:
        backend = FakeBackend(failures={"b.pl": BROKEN})
        cmd = ParsedCommand(inputs=(Path("a.pl"), Path("b.pl")))
        with pytest.raises(CompileError) as exc_info:
            run_syntax_check(cmd, InputLoader(backend))
        assert exc_info.value.diagnostic == BROKEN

    def test_no_inputs(self, fake_backend: FakeBackend) -> None:
        run_syntax_check(ParsedCommand(), InputLoader(fake_backend))
        assert fake_backend.consulted == []


class TestRunPrecompile:
    def test_saves_loaded_program(self, fake_backend: FakeBackend, tmp_path: Path) -> None:
        out = tmp_path / "app.img"
        cmd = ParsedCommand(inputs=(Path("a.pl"), Path("b.pl")), output=out)

        result = run_precompile(cmd, InputLoader(fake_backend), fake_backend)

        assert result == out
        assert out.exists()
        sources, output, options = fake_backend.saved[0]
        assert sources == (Path("a.pl"), Path("b.pl"))
        assert output == out
        assert options == SaveOptions(goal="true", toplevel="prolog", stand_alone=False)

    def test_first_file_is_reloaded_for_every_step(self, fake_backend: FakeBackend, tmp_path: Path) -> None:
        first = Path("a.pl")
        cmd = ParsedCommand(inputs=(first, Path("b.pl"), Path("c.pl")), output=tmp_path / "app.img")

        run_precompile(cmd, InputLoader(fake_backend), fake_backend)

        loads = sum(first in step for step in fake_backend.consulted)
        saves = sum(first in sources for sources, _, _ in fake_backend.saved)
        assert (loads, saves) == (3, 1)

    def test_missing_output_is_usage_error(self, fake_backend: FakeBackend) -> None:
        cmd = ParsedCommand(inputs=(Path("a.pl"),))
        with pytest.raises(UsageError, match="requires an output file"):
            run_precompile(cmd, InputLoader(fake_backend), fake_backend)
        assert fake_backend.consulted == []

    def test_load_failure_skips_save(self, tmp_path: Path) -> None:
        backend = FakeBackend(failures={"a.pl": BROKEN})
        out = tmp_path / "app.img"
        cmd = ParsedCommand(inputs=(Path("a.pl"),), output=out)

        with pytest.raises(CompileError):
            run_precompile(cmd, InputLoader(backend), backend)
        assert backend.saved == []
        assert not out.exists()

    def test_save_diagnostic_raises(self, tmp_path: Path) -> None:
        class FailingSave(FakeBackend):
            def save_image(self, sources, output, options, *, verbose=False):  # type: ignore[no-untyped-def]
                return CompileDiagnostic(message="no permission", raw="no permission")

        backend = FailingSave()
        cmd = ParsedCommand(inputs=(Path("a.pl"),), output=tmp_path / "x.img")
        with pytest.raises(CompileError, match="no permission"):
            run_precompile(cmd, InputLoader(backend), backend)
