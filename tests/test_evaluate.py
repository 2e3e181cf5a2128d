"""Tests for the ``test``, ``predict`` and ``predict-prob`` commands.

The engine is the in-memory :class:`StubEngine` from ``conftest.py``.

Coverage:
* Exact ``N`` / ``P@k`` / ``R@k`` output and the stderr example count.
* Defaults and explicit ``k`` / ``threshold`` reach the engine.
* ``-`` reads stdin; unopenable files fail with nothing on stdout.
* ``predict-prob`` is the only command that asks for probabilities.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from hornvecs.cli import exit_codes
from hornvecs.core.formatting import format_evaluation
from hornvecs.core.models import EvaluationResult


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatEvaluation:
    def test_three_significant_digits(self) -> None:
        lines = format_evaluation(EvaluationResult(1234, 0.123456, 0.98765), 5)
        assert lines == ["N\t1234", "P@5\t0.123", "R@5\t0.988"]

    def test_round_values_are_not_padded(self) -> None:
        lines = format_evaluation(EvaluationResult(2, 1.0, 0.5), 1)
        assert lines == ["N\t2", "P@1\t1", "R@1\t0.5"]


# ---------------------------------------------------------------------------
# test
# ---------------------------------------------------------------------------

class TestTestCommand:
    def test_reads_file_and_prints_summary(
        self, run, engine, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        data = tmp_path / "valid.txt"
        data.write_text("__label__a x y\n", encoding="utf-8")

        result = run(["test", "model.bin", str(data)])

        assert result.code == exit_codes.SUCCESS
        assert result.stdout == "N\t3\nP@1\t0.667\nR@1\t0.5\n"
        assert "Number of examples: 3" in capsys.readouterr().err
        assert engine.calls[0] == ("load_model", "model.bin")
        assert engine.calls[1] == ("test", "__label__a x y\n", 1, 0.0)

    def test_dash_reads_stdin(self, run, engine) -> None:
        result = run(["test", "model.bin", "-", "2", "0.5"], stdin="__label__b z\n")

        assert result.code == exit_codes.SUCCESS
        assert engine.calls[1] == ("test", "__label__b z\n", 2, 0.5)
        assert result.stdout.splitlines()[1].startswith("P@2\t")

    def test_missing_file(
        self, run, engine, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        result = run(["test", "model.bin", str(tmp_path / "missing.txt")])

        assert result.code == exit_codes.GENERAL_ERROR
        assert result.stdout == ""
        assert "Test file cannot be opened!" in capsys.readouterr().err
        assert "test" not in engine.names()


# ---------------------------------------------------------------------------
# predict / predict-prob
# ---------------------------------------------------------------------------

class TestPredictCommand:
    @pytest.mark.parametrize(
        "command,print_prob", [("predict", False), ("predict-prob", True)],
    )
    def test_print_prob_follows_command(
        self, run, engine, command: str, print_prob: bool,
    ) -> None:
        result = run([command, "model.bin", "-"], stdin="some text\n")

        assert result.code == exit_codes.SUCCESS
        assert engine.calls[-1] == ("predict", "some text\n", 1, print_prob, 0.0)

    def test_k_and_threshold(self, run, engine) -> None:
        run(["predict", "model.bin", "-", "4", "0.1"], stdin="x\n")
        assert engine.calls[-1] == ("predict", "x\n", 4, False, 0.1)

    def test_negative_threshold_passes_through(self, run, engine) -> None:
        run(["predict-prob", "model.bin", "-", "1", "-0.5"], stdin="x\n")
        assert engine.calls[-1][-1] == -0.5

    def test_missing_file(
        self, run, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        result = run(["predict", "model.bin", str(tmp_path / "nope.txt")])

        assert result.code == exit_codes.GENERAL_ERROR
        assert "Input file cannot be opened!" in capsys.readouterr().err

    def test_engine_failure_is_reported(
        self, run, engine, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def _broken(path: str) -> None:
            raise RuntimeError("bad magic number")

        monkeypatch.setattr(engine, "load_model", _broken)
        result = run(["predict", "model.bin", "-"], stdin="x\n")

        assert result.code == exit_codes.GENERAL_ERROR
        assert result.stdout == ""
        assert "bad magic number" in capsys.readouterr().err
