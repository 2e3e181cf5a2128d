"""Tests for the training and quantize commands and ModelSession sequencing.

The :class:`EmbeddingEngine` dependency is the stub from ``conftest.py``
or a ``MagicMock`` — no model is trained.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from hornvecs.cli import exit_codes
from hornvecs.core.args import TrainingArgs
from hornvecs.core.session import ModelSession
from hornvecs.exceptions import EngineError, StreamOpenError


# ---------------------------------------------------------------------------
# Training command
# ---------------------------------------------------------------------------

class TestTrainCommand:
    def test_saves_model_and_vectors(self, run, engine) -> None:
        result = run(["skipgram", "-input", "corpus.txt", "-output", "vecs"])

        assert result.code == exit_codes.SUCCESS
        assert engine.names() == ["train", "save_model", "save_vectors"]
        trained = engine.calls[0][1]
        assert trained.input == "corpus.txt"
        assert trained.model == "sg"

    def test_save_output_on_request(self, run, engine) -> None:
        run(["supervised", "-input", "t.txt", "-output", "clf", "-saveOutput"])
        assert engine.names() == ["train", "save_model", "save_vectors", "save_output"]

    def test_training_failure_is_fatal(
        self, run, engine, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        def _fail(args: TrainingArgs) -> None:
            raise MemoryError("out of memory")

        monkeypatch.setattr(engine, "train", _fail)
        result = run(["cbow", "-input", "c.txt", "-output", "o"])

        assert result.code == exit_codes.GENERAL_ERROR
        assert "save_model" not in engine.names()
        assert "out of memory" in capsys.readouterr().err

    def test_bad_option_prints_option_help(
        self, run_without_engine, capsys: pytest.CaptureFixture[str],
    ) -> None:
        result = run_without_engine(["supervised", "-input", "t", "-output", "o", "-dim", "x"])

        assert result.code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "usage: hornvecs supervised <args>" in err
        assert "The following arguments for training are optional:" in err


# ---------------------------------------------------------------------------
# Quantize command
# ---------------------------------------------------------------------------

class TestQuantizeCommand:
    def test_loads_bin_next_to_output(self, run, engine) -> None:
        result = run(["quantize", "-output", "clf", "-qnorm"])

        assert result.code == exit_codes.SUCCESS
        assert engine.calls[0] == ("load_model", "clf.bin")
        assert engine.names() == ["load_model", "quantize", "save_model"]
        assert engine.calls[1][1].qnorm is True

    def test_missing_output(
        self, run_without_engine, capsys: pytest.CaptureFixture[str],
    ) -> None:
        result = run_without_engine(["quantize", "-qnorm"])

        assert result.code == exit_codes.GENERAL_ERROR
        assert "Empty output path." in capsys.readouterr().err


# ---------------------------------------------------------------------------
# ModelSession — exception mapping
# ---------------------------------------------------------------------------

class TestSessionExceptions:
    def test_our_errors_propagate_unchanged(self) -> None:
        engine = MagicMock()
        engine.load_model.side_effect = StreamOpenError("nope")

        with pytest.raises(StreamOpenError, match="nope"):
            ModelSession(engine).load("m.bin")

    def test_unexpected_error_wrapped(self) -> None:
        engine = MagicMock()
        engine.get_word_vector.side_effect = KeyError("zebra")

        with pytest.raises(EngineError, match="Unexpected engine error during word vector"):
            ModelSession(engine).word_vector("zebra")

    def test_unexpected_error_chained(self) -> None:
        engine = MagicMock()
        original = RuntimeError("root cause")
        engine.test.side_effect = original

        with pytest.raises(EngineError) as exc_info:
            ModelSession(engine).evaluate(MagicMock(), 1, 0.0)
        assert exc_info.value.__cause__ is original


class TestSessionSequencing:
    def test_precompute_is_cached(self) -> None:
        engine = MagicMock()
        engine.precompute_word_vectors.return_value = "matrix"
        session = ModelSession(engine)

        session.precompute()
        session.nearest_neighbors("a", 3)
        session.nearest_neighbors("b", 3)

        engine.precompute_word_vectors.assert_called_once_with()
        engine.find_nn.assert_called_with(
            "matrix", engine.get_word_vector.return_value, 3, {"b"},
        )

    def test_neighbours_are_not_resorted(self) -> None:
        from hornvecs.core.models import Neighbor

        engine = MagicMock()
        unordered = [Neighbor(0.1, "x"), Neighbor(0.9, "y")]
        engine.find_nn.return_value = unordered

        assert ModelSession(engine).nearest_neighbors("q", 2) == unordered
