"""Shared pytest fixtures and configuration for the hornvecs test suite.

Guidelines
----------
* No trained model on disk — the engine is replaced by :class:`StubEngine`.
* fasttext must be faked at the infra boundary.
* Core tests must be pure — no side effects.
* stdin/stdout are ``StringIO`` objects; stderr is read through ``capsys``.
"""

from __future__ import annotations

import io
from collections.abc import Callable, Sequence, Set
from dataclasses import dataclass
from typing import Any, TextIO

import pytest

from hornvecs.cli.app import main
from hornvecs.core.args import ModelFileArgs, TrainingArgs
from hornvecs.core.models import EvaluationResult, Neighbor
from hornvecs.core.protocols import LineReader


# ---------------------------------------------------------------------------
# Stub engine
# ---------------------------------------------------------------------------

class StubDump:
    def __init__(self, text: str) -> None:
        self.text = text

    def dump(self, stream: TextIO) -> None:
        stream.write(self.text)


class StubEngine:
    """Deterministic in-memory engine that records every call."""

    def __init__(self) -> None:
        self.vectors: dict[str, list[float]] = {
            "cat": [1.0, 0.0],
            "kitten": [0.9, 0.1],
            "dog": [0.7, 0.3],
            "car": [0.0, 1.0],
        }
        self.calls: list[tuple[Any, ...]] = []
        self.ban_sets: list[set[str]] = []
        self.quantized = False
        self.result = EvaluationResult(examples=3, precision=2 / 3, recall=0.5)
        self.args = TrainingArgs.defaults_for("skipgram")

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    # --- lifecycle -------------------------------------------------------

    def load_model(self, path: str) -> None:
        self.calls.append(("load_model", path))

    def train(self, args: TrainingArgs) -> None:
        self.calls.append(("train", args))

    def quantize(self, args: TrainingArgs) -> None:
        self.calls.append(("quantize", args))
        self.quantized = True

    def save_model(self) -> None:
        self.calls.append(("save_model",))

    def save_vectors(self) -> None:
        self.calls.append(("save_vectors",))

    def save_output(self) -> None:
        self.calls.append(("save_output",))

    # --- supervised ------------------------------------------------------

    def test(self, stream: TextIO, k: int, threshold: float) -> EvaluationResult:
        self.calls.append(("test", stream.read(), k, threshold))
        return self.result

    def predict(
        self, stream: TextIO, k: int, print_prob: bool, threshold: float,
    ) -> None:
        self.calls.append(("predict", stream.read(), k, print_prob, threshold))

    # --- vectors ---------------------------------------------------------

    def get_dimension(self) -> int:
        return 2

    def get_word_vector(self, word: str) -> list[float]:
        self.calls.append(("get_word_vector", word))
        return self.vectors.get(word, [0.0, 0.0])

    def get_sentence_vector(self, stream: LineReader) -> list[float]:
        line = stream.readline()
        self.calls.append(("get_sentence_vector", line))
        return [float(len(line.split())), 0.5]

    def ngram_vectors(self, word: str) -> None:
        self.calls.append(("ngram_vectors", word))

    def precompute_word_vectors(self) -> str:
        self.calls.append(("precompute_word_vectors",))
        return "matrix"

    def find_nn(
        self, matrix: Any, query: Sequence[float], k: int, ban_set: Set[str],
    ) -> list[Neighbor]:
        self.calls.append(("find_nn", matrix, k))
        self.ban_sets.append(set(ban_set))
        scored = [
            Neighbor(score=sum(a * b for a, b in zip(vec, query)), label=word)
            for word, vec in self.vectors.items()
        ]
        scored.sort(key=lambda n: -n.score)
        return [n for n in scored if n.label not in ban_set][:k]

    def analogies(self, k: int) -> None:
        self.calls.append(("analogies", k))

    # --- introspection ---------------------------------------------------

    def is_quantized(self) -> bool:
        return self.quantized

    def get_args(self) -> ModelFileArgs:
        return ModelFileArgs(self.args)

    def get_dictionary(self) -> StubDump:
        return StubDump("2\ncat 4 word\ndog 2 word\n")

    def get_input_matrix(self) -> StubDump:
        return StubDump("2 2\n1 0\n0 1\n")

    def get_output_matrix(self) -> StubDump:
        return StubDump("1 2\n0.5 0.5\n")


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------

@dataclass
class RunResult:
    code: int
    stdout: str


@pytest.fixture()
def engine() -> StubEngine:
    return StubEngine()


@pytest.fixture()
def run(engine: StubEngine) -> Callable[..., RunResult]:
    """Invoke :func:`main` against the stub engine with an in-memory stdin."""

    def _run(argv: list[str], stdin: str = "") -> RunResult:
        out = io.StringIO()
        code = main(
            argv,
            engine_factory=lambda: engine,
            stdin=io.StringIO(stdin),
            stdout=out,
        )
        return RunResult(code=code, stdout=out.getvalue())

    return _run


@pytest.fixture()
def run_without_engine() -> Callable[..., RunResult]:
    """Invoke :func:`main` with a factory that fails the test if used."""

    def _forbidden() -> Any:
        pytest.fail("the engine must not be built for invalid arguments")

    def _run(argv: list[str], stdin: str = "") -> RunResult:
        out = io.StringIO()
        code = main(
            argv,
            engine_factory=_forbidden,
            stdin=io.StringIO(stdin),
            stdout=out,
        )
        return RunResult(code=code, stdout=out.getvalue())

    return _run
