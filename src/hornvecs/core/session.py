"""Core model session — sequences engine calls for one command.

This is the central service class consumed by the CLI layer.  It
depends on an :class:`~hornvecs.core.protocols.EmbeddingEngine`
injected at construction time (dependency inversion), keeping the core
free of any engine imports.

Guarantees
----------
* Pure orchestration — streams are passed in, never opened here.
* Only :class:`~hornvecs.exceptions.HornvecsError` subclasses escape.
* Neighbour lists are returned in engine order, never re-sorted.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import Any, TextIO, TypeVar

from hornvecs.core.args import TrainingArgs
from hornvecs.core.models import EvaluationResult, Neighbor
from hornvecs.core.protocols import EmbeddingEngine, LineReader, Vector
from hornvecs.exceptions import EngineError, HornvecsError


_T = TypeVar("_T")

MODEL_SUFFIX: str = ".bin"
"""Suffix of a full-precision model written by the training commands."""


class DumpTarget(str, Enum):
    """What ``dump`` can write."""

    ARGS = "args"
    DICT = "dict"
    INPUT = "input"
    OUTPUT = "output"

    @property
    def needs_full_precision(self) -> bool:
        return self in (DumpTarget.INPUT, DumpTarget.OUTPUT)


class ModelSession:
    """Owns the single engine handle of a command.

    Parameters
    ----------
    engine:
        Any object satisfying the :class:`EmbeddingEngine` protocol.
    """

    def __init__(self, engine: EmbeddingEngine) -> None:
        self._engine: EmbeddingEngine = engine
        self._word_matrix: Any = None

    # ------------------------------------------------------------------
    # Model lifecycle
    # ------------------------------------------------------------------

    def load(self, path: str) -> None:
        self._call("load", self._engine.load_model, path)

    def train_and_save(self, args: TrainingArgs) -> None:
        """Train, then write the model, its vectors and optionally its output."""
        self._call("train", self._engine.train, args)
        self._call("save", self._engine.save_model)
        self._call("save", self._engine.save_vectors)
        if args.save_output:
            self._call("save", self._engine.save_output)

    def quantize_and_save(self, args: TrainingArgs) -> None:
        """Load ``<output>.bin``, quantize it and write the compressed model."""
        self.load(args.output + MODEL_SUFFIX)
        self._call("quantize", self._engine.quantize, args)
        self._call("save", self._engine.save_model)

    # ------------------------------------------------------------------
    # Supervised evaluation
    # ------------------------------------------------------------------

    def evaluate(self, stream: TextIO, k: int, threshold: float) -> EvaluationResult:
        return self._call("test", self._engine.test, stream, k, threshold)

    def predict(
        self,
        stream: TextIO,
        k: int,
        print_prob: bool,
        threshold: float,
    ) -> None:
        self._call("predict", self._engine.predict, stream, k, print_prob, threshold)

    # ------------------------------------------------------------------
    # Vectors and queries
    # ------------------------------------------------------------------

    def word_vector(self, word: str) -> Vector:
        return self._call("word vector", self._engine.get_word_vector, word)

    def sentence_vector(self, stream: LineReader) -> Vector:
        return self._call("sentence vector", self._engine.get_sentence_vector, stream)

    def print_ngrams(self, word: str) -> None:
        self._call("ngrams", self._engine.ngram_vectors, word)

    def precompute(self) -> None:
        """Build the vocabulary matrix once; later calls are no-ops."""
        if self._word_matrix is None:
            self._word_matrix = self._call(
                "precompute", self._engine.precompute_word_vectors,
            )

    def nearest_neighbors(self, word: str, k: int) -> list[Neighbor]:
        """Return the *k* nearest neighbours of *word*, excluding *word* itself."""
        self.precompute()
        ban_set = {word}
        query = self.word_vector(word)
        return self._call(
            "nearest neighbours",
            self._engine.find_nn,
            self._word_matrix,
            query,
            k,
            ban_set,
        )

    def analogies(self, k: int) -> None:
        self._call("analogies", self._engine.analogies, k)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def dump(self, target: DumpTarget, stream: TextIO) -> bool:
        """Dump *target* to *stream*.

        Returns ``False`` without writing anything when a raw matrix is
        requested from a quantized model.
        """
        if target.needs_full_precision and self._call(
            "dump", self._engine.is_quantized,
        ):
            return False
        source = {
            DumpTarget.ARGS: self._engine.get_args,
            DumpTarget.DICT: self._engine.get_dictionary,
            DumpTarget.INPUT: self._engine.get_input_matrix,
            DumpTarget.OUTPUT: self._engine.get_output_matrix,
        }[target]
        dumpable = self._call("dump", source)
        self._call("dump", dumpable.dump, stream)
        return True

    # ------------------------------------------------------------------
    # Engine delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(operation: str, fn: Callable[..., _T], *args: Any) -> _T:
        """Call the engine and ensure only our exceptions escape."""
        try:
            return fn(*args)
        except HornvecsError:
            # Already one of ours; let it propagate unchanged.
            raise
        except Exception as exc:
            raise EngineError(
                f"Unexpected engine error during {operation}: {exc}",
            ) from exc
