"""Protocols (interfaces) consumed by the core layer.

These define the contracts that the embedding engine adapter must
satisfy.  Core code depends ONLY on these protocols — never on a
concrete engine — so tests can substitute a deterministic stub without
a trained model on disk.
"""

from __future__ import annotations

from collections.abc import Sequence, Set
from typing import Any, Protocol, TextIO

from hornvecs.core.args import TrainingArgs
from hornvecs.core.models import EvaluationResult, Neighbor


Vector = Sequence[float]
"""A dense embedding vector (a numpy array satisfies this)."""


class LineReader(Protocol):
    """A source of text lines; ``""`` signals end of input."""

    def readline(self) -> str:
        ...  # pragma: no cover


class Dumpable(Protocol):
    """Anything that can write a textual dump of itself."""

    def dump(self, stream: TextIO) -> None:
        ...  # pragma: no cover


class EmbeddingEngine(Protocol):
    """Contract for embedding engine backends.

    One engine instance owns exactly one model for the lifetime of a
    command.  Implementations must map all backend-specific exceptions
    to :class:`~hornvecs.exceptions.HornvecsError` subclasses.
    """

    # --- lifecycle -------------------------------------------------------

    def load_model(self, path: str) -> None:
        """Load a trained model from *path*.

        Raises
        ------
        EngineError
            When the file is missing or not a valid model.
        """
        ...  # pragma: no cover

    def train(self, args: TrainingArgs) -> None:
        ...  # pragma: no cover

    def quantize(self, args: TrainingArgs) -> None:
        ...  # pragma: no cover

    def save_model(self) -> None:
        """Persist the model next to the configured output prefix."""
        ...  # pragma: no cover

    def save_vectors(self) -> None:
        ...  # pragma: no cover

    def save_output(self) -> None:
        ...  # pragma: no cover

    # --- supervised ------------------------------------------------------

    def test(self, stream: TextIO, k: int, threshold: float) -> EvaluationResult:
        """Score every labelled line of *stream* at *k*."""
        ...  # pragma: no cover

    def predict(
        self,
        stream: TextIO,
        k: int,
        print_prob: bool,
        threshold: float,
    ) -> None:
        """Write the top-*k* labels of every line of *stream*.

        The engine owns the per-example output format.
        """
        ...  # pragma: no cover

    # --- vectors ---------------------------------------------------------

    def get_dimension(self) -> int:
        ...  # pragma: no cover

    def get_word_vector(self, word: str) -> Vector:
        ...  # pragma: no cover

    def get_sentence_vector(self, stream: LineReader) -> Vector:
        """Consume exactly one line of *stream* and embed it."""
        ...  # pragma: no cover

    def ngram_vectors(self, word: str) -> None:
        """Write every character n-gram of *word* with its vector."""
        ...  # pragma: no cover

    def precompute_word_vectors(self) -> Any:
        """Return the normalised vocabulary matrix used by :meth:`find_nn`."""
        ...  # pragma: no cover

    def find_nn(
        self,
        matrix: Any,
        query: Vector,
        k: int,
        ban_set: Set[str],
    ) -> list[Neighbor]:
        """Return the *k* best matches by descending score, skipping *ban_set*."""
        ...  # pragma: no cover

    def analogies(self, k: int) -> None:
        """Run the interactive analogy loop until end of input."""
        ...  # pragma: no cover

    # --- introspection ---------------------------------------------------

    def is_quantized(self) -> bool:
        ...  # pragma: no cover

    def get_args(self) -> Dumpable:
        ...  # pragma: no cover

    def get_dictionary(self) -> Dumpable:
        ...  # pragma: no cover

    def get_input_matrix(self) -> Dumpable:
        ...  # pragma: no cover

    def get_output_matrix(self) -> Dumpable:
        ...  # pragma: no cover
