"""fasttext backed implementation of :class:`~hornvecs.core.protocols.EmbeddingEngine`.

This module is the **only** place in the codebase that imports
``fasttext``.  All library exceptions are caught here and re-raised as
typed :class:`~hornvecs.exceptions.HornvecsError` subclasses — nothing
raw escapes the infrastructure boundary.

Per-example prediction lines, n-gram listings and the analogy loop are
written to the stdout stream given at construction time.
"""

from __future__ import annotations

import os
import shutil
import sys
import tempfile
from collections.abc import Iterator, Sequence, Set
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Any, TextIO

import numpy as np

from hornvecs.core.args import (
    MODEL_BY_COMMAND,
    MODEL_FILE_FLAGS,
    ModelFileArgs,
    TrainingArgs,
)
from hornvecs.core.formatting import format_neighbor, format_vector
from hornvecs.core.models import EvaluationResult, Neighbor
from hornvecs.core.protocols import LineReader
from hornvecs.exceptions import EngineError, EnvironmentError, HornvecsError
from hornvecs.infra.streams import read_words


ANALOGY_PROMPT: str = "Query triplet (A - B + C)? "


def _import_fasttext() -> Any:
    """Import fasttext lazily so argument errors never need it."""
    try:
        import fasttext
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "fasttext is not installed. Install with: pip install fasttext",
        ) from exc
    return fasttext


@contextmanager
def _mapped_errors(operation: str) -> Iterator[None]:
    """Translate fasttext failures into :class:`EngineError`."""
    try:
        yield
    except HornvecsError:
        raise
    except ValueError as exc:
        # fasttext reports bad files and unsupported operations this way.
        raise EngineError(f"{operation} failed: {exc}") from exc
    except Exception as exc:
        raise EngineError(
            f"Unexpected fasttext error during {operation}: {exc}",
        ) from exc


@contextmanager
def _as_file(stream: TextIO) -> Iterator[str]:
    """Yield a path holding the contents of *stream*.

    Streams opened from a file reuse that file; anything else (stdin) is
    copied to a temporary file that is removed afterwards.
    """
    name = getattr(stream, "name", None)
    if isinstance(name, str) and os.path.isfile(name):
        yield name
        return

    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", suffix=".txt", delete=False,
    ) as tmp:
        shutil.copyfileobj(stream, tmp)
    try:
        yield tmp.name
    finally:
        os.unlink(tmp.name)


# ---------------------------------------------------------------------------
# Dumpable views
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DictionaryDump:
    """Vocabulary entries with their counts, words first then labels."""

    words: Sequence[tuple[str, int]]
    labels: Sequence[tuple[str, int]]

    def dump(self, stream: TextIO) -> None:
        stream.write(f"{len(self.words) + len(self.labels)}\n")
        for word, count in self.words:
            stream.write(f"{word} {count} word\n")
        for label, count in self.labels:
            stream.write(f"{label} {count} label\n")


@dataclass(frozen=True, slots=True)
class MatrixDump:
    """A dense matrix written as ``<rows> <cols>`` then one row per line."""

    matrix: Any

    def dump(self, stream: TextIO) -> None:
        rows, cols = self.matrix.shape
        stream.write(f"{rows} {cols}\n")
        for row in self.matrix:
            stream.write(format_vector(row) + "\n")


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class FastTextEngine:
    """Concrete :class:`EmbeddingEngine` backed by the fasttext Python API.

    Usage::

        engine = FastTextEngine()
        engine.load_model("model.bin")
        vector = engine.get_word_vector("king")

    This class satisfies the
    :class:`~hornvecs.core.protocols.EmbeddingEngine` protocol
    structurally — no explicit inheritance required.
    """

    def __init__(
        self,
        *,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._stdin = stdin
        self._stdout = stdout
        self._model: Any = None
        self._args: TrainingArgs | None = None
        self._words: list[str] | None = None

    @property
    def _in(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def _out(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load_model(self, path: str) -> None:
        fasttext = _import_fasttext()
        with _mapped_errors("loading model"):
            self._model = fasttext.load_model(path)
        self._words = None

    def train(self, args: TrainingArgs) -> None:
        fasttext = _import_fasttext()
        params: dict[str, Any] = {
            "input": args.input,
            "lr": args.lr,
            "dim": args.dim,
            "ws": args.ws,
            "epoch": args.epoch,
            "minCount": args.min_count,
            "minCountLabel": args.min_count_label,
            "minn": args.minn,
            "maxn": args.maxn,
            "neg": args.neg,
            "wordNgrams": args.word_ngrams,
            "loss": args.loss,
            "bucket": args.bucket,
            "thread": args.thread,
            "lrUpdateRate": args.lr_update_rate,
            "t": args.t,
            "label": args.label,
            "verbose": args.verbose,
            "pretrainedVectors": args.pretrained_vectors,
        }
        with _mapped_errors("training"):
            if args.model == "sup":
                self._model = fasttext.train_supervised(**params)
            else:
                model_name = "skipgram" if args.model == "sg" else "cbow"
                self._model = fasttext.train_unsupervised(model=model_name, **params)
        self._args = args
        self._words = None

    def quantize(self, args: TrainingArgs) -> None:
        model = self._require_model()
        with _mapped_errors("quantization"):
            model.quantize(
                input=args.input or None,
                qout=args.qout,
                cutoff=args.cutoff,
                retrain=args.retrain,
                epoch=args.epoch,
                lr=args.lr,
                thread=args.thread,
                verbose=args.verbose,
                dsub=args.dsub,
                qnorm=args.qnorm,
            )
        self._args = args
        self._words = None

    def save_model(self) -> None:
        model = self._require_model()
        suffix = ".ftz" if self.is_quantized() else ".bin"
        path = self._output_prefix() + suffix
        with _mapped_errors("saving model"):
            model.save_model(path)

    def save_vectors(self) -> None:
        model = self._require_model()
        words = self._vocabulary()
        with _mapped_errors("saving vectors"), open(
            self._output_prefix() + ".vec", "w", encoding="utf-8",
        ) as fh:
            fh.write(f"{len(words)} {self.get_dimension()}\n")
            for word in words:
                fh.write(f"{word} {format_vector(model.get_word_vector(word))}\n")

    def save_output(self) -> None:
        model = self._require_model()
        with _mapped_errors("saving output"):
            matrix = model.get_output_matrix()
            if self._model_kind() == "sup":
                names = list(model.get_labels())
            else:
                names = self._vocabulary()
            with open(self._output_prefix() + ".output", "w", encoding="utf-8") as fh:
                rows, cols = matrix.shape
                fh.write(f"{rows} {cols}\n")
                for name, row in zip(names, matrix):
                    fh.write(f"{name} {format_vector(row)}\n")

    # ------------------------------------------------------------------
    # Supervised
    # ------------------------------------------------------------------

    def test(self, stream: TextIO, k: int, threshold: float) -> EvaluationResult:
        """Score *stream* with the library's own evaluation."""
        model = self._require_model()
        with _mapped_errors("testing"), _as_file(stream) as path:
            examples, precision, recall = model.test(path, k=k, threshold=threshold)
        return EvaluationResult(
            examples=int(examples),
            precision=float(precision),
            recall=float(recall),
        )

    def predict(
        self,
        stream: TextIO,
        k: int,
        print_prob: bool,
        threshold: float,
    ) -> None:
        model = self._require_model()
        out = self._out
        with _mapped_errors("prediction"):
            for line in stream:
                labels, probs = model.predict(line.rstrip("\n"), k=k, threshold=threshold)
                if print_prob:
                    parts = [f"{label} {float(prob):.6g}" for label, prob in zip(labels, probs)]
                else:
                    parts = list(labels)
                out.write(" ".join(parts) + "\n")

    # ------------------------------------------------------------------
    # Vectors
    # ------------------------------------------------------------------

    def get_dimension(self) -> int:
        return int(self._require_model().get_dimension())

    def get_word_vector(self, word: str) -> Any:
        model = self._require_model()
        with _mapped_errors("word vector"):
            return model.get_word_vector(word)

    def get_sentence_vector(self, stream: LineReader) -> Any:
        model = self._require_model()
        line = stream.readline()
        with _mapped_errors("sentence vector"):
            return model.get_sentence_vector(line.rstrip("\r\n"))

    def ngram_vectors(self, word: str) -> None:
        model = self._require_model()
        out = self._out
        with _mapped_errors("ngram vectors"):
            subwords, ids = model.get_subwords(word)
            for subword, index in zip(subwords, ids):
                vector = model.get_input_vector(index)
                out.write(f"{subword} {format_vector(vector)}\n")

    def precompute_word_vectors(self) -> Any:
        model = self._require_model()
        words = self._vocabulary()
        with _mapped_errors("precomputing word vectors"):
            matrix = np.zeros((len(words), self.get_dimension()), dtype=np.float32)
            for i, word in enumerate(words):
                matrix[i] = model.get_word_vector(word)
        norms = np.linalg.norm(matrix, axis=1, keepdims=True)
        return np.divide(matrix, norms, out=np.zeros_like(matrix), where=norms > 0)

    def find_nn(
        self,
        matrix: Any,
        query: Any,
        k: int,
        ban_set: Set[str],
    ) -> list[Neighbor]:
        words = self._vocabulary()
        query = np.asarray(query, dtype=np.float32)
        norm = float(np.linalg.norm(query))
        if abs(norm) < 1e-8:
            norm = 1.0
        scores = matrix @ query / norm
        results: list[Neighbor] = []
        for index in np.argsort(-scores, kind="stable"):
            if len(results) >= k:
                break
            word = words[index]
            if word in ban_set:
                continue
            results.append(Neighbor(score=float(scores[index]), label=word))
        return results

    def analogies(self, k: int) -> None:
        matrix = self.precompute_word_vectors()
        out = self._out
        out.write(ANALOGY_PROMPT)
        out.flush()
        triplet: list[str] = []
        for word in read_words(self._in):
            triplet.append(word)
            if len(triplet) < 3:
                continue
            a, b, c = triplet
            triplet = []
            query = self._unit(a) - self._unit(b) + self._unit(c)
            for neighbor in self.find_nn(matrix, query, k, {a, b, c}):
                out.write(format_neighbor(neighbor) + "\n")
            out.write(ANALOGY_PROMPT)
            out.flush()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def is_quantized(self) -> bool:
        return bool(self._require_model().is_quantized())

    def get_args(self) -> ModelFileArgs:
        return ModelFileArgs(self._stored_args())

    def get_dictionary(self) -> DictionaryDump:
        model = self._require_model()
        with _mapped_errors("dictionary"):
            words, word_counts = model.get_words(include_freq=True)
            labels: list[tuple[str, int]] = []
            if self._model_kind() == "sup":
                names, label_counts = model.get_labels(include_freq=True)
                labels = list(zip(names, (int(c) for c in label_counts)))
        return DictionaryDump(
            words=list(zip(words, (int(c) for c in word_counts))),
            labels=labels,
        )

    def get_input_matrix(self) -> MatrixDump:
        model = self._require_model()
        with _mapped_errors("input matrix"):
            return MatrixDump(model.get_input_matrix())

    def get_output_matrix(self) -> MatrixDump:
        model = self._require_model()
        with _mapped_errors("output matrix"):
            return MatrixDump(model.get_output_matrix())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_model(self) -> Any:
        if self._model is None:
            raise EngineError("No model loaded.")
        return self._model

    def _stored_args(self) -> TrainingArgs:
        """Options recorded in the model file, command defaults elsewhere."""
        raw = self._require_model().f.getArgs()
        command = raw.model.name
        if command not in MODEL_BY_COMMAND:
            raise EngineError(f"Unsupported model type: {command}")
        values: dict[str, Any] = {}
        for f in fields(TrainingArgs):
            flag = f.metadata["flag"]
            if flag in MODEL_FILE_FLAGS and flag != "model":
                value = getattr(raw, flag)
                values[f.name] = getattr(value, "name", value)
        return replace(TrainingArgs.defaults_for(command), **values)

    def _model_kind(self) -> str:
        return self._stored_args().model

    def _output_prefix(self) -> str:
        if self._args is None or not self._args.output:
            raise EngineError(
                "No output path configured.",
                hint="Pass -output when training or quantizing.",
            )
        return self._args.output

    def _vocabulary(self) -> list[str]:
        if self._words is None:
            with _mapped_errors("vocabulary"):
                self._words = list(self._require_model().get_words())
        return self._words

    def _unit(self, word: str) -> Any:
        vector = np.asarray(self.get_word_vector(word), dtype=np.float32)
        return vector / (np.linalg.norm(vector) + 1e-8)
