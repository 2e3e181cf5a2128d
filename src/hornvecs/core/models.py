"""Domain models for hornvecs.

All models are **frozen** dataclasses — immutable value objects derived
once per command and never mutated.  They carry zero I/O and no
dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass


STDIN_SENTINEL: str = "-"
"""Data-path value that binds a command to standard input."""


# ---------------------------------------------------------------------------
# Parsed per-command options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EvaluationOptions:
    """Options shared by ``test``, ``predict`` and ``predict-prob``."""

    model_path: str
    """Path of the trained model to load."""

    data_path: str
    """Path of the labelled/unlabelled data, or ``"-"`` for stdin."""

    k: int = 1
    """Number of top labels to consider per example."""

    threshold: float = 0.0
    """Minimum probability for a label to be reported."""


@dataclass(frozen=True, slots=True)
class QueryOptions:
    """Options shared by ``nn`` and ``analogies``."""

    model_path: str
    k: int = 10


# ---------------------------------------------------------------------------
# Engine results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Aggregate metrics returned by a batch test."""

    examples: int
    """Number of scored examples."""

    precision: float
    """Precision at *k*, in ``[0, 1]``."""

    recall: float
    """Recall at *k*, in ``[0, 1]``."""


@dataclass(frozen=True, slots=True)
class Neighbor:
    """One ranked entry of a nearest-neighbour query."""

    score: float
    label: str
