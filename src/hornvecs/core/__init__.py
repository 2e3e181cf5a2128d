"""Core / service layer — pure orchestration and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem access; streams are handed in by the caller.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from hornvecs.core.args import ModelFileArgs, TrainingArgs
from hornvecs.core.models import (
    EvaluationOptions,
    EvaluationResult,
    Neighbor,
    QueryOptions,
)
from hornvecs.core.protocols import Dumpable, EmbeddingEngine
from hornvecs.core.session import DumpTarget, ModelSession

__all__: list[str] = [
    "DumpTarget",
    "Dumpable",
    "EmbeddingEngine",
    "EvaluationOptions",
    "EvaluationResult",
    "ModelFileArgs",
    "ModelSession",
    "Neighbor",
    "QueryOptions",
    "TrainingArgs",
]
