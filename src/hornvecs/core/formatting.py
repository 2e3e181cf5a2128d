"""Text renderings shared by every command that writes results.

Pure transforms — they build strings and never write them.
"""

from __future__ import annotations

from collections.abc import Iterable

from hornvecs.core.models import EvaluationResult, Neighbor


def format_vector(vector: Iterable[float]) -> str:
    """Render vector components with 5 significant digits, space separated."""
    return " ".join(f"{float(value):.5g}" for value in vector)


def format_neighbor(neighbor: Neighbor) -> str:
    """Render ``<label> <score>`` with 6 significant digits."""
    return f"{neighbor.label} {neighbor.score:.6g}"


def format_evaluation(result: EvaluationResult, k: int) -> list[str]:
    """Return the three tab-separated ``N`` / ``P@k`` / ``R@k`` lines.

    Precision and recall keep 3 significant digits; the example count
    is written as a raw integer.
    """
    return [
        f"N\t{result.examples}",
        f"P@{k}\t{result.precision:.3g}",
        f"R@{k}\t{result.recall:.3g}",
    ]
