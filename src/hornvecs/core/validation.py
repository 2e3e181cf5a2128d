"""Per-command argument validation.

Every function here is pure: it inspects the raw argv list and either
returns a parsed options object or raises a
:class:`~hornvecs.exceptions.UsageError` /
:class:`~hornvecs.exceptions.ParseError`.  Nothing is opened or loaded,
so a validation failure can never leave partial side effects behind.

The argv list keeps the process layout: index 0 is the program name,
index 1 the command token, positional arguments follow.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence

from hornvecs.core.models import EvaluationOptions, QueryOptions
from hornvecs.exceptions import ParseError, UsageError


def require_arity(args: Sequence[str], allowed: Collection[int]) -> None:
    """Raise :class:`UsageError` unless ``len(args)`` is in *allowed*."""
    if len(args) not in allowed:
        raise UsageError(args[1])


def require_min_arity(args: Sequence[str], minimum: int) -> None:
    """Raise :class:`UsageError` unless at least *minimum* tokens exist."""
    if len(args) < minimum:
        raise UsageError(args[1])


def parse_k(command: str, raw: str) -> int:
    """Parse a strictly positive integer *k*.

    Raises
    ------
    ParseError
        If *raw* is not an integer literal or is smaller than 1.
    """
    try:
        value = int(raw)
    except ValueError as exc:
        raise ParseError(command, f"Invalid value for k: {raw!r}") from exc
    if value < 1:
        raise ParseError(command, f"k must be at least 1, got {value}")
    return value


def parse_threshold(command: str, raw: str) -> float:
    """Parse a real-valued threshold.

    No sign or range check is applied; negative or greater-than-one
    thresholds are passed through to the engine as given.
    """
    try:
        return float(raw)
    except ValueError as exc:
        raise ParseError(command, f"Invalid value for threshold: {raw!r}") from exc


def parse_evaluation_options(args: Sequence[str]) -> EvaluationOptions:
    """Validate ``<cmd> <model> <data> [k] [threshold]``."""
    require_arity(args, (4, 5, 6))
    command = args[1]
    k = parse_k(command, args[4]) if len(args) > 4 else 1
    threshold = parse_threshold(command, args[5]) if len(args) == 6 else 0.0
    return EvaluationOptions(
        model_path=args[2],
        data_path=args[3],
        k=k,
        threshold=threshold,
    )


def parse_query_options(args: Sequence[str]) -> QueryOptions:
    """Validate ``<cmd> <model> [k]``; *k* defaults to 10."""
    require_arity(args, (3, 4))
    k = parse_k(args[1], args[3]) if len(args) == 4 else 10
    return QueryOptions(model_path=args[2], k=k)
