"""CLI application entry point and command routing for hornvecs.

This module is the **sole error boundary** for the entire application.
:func:`main` catches :class:`~hornvecs.exceptions.HornvecsError` and
turns it into a usage block or error line on stderr plus an exit code;
:func:`cli` adds ``KeyboardInterrupt`` and unexpected exceptions and is
the only place that terminates the process.

Architecture notes
------------------
* Routing is an exact match of the first token against the closed
  :class:`Command` enum; every member has exactly one handler.
* Handlers validate before they build an engine, so argument errors
  never touch the filesystem or a model.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from enum import Enum
from functools import partial
from typing import TextIO

from hornvecs.cli import exit_codes
from hornvecs.cli.console import console
from hornvecs.cli.context import CommandContext, EngineFactory
from hornvecs.cli.dump import handle_dump
from hornvecs.cli.evaluate import handle_predict, handle_test
from hornvecs.cli.query import handle_analogies, handle_nn
from hornvecs.cli.train import handle_quantize, handle_train
from hornvecs.cli.usage import usage_for
from hornvecs.cli.vectors import (
    handle_print_ngrams,
    handle_print_sentence_vectors,
    handle_print_word_vectors,
)
from hornvecs.exceptions import HornvecsError, UsageError


PROG: str = "hornvecs"


# ---------------------------------------------------------------------------
# Command table
# ---------------------------------------------------------------------------

class Command(str, Enum):
    """Every command token the router accepts."""

    SUPERVISED = "supervised"
    SKIPGRAM = "skipgram"
    CBOW = "cbow"
    TEST = "test"
    QUANTIZE = "quantize"
    PREDICT = "predict"
    PREDICT_PROB = "predict-prob"
    PRINT_WORD_VECTORS = "print-word-vectors"
    PRINT_SENTENCE_VECTORS = "print-sentence-vectors"
    PRINT_NGRAMS = "print-ngrams"
    NN = "nn"
    ANALOGIES = "analogies"
    DUMP = "dump"


Handler = Callable[[CommandContext], int]

HANDLERS: dict[Command, Handler] = {
    Command.SUPERVISED: handle_train,
    Command.SKIPGRAM: handle_train,
    Command.CBOW: handle_train,
    Command.TEST: handle_test,
    Command.QUANTIZE: handle_quantize,
    Command.PREDICT: handle_predict,
    Command.PREDICT_PROB: handle_predict,
    Command.PRINT_WORD_VECTORS: handle_print_word_vectors,
    Command.PRINT_SENTENCE_VECTORS: handle_print_sentence_vectors,
    Command.PRINT_NGRAMS: handle_print_ngrams,
    Command.NN: handle_nn,
    Command.ANALOGIES: handle_analogies,
    Command.DUMP: handle_dump,
}


def resolve_command(args: Sequence[str]) -> Command:
    """Map ``args[1]`` to a :class:`Command` by exact match.

    Raises
    ------
    UsageError
        With no command, for the global usage, when the token is
        missing or unknown.
    """
    if len(args) < 2:
        raise UsageError(None)
    try:
        return Command(args[1])
    except ValueError:
        raise UsageError(None) from None


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------

def _render_usage_error(exc: UsageError) -> None:
    message = str(exc)
    if message:
        console.error(message, exc.hint)
    console.plain(usage_for(exc.command))


def _render_error(exc: HornvecsError) -> None:
    console.error(str(exc), exc.hint)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(
    argv: list[str] | None = None,
    *,
    engine_factory: EngineFactory | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Run the hornvecs CLI.

    Parameters
    ----------
    argv:
        Explicit argument list without the program name.  When ``None``
        (default), ``sys.argv[1:]`` is used.  Accepting *argv* enables
        deterministic testing without monkeypatching.
    engine_factory:
        Zero-argument callable building the embedding engine.  Defaults
        to :class:`~hornvecs.infra.fasttext_engine.FastTextEngine`.
    stdin, stdout:
        Process streams; default to :data:`sys.stdin` / :data:`sys.stdout`.

    Returns
    -------
    int
        OS process exit code.
    """
    args = (PROG, *(sys.argv[1:] if argv is None else argv))
    in_stream = sys.stdin if stdin is None else stdin
    out_stream = sys.stdout if stdout is None else stdout
    if engine_factory is None:
        from hornvecs.infra.fasttext_engine import FastTextEngine

        engine_factory = partial(FastTextEngine, stdin=in_stream, stdout=out_stream)

    ctx = CommandContext(
        args=args,
        engine_factory=engine_factory,
        stdin=in_stream,
        stdout=out_stream,
    )

    try:
        command = resolve_command(args)
        return HANDLERS[command](ctx)
    except UsageError as exc:
        _render_usage_error(exc)
    except HornvecsError as exc:
        _render_error(exc)
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
