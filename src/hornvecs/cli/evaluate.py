"""``test``, ``predict`` and ``predict-prob`` commands.

Both load the model first, then bind the data argument to a file or to
stdin (``-``) for the duration of one engine call.
"""

from __future__ import annotations

from hornvecs.cli import exit_codes
from hornvecs.cli.console import console
from hornvecs.cli.context import CommandContext
from hornvecs.core.formatting import format_evaluation
from hornvecs.core.validation import parse_evaluation_options
from hornvecs.infra.streams import open_input


def handle_test(ctx: CommandContext) -> int:
    """Print ``N`` / ``P@k`` / ``R@k`` for a labelled data set."""
    options = parse_evaluation_options(ctx.args)
    session = ctx.open_session()
    session.load(options.model_path)

    with open_input(options.data_path, "Test", ctx.stdin) as stream:
        result = session.evaluate(stream, options.k, options.threshold)

    for line in format_evaluation(result, options.k):
        ctx.emit(line)
    console.plain(f"Number of examples: {result.examples}")
    return exit_codes.SUCCESS


def handle_predict(ctx: CommandContext) -> int:
    """Print the top-k labels of every line, with probabilities for ``predict-prob``."""
    options = parse_evaluation_options(ctx.args)
    print_prob = ctx.command == "predict-prob"
    session = ctx.open_session()
    session.load(options.model_path)

    with open_input(options.data_path, "Input", ctx.stdin) as stream:
        session.predict(stream, options.k, print_prob, options.threshold)
    return exit_codes.SUCCESS
