"""Interactive ``nn`` loop and the delegated ``analogies`` command.

The ``nn`` loop reads one word at a time from stdin and answers it
immediately; end of input ends the loop with a success status.
"""

from __future__ import annotations

from hornvecs.cli import exit_codes
from hornvecs.cli.console import console
from hornvecs.cli.context import CommandContext
from hornvecs.core.formatting import format_neighbor
from hornvecs.core.validation import parse_query_options
from hornvecs.infra.streams import read_words


QUERY_PROMPT: str = "Query word? "


def handle_nn(ctx: CommandContext) -> int:
    """Print the nearest neighbours of every query word, excluding the word."""
    options = parse_query_options(ctx.args)
    session = ctx.open_session()
    session.load(options.model_path)

    # One pass over the whole vocabulary; can take a while on big models.
    console.plain("Pre-computing word vectors...", end="")
    session.precompute()
    console.plain(" done.")

    ctx.prompt(QUERY_PROMPT)
    for word in read_words(ctx.stdin):
        for neighbor in session.nearest_neighbors(word, options.k):
            ctx.emit(format_neighbor(neighbor))
        ctx.prompt(QUERY_PROMPT)
    return exit_codes.SUCCESS


def handle_analogies(ctx: CommandContext) -> int:
    options = parse_query_options(ctx.args)
    session = ctx.open_session()
    session.load(options.model_path)
    session.analogies(options.k)
    return exit_codes.SUCCESS
