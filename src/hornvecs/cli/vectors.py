"""``print-word-vectors``, ``print-sentence-vectors`` and ``print-ngrams``."""

from __future__ import annotations

from hornvecs.cli import exit_codes
from hornvecs.cli.context import CommandContext
from hornvecs.core.formatting import format_vector
from hornvecs.core.validation import require_arity
from hornvecs.infra.streams import LineLookahead, read_words


def handle_print_word_vectors(ctx: CommandContext) -> int:
    """Print ``<word> <vector>`` for every token read from stdin."""
    require_arity(ctx.args, (3,))
    session = ctx.open_session()
    session.load(ctx.args[2])

    for word in read_words(ctx.stdin):
        ctx.emit(f"{word} {format_vector(session.word_vector(word))}")
    return exit_codes.SUCCESS


def handle_print_sentence_vectors(ctx: CommandContext) -> int:
    """Print one vector per stdin line; the sentence itself is not echoed."""
    require_arity(ctx.args, (3,))
    session = ctx.open_session()
    session.load(ctx.args[2])

    reader = LineLookahead(ctx.stdin)
    while reader.has_pending():
        vector = session.sentence_vector(reader)
        ctx.emit(format_vector(vector))
    return exit_codes.SUCCESS


def handle_print_ngrams(ctx: CommandContext) -> int:
    require_arity(ctx.args, (4,))
    session = ctx.open_session()
    session.load(ctx.args[2])
    session.print_ngrams(ctx.args[3])
    return exit_codes.SUCCESS
