"""``supervised`` / ``skipgram`` / ``cbow`` and ``quantize`` commands."""

from __future__ import annotations

from hornvecs.cli import exit_codes
from hornvecs.cli.context import CommandContext
from hornvecs.core.args import TrainingArgs
from hornvecs.core.validation import require_min_arity


def handle_train(ctx: CommandContext) -> int:
    """Train a model and write ``.bin``, ``.vec`` and optionally ``.output``."""
    args = TrainingArgs.parse(ctx.args)
    ctx.open_session().train_and_save(args)
    return exit_codes.SUCCESS


def handle_quantize(ctx: CommandContext) -> int:
    """Compress ``<output>.bin`` into ``<output>.ftz``."""
    require_min_arity(ctx.args, 3)
    args = TrainingArgs.parse(ctx.args)
    ctx.open_session().quantize_and_save(args)
    return exit_codes.SUCCESS
