"""``dump`` — write model arguments, dictionary or raw matrices to stdout."""

from __future__ import annotations

from hornvecs.cli import exit_codes
from hornvecs.cli.console import console
from hornvecs.cli.context import CommandContext
from hornvecs.core.session import DumpTarget
from hornvecs.core.validation import require_min_arity
from hornvecs.exceptions import UsageError


def handle_dump(ctx: CommandContext) -> int:
    """Dump one of ``args``, ``dict``, ``input`` or ``output``.

    Raw matrices of a quantized model cannot be dumped; that case is
    reported on stderr but still counts as a successful run.
    """
    require_min_arity(ctx.args, 4)
    try:
        target = DumpTarget(ctx.args[3])
    except ValueError:
        raise UsageError(ctx.command, f"Unknown dump option: {ctx.args[3]}") from None

    session = ctx.open_session()
    session.load(ctx.args[2])
    if not session.dump(target, ctx.stdout):
        console.plain("Not supported for quantized models.")
    return exit_codes.SUCCESS
