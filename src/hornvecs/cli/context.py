"""Per-invocation state handed to every command handler."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from hornvecs.core.protocols import EmbeddingEngine
from hornvecs.core.session import ModelSession


EngineFactory = Callable[[], EmbeddingEngine]


@dataclass(frozen=True, slots=True)
class CommandContext:
    """The captured invocation plus the process streams.

    ``args`` keeps the process layout: index 0 is the program name,
    index 1 the command token, positional arguments follow.  The engine
    is only built when a handler calls :meth:`open_session`, which it
    does after validation has passed.
    """

    args: tuple[str, ...]
    engine_factory: EngineFactory
    stdin: TextIO
    stdout: TextIO

    @property
    def command(self) -> str:
        return self.args[1]

    def open_session(self) -> ModelSession:
        return ModelSession(self.engine_factory())

    def emit(self, line: str) -> None:
        """Write one result line to stdout."""
        self.stdout.write(line + "\n")

    def prompt(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()
