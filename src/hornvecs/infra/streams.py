"""Infrastructure: input stream resolution and readers.

Rules
-----
* ``"-"`` binds to the caller-supplied stdin, which is never closed here.
* Any other path is opened for reading and closed on every exit path.
* No ``print()`` — open failures surface as
  :class:`~hornvecs.exceptions.StreamOpenError`.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

from hornvecs.core.models import STDIN_SENTINEL
from hornvecs.exceptions import StreamOpenError


@contextmanager
def open_input(path: str, kind: str, stdin: TextIO) -> Iterator[TextIO]:
    """Yield a readable stream for *path*.

    Parameters
    ----------
    path:
        A filesystem path, or ``"-"`` for *stdin*.
    kind:
        Label used in the failure message (``"Test"``, ``"Input"``).
    stdin:
        The process standard input.

    Raises
    ------
    StreamOpenError
        When *path* cannot be opened for reading.
    """
    if path == STDIN_SENTINEL:
        yield stdin
        return

    try:
        handle = open(path, encoding="utf-8")
    except OSError as exc:
        raise StreamOpenError(
            f"{kind} file cannot be opened!",
            hint=f"Check that {path!r} exists and is readable, or use - for stdin.",
        ) from exc

    with handle:
        yield handle


def read_words(stream: TextIO) -> Iterator[str]:
    """Yield whitespace-delimited tokens lazily until end of *stream*.

    Lines are pulled one at a time so interactive input is answered as
    soon as a line is entered.
    """
    for line in iter(stream.readline, ""):
        yield from line.split()


class LineLookahead:
    """Wraps a text stream so pending input can be checked before reading.

    :meth:`has_pending` buffers at most one line; :meth:`readline`
    hands it out before touching the underlying stream again.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._buffered: str | None = None

    def has_pending(self) -> bool:
        if self._buffered is None:
            self._buffered = self._stream.readline()
        return self._buffered != ""

    def readline(self) -> str:
        if self._buffered is not None:
            line, self._buffered = self._buffered, None
            return line
        return self._stream.readline()
