"""Infrastructure layer — external system integration.

This layer wraps all interaction with the filesystem, standard input
and the fasttext library.  Every raw third-party exception must be
caught here and re-raised as a
:class:`~hornvecs.exceptions.HornvecsError` subclass.

Rules
-----
* No imports from ``cli``.
* No Rich rendering; engine output goes to the stream it was given.
* Must expose clean, typed interfaces consumed by the core layer.
"""

from hornvecs.infra.fasttext_engine import FastTextEngine
from hornvecs.infra.streams import LineLookahead, open_input, read_words

__all__: list[str] = [
    "FastTextEngine",
    "LineLookahead",
    "open_input",
    "read_words",
]
