"""hornvecs — command-line front end for word and sentence embeddings.

Routes training, evaluation, prediction, querying and dumping commands
to an embedding engine behind a strict layered architecture.
"""

from hornvecs.version import __version__

__all__: list[str] = ["__version__"]
