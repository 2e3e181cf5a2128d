"""Custom exception hierarchy for hornvecs.

All exceptions that cross layer boundaries must inherit from
:class:`HornvecsError`.  Raw third-party exceptions (e.g. from the
fasttext bindings) must NEVER propagate beyond the infrastructure
layer — they must be caught and re-raised as a typed subclass defined
here.

Hierarchy
---------
HornvecsError
├── UsageError
│   └── ParseError
├── StreamOpenError
├── EngineError
└── EnvironmentError
"""

from __future__ import annotations


class HornvecsError(Exception):
    """Base exception for all hornvecs errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class UsageError(HornvecsError):
    """Raised when a command is unknown or called with the wrong arguments.

    *command* is the command token whose usage block should be shown,
    or ``None`` for the global usage.  An empty *message* means the
    usage block alone is enough.
    """

    def __init__(
        self,
        command: str | None,
        message: str = "",
        *,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.command: str | None = command


class ParseError(UsageError):
    """Raised when a numeric argument cannot be parsed or is out of range."""


# --- Streams ---------------------------------------------------------------

class StreamOpenError(HornvecsError):
    """Raised when a named input file cannot be opened for reading."""


# --- Engine ----------------------------------------------------------------

class EngineError(HornvecsError):
    """Raised when the embedding engine fails (bad model, unsupported op)."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(HornvecsError):
    """Raised when a required runtime dependency is not available."""
