"""Process exit codes returned by :func:`hornvecs.cli.app.main`.

Scripts that drive hornvecs only distinguish success from failure, so
every typed error shares one code; the rest mark crashes and Ctrl+C.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command ran to the end of its input, including ``dump`` refusals."""

GENERAL_ERROR: int = 1
"""Usage, parse, stream-open, engine or missing-library error."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted by Ctrl+C (128 + SIGINT)."""

UNEXPECTED_ERROR: int = 2
"""An exception outside the HornvecsError hierarchy reached :func:`cli`."""
