"""CLI console helpers with optional Rich support.

Every diagnostic (usage text, errors, progress markers) goes to stderr
through :data:`console`; primary results are written to stdout by the
command handlers directly.  Rich is imported lazily so the tool keeps
working, with plain text, when it is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from hornvecs.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True, soft_wrap=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object, end: str = "\n") -> None:
		"""Render markup with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr, end=end)
			return
		rich_console.print(*objects, end=end)

	def plain(self, text: str, end: str = "\n") -> None:
		"""Write *text* verbatim — no markup, highlighting or wrapping."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(text, file=sys.stderr, end=end)
			return
		rich_console.print(text, end=end, markup=False, highlight=False)

	def error(self, message: str, hint: str | None = None) -> None:
		"""Render an error line and optional hint, escaping user text."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(f"Error: {message}", file=sys.stderr)
			if hint:
				print(f"Hint: {hint}", file=sys.stderr)
			return
		from rich.markup import escape

		rich_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
		if hint:
			rich_console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")


console = _ConsoleProxy()
