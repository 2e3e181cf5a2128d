"""``python -m hornvecs`` runs the same entry point as the console script."""

from __future__ import annotations

from hornvecs.cli.app import cli

if __name__ == "__main__":
    cli()
