"""Command line interface (python -m sheet_forensics.cli)."""

from .__main__ import main

__all__ = ["main"]
