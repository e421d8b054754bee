"""Entropy-based detection of fabricated, copy-pasted or duplicated numbers in spreadsheets."""

__version__ = "0.1.0"
