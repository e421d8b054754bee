"""Categorization, orchestration, progress and reporting services."""
