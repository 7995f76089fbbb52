"""Composable conditions for values, strings, sets and invoicing records."""

__version__ = "0.1.0"

__all__ = ["condition", "option", "strings", "sets", "records", "work"]