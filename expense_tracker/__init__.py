"""Expense and earnings tracker for small contracting businesses."""

__version__ = "1.0.0"
