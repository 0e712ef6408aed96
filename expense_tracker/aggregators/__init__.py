"""Aggregators for tabular expense reports."""

from expense_tracker.aggregators.expense_aggregator import (
    BREAKDOWN_COLUMNS,
    ExpenseAggregator,
)

__all__ = ["BREAKDOWN_COLUMNS", "ExpenseAggregator"]
