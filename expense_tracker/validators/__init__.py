"""Validation layer for business rule compliance."""

from expense_tracker.validators.profit_sharing import ProfitSharingValidator
from expense_tracker.validators.validation_report import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
)

__all__ = [
    "ProfitSharingValidator",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
]
