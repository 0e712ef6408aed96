"""Validation report for collecting and formatting business rule issues."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional

from expense_tracker.errors import ValidationFailedError


class ValidationSeverity(IntEnum):
    """Severity levels for validation issues."""

    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class ValidationIssue:
    """A single validation issue.

    Attributes:
        severity: The severity level of the issue
        field: The field name that has the issue (camelCase, as clients send it)
        message: Human-readable description of the issue
        value: The value that caused the issue
        context: Optional context information (e.g., share index)
    """

    severity: ValidationSeverity
    field: str
    message: str
    value: Any = None
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        context_str = ""
        if self.context:
            context_parts = [f"{k}={v}" for k, v in self.context.items()]
            context_str = f" ({', '.join(context_parts)})"
        return f"[{self.severity.name}] {self.field}: {self.message}{context_str}"


class ValidationReport:
    """Collects validation issues for one record.

    Example:
        >>> report = ValidationReport()
        >>> report.add_error("profitShares", "Percentages must add up to 100", 90)
        >>> report.is_valid()
        False
        >>> report.raise_if_invalid("Invalid profit sharing configuration")
        Traceback (most recent call last):
        ...
        expense_tracker.errors.ValidationFailedError: ...
    """

    def __init__(self) -> None:
        self.issues: List[ValidationIssue] = []

    def _add(
        self,
        severity: ValidationSeverity,
        field: str,
        message: str,
        value: Any,
        context: Optional[Dict[str, Any]],
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                field=field,
                message=message,
                value=value,
                context=context,
            )
        )

    def add_error(
        self,
        field: str,
        message: str,
        value: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add an error; any error makes the report invalid."""
        self._add(ValidationSeverity.ERROR, field, message, value, context)

    def add_warning(
        self,
        field: str,
        message: str,
        value: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add a warning; warnings are logged but do not reject the record."""
        self._add(ValidationSeverity.WARNING, field, message, value, context)

    def _with_severity(self, severity: ValidationSeverity) -> List[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == severity]

    def get_errors(self) -> List[ValidationIssue]:
        return self._with_severity(ValidationSeverity.ERROR)

    def get_warnings(self) -> List[ValidationIssue]:
        return self._with_severity(ValidationSeverity.WARNING)

    @property
    def error_count(self) -> int:
        return len(self.get_errors())

    @property
    def warning_count(self) -> int:
        return len(self.get_warnings())

    def is_valid(self) -> bool:
        """Check if validation passed (no errors)."""
        return self.error_count == 0

    def summary(self) -> str:
        """Summary with counts of errors and warnings."""
        parts = []
        if self.error_count > 0:
            parts.append(f"{self.error_count} error(s)")
        if self.warning_count > 0:
            parts.append(f"{self.warning_count} warning(s)")
        return ", ".join(parts) if parts else "No issues found"

    def format(self) -> str:
        """Format the report for display, errors first."""
        if not self.issues:
            return "Validation successful - no issues found"

        lines = [f"Validation Report - {self.summary()}", "=" * 60]
        for title, issues in (
            ("ERRORS:", self.get_errors()),
            ("WARNINGS:", self.get_warnings()),
        ):
            if issues:
                lines.append(f"\n{title}")
                lines.extend(f"  - {issue}" for issue in issues)
        return "\n".join(lines)

    def raise_if_invalid(self, message: str) -> None:
        """Raise ValidationFailedError carrying the errors when invalid.

        The first error's text becomes the user-facing message so a client
        showing only ``message`` still tells the user what to fix.

        Raises:
            ValidationFailedError: If the report holds any error
        """
        errors = self.get_errors()
        if errors:
            raise ValidationFailedError(
                f"{message}: {errors[0].message}",
                issues=[issue.message for issue in errors],
            )
