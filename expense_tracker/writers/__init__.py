"""Output writers: CSV/JSON exports and estimate PDFs."""

from expense_tracker.writers.csv_export import (
    EMPLOYEE_COLUMNS,
    EXPENSE_COLUMNS,
    EXPENSE_TYPE_COLUMNS,
    PROJECT_COLUMNS,
    ExportBundle,
    employee_export_row,
    escape_csv_value,
    expense_export_row,
    expenses_csv,
    export_filename,
    format_csv_value,
    project_export_row,
    to_csv,
    to_json,
)
from expense_tracker.writers.estimate_pdf import EstimatePdfWriter, estimate_pdf_filename

__all__ = [
    "EMPLOYEE_COLUMNS",
    "EXPENSE_COLUMNS",
    "EXPENSE_TYPE_COLUMNS",
    "PROJECT_COLUMNS",
    "ExportBundle",
    "employee_export_row",
    "escape_csv_value",
    "expense_export_row",
    "expenses_csv",
    "export_filename",
    "format_csv_value",
    "project_export_row",
    "to_csv",
    "to_json",
    "EstimatePdfWriter",
    "estimate_pdf_filename",
]
