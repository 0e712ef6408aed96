"""Export of projects, expenses and employees as CSV or JSON.

Rows are flat dictionaries keyed by the camelCase column names clients
see. CSV text follows these rules:
- null values become empty cells
- dates are written as YYYY-MM-DD, booleans as true/false
- lists and dictionaries are written as compact JSON
- a cell containing a comma, double quote or line break is quoted, with
  embedded quotes doubled
"""

import csv
import datetime as dt
import io
import json
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from expense_tracker.models.expense import ExpenseType

BOM = "\ufeff"
MISSING_REFERENCE = "N/A"
DEFAULT_PARTNER_NAME = "Partner"

PROJECT_COLUMNS = [
    "name",
    "grossIncome",
    "profitSharingEnabled",
    "profitSharingType",
    "profitShares",
    "createdAt",
]
EXPENSE_COLUMNS = [
    "type",
    "project",
    "category",
    "description",
    "amount",
    "employee",
    "daysWorked",
    "advancement",
    "weekStart",
    "weekend",
    "returnAmount",
    "createdAt",
]
EMPLOYEE_COLUMNS = ["name", "createdAt"]

EXPENSE_TYPE_COLUMNS = {
    ExpenseType.PAYROLL: [
        "project",
        "employee",
        "category",
        "description",
        "daysWorked",
        "amount",
        "advancement",
        "weekStart",
        "weekend",
        "createdAt",
    ],
    ExpenseType.MATERIAL: [
        "project",
        "category",
        "description",
        "amount",
        "returnAmount",
        "createdAt",
    ],
    ExpenseType.OPERATING: ["project", "category", "description", "amount", "createdAt"],
}


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_number(value) -> str:
    """Render a number the way a spreadsheet expects it.

    Example:
        >>> format_number(Decimal("1500.00")), format_number(Decimal("12.50"))
        ('1500', '12.5')
    """
    number = Decimal(str(value))
    if number == number.to_integral_value():
        return str(int(number))
    return format(number.normalize(), "f")


def format_csv_value(value: Any) -> str:
    """Convert one cell value to text, before escaping."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (Decimal, int, float)):
        return format_number(value)
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, default=_json_default, separators=(",", ":"))
    return str(value)


def _write_line(cells: Sequence[str]) -> str:
    """One CSV line, without its terminator."""
    buffer = io.StringIO()
    # A CR LF terminator makes the writer quote cells holding either character
    csv.writer(buffer, lineterminator="\r\n").writerow(cells)
    return buffer.getvalue()[:-2]


def escape_csv_value(value: Any) -> str:
    """Format a cell and quote it when it contains a delimiter.

    Example:
        >>> escape_csv_value("Roof, north")
        '"Roof, north"'
        >>> escape_csv_value(None)
        ''
    """
    text = format_csv_value(value)
    return _write_line([text]) if text else ""


def to_csv(rows: Iterable[Dict[str, Any]], columns: Sequence[str]) -> str:
    """Render rows as CSV text: a header line, then one line per row.

    Args:
        rows: Row dictionaries; missing keys render as empty cells
        columns: Column names, in output order

    Returns:
        Lines joined by ``\\n`` without a trailing newline
    """
    lines = [_write_line(columns)]
    for row in rows:
        cells = [format_csv_value(row.get(column)) for column in columns]
        lines.append(_write_line(cells))
    return "\n".join(lines)


def _date_or_blank(value) -> str:
    if value is None:
        return ""
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    return value.isoformat()


def format_profit_shares(shares) -> str:
    """Render profit shares as ``Name: 50%; Other: 50%``."""
    parts = []
    for share in shares or []:
        if isinstance(share, dict):
            name, percentage = share.get("name"), share.get("percentage")
        else:
            name, percentage = share.name, share.percentage
        parts.append(
            f"{name or DEFAULT_PARTNER_NAME}: {format_number(percentage or 0)}%"
        )
    return "; ".join(parts)


def project_export_row(project) -> Dict[str, Any]:
    sharing_type = project.profit_sharing_type
    return {
        "id": project.id,
        "name": project.name or "",
        "grossIncome": Decimal(project.gross_income or 0),
        "profitSharingEnabled": bool(project.profit_sharing_enabled),
        "profitSharingType": getattr(sharing_type, "value", sharing_type) or "none",
        "profitShares": format_profit_shares(project.profit_shares),
        "createdAt": _date_or_blank(project.created_at),
    }


def expense_export_row(expense) -> Dict[str, Any]:
    expense_type = expense.type
    return {
        "id": expense.id,
        "type": getattr(expense_type, "value", expense_type),
        "project": expense.project_name or MISSING_REFERENCE,
        "category": expense.category or "",
        "description": expense.description or "",
        "amount": Decimal(expense.amount or 0),
        "employee": expense.employee_name or MISSING_REFERENCE,
        "daysWorked": Decimal(expense.days_worked or 0),
        "advancement": Decimal(expense.advancement or 0),
        "weekStart": _date_or_blank(expense.week_start),
        "weekend": _date_or_blank(expense.weekend),
        "returnAmount": Decimal(expense.return_amount or 0),
        "createdAt": _date_or_blank(expense.created_at),
    }


def employee_export_row(employee) -> Dict[str, Any]:
    return {
        "id": employee.id,
        "name": employee.name or "",
        "createdAt": _date_or_blank(employee.created_at),
    }


@dataclass
class ExportBundle:
    """Everything in a year-end export.

    Attributes:
        export_date: When the export was produced (UTC)
        year: Year the expenses were filtered to, or None for all years
        projects: Project rows
        expenses: Expense rows
        employees: Employee rows
    """

    export_date: dt.datetime
    year: Optional[int] = None
    projects: List[Dict[str, Any]] = field(default_factory=list)
    expenses: List[Dict[str, Any]] = field(default_factory=list)
    employees: List[Dict[str, Any]] = field(default_factory=list)

    def to_document(self) -> Dict[str, Any]:
        """JSON body of the export."""
        return {
            "exportDate": self.export_date.isoformat() + "Z",
            "year": str(self.year) if self.year is not None else "all",
            "projects": self.projects,
            "expenses": self.expenses,
            "employees": self.employees,
        }

    def to_csv(self) -> str:
        """Sectioned CSV text, prefixed with a byte order mark for Excel."""
        sections = [
            "=== PROJECTS ===",
            to_csv(self.projects, PROJECT_COLUMNS),
            "",
            "=== EXPENSES ===",
            to_csv(self.expenses, EXPENSE_COLUMNS),
            "",
            "=== EMPLOYEES ===",
            to_csv(self.employees, EMPLOYEE_COLUMNS),
        ]
        return BOM + "\n".join(sections)


def expenses_csv(rows: Iterable[Dict[str, Any]], expense_type: ExpenseType) -> str:
    """CSV of one expense type with that type's columns, BOM-prefixed."""
    return BOM + to_csv(rows, EXPENSE_TYPE_COLUMNS[ExpenseType(expense_type)])


def to_json(document: Any) -> str:
    """Serialize an export document; whole-number decimals become integers."""
    return json.dumps(document, default=_json_default, indent=2)


def export_filename(
    base: str, year: Optional[int], extension: str, today: Optional[dt.date] = None
) -> str:
    """Download filename such as ``payroll-expenses-2024-2025-01-15.csv``."""
    today = today or dt.datetime.now(dt.timezone.utc).date()
    period = str(year) if year is not None else "all"
    return f"{base}-{period}-{today.isoformat()}.{extension}"
