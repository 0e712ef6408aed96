"""Year-end and per-type data exports."""

import datetime as dt
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.db.tables import EmployeeRecord, ExpenseRecord, ProjectRecord, utcnow
from expense_tracker.errors import ValidationFailedError
from expense_tracker.models.expense import ExpenseType
from expense_tracker.utils.logging_utils import log_function_call
from expense_tracker.writers.csv_export import (
    ExportBundle,
    employee_export_row,
    expense_export_row,
    project_export_row,
)

logger = logging.getLogger(__name__)


def parse_expense_type(value: str) -> ExpenseType:
    """Parse an expense type from a URL segment.

    Raises:
        ValidationFailedError: For anything but payroll, operating or material
    """
    try:
        return ExpenseType(value)
    except ValueError as e:
        raise ValidationFailedError("Invalid expense type") from e


def year_bounds(year: int):
    """First and last instant of a calendar year."""
    return (
        dt.datetime(year, 1, 1),
        dt.datetime.combine(dt.date(year, 12, 31), dt.time.max),
    )


class ExportService:
    """Builds export rows from a user's records.

    The year filter applies to expenses only, by creation date; projects
    and employees are always exported in full.
    """

    def __init__(self, db: Session, config: Optional[TrackerConfig] = None):
        self.db = db
        self.config = config or get_config()

    def _expenses(
        self,
        user_id: str,
        expense_type: Optional[ExpenseType] = None,
        year: Optional[int] = None,
    ) -> List[ExpenseRecord]:
        query = (
            select(ExpenseRecord)
            .options(
                joinedload(ExpenseRecord.project), joinedload(ExpenseRecord.employee)
            )
            .where(ExpenseRecord.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        if expense_type is not None:
            query = query.where(ExpenseRecord.type == expense_type.value)
        if year is not None:
            start, end = year_bounds(year)
            query = query.where(
                ExpenseRecord.created_at >= start, ExpenseRecord.created_at <= end
            )
        return list(
            self.db.scalars(query.order_by(ExpenseRecord.created_at.desc())).all()
        )

    @log_function_call
    def export_all(self, user_id: str, year: Optional[int] = None) -> ExportBundle:
        """Projects, expenses and employees of a user."""
        projects = self.db.scalars(
            select(ProjectRecord)
            .where(ProjectRecord.user_id == user_id)
            .order_by(ProjectRecord.created_at)
        ).all()
        employees = self.db.scalars(
            select(EmployeeRecord)
            .where(EmployeeRecord.user_id == user_id)
            .order_by(EmployeeRecord.created_at)
        ).all()
        expenses = self._expenses(user_id, year=year)

        bundle = ExportBundle(
            export_date=utcnow(),
            year=year,
            projects=[project_export_row(p) for p in projects],
            expenses=[expense_export_row(e) for e in expenses],
            employees=[employee_export_row(e) for e in employees],
        )
        logger.info(
            f"Exported {len(bundle.projects)} project(s), {len(bundle.expenses)} "
            f"expense(s), {len(bundle.employees)} employee(s) for user {user_id} "
            f"(year={year or 'all'})"
        )
        return bundle

    @log_function_call
    def export_expenses(
        self, user_id: str, expense_type: ExpenseType, year: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """Rows for one expense type."""
        rows = [
            expense_export_row(e)
            for e in self._expenses(user_id, ExpenseType(expense_type), year)
        ]
        logger.info(
            f"Exported {len(rows)} {ExpenseType(expense_type).value} expense(s) "
            f"for user {user_id} (year={year or 'all'})"
        )
        return rows
