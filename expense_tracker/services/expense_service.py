"""Expense service: CRUD and filtered listing of payroll, operating and
material expenses."""

import datetime as dt
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.db.tables import EmployeeRecord, ExpenseRecord, ProjectRecord
from expense_tracker.errors import NotFoundError
from expense_tracker.models.expense import (
    Expense,
    ExpenseCreate,
    ExpenseType,
    ExpenseUpdate,
)

logger = logging.getLogger(__name__)

# Columns that cannot be cleared by sending null
REQUIRED_FIELDS = {
    "type",
    "project_id",
    "category",
    "amount",
    "days_worked",
    "advancement",
    "return_amount",
}


def end_of_day(day: dt.date) -> dt.datetime:
    """Last instant of a calendar day, for inclusive date-range filters."""
    return dt.datetime.combine(day, dt.time.max)


class ExpenseService:
    """CRUD operations on a user's expenses.

    Every expense references one of the user's projects and, for payroll,
    optionally one of the user's employees.
    """

    def __init__(self, db: Session, config: Optional[TrackerConfig] = None):
        self.db = db
        self.config = config or get_config()

    def _query(self, user_id: str):
        return (
            select(ExpenseRecord)
            .options(
                joinedload(ExpenseRecord.project), joinedload(ExpenseRecord.employee)
            )
            .where(ExpenseRecord.user_id == user_id)
            .execution_options(populate_existing=True)
        )

    def _get_record(self, user_id: str, expense_id: str) -> ExpenseRecord:
        record = self.db.scalar(
            self._query(user_id).where(ExpenseRecord.id == expense_id)
        )
        if record is None:
            raise NotFoundError("Expense not found")
        return record

    def _check_references(
        self, user_id: str, project_id: Optional[str], employee_id: Optional[str]
    ) -> None:
        if project_id is not None:
            project = self.db.scalar(
                select(ProjectRecord.id).where(
                    ProjectRecord.id == project_id, ProjectRecord.user_id == user_id
                )
            )
            if project is None:
                raise NotFoundError("Project not found")
        if employee_id is not None:
            employee = self.db.scalar(
                select(EmployeeRecord.id).where(
                    EmployeeRecord.id == employee_id, EmployeeRecord.user_id == user_id
                )
            )
            if employee is None:
                raise NotFoundError("Employee not found")

    def list(
        self,
        user_id: str,
        expense_type: Optional[ExpenseType] = None,
        project_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        start_date: Optional[dt.date] = None,
        end_date: Optional[dt.date] = None,
    ) -> List[Expense]:
        """List expenses, newest first.

        Args:
            user_id: Owner of the expenses
            expense_type: Only expenses of this type
            project_id: Only expenses of this project
            employee_id: Only expenses of this employee
            start_date: Created on or after this day
            end_date: Created on or before this day (inclusive)

        Returns:
            Matching expenses with project and employee names resolved
        """
        query = self._query(user_id)
        if expense_type is not None:
            query = query.where(ExpenseRecord.type == ExpenseType(expense_type).value)
        if project_id:
            query = query.where(ExpenseRecord.project_id == project_id)
        if employee_id:
            query = query.where(ExpenseRecord.employee_id == employee_id)
        if start_date is not None:
            query = query.where(
                ExpenseRecord.created_at >= dt.datetime.combine(start_date, dt.time.min)
            )
        if end_date is not None:
            query = query.where(ExpenseRecord.created_at <= end_of_day(end_date))

        records = self.db.scalars(
            query.order_by(ExpenseRecord.created_at.desc())
        ).all()
        return [Expense.model_validate(record) for record in records]

    def get(self, user_id: str, expense_id: str) -> Expense:
        return Expense.model_validate(self._get_record(user_id, expense_id))

    def create(self, user_id: str, data: ExpenseCreate) -> Expense:
        self._check_references(user_id, data.project_id, data.employee_id)
        values = data.model_dump()
        values["type"] = data.type.value
        record = ExpenseRecord(user_id=user_id, **values)
        self.db.add(record)
        self.db.commit()
        logger.info(
            f"Created {record.type} expense {record.id} "
            f"({record.amount}) on project {record.project_id}"
        )
        return self.get(user_id, record.id)

    def update(self, user_id: str, expense_id: str, data: ExpenseUpdate) -> Expense:
        """Apply a partial update.

        Required fields sent as null are left unchanged, and so is an
        employee sent as null or an empty string.
        """
        record = self._get_record(user_id, expense_id)
        changes = data.model_dump(exclude_unset=True)
        for field in list(changes):
            if changes[field] is None and (
                field in REQUIRED_FIELDS or field == "employee_id"
            ):
                del changes[field]

        self._check_references(
            user_id, changes.get("project_id"), changes.get("employee_id")
        )
        if "type" in changes:
            changes["type"] = ExpenseType(changes["type"]).value

        for field, value in changes.items():
            setattr(record, field, value)
        self.db.commit()
        logger.info(f"Updated expense {expense_id}: {sorted(changes)}")
        return self.get(user_id, expense_id)

    def delete(self, user_id: str, expense_id: str) -> None:
        record = self._get_record(user_id, expense_id)
        self.db.delete(record)
        self.db.commit()
        logger.info(f"Deleted expense {expense_id}")
