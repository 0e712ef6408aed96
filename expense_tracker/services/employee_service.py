"""Employee roster service."""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.db.tables import EmployeeRecord
from expense_tracker.errors import NotFoundError
from expense_tracker.models.employee import Employee, EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)


class EmployeeService:
    """CRUD operations on a user's employees.

    Example:
        >>> service = EmployeeService(db)
        >>> employee = service.create(user_id, EmployeeCreate(name="Ana"))
        >>> [e.name for e in service.list(user_id)]
        ['Ana']
    """

    def __init__(self, db: Session, config: Optional[TrackerConfig] = None):
        self.db = db
        self.config = config or get_config()

    def _get_record(self, user_id: str, employee_id: str) -> EmployeeRecord:
        record = self.db.scalar(
            select(EmployeeRecord).where(
                EmployeeRecord.id == employee_id, EmployeeRecord.user_id == user_id
            )
        )
        if record is None:
            raise NotFoundError("Employee not found")
        return record

    def list(self, user_id: str) -> List[Employee]:
        """All employees of the user, sorted by name."""
        records = self.db.scalars(
            select(EmployeeRecord)
            .where(EmployeeRecord.user_id == user_id)
            .order_by(EmployeeRecord.name)
        ).all()
        return [Employee.model_validate(record) for record in records]

    def get(self, user_id: str, employee_id: str) -> Employee:
        return Employee.model_validate(self._get_record(user_id, employee_id))

    def create(self, user_id: str, data: EmployeeCreate) -> Employee:
        record = EmployeeRecord(user_id=user_id, **data.model_dump())
        self.db.add(record)
        self.db.commit()
        logger.info(f"Created employee {record.id} for user {user_id}")
        return Employee.model_validate(record)

    def update(self, user_id: str, employee_id: str, data: EmployeeUpdate) -> Employee:
        record = self._get_record(user_id, employee_id)
        changes = data.model_dump(exclude_unset=True)
        # name is required on the record; a null name leaves it unchanged
        if changes.get("name") is None:
            changes.pop("name", None)
        for field, value in changes.items():
            setattr(record, field, value)
        self.db.commit()
        logger.info(f"Updated employee {employee_id}: {sorted(changes)}")
        return Employee.model_validate(record)

    def delete(self, user_id: str, employee_id: str) -> None:
        """Delete an employee; their payroll expenses keep no employee."""
        record = self._get_record(user_id, employee_id)
        self.db.delete(record)
        self.db.commit()
        logger.info(f"Deleted employee {employee_id}")
