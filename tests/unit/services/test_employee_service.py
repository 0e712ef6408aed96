"""
Unit tests for the employee service.
"""

from decimal import Decimal

import pytest

from expense_tracker.errors import NotFoundError
from expense_tracker.models.employee import EmployeeCreate, EmployeeUpdate
from expense_tracker.models.expense import ExpenseCreate, ExpenseType
from expense_tracker.models.project import ProjectCreate
from expense_tracker.services import EmployeeService, ExpenseService, ProjectService


@pytest.fixture
def employee_service(db_session, test_config):
    return EmployeeService(db_session, test_config)


class TestEmployeeService:
    """Test roster management."""

    def test_create_and_list_sorted(self, employee_service, user):
        employee_service.create(user.id, EmployeeCreate(name="Zoe"))
        employee_service.create(
            user.id, EmployeeCreate(name="Ana", position=" Carpenter ")
        )

        employees = employee_service.list(user.id)

        assert [e.name for e in employees] == ["Ana", "Zoe"]
        assert employees[0].position == "Carpenter"

    def test_scoped_to_user(self, employee_service, user, other_user):
        employee = employee_service.create(user.id, EmployeeCreate(name="Ana"))

        assert employee_service.list(other_user.id) == []
        with pytest.raises(NotFoundError, match="Employee not found"):
            employee_service.get(other_user.id, employee.id)

    def test_update(self, employee_service, user):
        employee = employee_service.create(user.id, EmployeeCreate(name="Ana"))

        updated = employee_service.update(
            user.id, employee.id, EmployeeUpdate(name=None, phone="555-0100")
        )

        assert updated.name == "Ana"
        assert updated.phone == "555-0100"

    def test_delete_keeps_expenses(self, employee_service, user, db_session, test_config):
        project = ProjectService(db_session, test_config).create(
            user.id, ProjectCreate(name="Deck")
        )
        employee = employee_service.create(user.id, EmployeeCreate(name="Ana"))
        expenses = ExpenseService(db_session, test_config)
        expense = expenses.create(
            user.id,
            ExpenseCreate(
                type=ExpenseType.PAYROLL,
                project_id=project.id,
                category="Labor",
                amount=Decimal("800"),
                employee_id=employee.id,
            ),
        )

        employee_service.delete(user.id, employee.id)

        remaining = expenses.get(user.id, expense.id)
        assert remaining.employee_id is None
        assert remaining.employee_name is None
        assert employee_service.list(user.id) == []
