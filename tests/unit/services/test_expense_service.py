"""
Unit tests for the expense service.
"""

import datetime as dt
from decimal import Decimal

import pytest

from expense_tracker.db.tables import ExpenseRecord
from expense_tracker.errors import NotFoundError
from expense_tracker.models.employee import EmployeeCreate
from expense_tracker.models.expense import ExpenseCreate, ExpenseType, ExpenseUpdate
from expense_tracker.models.project import ProjectCreate
from expense_tracker.services import EmployeeService, ExpenseService, ProjectService
from expense_tracker.services.expense_service import end_of_day


@pytest.fixture
def expense_service(db_session, test_config):
    return ExpenseService(db_session, test_config)


@pytest.fixture
def project(db_session, test_config, user):
    return ProjectService(db_session, test_config).create(
        user.id, ProjectCreate(name="Deck", gross_income=Decimal("15000"))
    )


@pytest.fixture
def employee(db_session, test_config, user):
    return EmployeeService(db_session, test_config).create(
        user.id, EmployeeCreate(name="Ana")
    )


def payroll(project, employee=None, **overrides):
    values = dict(
        type=ExpenseType.PAYROLL,
        project_id=project.id,
        category="Labor",
        amount=Decimal("800"),
        employee_id=employee.id if employee else None,
        days_worked=Decimal("4"),
        week_start=dt.date(2024, 3, 4),
    )
    values.update(overrides)
    return ExpenseCreate(**values)


def set_created_at(db_session, expense_id, when):
    db_session.get(ExpenseRecord, expense_id).created_at = when
    db_session.commit()


class TestEndOfDay:
    def test_last_instant(self):
        assert end_of_day(dt.date(2024, 12, 31)) == dt.datetime(
            2024, 12, 31, 23, 59, 59, 999999
        )


class TestExpenseCrud:
    """Test create, read, update and delete."""

    def test_create_resolves_names(self, expense_service, user, project, employee):
        expense = expense_service.create(user.id, payroll(project, employee))

        assert expense.type == ExpenseType.PAYROLL
        assert expense.project_name == "Deck"
        assert expense.employee_name == "Ana"
        assert expense.amount == Decimal("800")
        assert expense.week_start == dt.date(2024, 3, 4)

    def test_create_checks_project_owner(self, expense_service, other_user, project):
        with pytest.raises(NotFoundError, match="Project not found"):
            expense_service.create(other_user.id, payroll(project))

    def test_create_checks_employee_owner(
        self, expense_service, db_session, test_config, user, other_user, employee
    ):
        theirs = ProjectService(db_session, test_config).create(
            other_user.id, ProjectCreate(name="Theirs")
        )
        with pytest.raises(NotFoundError, match="Employee not found"):
            expense_service.create(other_user.id, payroll(theirs, employee))

    def test_get_other_users_expense(self, expense_service, user, other_user, project):
        expense = expense_service.create(user.id, payroll(project))
        with pytest.raises(NotFoundError, match="Expense not found"):
            expense_service.get(other_user.id, expense.id)

    def test_update_partial(self, expense_service, user, project, employee):
        expense = expense_service.create(user.id, payroll(project, employee))

        updated = expense_service.update(
            user.id,
            expense.id,
            ExpenseUpdate(amount=Decimal("900"), category=None, employee_id=None),
        )

        assert updated.amount == Decimal("900")
        assert updated.category == "Labor"
        assert updated.employee_id == employee.id

    def test_update_moves_project(
        self, expense_service, db_session, test_config, user, project
    ):
        expense = expense_service.create(user.id, payroll(project))
        other = ProjectService(db_session, test_config).create(
            user.id, ProjectCreate(name="Roof")
        )

        updated = expense_service.update(
            user.id, expense.id, ExpenseUpdate(project_id=other.id)
        )

        assert updated.project_id == other.id
        assert updated.project_name == "Roof"

    def test_update_rejects_unknown_project(self, expense_service, user, project):
        expense = expense_service.create(user.id, payroll(project))
        with pytest.raises(NotFoundError, match="Project not found"):
            expense_service.update(user.id, expense.id, ExpenseUpdate(project_id="nope"))

    def test_delete(self, expense_service, user, project):
        expense = expense_service.create(user.id, payroll(project))
        expense_service.delete(user.id, expense.id)

        assert expense_service.list(user.id) == []


class TestExpenseListing:
    """Test list filters."""

    @pytest.fixture
    def mixed(self, expense_service, db_session, user, project, employee):
        payroll_expense = expense_service.create(user.id, payroll(project, employee))
        operating = expense_service.create(
            user.id,
            ExpenseCreate(
                type=ExpenseType.OPERATING,
                project_id=project.id,
                category="Fuel",
                amount=Decimal("60"),
            ),
        )
        material = expense_service.create(
            user.id,
            ExpenseCreate(
                type=ExpenseType.MATERIAL,
                project_id=project.id,
                category="Lumber",
                amount=Decimal("1200"),
                return_amount=Decimal("100"),
            ),
        )
        set_created_at(db_session, payroll_expense.id, dt.datetime(2024, 3, 1, 9))
        set_created_at(db_session, operating.id, dt.datetime(2024, 3, 15, 23, 30))
        set_created_at(db_session, material.id, dt.datetime(2024, 4, 2, 8))
        return payroll_expense, operating, material

    def test_newest_first(self, expense_service, user, mixed):
        payroll_expense, operating, material = mixed
        assert [e.id for e in expense_service.list(user.id)] == [
            material.id,
            operating.id,
            payroll_expense.id,
        ]

    def test_by_type(self, expense_service, user, mixed):
        expenses = expense_service.list(user.id, expense_type=ExpenseType.MATERIAL)
        assert [e.category for e in expenses] == ["Lumber"]
        assert expenses[0].net_amount == Decimal("1100")

    def test_by_employee(self, expense_service, user, employee, mixed):
        expenses = expense_service.list(user.id, employee_id=employee.id)
        assert [e.type for e in expenses] == [ExpenseType.PAYROLL]

    def test_by_project(self, expense_service, user, project, mixed):
        assert len(expense_service.list(user.id, project_id=project.id)) == 3
        assert expense_service.list(user.id, project_id="other") == []

    def test_date_range_is_inclusive(self, expense_service, user, mixed):
        expenses = expense_service.list(
            user.id, start_date=dt.date(2024, 3, 1), end_date=dt.date(2024, 3, 15)
        )
        assert [e.category for e in expenses] == ["Fuel", "Labor"]

    def test_scoped_to_user(self, expense_service, other_user, mixed):
        assert expense_service.list(other_user.id) == []
