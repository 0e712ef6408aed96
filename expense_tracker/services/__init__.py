"""Service layer: one service per entity plus authentication and email."""

from expense_tracker.services.auth_service import AuthService
from expense_tracker.services.dashboard_service import DashboardService
from expense_tracker.services.email_service import EmailService
from expense_tracker.services.employee_service import EmployeeService
from expense_tracker.services.estimate_service import EstimateService
from expense_tracker.services.expense_service import ExpenseService
from expense_tracker.services.export_service import ExportService
from expense_tracker.services.project_service import ProjectService

__all__ = [
    "AuthService",
    "DashboardService",
    "EmailService",
    "EmployeeService",
    "EstimateService",
    "ExpenseService",
    "ExportService",
    "ProjectService",
]
