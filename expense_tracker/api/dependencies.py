"""FastAPI dependencies: services bound to the request session and the
authenticated user."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from expense_tracker.db.session import get_db
from expense_tracker.errors import AuthenticationError
from expense_tracker.models.user import User
from expense_tracker.services.auth_service import AuthService
from expense_tracker.services.dashboard_service import DashboardService
from expense_tracker.services.email_service import EmailService
from expense_tracker.services.employee_service import EmployeeService
from expense_tracker.services.estimate_service import EstimateService
from expense_tracker.services.expense_service import ExpenseService
from expense_tracker.services.export_service import ExportService
from expense_tracker.services.project_service import ProjectService

bearer_scheme = HTTPBearer(auto_error=False)


def get_email_service() -> EmailService:
    return EmailService()


def get_auth_service(
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> AuthService:
    return AuthService(db, email_service=email_service)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the user from the ``Authorization: Bearer <token>`` header.

    Raises:
        AuthenticationError: If the header is missing or the token is
            invalid, expired or belongs to a deleted account
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token, authorization denied")
    return auth_service.authenticate(credentials.credentials)


def get_project_service(db: Session = Depends(get_db)) -> ProjectService:
    return ProjectService(db)


def get_expense_service(db: Session = Depends(get_db)) -> ExpenseService:
    return ExpenseService(db)


def get_employee_service(db: Session = Depends(get_db)) -> EmployeeService:
    return EmployeeService(db)


def get_estimate_service(db: Session = Depends(get_db)) -> EstimateService:
    return EstimateService(db)


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


def get_export_service(db: Session = Depends(get_db)) -> ExportService:
    return ExportService(db)
