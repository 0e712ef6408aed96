"""Data models for the expense tracker.

This package contains Pydantic models for all business entities:
- BaseDataModel / ApiModel: Base classes with common configuration
- Project, ProfitShare: Projects and their profit-sharing setup
- Expense: Payroll, operating and material expenses
- Employee: Roster entries referenced by payroll expenses
- Estimate, EstimateItem: Customer quotes
- User: Account owning all of the above
"""

from expense_tracker.models.base import ApiModel, BaseDataModel, MessageResponse
from expense_tracker.models.dashboard import (
    BreakdownRow,
    DashboardMetrics,
    ExpenseBreakdown,
)
from expense_tracker.models.employee import Employee, EmployeeCreate, EmployeeUpdate
from expense_tracker.models.estimate import (
    Estimate,
    EstimateCreate,
    EstimateItem,
    EstimateStatus,
    EstimateSummary,
    EstimateUpdate,
)
from expense_tracker.models.expense import (
    Expense,
    ExpenseCreate,
    ExpenseType,
    ExpenseUpdate,
)
from expense_tracker.models.project import (
    ProfitShare,
    ProfitSharingType,
    Project,
    ProjectCreate,
    ProjectSummary,
    ProjectUpdate,
    ShareAllocation,
)
from expense_tracker.models.user import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    User,
    VerifyOtpRequest,
)

__all__ = [
    "ApiModel",
    "BaseDataModel",
    "MessageResponse",
    "BreakdownRow",
    "DashboardMetrics",
    "ExpenseBreakdown",
    "Employee",
    "EmployeeCreate",
    "EmployeeUpdate",
    "Estimate",
    "EstimateCreate",
    "EstimateItem",
    "EstimateStatus",
    "EstimateSummary",
    "EstimateUpdate",
    "Expense",
    "ExpenseCreate",
    "ExpenseType",
    "ExpenseUpdate",
    "ProfitShare",
    "ProfitSharingType",
    "Project",
    "ProjectCreate",
    "ProjectSummary",
    "ProjectUpdate",
    "ShareAllocation",
    "AuthResponse",
    "ForgotPasswordRequest",
    "LoginRequest",
    "RegisterRequest",
    "ResetPasswordRequest",
    "User",
    "VerifyOtpRequest",
]
