"""Dashboard routes."""

from fastapi import APIRouter, Depends

from expense_tracker.api.dependencies import get_current_user, get_dashboard_service
from expense_tracker.models.dashboard import DashboardMetrics, ExpenseBreakdown
from expense_tracker.models.user import User
from expense_tracker.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardMetrics)
def dashboard_metrics(
    user: User = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    return service.metrics(user.id)


@router.get("/breakdown", response_model=ExpenseBreakdown)
def expense_breakdown(
    user: User = Depends(get_current_user),
    service: DashboardService = Depends(get_dashboard_service),
):
    return service.breakdown(user.id)
