"""API routers, one module per resource."""

from fastapi import APIRouter

from expense_tracker.api.routes import (
    auth,
    dashboard,
    employees,
    estimates,
    expenses,
    export,
    projects,
)

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(projects.router)
api_router.include_router(expenses.router)
api_router.include_router(employees.router)
api_router.include_router(estimates.router)
api_router.include_router(dashboard.router)
api_router.include_router(export.router)

__all__ = ["api_router"]
