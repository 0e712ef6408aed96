"""Expense routes."""

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from expense_tracker.api.dependencies import get_current_user, get_expense_service
from expense_tracker.models.base import MessageResponse
from expense_tracker.models.expense import (
    Expense,
    ExpenseCreate,
    ExpenseType,
    ExpenseUpdate,
)
from expense_tracker.models.user import User
from expense_tracker.services.expense_service import ExpenseService

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.get("", response_model=List[Expense])
def list_expenses(
    expense_type: Optional[ExpenseType] = Query(default=None, alias="type"),
    project_id: Optional[str] = Query(default=None, alias="projectId"),
    employee_id: Optional[str] = Query(default=None, alias="employeeId"),
    start_date: Optional[dt.date] = Query(default=None, alias="startDate"),
    end_date: Optional[dt.date] = Query(default=None, alias="endDate"),
    user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    """List expenses, newest first.

    ``startDate`` and ``endDate`` filter by creation date; the end date
    includes the whole day.
    """
    return service.list(
        user.id,
        expense_type=expense_type,
        project_id=project_id,
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
    )


@router.post("", response_model=Expense, status_code=status.HTTP_201_CREATED)
def create_expense(
    data: ExpenseCreate,
    user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    return service.create(user.id, data)


@router.get("/{expense_id}", response_model=Expense)
def get_expense(
    expense_id: str,
    user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    return service.get(user.id, expense_id)


@router.put("/{expense_id}", response_model=Expense)
def update_expense(
    expense_id: str,
    data: ExpenseUpdate,
    user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    return service.update(user.id, expense_id, data)


@router.delete("/{expense_id}", response_model=MessageResponse)
def delete_expense(
    expense_id: str,
    user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
):
    service.delete(user.id, expense_id)
    return MessageResponse(message="Expense deleted")
