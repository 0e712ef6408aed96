"""Employee roster routes, mounted under ``/users/employees``."""

from typing import List

from fastapi import APIRouter, Depends, status

from expense_tracker.api.dependencies import get_current_user, get_employee_service
from expense_tracker.models.base import MessageResponse
from expense_tracker.models.employee import Employee, EmployeeCreate, EmployeeUpdate
from expense_tracker.models.user import User
from expense_tracker.services.employee_service import EmployeeService

router = APIRouter(prefix="/users/employees", tags=["employees"])


@router.get("", response_model=List[Employee])
def list_employees(
    user: User = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    return service.list(user.id)


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
def create_employee(
    data: EmployeeCreate,
    user: User = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    return service.create(user.id, data)


@router.get("/{employee_id}", response_model=Employee)
def get_employee(
    employee_id: str,
    user: User = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    return service.get(user.id, employee_id)


@router.put("/{employee_id}", response_model=Employee)
def update_employee(
    employee_id: str,
    data: EmployeeUpdate,
    user: User = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    return service.update(user.id, employee_id, data)


@router.delete("/{employee_id}", response_model=MessageResponse)
def delete_employee(
    employee_id: str,
    user: User = Depends(get_current_user),
    service: EmployeeService = Depends(get_employee_service),
):
    service.delete(user.id, employee_id)
    return MessageResponse(message="Employee deleted successfully")
