"""Project routes."""

from typing import List

from fastapi import APIRouter, Depends, status

from expense_tracker.api.dependencies import get_current_user, get_project_service
from expense_tracker.models.base import MessageResponse
from expense_tracker.models.project import (
    Project,
    ProjectCreate,
    ProjectSummary,
    ProjectUpdate,
)
from expense_tracker.models.user import User
from expense_tracker.services.project_service import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[Project])
def list_projects(
    user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return service.list(user.id)


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate,
    user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return service.create(user.id, data)


@router.get("/{project_id}", response_model=Project)
def get_project(
    project_id: str,
    user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return service.get(user.id, project_id)


@router.get("/{project_id}/summary", response_model=ProjectSummary)
def get_project_summary(
    project_id: str,
    user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    """Labor, operating and material totals, admin fee, net profit and
    partner shares."""
    return service.summary(user.id, project_id)


@router.put("/{project_id}", response_model=Project)
def update_project(
    project_id: str,
    data: ProjectUpdate,
    user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    return service.update(user.id, project_id, data)


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(
    project_id: str,
    user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
):
    service.delete(user.id, project_id)
    return MessageResponse(message="Project deleted")
