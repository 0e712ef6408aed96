"""Estimate routes."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from expense_tracker.api.dependencies import get_current_user, get_estimate_service
from expense_tracker.models.base import MessageResponse
from expense_tracker.models.estimate import (
    Estimate,
    EstimateCreate,
    EstimateStatus,
    EstimateSummary,
    EstimateUpdate,
)
from expense_tracker.models.user import User
from expense_tracker.services.estimate_service import EstimateService

router = APIRouter(prefix="/estimates", tags=["estimates"])


@router.get("", response_model=List[Estimate])
def list_estimates(
    estimate_status: Optional[EstimateStatus] = Query(default=None, alias="status"),
    search: Optional[str] = None,
    user: User = Depends(get_current_user),
    service: EstimateService = Depends(get_estimate_service),
):
    """List estimates, newest first, optionally filtered by status and a
    search over customer name, project title and estimate number."""
    return service.list(user.id, status=estimate_status, search=search)


@router.get("/summary", response_model=EstimateSummary)
def estimate_summary(
    user: User = Depends(get_current_user),
    service: EstimateService = Depends(get_estimate_service),
):
    return service.summary(user.id)


@router.post("", response_model=Estimate, status_code=status.HTTP_201_CREATED)
def create_estimate(
    data: EstimateCreate,
    user: User = Depends(get_current_user),
    service: EstimateService = Depends(get_estimate_service),
):
    return service.create(user.id, data)


@router.get("/{estimate_id}", response_model=Estimate)
def get_estimate(
    estimate_id: str,
    user: User = Depends(get_current_user),
    service: EstimateService = Depends(get_estimate_service),
):
    return service.get(user.id, estimate_id)


@router.get("/{estimate_id}/pdf")
def estimate_pdf(
    estimate_id: str,
    user: User = Depends(get_current_user),
    service: EstimateService = Depends(get_estimate_service),
):
    content, filename = service.render_pdf(user.id, estimate_id)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.put("/{estimate_id}", response_model=Estimate)
def update_estimate(
    estimate_id: str,
    data: EstimateUpdate,
    user: User = Depends(get_current_user),
    service: EstimateService = Depends(get_estimate_service),
):
    return service.update(user.id, estimate_id, data)


@router.delete("/{estimate_id}", response_model=MessageResponse)
def delete_estimate(
    estimate_id: str,
    user: User = Depends(get_current_user),
    service: EstimateService = Depends(get_estimate_service),
):
    service.delete(user.id, estimate_id)
    return MessageResponse(message="Estimate deleted successfully")
