"""Estimate (quote) data models.

Totals on estimates are always computed server-side from the line items;
any totals a client sends are ignored.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from expense_tracker.models.base import (
    ApiModel,
    Money,
    OptionalDate,
    require_text,
    strip_optional,
)


class EstimateStatus(str, Enum):
    """Lifecycle state of an estimate."""

    DRAFT = "draft"
    SENT = "sent"
    APPROVED = "approved"
    REJECTED = "rejected"


class EstimateItem(ApiModel):
    """One line of an estimate.

    Attributes:
        description: What is being quoted
        amount: Quantity (defaults to 1)
        unit_price: Price per unit (defaults to 0)
        total: amount x unit_price, filled in by the estimate calculator

    Example:
        >>> item = EstimateItem(description="Drywall", amount=3, unit_price=25)
        >>> item.amount
        Decimal('3')
    """

    description: str
    amount: Optional[Money] = Decimal("1")
    unit_price: Optional[Money] = Decimal("0")
    total: Money = Decimal("0")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str, info) -> str:
        return require_text(v, info.field_name)


class EstimateCreate(ApiModel):
    """Fields accepted when creating an estimate."""

    estimate_number: Optional[str] = None
    customer_name: str = Field(..., min_length=1)
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    project_title: str = Field(..., min_length=1)
    description: Optional[str] = None
    valid_until: OptionalDate = None
    items: List[EstimateItem] = Field(default_factory=list)
    tax_rate: Optional[Money] = Field(default=None, ge=0, le=100)
    additional_notes: Optional[str] = None
    status: EstimateStatus = EstimateStatus.DRAFT
    approved_amount: Money = Field(default=Decimal("0"), ge=0)

    @field_validator("customer_name", "project_title")
    @classmethod
    def validate_required_text(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("customer_email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip().lower() or None

    @field_validator(
        "estimate_number", "customer_phone", "description", "additional_notes"
    )
    @classmethod
    def strip_fields(cls, v: Optional[str]) -> Optional[str]:
        v = strip_optional(v)
        return v or None

    @field_validator("approved_amount", mode="before")
    @classmethod
    def default_approved(cls, v):
        if v is None or v == "":
            return Decimal("0")
        return v


class EstimateUpdate(ApiModel):
    """Partial update; totals are recomputed when items or tax rate change."""

    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    project_title: Optional[str] = None
    description: Optional[str] = None
    valid_until: OptionalDate = None
    items: Optional[List[EstimateItem]] = None
    tax_rate: Optional[Money] = Field(default=None, ge=0, le=100)
    additional_notes: Optional[str] = None
    status: Optional[EstimateStatus] = None
    approved_amount: Optional[Money] = Field(default=None, ge=0)

    @field_validator("customer_name", "project_title")
    @classmethod
    def validate_required_text(cls, v: Optional[str], info) -> Optional[str]:
        if v is None:
            return None
        return require_text(v, info.field_name)

    @field_validator("customer_email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip().lower() or None

    @field_validator("customer_phone", "description", "additional_notes")
    @classmethod
    def strip_fields(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)


class Estimate(ApiModel):
    """Estimate as returned by the API."""

    id: str
    estimate_number: str
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    project_title: str
    description: Optional[str] = None
    valid_until: Optional[dt.date] = None
    items: List[EstimateItem]
    subtotal: Money
    tax_rate: Money
    tax_amount: Money
    total: Money
    additional_notes: Optional[str] = None
    status: EstimateStatus
    approved_amount: Money
    user_id: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class EstimateSummary(ApiModel):
    """Counts and approved value across a user's estimates."""

    total: int = 0
    drafts: int = 0
    sent: int = 0
    approved: int = 0
    rejected: int = 0
    approved_amount: Money = Decimal("0")
