"""Project data models for the expense tracker.

This module defines the Project model together with its profit-sharing
configuration and the financial summary computed from its expenses.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from expense_tracker.models.base import ApiModel, Money, require_text


class ProfitSharingType(str, Enum):
    """How a project's net profit is split between partners."""

    NONE = "none"
    TWO_WAY = "two-way"
    THREE_WAY = "three-way"
    CUSTOM = "custom"


class ProfitShare(ApiModel):
    """One partner's share of a project's net profit.

    Attributes:
        name: Partner name
        percentage: Share of the net profit (0-100)

    Example:
        >>> share = ProfitShare(name="Alice", percentage=Decimal("50"))
        >>> share.percentage
        Decimal('50')
    """

    name: str = Field(..., description="Partner name")
    percentage: Money = Field(..., ge=0, le=100, description="Share percentage")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class ProjectCreate(ApiModel):
    """Fields accepted when creating a project.

    Example:
        >>> project = ProjectCreate(name="Kitchen remodel", gross_income=15000)
        >>> project.profit_sharing_type
        <ProfitSharingType.NONE: 'none'>
    """

    name: str = Field(..., min_length=1, description="Project name")
    gross_income: Money = Field(default=Decimal("0"), ge=0)
    profit_sharing_enabled: bool = False
    profit_sharing_type: ProfitSharingType = ProfitSharingType.NONE
    profit_shares: List[ProfitShare] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("gross_income", mode="before")
    @classmethod
    def default_income(cls, v):
        # Clients send null or "" for an untouched income field
        if v is None or v == "":
            return Decimal("0")
        return v


class ProjectUpdate(ApiModel):
    """Partial update; only fields present in the body are changed."""

    name: Optional[str] = None
    gross_income: Optional[Money] = Field(default=None, ge=0)
    profit_sharing_enabled: Optional[bool] = None
    profit_sharing_type: Optional[ProfitSharingType] = None
    profit_shares: Optional[List[ProfitShare]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str], info) -> Optional[str]:
        if v is None:
            return None
        return require_text(v, info.field_name)


class Project(ApiModel):
    """Project as returned by the API."""

    id: str
    name: str
    gross_income: Money
    profit_sharing_enabled: bool
    profit_sharing_type: ProfitSharingType
    profit_shares: List[ProfitShare]
    user_id: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class ShareAllocation(ApiModel):
    """A partner's share expressed as money."""

    name: str
    percentage: Money
    amount: Money


class ProjectSummary(ApiModel):
    """Financial summary of a single project.

    Attributes:
        labor_expenses: Sum of payroll expenses
        operating_expenses: Sum of operating expenses
        material_expenses: Sum of material expenses net of returns
        total_expenses: labor + operating + material
        admin_fee: Administrative fee charged on total expenses
        net_profit: gross income - total expenses - admin fee
        shares: Profit allocations (empty unless profit sharing is enabled)
    """

    project_id: str
    name: str
    gross_income: Money
    labor_expenses: Money
    operating_expenses: Money
    material_expenses: Money
    total_expenses: Money
    admin_fee_percentage: Money
    admin_fee: Money
    net_profit: Money
    expense_count: int
    shares: List[ShareAllocation] = Field(default_factory=list)
