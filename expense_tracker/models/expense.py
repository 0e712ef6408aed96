"""Expense data models.

One model covers the three expense kinds. Payroll expenses carry the
employee, days worked, advancement and pay week; material expenses carry
the amount returned to the supplier.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from expense_tracker.models.base import (
    ApiModel,
    Money,
    OptionalDate,
    OptionalReference,
    require_text,
    strip_optional,
)


class ExpenseType(str, Enum):
    """Kinds of expense tracked against a project."""

    PAYROLL = "payroll"
    OPERATING = "operating"
    MATERIAL = "material"


def _zero_if_missing(v):
    if v is None or v == "":
        return 0
    return v


class ExpenseCreate(ApiModel):
    """Fields accepted when recording an expense."""

    type: ExpenseType
    project_id: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    description: Optional[str] = None
    amount: Money = Decimal("0")
    employee_id: OptionalReference = None
    days_worked: Decimal = Field(default=Decimal("0"), ge=0)
    advancement: Money = Decimal("0")
    week_start: OptionalDate = None
    weekend: OptionalDate = None
    return_amount: Money = Decimal("0")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)

    @field_validator(
        "amount", "days_worked", "advancement", "return_amount", mode="before"
    )
    @classmethod
    def default_numbers(cls, v):
        return _zero_if_missing(v)


class ExpenseUpdate(ApiModel):
    """Partial update; only fields present in the body are changed.

    An ``employeeId`` of ``""`` or ``null`` leaves the stored employee
    untouched.
    """

    type: Optional[ExpenseType] = None
    project_id: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[Money] = None
    employee_id: OptionalReference = None
    days_worked: Optional[Decimal] = Field(default=None, ge=0)
    advancement: Optional[Money] = None
    week_start: OptionalDate = None
    weekend: OptionalDate = None
    return_amount: Optional[Money] = None

    @field_validator("category")
    @classmethod
    def validate_category(cls, v: Optional[str], info) -> Optional[str]:
        if v is None:
            return None
        return require_text(v, info.field_name)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)


class Expense(ApiModel):
    """Expense as returned by the API, with resolved reference names."""

    id: str
    type: ExpenseType
    project_id: str
    project_name: Optional[str] = None
    category: str
    description: Optional[str] = None
    amount: Money
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    days_worked: Money
    advancement: Money
    week_start: Optional[dt.date] = None
    weekend: Optional[dt.date] = None
    return_amount: Money
    user_id: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @property
    def net_amount(self) -> Decimal:
        """Amount actually spent: material returns are deducted."""
        if self.type == ExpenseType.MATERIAL:
            return self.amount - (self.return_amount or Decimal("0"))
        return self.amount
