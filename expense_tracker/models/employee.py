"""Employee (roster) models."""

import datetime as dt
from typing import Optional

from pydantic import Field, field_validator

from expense_tracker.models.base import ApiModel, require_text, strip_optional


class EmployeeCreate(ApiModel):
    """Fields accepted when adding an employee to the roster."""

    name: str = Field(..., min_length=1, description="Employee name")
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str, info) -> str:
        return require_text(v, info.field_name)

    @field_validator("email", "phone", "position")
    @classmethod
    def strip_fields(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)


class EmployeeUpdate(ApiModel):
    """Partial update; only fields present in the body are changed."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str], info) -> Optional[str]:
        if v is None:
            return None
        return require_text(v, info.field_name)

    @field_validator("email", "phone", "position")
    @classmethod
    def strip_fields(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)


class Employee(ApiModel):
    """Employee as returned by the API."""

    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    user_id: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
