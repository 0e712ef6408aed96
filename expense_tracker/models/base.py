"""Base models for all data models in the expense tracker.

This module provides a base Pydantic model with common configuration,
the camelCase API variant used on the wire, and the shared money type.
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def _strip_to_date(value: Any) -> Any:
    """Accept full ISO timestamps where a calendar date is expected.

    Browser clients send ``new Date(...)`` values such as
    ``2024-03-04T00:00:00.000Z``; only the date part is kept.
    """
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if "T" in value:
            return value.split("T", 1)[0]
    return value


def _blank_to_none(value: Any) -> Any:
    """Treat empty strings as missing values."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Decimal internally, plain JSON number on the wire
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]

OptionalDate = Annotated[Optional[dt.date], BeforeValidator(_strip_to_date)]
OptionalReference = Annotated[Optional[str], BeforeValidator(_blank_to_none)]


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration for:
    - Validation with type checking
    - Serialization to/from dictionaries
    - Arbitrary types support for dates and decimals

    Example:
        >>> class Share(BaseDataModel):
        ...     name: str
        ...     percentage: int
        >>> Share(name="Alice", percentage=50).model_dump()
        {'name': 'Alice', 'percentage': 50}
    """

    model_config = ConfigDict(
        # Allow arbitrary types like Decimal, date
        arbitrary_types_allowed=True,
        # Validate on assignment to catch errors early
        validate_assignment=True,
        strict=False,
        extra="forbid",
        frozen=False,
    )


class ApiModel(BaseDataModel):
    """Base class for request and response bodies.

    Field names are snake_case in Python and camelCase on the wire
    (``gross_income`` <-> ``grossIncome``). Unknown keys sent by clients,
    such as ``_id`` or client-computed totals, are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class MessageResponse(ApiModel):
    """Plain acknowledgement body, e.g. ``{"message": "Project deleted"}``."""

    message: str


def require_text(value: Optional[str], field_name: str) -> str:
    """Validate that a string is not empty or whitespace only.

    Args:
        value: The value to validate
        field_name: Field name used in the error message

    Returns:
        The stripped value

    Raises:
        ValueError: If the value is empty or whitespace only
    """
    if value is None or not value.strip():
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    return value.strip()


def strip_optional(value: Optional[str]) -> Optional[str]:
    """Strip an optional string, keeping None as None."""
    if value is None:
        return None
    return value.strip()
