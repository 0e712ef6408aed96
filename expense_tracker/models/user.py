"""User and authentication request/response models."""

import datetime as dt
from typing import Optional

from pydantic import field_validator

from expense_tracker.models.base import ApiModel


def _normalize_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip().lower()
    return value or None


class RegisterRequest(ApiModel):
    """Body of ``POST /api/auth/register``.

    Presence of email and password is checked by the auth service so the
    API can answer with the same message whichever one is missing.
    """

    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v)


class LoginRequest(ApiModel):
    """Body of ``POST /api/auth/login``."""

    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v)


class ForgotPasswordRequest(ApiModel):
    """Body of ``POST /api/auth/forgot-password``."""

    email: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v)


class VerifyOtpRequest(ApiModel):
    """Body of ``POST /api/auth/verify-otp``."""

    email: Optional[str] = None
    otp: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v)


class ResetPasswordRequest(ApiModel):
    """Body of ``POST /api/auth/reset-password``."""

    email: Optional[str] = None
    otp: Optional[str] = None
    new_password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v)


class User(ApiModel):
    """Public view of a user account.

    Password hashes and reset codes never leave the database layer.
    """

    id: str
    email: str
    name: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class AuthResponse(ApiModel):
    """Token issued on register and login."""

    token: str
    user: User
