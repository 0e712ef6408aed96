"""Authentication routes: register, login, password reset."""

from fastapi import APIRouter, Depends, status

from expense_tracker.api.dependencies import get_auth_service, get_current_user
from expense_tracker.models.base import MessageResponse
from expense_tracker.models.user import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    User,
    VerifyOtpRequest,
)
from expense_tracker.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
def register(data: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    return service.register(data)


@router.post("/login", response_model=AuthResponse)
def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.login(data)


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    data: ForgotPasswordRequest, service: AuthService = Depends(get_auth_service)
):
    """Email a 6-digit reset code.

    Answers with the same message whether or not the email is registered.
    """
    return MessageResponse(message=service.forgot_password(data))


@router.post("/verify-otp", response_model=MessageResponse)
def verify_otp(data: VerifyOtpRequest, service: AuthService = Depends(get_auth_service)):
    return MessageResponse(message=service.verify_otp(data))


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    data: ResetPasswordRequest, service: AuthService = Depends(get_auth_service)
):
    return MessageResponse(message=service.reset_password(data))


@router.get("/me", response_model=User)
def me(user: User = Depends(get_current_user)):
    return user
