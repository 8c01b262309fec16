"""
Authentication Endpoints.

Registration, login and password recovery. Successful registration and
login return a JWT bearer token valid for ``JWT_EXPIRES_HOURS`` hours.
"""

from fastapi import APIRouter, status

from ecodata.core.models.io import MessageResponse
from ecodata.core.models.io.users import (
    AuthResponse,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    ResetTokenStatus,
)

from .deps import AuthServiceDep

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create a donor account and return a bearer token.",
    responses={
        201: {"description": "Account created"},
        400: {"description": "Invalid data, username taken or email already registered"},
    },
)
async def register(body: RegisterRequest, auth: AuthServiceDep) -> AuthResponse:
    return await auth.register(body)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log In",
    description="Exchange a username and password for a bearer token.",
    responses={
        400: {"description": "Username or password missing"},
        401: {"description": "Invalid username or password"},
    },
)
async def login(body: LoginRequest, auth: AuthServiceDep) -> AuthResponse:
    return await auth.login(body)


@router.post(
    "/forgot-password",
    response_model=ForgotPasswordResponse,
    response_model_exclude_none=True,
    summary="Request Password Reset",
    description="Email a password reset link. The response does not reveal whether the email is registered.",
    responses={400: {"description": "Email missing"}},
)
async def forgot_password(body: ForgotPasswordRequest, auth: AuthServiceDep) -> ForgotPasswordResponse:
    return await auth.request_password_reset(body.email)


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    summary="Reset Password",
    description="Set a new password using a reset token. Tokens are single use.",
    responses={400: {"description": "Missing fields or invalid/expired token"}},
)
async def reset_password(body: ResetPasswordRequest, auth: AuthServiceDep) -> MessageResponse:
    await auth.reset_password(body)
    return MessageResponse(message="Password has been successfully reset")


@router.get(
    "/validate-reset-token/{token}",
    response_model=ResetTokenStatus,
    summary="Validate Reset Token",
    description="Check a reset token before showing the new-password form.",
    responses={400: {"description": "Invalid or expired token"}},
)
async def validate_reset_token(token: str, auth: AuthServiceDep) -> ResetTokenStatus:
    return await auth.validate_reset_token(token)
