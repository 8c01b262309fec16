"""
Account service: registration, login and password recovery.
"""

from typing import Optional

from ecodata.core.database.entities import User
from ecodata.core.exceptions import AuthenticationError, BadRequestError, ConflictError
from ecodata.core.logging_config import get_logger
from ecodata.core.models.io.users import (
    AuthResponse,
    ForgotPasswordResponse,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    ResetTokenStatus,
    UserPublic,
)
from ecodata.core.security import create_access_token, hash_password, verify_password
from ecodata.core.storage import Storage
from ecodata.server.core.config import settings

from .email_service import EmailService

logger = get_logger(__name__)

RESET_REQUESTED_MESSAGE = "If that email exists in our system, we've sent a password reset link"


def issue_token(user: User) -> AuthResponse:
    token = create_access_token(user.id, user.username, user.role)
    return AuthResponse(token=token, user=UserPublic.model_validate(user))


class AuthService:
    """Account operations on top of ``Storage``."""

    def __init__(self, storage: Storage, email_service: EmailService):
        self.storage = storage
        self.email_service = email_service

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create a donor account and log it in.

        New accounts always get the ``user`` role.

        Raises:
            ConflictError: The username or email is already in use.
        """
        if await self.storage.get_user_by_username(request.username):
            raise ConflictError("Username already taken")
        if await self.storage.get_user_by_email(request.email):
            raise ConflictError("Email already registered")

        user = await self.storage.create_user(
            User(
                username=request.username,
                email=request.email,
                role="user",
                first_name=request.first_name,
                last_name=request.last_name,
                hashed_password=hash_password(request.password),
            )
        )
        logger.info(f"Registered user {user.id} ({user.username})")
        return issue_token(user)

    async def login(self, request: LoginRequest) -> AuthResponse:
        if not request.username or not request.password:
            raise BadRequestError("Username and password are required")
        user = await self.storage.get_user_by_username(request.username)
        if user is None or not verify_password(request.password, user.hashed_password):
            logger.info(f"Failed login for '{request.username}'")
            raise AuthenticationError("Invalid username or password")
        return issue_token(user)

    async def request_password_reset(self, email: Optional[str]) -> ForgotPasswordResponse:
        """
        Create and email a reset token when the address belongs to an account.

        The response is identical whether or not the account exists. In
        development the token and link are echoed back for manual testing.
        """
        if not email:
            raise BadRequestError("Email is required")
        user = await self.storage.get_user_by_email(email)
        if user is None:
            return ForgotPasswordResponse(message=RESET_REQUESTED_MESSAGE)

        reset_token = await self.storage.create_password_reset_token(
            user.id, ttl_minutes=settings.password_reset_token_ttl_minutes
        )
        sent = await self.email_service.send_password_reset_email(
            user.email, reset_token.token, user.first_name or user.username
        )
        if not sent:
            logger.error(f"Failed to send password reset email for user {user.id}")

        if settings.is_development:
            return ForgotPasswordResponse(
                message=RESET_REQUESTED_MESSAGE,
                token=reset_token.token,
                reset_url=self.email_service.password_reset_url(reset_token.token),
            )
        return ForgotPasswordResponse(message=RESET_REQUESTED_MESSAGE)

    async def reset_password(self, request: ResetPasswordRequest) -> None:
        if not request.token or not request.password:
            raise BadRequestError("Token and new password are required")
        reset_token = await self.storage.get_password_reset_token(request.token)
        user = await self.storage.validate_password_reset_token(request.token)
        if reset_token is None or user is None:
            raise BadRequestError("Invalid or expired token")

        await self.storage.update_user(user.id, {"hashed_password": hash_password(request.password)})
        await self.storage.mark_token_used(reset_token.id)
        logger.info(f"Password reset for user {user.id}")
        await self.email_service.send_password_change_confirmation(user.email, user.first_name or user.username)

    async def validate_reset_token(self, token: str) -> ResetTokenStatus:
        user = await self.storage.validate_password_reset_token(token)
        if user is None:
            raise BadRequestError("Invalid or expired token")
        return ResetTokenStatus(message="Token is valid", email=user.email)
