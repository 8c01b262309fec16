"""
Password hashing and JWT helpers.

Tokens carry ``userId``, ``username`` and ``role`` and expire after
``JWT_EXPIRES_HOURS`` hours. Passwords are hashed with bcrypt.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field

from ecodata.core.exceptions import InvalidTokenError
from ecodata.server.core.config import settings


class TokenClaims(BaseModel):
    """Claims decoded from a bearer token."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash password with configurable rounds (BCRYPT_ROUNDS in .env)"""
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    password_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(user_id: int, username: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT for the given user."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=settings.jwt_expires_hours))
    to_encode = {"userId": user_id, "username": username, "role": role, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> TokenClaims:
    """Decode and validate a JWT.

    Raises:
        InvalidTokenError: The signature, expiry or payload is invalid.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return TokenClaims.model_validate(payload)
    except (JWTError, ValueError) as e:
        raise InvalidTokenError() from e


def generate_reset_token() -> str:
    """Generate an unguessable password reset token."""
    return secrets.token_urlsafe(32)
