"""
User account entity models.

This module contains the database entities for website accounts (donors and
administrators) and the one-time tokens used to reset a forgotten password.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON
from sqlmodel import Field

from ..base import Base, utc_now


class UserBase(Base):
    """Base fields for a website account."""

    username: str = Field(index=True, unique=True, description="Unique login name")
    email: str = Field(index=True, description="Contact email, also used for password recovery")
    role: str = Field(default="user", description="Either 'user' or 'admin'")

    # Donor profile
    first_name: Optional[str] = Field(default=None)
    last_name: Optional[str] = Field(default=None)
    bio: Optional[str] = Field(default=None)
    interests: List[str] = Field(default_factory=list, sa_type=JSON)
    notifications_enabled: bool = Field(default=True)
    has_used_free_consultation: bool = Field(default=False)


class User(UserBase, table=True):
    """Persistent website account.

    The bcrypt hash lives in ``hashed_password`` and is never part of an API
    response model.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    hashed_password: str = Field(description="bcrypt hash of the password")

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username}, role={self.role})"


class PasswordResetToken(Base, table=True):
    """One-time password reset token.

    Table: password_reset_tokens
    """

    __tablename__ = "password_reset_tokens"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    token: str = Field(index=True, unique=True)
    expires_at: datetime
    used: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """A token is valid while unused and not yet expired."""
        return not self.used and self.expires_at > (now or utc_now())
