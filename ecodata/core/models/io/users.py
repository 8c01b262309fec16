"""
Account I/O models for authentication and the donor profile.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from .common import ApiModel, PartialUpdate


class RegisterRequest(ApiModel):
    """Schema for creating an account via API."""

    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=128)
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginRequest(ApiModel):
    """Credentials; presence is checked by the route to return a friendly message."""

    username: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(ApiModel):
    email: Optional[str] = None


class ResetPasswordRequest(ApiModel):
    token: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)


class UserPublic(ApiModel):
    """Minimal user representation returned with a token."""

    id: int
    username: str
    email: str
    role: str


class AuthResponse(ApiModel):
    token: str
    user: UserPublic


class ForgotPasswordResponse(ApiModel):
    message: str
    token: Optional[str] = None
    reset_url: Optional[str] = Field(default=None, serialization_alias="resetURL")


class ResetTokenStatus(ApiModel):
    message: str
    email: str


class UserProfile(ApiModel):
    """Schema for reading the authenticated user's profile (never includes the password hash)."""

    id: int
    username: str
    email: str
    role: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None
    interests: List[str] = []
    notifications_enabled: bool = True
    has_used_free_consultation: bool = False
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(PartialUpdate):
    """Fields a donor may change on their own profile."""

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[EmailStr] = None
    bio: Optional[str] = Field(default=None, max_length=2000)
    interests: Optional[List[str]] = None
    notifications_enabled: Optional[bool] = None


class ConsultationStatus(ApiModel):
    message: str
    has_used_free_consultation: bool
