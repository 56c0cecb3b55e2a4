"""
User schema definitions for request/response handling.
"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from accounts.schemas.base import BaseSchema, is_admin_field


class UserCreate(BaseSchema):
    """Registration payload."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Password must not be blank")
        return value


class LoginRequest(BaseSchema):
    """Credentials for POST /users/login."""

    email: str
    password: str


class _PartialUpdate(BaseSchema):
    """Optional fields where an empty string means "leave unchanged"."""

    @field_validator("name", "email", "password", mode="before", check_fields=False)
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProfileUpdate(_PartialUpdate):
    """Self-service profile update."""

    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)


class AdminUserUpdate(_PartialUpdate):
    """Admin update of another user; ``isAdmin`` applies only when sent."""

    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    is_admin: Optional[bool] = is_admin_field(None)


class UserResponse(BaseSchema):
    """Public user representation, never carries the password hash."""

    id: int
    name: str
    email: str
    is_admin: bool = is_admin_field()


class UserTokenResponse(UserResponse):
    """User representation plus a freshly issued bearer token."""

    token: str


class MessageResponse(BaseSchema):
    message: str
