"""User and authentication schemas."""

from pydantic import EmailStr, Field

from .common import ApiModel


class UserPublic(ApiModel):
    """Safe projection of a user: no credential material."""

    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    is_admin: bool = False
    created_at: str | None = None


class RegisterRequest(ApiModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=3, max_length=32, pattern=r"^[A-Za-z0-9_.-]+$")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=64)
    last_name: str = Field(..., min_length=1, max_length=64)


class LoginRequest(ApiModel):
    """Schema for login submissions."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AuthResponse(ApiModel):
    """Response returned after registration or login."""

    user: UserPublic
    token: str = Field(..., description="JWT bearer token")
