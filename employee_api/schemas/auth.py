from __future__ import annotations

from pydantic import EmailStr, Field

from employee_api.db.models import Role
from .common import CamelModel, Timestamps
from .validators import NAME_MAX, NAME_MIN, PASSWORD_MIN, USERNAME_MAX, USERNAME_MIN, USERNAME_PATTERN


class LoginRequest(CamelModel):
    """Credentials for password login."""
    username: str = Field(..., min_length=1, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class RegisterRequest(CamelModel):
    """Registration details for creating a new user."""
    username: str = Field(
        ..., min_length=USERNAME_MIN, max_length=USERNAME_MAX, pattern=USERNAME_PATTERN,
        description="Alphanumeric login name",
    )
    email: EmailStr = Field(..., description="User email")
    password: str = Field(..., min_length=PASSWORD_MIN, description="User password")
    full_name: str = Field(..., min_length=NAME_MIN, max_length=NAME_MAX)
    role: Role = Field(default=Role.USER)


class UserRead(Timestamps):
    """User read model; never includes the password hash."""
    id: str = Field(..., description="User ID")
    username: str
    email: str
    full_name: str
    role: Role


class LoginData(CamelModel):
    """Issued token plus the authenticated user."""
    token: str = Field(..., description="JWT access token")
    user: UserRead
