from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import EmailStr, Field, field_validator

from .common import CamelModel, Timestamps
from .validators import (
    NAME_MAX,
    NAME_MIN,
    PHONE_PATTERN,
    USERNAME_MAX,
    USERNAME_MIN,
    USERNAME_PATTERN,
    check_http_url,
)


class EmployeeCreate(CamelModel):
    """Payload for creating an employee."""
    full_name: str = Field(..., min_length=NAME_MIN, max_length=NAME_MAX)
    username: str = Field(
        ..., min_length=USERNAME_MIN, max_length=USERNAME_MAX, pattern=USERNAME_PATTERN
    )
    email: EmailStr
    phone: str = Field(..., pattern=PHONE_PATTERN)
    position: str = Field(..., min_length=NAME_MIN, max_length=NAME_MAX)
    department: str = Field(..., min_length=NAME_MIN, max_length=NAME_MAX)
    avatar_url: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True)

    @field_validator("avatar_url")
    @classmethod
    def _avatar_url(cls, v: Optional[str]) -> Optional[str]:
        return check_http_url(v)


class EmployeeUpdate(CamelModel):
    """Partial update; only fields present in the request body are changed."""
    full_name: Optional[str] = Field(default=None, min_length=NAME_MIN, max_length=NAME_MAX)
    username: Optional[str] = Field(
        default=None, min_length=USERNAME_MIN, max_length=USERNAME_MAX, pattern=USERNAME_PATTERN
    )
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    position: Optional[str] = Field(default=None, min_length=NAME_MIN, max_length=NAME_MAX)
    department: Optional[str] = Field(default=None, min_length=NAME_MIN, max_length=NAME_MAX)
    avatar_url: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("avatar_url")
    @classmethod
    def _avatar_url(cls, v: Optional[str]) -> Optional[str]:
        return check_http_url(v)

    def changes(self) -> Dict[str, Any]:
        """Fields sent by the client. An explicit null only clears avatarUrl."""
        data = self.model_dump(exclude_unset=True)
        return {k: v for k, v in data.items() if v is not None or k == "avatar_url"}


class EmployeeRead(Timestamps):
    """Employee read model."""
    id: str
    full_name: str
    username: str
    email: str
    phone: str
    position: str
    department: str
    avatar_url: Optional[str] = None
    is_active: bool


class Availability(CamelModel):
    available: bool


class EmployeeStats(CamelModel):
    total: int = Field(..., ge=0)
    active: int = Field(..., ge=0)
    inactive: int = Field(..., ge=0)
