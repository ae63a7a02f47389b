from __future__ import annotations

from typing import Optional

from pydantic import Field

from .base import Entity


class Employee(Entity):
    """Employee record managed by administrators."""

    full_name: str = Field(...)
    username: str = Field(..., description="Unique among employees")
    email: str = Field(..., description="Unique among employees")
    phone: str = Field(...)
    position: str = Field(...)
    department: str = Field(...)
    avatar_url: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True)
