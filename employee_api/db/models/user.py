from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from pydantic import Field

from .base import Entity


class Role(str, Enum):
    ADMIN = "admin"
    USER = "user"


class User(Entity):
    """Account that can log in to the API."""

    username: str = Field(..., description="Unique, case-sensitive login name")
    email: str = Field(..., description="Unique email address")
    password_hash: str = Field(..., description="bcrypt hash of the password")
    full_name: str = Field(...)
    role: Role = Field(default=Role.USER)

    def public_document(self) -> Dict[str, Any]:
        """Stored form without the password hash, safe to return to clients."""
        doc = self.to_document()
        doc.pop("passwordHash", None)
        return doc
