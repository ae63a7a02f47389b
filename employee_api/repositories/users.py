from __future__ import annotations

from typing import Optional

from employee_api.db.models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for login accounts. Usernames and emails are unique among users."""

    model = User
    entity_name = "User"
    unique_fields = ("username", "email")
    search_fields = ("full_name", "username", "email")

    def find_by_username(self, username: str) -> Optional[User]:
        return self.find_by("username", username)

    def find_by_email(self, email: str) -> Optional[User]:
        return self.find_by("email", email)
