from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from employee_api.db.models import Employee
from .base import BaseRepository, Page


class EmployeeStatus(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


class EmployeeRepository(BaseRepository[Employee]):
    """Repository for employee records, a uniqueness namespace separate from users."""

    model = Employee
    entity_name = "Employee"
    unique_fields = ("username", "email")
    search_fields = ("full_name", "username", "email", "department", "position")

    def find_all(  # type: ignore[override]
        self,
        *,
        search: str = "",
        page: int = 1,
        per_page: int = 10,
        status: EmployeeStatus = EmployeeStatus.ALL,
    ) -> Page[Employee]:
        """Search and paginate employees, optionally narrowed by active status."""
        status = EmployeeStatus(status)
        predicate = None
        if status is not EmployeeStatus.ALL:
            wanted = status is EmployeeStatus.ACTIVE
            predicate = lambda e: e.is_active is wanted  # noqa: E731
        return super().find_all(search=search, page=page, per_page=per_page, predicate=predicate)

    def find_by_username(self, username: str) -> Optional[Employee]:
        return self.find_by("username", username)

    def find_by_email(self, email: str) -> Optional[Employee]:
        return self.find_by("email", email)

    def count_by_status(self) -> Dict[str, int]:
        """Totals for the whole collection: total, active and inactive."""
        employees = self._load()
        active = sum(1 for e in employees if e.is_active)
        return {"total": len(employees), "active": active, "inactive": len(employees) - active}
