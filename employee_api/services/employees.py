from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from employee_api.core.exceptions import NotFoundError
from employee_api.db.models import Employee
from employee_api.repositories.base import Page
from employee_api.repositories.employees import EmployeeRepository, EmployeeStatus


class EmployeeService:
    """
    Domain service for employee records.

    Turns repository absence into NotFoundError and answers availability and
    statistics questions for the admin UI.
    """

    def __init__(self, employees: EmployeeRepository) -> None:
        self.employees = employees

    # PUBLIC_INTERFACE
    def list_employees(
        self,
        *,
        page: int,
        per_page: int,
        search: str = "",
        status: EmployeeStatus = EmployeeStatus.ALL,
    ) -> Page[Employee]:
        return self.employees.find_all(search=search, page=page, per_page=per_page, status=status)

    # PUBLIC_INTERFACE
    def get_employee(self, employee_id: str) -> Employee:
        employee = self.employees.find_by_id(employee_id)
        if employee is None:
            raise NotFoundError("Employee not found")
        return employee

    # PUBLIC_INTERFACE
    def create_employee(self, data: Mapping[str, Any]) -> Employee:
        return self.employees.create(data)

    # PUBLIC_INTERFACE
    def update_employee(self, employee_id: str, changes: Mapping[str, Any]) -> Employee:
        return self.employees.update(employee_id, changes)

    # PUBLIC_INTERFACE
    def delete_employee(self, employee_id: str) -> str:
        self.employees.delete(employee_id)
        return "Employee deleted successfully"

    # PUBLIC_INTERFACE
    def is_username_available(self, username: str, exclude_id: Optional[str] = None) -> bool:
        """True when no employee other than exclude_id uses username."""
        existing = self.employees.find_by_username(username)
        return existing is None or (exclude_id is not None and existing.id == exclude_id)

    # PUBLIC_INTERFACE
    def is_email_available(self, email: str, exclude_id: Optional[str] = None) -> bool:
        """True when no employee other than exclude_id uses email."""
        existing = self.employees.find_by_email(email)
        return existing is None or (exclude_id is not None and existing.id == exclude_id)

    # PUBLIC_INTERFACE
    def statistics(self) -> Dict[str, int]:
        return self.employees.count_by_status()
