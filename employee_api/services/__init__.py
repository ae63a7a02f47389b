"""
Service layer: business rules and orchestration over the repositories.
"""

from .auth import AuthService, LoginResult
from .employees import EmployeeService

__all__ = ["AuthService", "EmployeeService", "LoginResult"]
