"""
Entity models persisted in the JSON document stores.
"""

from .base import Entity, utcnow
from .employee import Employee
from .user import Role, User

__all__ = ["Entity", "Employee", "Role", "User", "utcnow"]
