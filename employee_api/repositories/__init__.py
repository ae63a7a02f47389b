"""
Repository layer for data access.

Repositories give typed CRUD over a record store handed to them at
construction time (JSON file, in-memory, or anything implementing
RecordStore). They hold no state of their own between calls.
"""

from .base import BaseRepository, Page
from .employees import EmployeeRepository, EmployeeStatus
from .users import UserRepository

__all__ = ["BaseRepository", "EmployeeRepository", "EmployeeStatus", "Page", "UserRepository"]
