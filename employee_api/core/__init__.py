"""
Core application utilities for settings, security and FastAPI dependencies.

This package provides:
- Application-level settings (separate from store settings)
- Password hashing and JWT helpers
- The error taxonomy shared by repositories, services and the HTTP layer
- Dependency helpers (bearer token extraction, role checks, container access)
"""
