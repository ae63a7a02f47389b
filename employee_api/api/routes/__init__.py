"""
API route modules.

This package contains subrouters for:
- Auth: login, register, logout and current user
- Employees: employee CRUD, availability checks and statistics

Routers are included from employee_api.api.main (under the /api prefix).
"""
