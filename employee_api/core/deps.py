from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from employee_api.container import Container
from employee_api.core.exceptions import InsufficientRoleError
from employee_api.core.settings import AppSettings
from employee_api.core.access import (
    Identity,
    authenticate,
    authenticate_optional,
    authorize,
)
from employee_api.services.auth import AuthService
from employee_api.services.employees import EmployeeService

logger = logging.getLogger(__name__)

# Bearer scheme (used by docs); errors are raised by the access gate instead
bearer_scheme = HTTPBearer(auto_error=False)


def _token(credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    return credentials.credentials if credentials else None


# PUBLIC_INTERFACE
def get_container(request: Request) -> Container:
    """Return the application's dependency container, building it on first use."""
    return request.app.state.container_provider.get()


# PUBLIC_INTERFACE
def get_settings(request: Request) -> AppSettings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


# PUBLIC_INTERFACE
def get_auth_service(container: Container = Depends(get_container)) -> AuthService:
    return container.auth_service


# PUBLIC_INTERFACE
def get_employee_service(container: Container = Depends(get_container)) -> EmployeeService:
    return container.employee_service


# PUBLIC_INTERFACE
def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    container: Container = Depends(get_container),
) -> Identity:
    """
    Resolve the caller's identity from the Authorization bearer token.

    Raises NoTokenError, InvalidTokenError or TokenExpiredError, which the
    application's exception handlers turn into 401 responses.
    """
    return authenticate(_token(credentials), container.settings)


# PUBLIC_INTERFACE
def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    container: Container = Depends(get_container),
) -> Optional[Identity]:
    """Identity when a valid token is present, otherwise None."""
    return authenticate_optional(_token(credentials), container.settings)


# PUBLIC_INTERFACE
def require_roles(*allowed: str):
    """
    Create a dependency that requires the current user to hold one of the
    given roles. Returns the Identity so routes can use it directly.
    """

    def _dep(user: Identity = Depends(get_current_user)) -> Identity:
        try:
            return authorize(user, allowed)
        except InsufficientRoleError:
            logger.info("User %s with role %s denied; requires %s", user.id, user.role, allowed)
            raise

    return _dep
