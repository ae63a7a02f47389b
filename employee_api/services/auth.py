from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from employee_api.core.exceptions import InvalidCredentialsError, NotFoundError
from employee_api.core.security import (
    create_access_token,
    dummy_verify,
    get_password_hash,
    verify_access_token,
    verify_password,
)
from employee_api.core.settings import AppSettings, get_app_settings
from employee_api.db.models import Role
from employee_api.repositories.users import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: Dict[str, Any]


class AuthService:
    """
    Credential checks, token issuance and user registration.

    Tokens are signed and verified, and passwords hashed, with the given
    settings. Users returned from this service never include the password hash.
    """

    def __init__(self, users: UserRepository, settings: Optional[AppSettings] = None) -> None:
        self.users = users
        self.settings = settings if settings is not None else get_app_settings()

    # PUBLIC_INTERFACE
    def login(self, username: str, password: str) -> LoginResult:
        """
        Verify credentials and issue an access token.

        Unknown usernames and wrong passwords raise the same
        InvalidCredentialsError; a dummy hash check runs for unknown users.
        """
        user = self.users.find_by_username(username)
        if user is None:
            dummy_verify(self.settings)
            logger.info("Login failed for unknown username")
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash, self.settings):
            logger.info("Login failed for user %s", user.id)
            raise InvalidCredentialsError()

        token = create_access_token(
            user_id=user.id,
            username=user.username,
            email=user.email,
            role=Role(user.role).value,
            settings=self.settings,
        )
        logger.info("User %s logged in", user.id)
        return LoginResult(token=token, user=user.public_document())

    # PUBLIC_INTERFACE
    def register(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Hash the plaintext password and create the user.

        ConflictError from the repository propagates unchanged.
        """
        values = dict(data)
        password = values.pop("password")
        values["password_hash"] = get_password_hash(password, self.settings)
        if not values.get("role"):
            values["role"] = Role.USER
        user = self.users.create(values)
        return user.public_document()

    # PUBLIC_INTERFACE
    def get_profile(self, user_id: str) -> Dict[str, Any]:
        user = self.users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user.public_document()

    # PUBLIC_INTERFACE
    def verify_token(self, token: str) -> Dict[str, Any]:
        """Return token claims; raises TokenExpiredError or InvalidTokenError."""
        return verify_access_token(token, self.settings)
