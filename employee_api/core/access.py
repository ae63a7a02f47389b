"""
Request-level access control.

A request moves through three states:

    Unauthenticated -> Authenticated(identity) -> Authorized

`authenticate` performs the first transition from a bearer token and
`authorize` the second from an allowed role set. Each failure raises its own
error (NoTokenError, InvalidTokenError, TokenExpiredError,
InsufficientRoleError) and nothing falls through. `authenticate_optional` is
the lenient variant: a missing or bad token yields None.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Collection, Dict, Mapping, Optional

from employee_api.core.exceptions import InsufficientRoleError, InvalidTokenError, NoTokenError
from employee_api.core.security import verify_access_token
from employee_api.core.settings import AppSettings

BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class Identity:
    """Claims carried by a verified access token."""

    id: str
    username: str
    email: str
    role: str

    @classmethod
    def from_claims(cls, claims: Mapping[str, Any]) -> "Identity":
        return cls(
            id=str(claims["id"]),
            username=str(claims["username"]),
            email=str(claims.get("email") or ""),
            role=str(claims["role"]),
        )

    def as_dict(self) -> Dict[str, str]:
        return {"id": self.id, "username": self.username, "email": self.email, "role": self.role}


# PUBLIC_INTERFACE
def token_from_header(authorization: Optional[str]) -> Optional[str]:
    """Return the token of an `Authorization: Bearer <token>` header, else None."""
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


# PUBLIC_INTERFACE
def authenticate(token: Optional[str], settings: Optional[AppSettings] = None) -> Identity:
    """
    Unauthenticated -> Authenticated.

    The token is checked against the secret and algorithm in settings.

    Raises:
        NoTokenError: no token supplied.
        TokenExpiredError: token past its expiry.
        InvalidTokenError: token tampered with or malformed.
    """
    if not token:
        raise NoTokenError()
    claims = verify_access_token(token, settings)
    return Identity.from_claims(claims)


# PUBLIC_INTERFACE
def authenticate_optional(
    token: Optional[str], settings: Optional[AppSettings] = None
) -> Optional[Identity]:
    """Like authenticate, but a missing or invalid token yields None."""
    if not token:
        return None
    try:
        return authenticate(token, settings)
    except InvalidTokenError:
        return None


# PUBLIC_INTERFACE
def authorize(identity: Identity, allowed_roles: Collection[str]) -> Identity:
    """
    Authenticated -> Authorized.

    Raises:
        InsufficientRoleError: identity.role is not in allowed_roles.
    """
    if identity.role not in allowed_roles:
        raise InsufficientRoleError()
    return identity
