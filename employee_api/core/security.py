from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from employee_api.core.exceptions import InvalidTokenError, TokenExpiredError
from employee_api.core.settings import AppSettings, get_app_settings

REQUIRED_CLAIMS = ("id", "username", "role")


@lru_cache(maxsize=8)
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def _resolve(settings: Optional[AppSettings]) -> AppSettings:
    # The environment is read only when no settings are passed
    return settings if settings is not None else get_app_settings()


# PUBLIC_INTERFACE
def verify_password(
    plain_password: str, hashed_password: str, settings: Optional[AppSettings] = None
) -> bool:
    """Verify a plain password against a bcrypt hash; malformed hashes never verify."""
    if not hashed_password:
        return False
    try:
        return _pwd_context(_resolve(settings).PASSWORD_HASH_ROUNDS).verify(
            plain_password, hashed_password
        )
    except (ValueError, TypeError):
        return False


# PUBLIC_INTERFACE
def get_password_hash(password: str, settings: Optional[AppSettings] = None) -> str:
    """Hash a password using bcrypt with the configured cost factor."""
    return _pwd_context(_resolve(settings).PASSWORD_HASH_ROUNDS).hash(password)


# PUBLIC_INTERFACE
def dummy_verify(settings: Optional[AppSettings] = None) -> None:
    """
    Burn one bcrypt verification. Used when the user does not exist so that
    both login failure paths cost the same.
    """
    _pwd_context(_resolve(settings).PASSWORD_HASH_ROUNDS).dummy_verify()


def _create_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta],
    token_type: str,
    settings: AppSettings,
) -> str:
    to_encode = data.copy()
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "iat": now, "type": token_type})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


# PUBLIC_INTERFACE
def create_access_token(
    *,
    user_id: str,
    username: str,
    email: str,
    role: str,
    expires_minutes: Optional[int] = None,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[AppSettings] = None,
) -> str:
    """Create a signed access token carrying the user's identity and role claims."""
    if expires_delta is None and expires_minutes is not None:
        expires_delta = timedelta(minutes=expires_minutes)
    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "id": str(user_id),
        "username": username,
        "email": email,
        "role": role,
    }
    return _create_token(payload, expires_delta, "access", _resolve(settings))


# PUBLIC_INTERFACE
def decode_token(token: str, settings: Optional[AppSettings] = None) -> Dict[str, Any]:
    """Decode and validate a JWT; raises JWTError if invalid/expired."""
    settings = _resolve(settings)
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


# PUBLIC_INTERFACE
def verify_access_token(token: str, settings: Optional[AppSettings] = None) -> Dict[str, Any]:
    """
    Validate signature and expiry of an access token and return its claims.

    Raises:
        TokenExpiredError: signature is valid but the token has expired.
        InvalidTokenError: any other problem (tampered, malformed, wrong type,
            missing identity claims).
    """
    try:
        claims = decode_token(token, settings)
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()

    if claims.get("type") != "access":
        raise InvalidTokenError()
    if any(not claims.get(name) for name in REQUIRED_CLAIMS):
        raise InvalidTokenError()
    return claims
