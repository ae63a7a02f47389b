"""
Field rules shared by the auth and employee request schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AnyHttpUrl, EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

USERNAME_PATTERN = r"^[a-zA-Z0-9]+$"
PHONE_PATTERN = r"^[\d\s\-+()]+$"

USERNAME_MIN, USERNAME_MAX = 3, 30
NAME_MIN, NAME_MAX = 2, 100
PASSWORD_MIN = 6
SEARCH_MAX = 100

_http_url = TypeAdapter(AnyHttpUrl)


def check_http_url(value: Optional[str]) -> Optional[str]:
    """Accept None/empty or an http(s) URL; the input string is kept as-is."""
    if value is None or value == "":
        return None
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        raise ValueError("Avatar URL must be a valid URL")
    return value


_email = TypeAdapter(EmailStr)


def normalize_email(value: str) -> str:
    """Normalize an address the way EmailStr fields store it (domain lowercased)."""
    try:
        return _email.validate_python(value)
    except PydanticValidationError:
        raise ValueError("Email must be a valid email address")
