"""
Tests for the access control gate: token extraction, authentication and
role authorization.
"""

from datetime import timedelta

import pytest

from employee_api.core.access import (
    Identity,
    authenticate,
    authenticate_optional,
    authorize,
    token_from_header,
)
from employee_api.core.exceptions import (
    InsufficientRoleError,
    InvalidTokenError,
    NoTokenError,
    TokenExpiredError,
)
from employee_api.core.security import create_access_token


def _token(role="user", **kwargs):
    return create_access_token(
        user_id="7", username="bob", email="bob@example.com", role=role, **kwargs
    )


class TestTokenFromHeader:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc.def.ghi", "abc.def.ghi"),
            ("bearer abc", "abc"),
            ("Bearer ", None),
            ("Basic dXNlcjpwYXNz", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extraction(self, header, expected):
        assert token_from_header(header) == expected


class TestAuthenticate:
    def test_valid_token_yields_identity(self):
        identity = authenticate(_token())
        assert identity == Identity(id="7", username="bob", email="bob@example.com", role="user")

    def test_missing_token(self):
        with pytest.raises(NoTokenError) as exc_info:
            authenticate(None)
        assert exc_info.value.message == "No token provided"

    def test_expired_token(self):
        with pytest.raises(TokenExpiredError):
            authenticate(_token(expires_delta=timedelta(seconds=-1)))

    def test_invalid_token(self):
        with pytest.raises(InvalidTokenError) as exc_info:
            authenticate("garbage")
        assert not isinstance(exc_info.value, TokenExpiredError)


class TestAuthenticateOptional:
    def test_returns_identity_for_valid_token(self):
        assert authenticate_optional(_token()).username == "bob"

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_returns_none_for_missing_or_invalid(self, token):
        assert authenticate_optional(token) is None

    def test_returns_none_for_expired(self):
        assert authenticate_optional(_token(expires_delta=timedelta(seconds=-1))) is None


class TestAuthorize:
    def test_allowed_role(self):
        identity = authenticate(_token(role="admin"))
        assert authorize(identity, {"admin"}) is identity

    def test_any_of_several_roles(self):
        identity = authenticate(_token(role="user"))
        assert authorize(identity, ("admin", "user")) is identity

    def test_insufficient_role(self):
        identity = authenticate(_token(role="user"))
        with pytest.raises(InsufficientRoleError) as exc_info:
            authorize(identity, ("admin",))
        assert exc_info.value.status_code == 403
