"""
Tests for AccessToken and IdentityUser domain models.
"""

import time

import pytest
from pydantic import ValidationError

from oauth2_client.core.domain import AccessToken, IdentityUser
from oauth2_client.core.exceptions import MalformedResponseError, MissingTokenError


class TestAccessToken:
    """Tests for AccessToken model."""

    def test_create_token_with_required_fields(self):
        """Test creating token with minimum required fields."""
        token = AccessToken(access_token="abc")

        assert token.access_token == "abc"
        assert token.expires_in is None
        assert token.expires is None
        assert token.refresh_token is None
        assert token.values == {}

    def test_expires_computed_from_expires_in(self):
        """Test the absolute expiry is derived from the lifetime."""
        before = int(time.time())
        token = AccessToken(access_token="abc", expires_in=3600)

        assert before + 3600 <= token.expires <= int(time.time()) + 3600

    def test_string_expires_in(self):
        """Test numeric strings are accepted for the lifetime."""
        assert AccessToken(access_token="abc", expires_in="60").expires_in == 60

    def test_empty_access_token_rejected(self):
        """Test an empty token value is invalid."""
        with pytest.raises(ValidationError):
            AccessToken(access_token="")

    def test_immutable(self):
        """Test tokens cannot be changed after construction."""
        token = AccessToken(access_token="abc")

        with pytest.raises(ValidationError):
            token.access_token = "other"

    def test_str_is_token_value(self):
        """Test str() gives the raw token for header building."""
        assert str(AccessToken(access_token="abc")) == "abc"

    def test_is_expired_with_future_expiry(self):
        """Test token is not expired when expires is in the future."""
        token = AccessToken(access_token="abc", expires=int(time.time()) + 3600)

        assert not token.has_expired()

    def test_is_expired_with_past_expiry(self):
        """Test token is expired when expires is in the past."""
        token = AccessToken(access_token="abc", expires=int(time.time()) - 3600)

        assert token.has_expired()

    def test_is_expired_without_expiry(self):
        """Test token without expiry is never expired."""
        assert not AccessToken(access_token="abc").has_expired()


class TestAccessTokenFromResponse:
    """Tests for AccessToken.from_response."""

    def test_full_response(self):
        """Test known fields are mapped and the rest kept in values."""
        response = {
            "access_token": "abc",
            "expires_in": 3600,
            "refresh_token": "r-1",
            "token_type": "Bearer",
            "scope": "openid",
        }

        token = AccessToken.from_response(response)

        assert token.access_token == "abc"
        assert token.expires_in == 3600
        assert token.refresh_token == "r-1"
        assert token.values == {"token_type": "Bearer", "scope": "openid"}

    def test_missing_token(self):
        """Test a response without the token field fails."""
        with pytest.raises(MissingTokenError):
            AccessToken.from_response({"token_type": "Bearer"})

    def test_empty_token(self):
        """Test an empty token value counts as missing."""
        with pytest.raises(MissingTokenError):
            AccessToken.from_response({"access_token": ""})

    def test_custom_token_key(self):
        """Test providers can name the token field differently."""
        token = AccessToken.from_response({"oauth_token": "abc"}, token_key="oauth_token")

        assert token.access_token == "abc"
        assert token.values == {}

    def test_expires_as_lifetime(self):
        """Test a small 'expires' value is read as seconds."""
        token = AccessToken.from_response({"access_token": "abc", "expires": "5183999"})

        assert token.expires_in == 5183999

    def test_expires_as_timestamp(self):
        """Test a future 'expires' value is read as an absolute time."""
        expires = int(time.time()) + 7200

        token = AccessToken.from_response({"access_token": "abc", "expires": expires})

        assert token.expires == expires
        assert token.expires_in is None

    @pytest.mark.parametrize("value, expected", [("3600.0", 3600), (3600.5, 3600), ("60", 60)])
    def test_fractional_expires_in(self, value, expected):
        """Test decimal lifetimes are truncated to whole seconds."""
        token = AccessToken.from_response({"access_token": "abc", "expires_in": value})

        assert token.expires_in == expected

    @pytest.mark.parametrize("value", ["never", "inf", [3600]])
    def test_unparseable_expires_in(self, value):
        """Test a non-numeric lifetime is reported as a malformed response."""
        with pytest.raises(MalformedResponseError, match="Invalid expiry"):
            AccessToken.from_response({"access_token": "abc", "expires_in": value})

    def test_resource_owner_id(self):
        """Test the uid field is extracted and not duplicated in values."""
        token = AccessToken.from_response(
            {"access_token": "abc", "uid": 42}, uid_key="uid"
        )

        assert token.resource_owner_id == 42
        assert token.values == {}


class TestIdentityUser:
    """Tests for IdentityUser model."""

    def test_defaults(self):
        """Test all fields default to None."""
        user = IdentityUser()

        assert user.uid is None
        assert user.name is None
        assert user.email is None

    def test_raw_excluded_from_dump(self):
        """Test the raw response is kept but not serialized."""
        user = IdentityUser(uid=1, name="Ada", raw={"id": 1, "name": "Ada"})

        assert user.raw == {"id": 1, "name": "Ada"}
        assert user.model_dump() == {"uid": 1, "name": "Ada", "email": None}
