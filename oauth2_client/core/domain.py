"""
Core domain models for tokens and identities.

These models are independent of any provider or transport.
"""

import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from oauth2_client.core.exceptions import MalformedResponseError, MissingTokenError


def _seconds(value: Any) -> int | None:
    """Providers send numbers as strings in CSV and query-string bodies."""
    if value in (None, ""):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedResponseError(f"Invalid expiry value: {value!r}") from e


class AccessToken(BaseModel):
    """
    Access token returned by a token exchange.

    Immutable. Built once per token response and never refreshed in place;
    persistence is up to the caller.
    """

    access_token: str = Field(min_length=1, description="OAuth2 access token")
    expires_in: int | None = Field(default=None, description="Lifetime in seconds")
    expires: int | None = Field(
        default=None, description="Expiration timestamp (Unix epoch)"
    )
    refresh_token: str | None = Field(default=None, description="Refresh token")
    resource_owner_id: Any = Field(
        default=None, description="User ID returned alongside the token"
    )
    values: dict[str, Any] = Field(
        default_factory=dict, description="Any other fields the provider returned"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def compute_expiry(cls, data: Any) -> Any:
        """Derive the absolute expiry from expires_in when not given."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        data["expires_in"] = _seconds(data.get("expires_in"))
        data["expires"] = _seconds(data.get("expires"))
        if data["expires"] is None and data["expires_in"] is not None:
            data["expires"] = int(time.time()) + data["expires_in"]
        return data

    @classmethod
    def from_response(
        cls,
        response: dict[str, Any],
        token_key: str = "access_token",
        uid_key: str | None = None,
    ) -> "AccessToken":
        """
        Create an AccessToken from a decoded token response.

        Args:
            response: Decoded response that already passed the error check
            token_key: Field holding the access token
            uid_key: Field holding the resource owner ID, if any

        Returns:
            AccessToken instance

        Raises:
            MissingTokenError: If the token field is absent or empty
        """
        token = response.get(token_key)
        if not token:
            raise MissingTokenError(f"Token response has no '{token_key}' field")

        expires_in = _seconds(response.get("expires_in"))
        expires = None
        if expires_in is None:
            # "expires" is either a lifetime or an absolute timestamp
            raw = _seconds(response.get("expires"))
            if raw is not None and raw > time.time():
                expires = raw
            else:
                expires_in = raw

        known = {token_key, "expires_in", "expires", "refresh_token"}
        if uid_key:
            known.add(uid_key)

        return cls(
            access_token=str(token),
            expires_in=expires_in,
            expires=expires,
            refresh_token=response.get("refresh_token"),
            resource_owner_id=response.get(uid_key) if uid_key else None,
            values={k: v for k, v in response.items() if k not in known},
        )

    def has_expired(self) -> bool:
        """Check if the access token is expired. Tokens without expiry never are."""
        if self.expires is None:
            return False
        return time.time() >= self.expires

    def __str__(self) -> str:
        return self.access_token


class IdentityUser(BaseModel):
    """Canonical identity attributes mapped from a user-info response."""

    uid: Any = Field(default=None, description="Provider user ID")
    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Email address")
    raw: dict[str, Any] = Field(
        default_factory=dict, exclude=True, description="Decoded user-info response"
    )
