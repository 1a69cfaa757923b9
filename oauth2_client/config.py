"""
Provider configuration.

A single pydantic model holds every option the client understands. Options
are accepted in snake_case or camelCase (clientId, scopeSeparator, ...).
Unrecognized keys are kept in the typed `extra` mapping instead of being set
as attributes.
"""

import logging
import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


logger = logging.getLogger(__name__)


class ResponseType(str, Enum):
    """Body format of provider responses."""

    JSON = "json"
    CSV = "csv"
    XML = "xml"
    STRING = "string"


class RequestMethod(str, Enum):
    """HTTP method used for the token request."""

    GET = "get"
    POST = "post"


class ProviderConfig(BaseModel):
    """
    OAuth2 settings for one identity provider.

    client_id, client_secret and redirect_uri identify the client and cannot
    be reassigned after construction. Everything else may be changed and is
    validated on assignment.
    """

    client_id: str = Field(frozen=True, min_length=1, description="OAuth2 client ID")
    client_secret: str = Field(frozen=True, description="OAuth2 client secret")
    redirect_uri: str = Field(frozen=True, description="Registered callback URL")

    name: str | None = Field(default=None, description="Provider display name")
    scopes: list[str] = Field(default_factory=list, description="Requested scopes")
    scope_separator: str = Field(default=" ", description="Joins scopes in the URL")
    response_type: ResponseType = Field(
        default=ResponseType.JSON, description="Format of provider responses"
    )
    method: RequestMethod = Field(
        default=RequestMethod.POST, description="Token request HTTP method"
    )
    authorization_header: str | None = Field(
        default=None, description="Authorization scheme, e.g. Bearer"
    )
    headers: dict[str, str] = Field(
        default_factory=dict, description="Static headers sent with every request"
    )
    uid_key: str = Field(default="id", description="User ID field in responses")
    screen_name_key: str = Field(default="name", description="Display name field")
    email_key: str = Field(default="email", description="Email field")
    access_token_key: str = Field(
        default="access_token", description="Token field in token responses"
    )
    state: str | None = Field(default=None, description="Caller-controlled CSRF value")
    extra: dict[str, Any] = Field(
        default_factory=dict, description="Options the client does not recognize"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="forbid",
    )

    @model_validator(mode="before")
    @classmethod
    def route_unknown_options(cls, data: Any) -> Any:
        """Move unrecognized keys into `extra`."""
        if not isinstance(data, dict):
            return data

        known = set()
        for field_name, field in cls.model_fields.items():
            known.add(field_name)
            if field.alias:
                known.add(field.alias)

        unknown = {key: value for key, value in data.items() if key not in known}
        if not unknown:
            return data

        logger.debug(
            "Routing unknown provider options to extra",
            extra={"extra_fields": {"options": sorted(unknown)}},
        )
        routed = {key: value for key, value in data.items() if key in known}
        routed["extra"] = {**data.get("extra", {}), **unknown}
        return routed

    @field_validator("response_type", mode="before")
    @classmethod
    def normalize_response_type(cls, v):
        """Accept 'query-string' as an alias of 'string'."""
        if isinstance(v, str):
            v = v.lower()
            if v == "query-string":
                return ResponseType.STRING
        return v

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v):
        """Methods are case-insensitive."""
        if isinstance(v, str):
            return v.lower()
        return v

    @classmethod
    def from_env(cls, prefix: str = "OAUTH2_") -> "ProviderConfig":
        """
        Load configuration from environment variables.

        Reads <prefix>CLIENT_ID, CLIENT_SECRET and REDIRECT_URI plus the
        optional SCOPES (comma-separated), SCOPE_SEPARATOR, RESPONSE_TYPE,
        METHOD, AUTHORIZATION_HEADER and UID_KEY.
        """
        options: dict[str, Any] = {
            "client_id": os.getenv(f"{prefix}CLIENT_ID", ""),
            "client_secret": os.getenv(f"{prefix}CLIENT_SECRET", ""),
            "redirect_uri": os.getenv(f"{prefix}REDIRECT_URI", ""),
        }

        scopes = os.getenv(f"{prefix}SCOPES")
        if scopes:
            options["scopes"] = [s.strip() for s in scopes.split(",") if s.strip()]

        optional = {
            "scope_separator": "SCOPE_SEPARATOR",
            "response_type": "RESPONSE_TYPE",
            "method": "METHOD",
            "authorization_header": "AUTHORIZATION_HEADER",
            "uid_key": "UID_KEY",
        }
        for field_name, env_name in optional.items():
            value = os.getenv(f"{prefix}{env_name}")
            if value is not None:
                options[field_name] = value

        return cls(**options)

    def scope_string(self, scopes: list[str] | None = None) -> str:
        """Join scopes with the configured separator."""
        return self.scope_separator.join(self.scopes if scopes is None else scopes)
