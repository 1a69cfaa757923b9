"""
Exceptions for the OAuth2 client core.

Every error carries an ErrorKind so callers can dispatch on a single
attribute instead of a chain of isinstance checks. All of them are raised
at the point of detection and never retried by the core.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure categories raised by the client."""

    INVALID_GRANT = "invalid_grant"
    MISSING_GRANT_PARAMETER = "missing_grant_parameter"
    RESERVED_PARAMETER = "reserved_parameter"
    MALFORMED_RESPONSE = "malformed_response"
    IDENTITY_PROVIDER = "identity_provider"
    MISSING_TOKEN = "missing_token"
    STATE_MISMATCH = "state_mismatch"
    PROVIDER_CONFIGURATION = "provider_configuration"
    TRANSPORT = "transport"


class OAuthClientError(Exception):
    """Base exception for OAuth2 client errors."""

    kind: ErrorKind


class InvalidGrant(OAuthClientError, ValueError):
    """
    Raised when a grant descriptor is neither a registered name nor a Grant.

    Checked before any parameter validation or network access.
    """

    kind = ErrorKind.INVALID_GRANT


class MissingGrantParameterError(OAuthClientError, ValueError):
    """Raised when a grant's required parameter was not supplied."""

    kind = ErrorKind.MISSING_GRANT_PARAMETER


class ReservedParameterError(OAuthClientError, ValueError):
    """
    Raised when caller params try to override identity-critical fields.

    client_id, client_secret, redirect_uri and grant_type always come from
    configuration and the resolved grant.
    """

    kind = ErrorKind.RESERVED_PARAMETER


class MalformedResponseError(OAuthClientError):
    """Raised when a response body cannot be parsed in the configured format."""

    kind = ErrorKind.MALFORMED_RESPONSE


class IdentityProviderError(OAuthClientError):
    """
    Raised by a provider's error check when a response encodes an error.

    Attributes:
        message: Human-readable error message from the provider
        code: Provider-supplied error code (may be a string or an int)
        response: The decoded response, kept for diagnostics
    """

    kind = ErrorKind.IDENTITY_PROVIDER

    def __init__(self, message: str, code: Any = None, response: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response if response is not None else {}


class MissingTokenError(OAuthClientError):
    """Raised when a successful token response has no access token."""

    kind = ErrorKind.MISSING_TOKEN


class StateMismatchError(OAuthClientError):
    """Raised when the state returned by the provider does not match."""

    kind = ErrorKind.STATE_MISMATCH


class ProviderConfigurationError(OAuthClientError):
    """Raised when a provider object does not implement the required hooks."""

    kind = ErrorKind.PROVIDER_CONFIGURATION


class TransportError(OAuthClientError):
    """
    Raised by the HTTP transport adapter for network-level failures.

    Connection, TLS and timeout errors end up here. HTTP error statuses do
    not: their bodies are returned so the provider error check can read them.
    """

    kind = ErrorKind.TRANSPORT
