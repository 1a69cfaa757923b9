"""
Port definitions (interfaces) for the OAuth2 core.

Ports define the contracts between the core and its collaborators.
Concrete identity providers and HTTP transports implement these ports;
the core depends on the interfaces only.
"""

from typing import Any, Optional, Protocol

from oauth2_client.core.domain import AccessToken


class Transport(Protocol):
    """
    Port (interface) for sending HTTP requests.

    Implementations return the response body for every HTTP status and
    raise their own errors for network-level failures. The core neither
    wraps nor retries those errors.
    """

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Optional[str] = None,
    ) -> str:
        """
        Send a request and return the raw response body.

        Args:
            method: HTTP method (GET or POST)
            url: Fully built request URL
            headers: Request headers
            body: Encoded request body, if any

        Returns:
            Response body as text
        """
        ...


class ProviderEndpoints(Protocol):
    """The three URLs every identity provider must supply."""

    def authorize_url(self) -> str:
        ...

    def token_url(self) -> str:
        ...

    def user_info_url(self, token: AccessToken) -> str:
        ...


class ErrorChecker(Protocol):
    """Detects errors encoded in a decoded provider response."""

    def error_check(self, response: dict[str, Any]) -> None:
        """
        Raise IdentityProviderError if the response describes an error.

        Called right after every decode, before any token or user object
        is built.
        """
        ...


class UserMapper(Protocol):
    """Maps a decoded user-info response to the provider's identity object."""

    def map_user_info(self, response: dict[str, Any], token: AccessToken) -> Any:
        ...


class Provider(ProviderEndpoints, ErrorChecker, UserMapper, Protocol):
    """Everything the core needs from a concrete identity provider."""


REQUIRED_PROVIDER_HOOKS = (
    "authorize_url",
    "token_url",
    "user_info_url",
    "error_check",
    "map_user_info",
)
