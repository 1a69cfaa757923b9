"""
Core service for handling OAuth 2.0 authorization flows.

OAuthService holds a provider (endpoints, error check, user mapping) and a
transport, and runs the generic parts of the flow: authorization URL with
CSRF state, token exchange, response decoding and authenticated headers.
"""

import logging
from typing import Any, Callable, Optional

from oauth2_client.config import ProviderConfig
from oauth2_client.core.authorization import build_authorization_url
from oauth2_client.core.decoding import decode_response
from oauth2_client.core.domain import AccessToken
from oauth2_client.core.exceptions import (
    IdentityProviderError,
    MissingTokenError,
    ProviderConfigurationError,
)
from oauth2_client.core.grants import REFRESH_TOKEN, resolve_grant
from oauth2_client.core.headers import build_headers
from oauth2_client.core.ports import REQUIRED_PROVIDER_HOOKS, Provider, Transport
from oauth2_client.core.state import StateGenerator, verify_state
from oauth2_client.core.token_request import build_token_request
from oauth2_client.infrastructure.http_transport import HttpxTransport


logger = logging.getLogger(__name__)

RedirectHandler = Callable[[str, "OAuthService"], Any]


class OAuthService:
    """
    A service for handling OAuth 2.0 flows against one identity provider.

    Not safe for concurrent use: `state` is per-instance mutable state.
    """

    def __init__(
        self,
        config: ProviderConfig | dict[str, Any],
        provider: Provider,
        transport: Optional[Transport] = None,
        redirect_handler: Optional[RedirectHandler] = None,
    ):
        if isinstance(config, dict):
            config = ProviderConfig.model_validate(config)

        missing = [
            hook for hook in REQUIRED_PROVIDER_HOOKS
            if not callable(getattr(provider, hook, None))
        ]
        if missing:
            raise ProviderConfigurationError(
                f"Provider {type(provider).__name__} is missing: {', '.join(missing)}"
            )

        self.config = config
        self.provider = provider
        self.transport = transport if transport is not None else HttpxTransport()
        self.redirect_handler = redirect_handler
        self._state_generator = StateGenerator()
        self._state: Optional[str] = config.state

    @property
    def state(self) -> Optional[str]:
        """The state sent with the most recent authorization URL."""
        return self._state

    def set_redirect_handler(self, handler: RedirectHandler) -> None:
        """Call `handler(url, service)` from authorize() instead of returning the URL."""
        self.redirect_handler = handler

    def get_authorization_url(self, **options: Any) -> str:
        """
        Build the provider authorization URL.

        A `state` option is used verbatim, then a configured state; otherwise
        a fresh random value is generated. The value sent is stored on the
        instance for later verification.
        """
        state = options.pop("state", None) or self.config.state
        if not state:
            state = self._state_generator.generate()
        self._state = state

        return build_authorization_url(
            self.provider.authorize_url(), self.config, state, options
        )

    def authorize(self, **options: Any) -> Any:
        """
        Start the authorization flow.

        Hands the authorization URL to the redirect handler when one is set
        and returns its result; otherwise returns the URL for the host to
        redirect to.
        """
        url = self.get_authorization_url(**options)

        logger.info(
            "Starting OAuth authorization",
            extra={"extra_fields": {"provider": self._provider_name}},
        )

        if self.redirect_handler is not None:
            return self.redirect_handler(url, self)
        return url

    def verify_state(self, received: Optional[str]) -> None:
        """
        Check the state returned on the callback against the stored one.

        Raises:
            StateMismatchError: If the values differ or either is missing
        """
        verify_state(self._state, received)

    def get_access_token(self, grant: Any, **params: Any) -> AccessToken:
        """
        Exchange a grant for an access token.

        Args:
            grant: Grant name (e.g. "authorization_code") or Grant instance
            **params: Grant parameters such as `code` or `refresh_token`

        Returns:
            AccessToken built from the provider response

        Raises:
            InvalidGrant: Unknown grant, raised before anything else
            ReservedParameterError: params override client identity fields
            MissingGrantParameterError: required grant parameter missing
            MalformedResponseError: response not parseable
            IdentityProviderError: provider reported an error
            MissingTokenError: response has no access token
        """
        resolved = resolve_grant(grant)

        request = build_token_request(
            self.provider.token_url(), resolved, params, self.config
        )

        logger.info(
            f"Requesting access token with grant: {resolved.name}",
            extra={
                "extra_fields": {
                    "provider": self._provider_name,
                    "grant_type": resolved.name,
                    "method": request.method,
                }
            },
        )

        raw = self.transport.send(request.method, request.url, request.headers, request.body)
        response = self._check_response(raw)

        try:
            token = AccessToken.from_response(
                response,
                token_key=self.config.access_token_key,
                uid_key=self.config.uid_key,
            )
        except MissingTokenError:
            logger.error(
                "Token response did not contain an access token",
                extra={"extra_fields": {"provider": self._provider_name}},
            )
            raise

        logger.info(
            "Access token received",
            extra={
                "extra_fields": {
                    "provider": self._provider_name,
                    "expires_in": token.expires_in,
                    "has_refresh_token": token.refresh_token is not None,
                }
            },
        )
        return token

    def refresh_access_token(self, token: AccessToken) -> AccessToken:
        """
        Get a new access token with the refresh_token grant.

        Raises:
            MissingGrantParameterError: If the token has no refresh token
        """
        return self.get_access_token(REFRESH_TOKEN, refresh_token=token.refresh_token)

    def get_headers(self, token: AccessToken | str | None = None) -> dict[str, str]:
        """Headers that authorize an API call made with `token`."""
        return build_headers(self.config, token)

    def fetch_user_details(self, token: AccessToken) -> dict[str, Any]:
        """
        Fetch and decode the user-info response for a token.

        The provider's error check runs before the response is returned.
        """
        url = self.provider.user_info_url(token)
        raw = self.transport.send("GET", url, self.get_headers(token), None)
        return self._check_response(raw)

    def get_user_details(self, token: AccessToken) -> Any:
        """Fetch user info and map it with the provider's user mapper."""
        response = self.fetch_user_details(token)
        return self.provider.map_user_info(response, token)

    def get_user_uid(self, token: AccessToken) -> Any:
        return self.user_uid(self.fetch_user_details(token), token)

    def get_user_email(self, token: AccessToken) -> Any:
        return self.user_email(self.fetch_user_details(token), token)

    def get_user_screen_name(self, token: AccessToken) -> Any:
        return self.user_screen_name(self.fetch_user_details(token), token)

    def user_uid(self, response: dict[str, Any], token: AccessToken | None = None) -> Any:
        """User ID from a decoded user-info response, or None."""
        return response.get(self.config.uid_key)

    def user_email(self, response: dict[str, Any], token: AccessToken | None = None) -> Any:
        """Email from a decoded user-info response, or None."""
        return response.get(self.config.email_key)

    def user_screen_name(
        self, response: dict[str, Any], token: AccessToken | None = None
    ) -> Any:
        """Display name from a decoded user-info response, or None."""
        return response.get(self.config.screen_name_key)

    def _check_response(self, raw: str) -> dict[str, Any]:
        """Decode a body and run the provider's error check on it."""
        response = decode_response(raw, self.config.response_type)

        try:
            self.provider.error_check(response)
        except IdentityProviderError as e:
            logger.warning(
                f"Provider returned an error: {e.message}",
                extra={"extra_fields": {"provider": self._provider_name, "code": e.code}},
            )
            raise

        return response

    @property
    def _provider_name(self) -> str:
        return self.config.name or type(self.provider).__name__
