"""
OAuth 2.0 provider implementations.

GenericProvider covers any provider that follows RFC 6749 closely enough
to be described by its three URLs and a few response field names.
"""

from typing import Any

from oauth2_client.core.domain import AccessToken, IdentityUser
from oauth2_client.core.exceptions import IdentityProviderError


class GenericProvider:
    """A provider configured entirely from endpoint URLs and field keys."""

    def __init__(
        self,
        authorize_url: str,
        token_url: str,
        user_info_url: str,
        error_key: str = "error",
        uid_key: str = "id",
        name_key: str = "name",
        email_key: str = "email",
    ):
        self._authorize_url = authorize_url
        self._token_url = token_url
        self._user_info_url = user_info_url
        self.error_key = error_key
        self.uid_key = uid_key
        self.name_key = name_key
        self.email_key = email_key

    def authorize_url(self) -> str:
        return self._authorize_url

    def token_url(self) -> str:
        return self._token_url

    def user_info_url(self, token: AccessToken) -> str:
        return self._user_info_url

    def error_check(self, response: dict[str, Any]) -> None:
        """
        Raise IdentityProviderError when the error field is set.

        Uses error_description as the message when present (RFC 6749 §5.2).
        The error code comes from `code`, falling back to the error value.
        """
        error = response.get(self.error_key)
        if not error:
            return

        if isinstance(error, dict):
            # {"error": {"message": ..., "code": ...}} style bodies
            message = error.get("message") or str(error)
            code = error.get("code", response.get("code"))
        else:
            message = response.get("error_description") or str(error)
            code = response.get("code", error)

        raise IdentityProviderError(message, code, response)

    def map_user_info(self, response: dict[str, Any], token: AccessToken) -> IdentityUser:
        return IdentityUser(
            uid=response.get(self.uid_key),
            name=response.get(self.name_key),
            email=response.get(self.email_key),
            raw=response,
        )
