"""
Token exchange request construction.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from authlib.common.urls import add_params_to_uri, url_encode

from oauth2_client.config import ProviderConfig, RequestMethod, ResponseType
from oauth2_client.core.exceptions import ReservedParameterError
from oauth2_client.core.grants import Grant


RESERVED_PARAMS = ("client_id", "client_secret", "redirect_uri", "grant_type")

ACCEPT_HEADERS = {
    ResponseType.JSON: "application/json",
    ResponseType.XML: "application/xml",
    ResponseType.CSV: "text/csv",
    ResponseType.STRING: "application/x-www-form-urlencoded",
}


@dataclass(frozen=True)
class TokenRequest:
    """A fully built token request, ready for the transport."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


def build_token_request(
    url: str,
    grant: Grant,
    params: dict[str, Any],
    config: ProviderConfig,
) -> TokenRequest:
    """
    Compose the token exchange request for a grant.

    Args:
        url: The provider's token endpoint
        grant: Resolved grant type
        params: Caller parameters (code, refresh_token, ...)
        config: Provider configuration

    Returns:
        TokenRequest with method, URL, headers and encoded body

    Raises:
        ReservedParameterError: If params set client_id, client_secret,
            redirect_uri or grant_type
        MissingGrantParameterError: If the grant's required params are missing
    """
    reserved = sorted(key for key in params if key in RESERVED_PARAMS)
    if reserved:
        raise ReservedParameterError(
            f"Reserved parameters cannot be overridden: {', '.join(reserved)}"
        )

    fields = {
        "client_id": config.client_id,
        "client_secret": config.client_secret,
        "redirect_uri": config.redirect_uri,
        **grant.prepare_params(params),
    }
    pairs = [(key, str(value)) for key, value in fields.items() if value is not None]

    headers = {
        **config.headers,
        "Accept": ACCEPT_HEADERS[config.response_type],
    }

    if config.method == RequestMethod.GET:
        return TokenRequest(
            method="GET",
            url=add_params_to_uri(url, pairs),
            headers=headers,
        )

    headers["Content-Type"] = "application/x-www-form-urlencoded"
    return TokenRequest(method="POST", url=url, headers=headers, body=url_encode(pairs))
