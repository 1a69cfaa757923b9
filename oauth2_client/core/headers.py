"""
Headers for authenticated API calls.
"""

from oauth2_client.config import ProviderConfig
from oauth2_client.core.domain import AccessToken


def build_headers(
    config: ProviderConfig, token: AccessToken | str | None = None
) -> dict[str, str]:
    """
    Build the headers that authorize a request made with a token.

    Accepts an AccessToken or a raw token string. Without a token, or when
    no authorization_header scheme is configured, only the static headers
    are returned.
    """
    headers = dict(config.headers)

    if token and config.authorization_header:
        headers["Authorization"] = f"{config.authorization_header} {token}"

    return headers
