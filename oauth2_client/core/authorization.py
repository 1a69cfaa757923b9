"""
Authorization URL construction.
"""

from typing import Any

from authlib.common.urls import add_params_to_uri

from oauth2_client.config import ProviderConfig


# Fixed by configuration, never overridable by caller options
FIXED_PARAMS = ("client_id", "redirect_uri")


def build_authorization_url(
    base_url: str,
    config: ProviderConfig,
    state: str,
    options: dict[str, Any] | None = None,
) -> str:
    """
    Compose the provider's authorize URL.

    Args:
        base_url: The provider's authorization endpoint
        config: Provider configuration (client ID, redirect URI, scopes)
        state: CSRF state value to send
        options: Extra query parameters; they override defaults except
            client_id and redirect_uri

    Returns:
        The full authorization URL
    """
    params: dict[str, Any] = {
        "state": state,
        "scope": config.scope_string(),
        "response_type": "code",
        "approval_prompt": "auto",
    }

    for key, value in (options or {}).items():
        if key in FIXED_PARAMS:
            continue
        if key == "scope" and isinstance(value, (list, tuple)):
            value = config.scope_string(list(value))
        params[key] = value

    params["client_id"] = config.client_id
    params["redirect_uri"] = config.redirect_uri

    query = [(key, str(value)) for key, value in params.items() if value is not None]
    return add_params_to_uri(base_url, query)
