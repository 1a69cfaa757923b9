"""
Shared test configuration and fixtures.
"""

from unittest.mock import MagicMock

import pytest

from oauth2_client.config import ProviderConfig
from oauth2_client.core.exceptions import IdentityProviderError
from oauth2_client.core.oauth_service import OAuthService


class MockProvider:
    """Provider double that raises on a non-empty `error` field."""

    def authorize_url(self):
        return "https://provider.example.com/oauth/authorize"

    def token_url(self):
        return "https://provider.example.com/oauth/token"

    def user_info_url(self, token):
        return "https://provider.example.com/api/me"

    def map_user_info(self, response, token):
        return response

    def error_check(self, response):
        if response.get("error"):
            raise IdentityProviderError(response["error"], response.get("code"), response)


@pytest.fixture
def provider_config():
    """Minimal provider configuration."""
    return ProviderConfig(
        client_id="mock_client_id",
        client_secret="mock_secret",
        redirect_uri="none",
    )


@pytest.fixture
def mock_provider():
    return MockProvider()


@pytest.fixture
def mock_transport():
    """
    Transport double.

    Returns a successful JSON token response by default. Tests that need
    another body or a failure override send.return_value / side_effect.
    """
    transport = MagicMock()
    transport.send.return_value = '{"access_token": "mock_access_token", "expires_in": 3600}'
    return transport


@pytest.fixture
def service(provider_config, mock_provider, mock_transport):
    """OAuthService wired to the mock provider and transport."""
    return OAuthService(provider_config, mock_provider, transport=mock_transport)
