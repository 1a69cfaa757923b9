"""
HTTP transport backed by httpx.
"""

import logging
from typing import Optional

import httpx

from oauth2_client.core.exceptions import TransportError


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class HttpxTransport:
    """
    Sends OAuth requests with httpx.

    Returns the body for every HTTP status: providers report OAuth errors
    in 4xx bodies, which the provider error check must see. Network-level
    failures raise TransportError.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initializes the transport.

        Args:
            client: Shared httpx client; a short-lived one is used per request
                when omitted
            timeout: Request timeout in seconds for short-lived clients
        """
        self._client = client
        self._timeout = timeout

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Optional[str] = None,
    ) -> str:
        """
        Send a request and return the response body.

        Raises:
            TransportError: On connection, TLS or timeout errors
        """
        try:
            if self._client is not None:
                response = self._client.request(method, url, headers=headers, content=body)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.request(method, url, headers=headers, content=body)
        except httpx.RequestError as e:
            logger.error(f"Network error during {method} request: {e}")
            raise TransportError(f"Network error: {e}") from e

        if response.is_error:
            logger.warning(
                f"Provider responded with HTTP {response.status_code}",
                extra={"extra_fields": {"method": method, "status": response.status_code}},
            )

        return response.text
