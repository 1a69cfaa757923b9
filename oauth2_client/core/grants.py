"""
Grant types for the token exchange.

A grant is a tagged value: its name (sent as grant_type) and the parameters
it requires. The four RFC 6749 grants are registered by default; callers can
register their own or pass a Grant instance directly.
"""

import logging
from dataclasses import dataclass
from typing import Any

from oauth2_client.core.exceptions import InvalidGrant, MissingGrantParameterError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Grant:
    """An OAuth2 grant type and the parameters it needs."""

    name: str
    required_params: tuple[str, ...] = ()

    def prepare_params(self, params: dict[str, Any]) -> dict[str, Any]:
        """
        Validate caller params and return the grant's body fields.

        Args:
            params: Caller-supplied token request parameters

        Returns:
            The params with grant_type set to this grant's name

        Raises:
            MissingGrantParameterError: If a required parameter is absent or empty
        """
        for key in self.required_params:
            if params.get(key) in (None, ""):
                raise MissingGrantParameterError(
                    f"Required parameter not passed for grant '{self.name}': {key}"
                )

        return {**params, "grant_type": self.name}

    def __str__(self) -> str:
        return self.name


AUTHORIZATION_CODE = Grant("authorization_code", ("code",))
PASSWORD = Grant("password", ("username", "password"))
CLIENT_CREDENTIALS = Grant("client_credentials")
REFRESH_TOKEN = Grant("refresh_token", ("refresh_token",))

BUILTIN_GRANTS = (AUTHORIZATION_CODE, PASSWORD, CLIENT_CREDENTIALS, REFRESH_TOKEN)

_registry: dict[str, Grant] = {grant.name: grant for grant in BUILTIN_GRANTS}


def register_grant(grant: Grant) -> None:
    """Make a custom grant resolvable by name."""
    if not isinstance(grant, Grant) or not grant.name:
        raise InvalidGrant(f"Cannot register grant: {grant!r}")

    if grant.name in {builtin.name for builtin in BUILTIN_GRANTS}:
        raise InvalidGrant(f"Cannot replace built-in grant: {grant.name}")

    _registry[grant.name] = grant
    logger.debug(f"Registered grant type: {grant.name}")


def unregister_grant(name: str) -> None:
    """Remove a custom grant from the registry. Unknown and built-in names are ignored."""
    if name in {builtin.name for builtin in BUILTIN_GRANTS}:
        return
    _registry.pop(name, None)


def resolve_grant(descriptor: Any) -> Grant:
    """
    Normalize a grant descriptor into a Grant.

    Args:
        descriptor: A registered grant name or a Grant instance

    Returns:
        The resolved Grant

    Raises:
        InvalidGrant: If the descriptor is an unknown name or any other type
    """
    if isinstance(descriptor, Grant):
        return descriptor

    if isinstance(descriptor, str):
        grant = _registry.get(descriptor)
        if grant is not None:
            return grant
        raise InvalidGrant(f"Unknown grant: {descriptor}")

    raise InvalidGrant(
        f"Grant must be a name or a Grant instance, got {type(descriptor).__name__}"
    )
