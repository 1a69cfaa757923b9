"""
CSRF state values for the authorization step.
"""

import hmac

from authlib.common.security import generate_token

from oauth2_client.core.exceptions import StateMismatchError


STATE_LENGTH = 32


class StateGenerator:
    """
    Issues random opaque state values.

    Consecutive values from one generator always differ.
    """

    def __init__(self, length: int = STATE_LENGTH):
        self._length = length
        self._last: str | None = None

    def generate(self) -> str:
        state = generate_token(self._length)
        while state == self._last:
            state = generate_token(self._length)

        self._last = state
        return state


def verify_state(expected: str | None, received: str | None) -> None:
    """
    Compare the stored state with the one returned on the callback.

    Raises:
        StateMismatchError: If either value is missing or they differ
    """
    if not expected or not received:
        raise StateMismatchError("Missing OAuth state")

    if not hmac.compare_digest(expected.encode(), received.encode()):
        raise StateMismatchError("OAuth state does not match")
