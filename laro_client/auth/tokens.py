"""Bearer credential holder for outgoing requests.

Holds at most one credential per client context. Every dispatch asks the
header provider for a fresh copy of the default headers, so a token change
only affects requests dispatched after it; an in-flight request keeps the
headers it captured.

SECURITY: Never logs token values.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

from laro_client.models.schemas import AuthTokens

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


class HeaderProvider(Protocol):
    """Supplies the default headers for each dispatch."""

    def headers(self) -> dict[str, str]: ...


class AuthTokenManager:
    """Default header provider with bearer token lifecycle.

    Parameters
    ----------
    clock:
        Monotonic clock used for access token expiry (default ``time.monotonic``).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._default_headers: dict[str, str] = dict(DEFAULT_HEADERS)
        self._tokens: AuthTokens | None = None
        self._expires_at: float | None = None

    # ------------------------------------------------------------------
    # Header provider
    # ------------------------------------------------------------------

    def headers(self) -> dict[str, str]:
        """Snapshot of the default headers for one request."""
        return dict(self._default_headers)

    # ------------------------------------------------------------------
    # Bearer header
    # ------------------------------------------------------------------

    def set_auth_token(self, token: str) -> None:
        """Install or replace the ``Authorization: Bearer`` header."""
        self._default_headers["Authorization"] = f"Bearer {token}"
        logger.debug("Auth token installed")

    def clear_auth_token(self) -> None:
        """Remove the ``Authorization`` header."""
        self._default_headers.pop("Authorization", None)
        logger.debug("Auth token cleared")

    @property
    def access_token(self) -> str | None:
        value = self._default_headers.get("Authorization")
        if value is None:
            return None
        return value.removeprefix("Bearer ")

    @property
    def is_authenticated(self) -> bool:
        return "Authorization" in self._default_headers

    # ------------------------------------------------------------------
    # Token pair lifecycle
    # ------------------------------------------------------------------

    @property
    def tokens(self) -> AuthTokens | None:
        return self._tokens

    def store_tokens(self, tokens: AuthTokens) -> None:
        """Keep a token pair issued by login/register and install its access token."""
        self._tokens = tokens
        self._expires_at = self._clock() + tokens.expires_in
        self.set_auth_token(tokens.access_token)

    def update_access_token(self, access_token: str, expires_in: int) -> None:
        """Replace the access token after a refresh; the refresh token is kept."""
        if self._tokens is not None:
            self._tokens = self._tokens.model_copy(
                update={"access_token": access_token, "expires_in": expires_in}
            )
        self._expires_at = self._clock() + expires_in
        self.set_auth_token(access_token)

    def clear(self) -> None:
        """Discard both tokens and the bearer header (logout)."""
        self._tokens = None
        self._expires_at = None
        self.clear_auth_token()

    def is_expired(self, leeway_seconds: float = 0.0) -> bool:
        """Whether the access token is expired, or will be within ``leeway_seconds``.

        A manually installed token with no known lifetime never expires.
        """
        if self._expires_at is None:
            return False
        return self._clock() + leeway_seconds >= self._expires_at
