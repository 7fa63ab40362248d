"""Authentication API services.

Besides the plain façades, login/register/refresh/logout drive the token
lifecycle of the client context: issued tokens are stored and installed as
the bearer header, a refresh replaces the access token, logout discards both.
Envelopes are still returned unmodified.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError as PydanticValidationError

from laro_client.errors import ApiError, AuthenticationError
from laro_client.models.requests import HttpMethod
from laro_client.models.responses import ApiResponse
from laro_client.models.schemas import AuthTokens, RefreshTokenResponse
from laro_client.services.base import BaseService

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """Façade over the ``/auth`` endpoints."""

    async def register(self, data: Any) -> ApiResponse:
        response = await self._retried(HttpMethod.POST, "/auth/register", data)
        self._store_session(response)
        return response

    async def login(self, data: Any) -> ApiResponse:
        response = await self._retried(HttpMethod.POST, "/auth/login", data)
        self._store_session(response)
        return response

    async def logout(self) -> ApiResponse:
        """Log out; local tokens are discarded even if the call fails."""
        try:
            return await self._client.post("/auth/logout")
        finally:
            self._client.auth.clear()

    async def refresh_token(self, refresh_token: str | None = None) -> ApiResponse:
        """Exchange a refresh token (default: the stored one) for a new access token."""
        if refresh_token is None:
            stored = self._client.auth.tokens
            if stored is None:
                raise AuthenticationError("No refresh token available")
            refresh_token = stored.refresh_token

        response = await self._client.post("/auth/refresh", {"refreshToken": refresh_token})
        if response.success and response.data:
            try:
                refreshed = RefreshTokenResponse.model_validate(response.data)
            except PydanticValidationError as exc:
                logger.warning("Refresh response carried no usable access token: %s", exc)
            else:
                self._client.auth.update_access_token(refreshed.access_token, refreshed.expires_in)
        return response

    async def get_current_user(self) -> ApiResponse:
        """Current user; a failure yields a ``success=False`` envelope instead of raising."""
        try:
            return await self._client.get("/auth/me")
        except ApiError as exc:
            logger.error("get_current_user failed: %s", exc.message)
            return ApiResponse(data=None, success=False, message="Failed to get current user")

    async def update_profile(self, data: Any) -> ApiResponse:
        return await self._client.put("/users/profile", data)

    async def change_password(self, current_password: str, new_password: str) -> ApiResponse:
        return await self._client.post(
            "/auth/change-password",
            {"currentPassword": current_password, "newPassword": new_password},
        )

    async def request_password_reset(self, email: str) -> ApiResponse:
        return await self._client.post("/auth/forgot-password", {"email": email})

    async def reset_password(self, token: str, new_password: str) -> ApiResponse:
        return await self._client.post(
            "/auth/reset-password", {"token": token, "newPassword": new_password}
        )

    async def verify_email(self, token: str) -> ApiResponse:
        return await self._client.post("/auth/verify-email", {"token": token})

    async def resend_verification_email(self) -> ApiResponse:
        return await self._client.post("/auth/resend-verification")

    async def social_login(self, provider: str, code: str) -> ApiResponse:
        response = await self._client.post(f"/auth/social/{quote(provider, safe='')}", {"code": code})
        self._store_session(response)
        return response

    async def delete_account(self, password: str) -> ApiResponse:
        return await self._client.request(
            HttpMethod.DELETE, "/auth/account", json={"password": password}
        )

    async def check_username_availability(self, username: str) -> ApiResponse:
        return await self._client.get(f"/auth/check-username/{quote(username, safe='')}")

    async def check_email_availability(self, email: str) -> ApiResponse:
        return await self._client.get(f"/auth/check-email/{quote(email, safe='')}")

    async def get_user_sessions(self) -> ApiResponse:
        return await self._client.get("/auth/sessions")

    async def revoke_session(self, session_id: str) -> ApiResponse:
        return await self._client.delete(f"/auth/sessions/{session_id}")

    async def revoke_all_sessions(self) -> ApiResponse:
        return await self._client.post("/auth/revoke-all-sessions")

    async def enable_two_factor(self) -> ApiResponse:
        return await self._client.post("/auth/2fa/enable")

    async def verify_two_factor(self, code: str) -> ApiResponse:
        return await self._client.post("/auth/2fa/verify", {"code": code})

    async def disable_two_factor(self, code: str) -> ApiResponse:
        return await self._client.post("/auth/2fa/disable", {"code": code})

    async def generate_backup_codes(self) -> ApiResponse:
        return await self._client.post("/auth/2fa/backup-codes")

    def _store_session(self, response: ApiResponse) -> None:
        """Install the token pair of a successful login/register response."""
        if not response.success or not isinstance(response.data, dict):
            return
        raw_tokens = response.data.get("tokens")
        if raw_tokens is None:
            return
        try:
            tokens = AuthTokens.model_validate(raw_tokens)
        except PydanticValidationError as exc:
            logger.warning("Auth response carried malformed tokens: %s", exc)
            return
        self._client.auth.store_tokens(tokens)
