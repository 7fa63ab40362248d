"""User API services."""

from __future__ import annotations

from typing import Any, Mapping

from laro_client.models.requests import HttpMethod
from laro_client.models.responses import ApiResponse
from laro_client.services.base import MINUTE, BaseService, build_params, cache_key


class UsersService(BaseService):
    """Façade over the ``/users`` endpoints."""

    async def get_current_user(self) -> ApiResponse:
        return await self._cached(
            "current-user", lambda: self._client.get("/users/me"), 5 * MINUTE
        )

    async def get_user_profile(self, user_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("user-profile", user_id),
            lambda: self._client.get(f"/users/{user_id}"),
            5 * MINUTE,
        )

    async def update_user_profile(self, user_id: str, data: Any) -> ApiResponse:
        return await self._retried(HttpMethod.PATCH, f"/users/{user_id}", data)

    async def get_user_stats(
        self,
        user_id: str,
        season: str | None = None,
        timeframe: str | None = None,  # all | last30 | last7
    ) -> ApiResponse:
        params = build_params(season=season, timeframe=timeframe)
        return await self._cached(
            cache_key("user-stats", user_id, params=params),
            lambda: self._client.get(f"/users/{user_id}/stats", params),
            2 * MINUTE,
        )

    async def search_users(
        self,
        query: str,
        filters: Mapping[str, Any] | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> ApiResponse:
        params = {"q": query, **build_params(filters), "page": page, "limit": limit}
        return await self._client.get("/users/search", params)

    async def get_user_teams(self, user_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("user-teams", user_id),
            lambda: self._client.get(f"/users/{user_id}/teams"),
            5 * MINUTE,
        )

    async def get_user_games(
        self, user_id: str, status: str | None = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = build_params(status=status, page=page, limit=limit)
        return await self._client.get(f"/users/{user_id}/games", params)

    async def get_user_reservations(
        self, user_id: str, status: str | None = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = build_params(status=status, page=page, limit=limit)
        return await self._client.get(f"/users/{user_id}/reservations", params)

    async def follow_user(self, user_id: str) -> ApiResponse:
        return await self._retried(HttpMethod.POST, f"/users/{user_id}/follow")

    async def unfollow_user(self, user_id: str) -> ApiResponse:
        return await self._retried(HttpMethod.DELETE, f"/users/{user_id}/follow")

    async def get_user_followers(self, user_id: str, page: int = 1, limit: int = 10) -> ApiResponse:
        return await self._client.get(
            f"/users/{user_id}/followers", {"page": page, "limit": limit}
        )

    async def get_user_following(self, user_id: str, page: int = 1, limit: int = 10) -> ApiResponse:
        return await self._client.get(
            f"/users/{user_id}/following", {"page": page, "limit": limit}
        )

    async def upload_avatar(self, user_id: str, file: Any) -> ApiResponse:
        """Upload an avatar; ``file`` is anything httpx accepts as a multipart file."""
        return await self._retried(
            HttpMethod.POST, f"/users/{user_id}/avatar", files={"avatar": file}
        )

    async def delete_user(self, user_id: str) -> ApiResponse:
        return await self._client.delete(f"/users/{user_id}")

    async def get_user_notifications(
        self, user_id: str, unread_only: bool = False, page: int = 1, limit: int = 20
    ) -> ApiResponse:
        params = {"unreadOnly": unread_only, "page": page, "limit": limit}
        return await self._client.get(f"/users/{user_id}/notifications", params)

    async def mark_notifications_read(
        self, user_id: str, notification_ids: list[str] | None = None
    ) -> ApiResponse:
        data = {"notificationIds": notification_ids} if notification_ids else {}
        return await self._client.patch(f"/users/{user_id}/notifications/read", data)

    async def get_user_preferences(self, user_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("user-preferences", user_id),
            lambda: self._client.get(f"/users/{user_id}/preferences"),
            10 * MINUTE,
        )

    async def update_user_preferences(self, user_id: str, preferences: Any) -> ApiResponse:
        return await self._retried(HttpMethod.PATCH, f"/users/{user_id}/preferences", preferences)
