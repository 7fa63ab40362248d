"""Games API services."""

from __future__ import annotations

from typing import Any

from laro_client.models.requests import HttpMethod
from laro_client.models.responses import ApiResponse
from laro_client.services.base import MINUTE, BaseService, Filters, build_params, cache_key


class GamesService(BaseService):
    """Façade over the ``/games`` endpoints."""

    async def get_games(self, filters: Filters = None, page: int = 1, limit: int = 10) -> ApiResponse:
        params = build_params(filters, page=page, limit=limit)
        return await self._cached(
            cache_key("games", params=params),
            lambda: self._client.get("/games", params),
            2 * MINUTE,
        )

    async def get_game_by_id(self, game_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("game", game_id),
            lambda: self._client.get(f"/games/{game_id}"),
            1 * MINUTE,
        )

    async def create_game(self, data: Any) -> ApiResponse:
        return await self._retried(HttpMethod.POST, "/games", data)

    async def update_game(self, game_id: str, data: Any) -> ApiResponse:
        return await self._client.patch(f"/games/{game_id}", data)

    async def delete_game(self, game_id: str) -> ApiResponse:
        return await self._client.delete(f"/games/{game_id}")

    async def join_game(self, game_id: str) -> ApiResponse:
        return await self._retried(HttpMethod.POST, f"/games/{game_id}/join")

    async def leave_game(self, game_id: str) -> ApiResponse:
        return await self._client.post(f"/games/{game_id}/leave")

    async def get_game_participants(self, game_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("game-participants", game_id),
            lambda: self._client.get(f"/games/{game_id}/participants"),
            1 * MINUTE,
        )

    async def complete_game(self, game_id: str, data: Any) -> ApiResponse:
        """Record the final result: scores, winner and per-player stat lines."""
        return await self._client.post(f"/games/{game_id}/complete", data)

    async def start_game(self, game_id: str) -> ApiResponse:
        return await self._client.post(f"/games/{game_id}/start")

    async def end_game(self, game_id: str, host_score: int, opponent_score: int) -> ApiResponse:
        return await self._client.post(
            f"/games/{game_id}/end", {"hostScore": host_score, "opponentScore": opponent_score}
        )

    async def cancel_game(self, game_id: str, reason: str | None = None) -> ApiResponse:
        return await self._client.post(f"/games/{game_id}/cancel", {"reason": reason})

    async def get_user_games(
        self, user_id: str, status: str | None = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = build_params(status=status, page=page, limit=limit)
        return await self._client.get(f"/users/{user_id}/games", params)

    async def get_team_games(
        self, team_id: str, status: str | None = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = build_params(status=status, page=page, limit=limit)
        return await self._client.get(f"/teams/{team_id}/games", params)

    async def get_nearby_games(
        self,
        latitude: float,
        longitude: float,
        radius: float = 10,
        filters: Filters = None,
    ) -> ApiResponse:
        params = {"latitude": latitude, "longitude": longitude, "radius": radius, **build_params(filters)}
        return await self._cached(
            cache_key("nearby-games", params=params),
            lambda: self._client.get("/games/nearby", params),
            2 * MINUTE,
        )

    async def search_games(
        self, query: str, filters: Filters = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = {"q": query, **build_params(filters, page=page, limit=limit)}
        return await self._client.get("/games/search", params)

    async def get_game_invitations(
        self, status: str | None = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = build_params(status=status, page=page, limit=limit)
        return await self._client.get("/games/invitations", params)

    async def send_game_invitation(
        self, game_id: str, team_id: str, message: str | None = None
    ) -> ApiResponse:
        return await self._client.post(
            f"/games/{game_id}/invite", {"teamId": team_id, "message": message}
        )

    async def respond_to_invitation(self, invitation_id: str, response: str) -> ApiResponse:
        """Answer a game invitation with ``accept`` or ``decline``."""
        return await self._client.post(
            f"/games/invitations/{invitation_id}/respond", {"response": response}
        )

    async def get_game_stats(self, game_id: str) -> ApiResponse:
        return await self._client.get(f"/games/{game_id}/stats")

    async def get_user_game_stats(self, user_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("user-game-stats", user_id),
            lambda: self._client.get(f"/users/{user_id}/game-stats"),
            5 * MINUTE,
        )

    async def get_live_game_update(self, game_id: str) -> ApiResponse:
        return await self._client.get(f"/games/{game_id}/live")

    async def update_live_score(self, game_id: str, host_score: int, opponent_score: int) -> ApiResponse:
        return await self._client.post(
            f"/games/{game_id}/live/score",
            {"hostScore": host_score, "opponentScore": opponent_score},
        )

    async def get_game_history(self, user_id: str, page: int = 1, limit: int = 20) -> ApiResponse:
        return await self._client.get(
            f"/users/{user_id}/game-history", {"page": page, "limit": limit}
        )

    async def report_game_result(self, game_id: str, result: Any) -> ApiResponse:
        return await self._client.post(f"/games/{game_id}/result", result)
