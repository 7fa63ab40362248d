"""Teams API services."""

from __future__ import annotations

from typing import Any

from laro_client.models.requests import HttpMethod
from laro_client.models.responses import ApiResponse
from laro_client.services.base import MINUTE, BaseService, Filters, build_params, cache_key


class TeamsService(BaseService):
    """Façade over the ``/teams`` endpoints."""

    async def get_teams(self, filters: Filters = None, page: int = 1, limit: int = 10) -> ApiResponse:
        params = build_params(filters, page=page, limit=limit)
        return await self._cached(
            cache_key("teams", params=params),
            lambda: self._client.get("/teams", params),
            3 * MINUTE,
        )

    async def get_team_by_id(self, team_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("team", team_id),
            lambda: self._client.get(f"/teams/{team_id}"),
            2 * MINUTE,
        )

    async def create_team(self, data: Any) -> ApiResponse:
        return await self._retried(HttpMethod.POST, "/teams", data)

    async def update_team(self, team_id: str, data: Any) -> ApiResponse:
        return await self._client.patch(f"/teams/{team_id}", data)

    async def delete_team(self, team_id: str) -> ApiResponse:
        return await self._client.delete(f"/teams/{team_id}")

    async def join_team(self, team_id: str, message: str | None = None) -> ApiResponse:
        return await self._client.post(f"/teams/{team_id}/join", {"message": message})

    async def leave_team(self, team_id: str) -> ApiResponse:
        return await self._client.post(f"/teams/{team_id}/leave")

    async def get_user_teams(self, user_id: str, page: int = 1, limit: int = 10) -> ApiResponse:
        return await self._client.get(f"/users/{user_id}/teams", {"page": page, "limit": limit})

    async def get_team_members(self, team_id: str, page: int = 1, limit: int = 20) -> ApiResponse:
        return await self._cached(
            cache_key("team-members", team_id, page, limit),
            lambda: self._client.get(f"/teams/{team_id}/members", {"page": page, "limit": limit}),
            2 * MINUTE,
        )

    async def add_team_member(self, team_id: str, user_id: str, role: str = "member") -> ApiResponse:
        return await self._client.post(f"/teams/{team_id}/members", {"userId": user_id, "role": role})

    async def update_team_member(self, team_id: str, member_id: str, data: Any) -> ApiResponse:
        return await self._client.patch(f"/teams/{team_id}/members/{member_id}", data)

    async def remove_team_member(self, team_id: str, member_id: str) -> ApiResponse:
        return await self._client.delete(f"/teams/{team_id}/members/{member_id}")

    async def search_teams(
        self, query: str, filters: Filters = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = {"q": query, **build_params(filters, page=page, limit=limit)}
        return await self._client.get("/teams/search", params)

    async def get_nearby_teams(
        self,
        latitude: float,
        longitude: float,
        radius: float = 10,
        filters: Filters = None,
    ) -> ApiResponse:
        params = {"latitude": latitude, "longitude": longitude, "radius": radius, **build_params(filters)}
        return await self._cached(
            cache_key("nearby-teams", params=params),
            lambda: self._client.get("/teams/nearby", params),
            3 * MINUTE,
        )

    async def get_team_invitations(
        self, status: str | None = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = build_params(status=status, page=page, limit=limit)
        return await self._client.get("/teams/invitations", params)

    async def send_team_invitation(
        self,
        team_id: str,
        user_id: str,
        role: str = "member",
        message: str | None = None,
    ) -> ApiResponse:
        return await self._client.post(
            f"/teams/{team_id}/invite", {"userId": user_id, "role": role, "message": message}
        )

    async def respond_to_invitation(self, invitation_id: str, response: str) -> ApiResponse:
        """Answer a team invitation with ``accept`` or ``decline``."""
        return await self._client.post(
            f"/teams/invitations/{invitation_id}/respond", {"response": response}
        )

    async def get_team_stats(self, team_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("team-stats", team_id),
            lambda: self._client.get(f"/teams/{team_id}/stats"),
            5 * MINUTE,
        )

    async def get_team_leaderboard(
        self,
        filters: Filters = None,  # skillLevel, location
        page: int = 1,
        limit: int = 20,
    ) -> ApiResponse:
        params = build_params(filters, page=page, limit=limit)
        return await self._cached(
            cache_key("team-leaderboard", params=params),
            lambda: self._client.get("/teams/leaderboard", params),
            10 * MINUTE,
        )

    async def transfer_ownership(self, team_id: str, new_captain_id: str) -> ApiResponse:
        return await self._client.post(
            f"/teams/{team_id}/transfer-ownership", {"newCaptainId": new_captain_id}
        )

    async def set_team_lineup(self, team_id: str, lineup: list[dict[str, Any]]) -> ApiResponse:
        """Replace the lineup; entries carry ``memberId``, ``position`` and ``isStarter``."""
        return await self._client.post(f"/teams/{team_id}/lineup", {"lineup": lineup})

    async def get_team_lineup(self, team_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("team-lineup", team_id),
            lambda: self._client.get(f"/teams/{team_id}/lineup"),
            2 * MINUTE,
        )

    async def upload_team_logo(self, team_id: str, file: Any) -> ApiResponse:
        return await self._client.post(f"/teams/{team_id}/logo", files={"logo": file})

    async def get_team_achievements(self, team_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("team-achievements", team_id),
            lambda: self._client.get(f"/teams/{team_id}/achievements"),
            10 * MINUTE,
        )
