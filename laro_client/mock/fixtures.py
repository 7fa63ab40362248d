"""Built-in development fixtures.

Illustrative payloads for the list endpoints and the current user. Each list
fixture is registered under the bare service path (``/teams``) and under the
``/api``-prefixed path the web app's routes use (``/api/teams``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from laro_client.mock.registry import FixtureRegistry
from laro_client.models.requests import RequestDescriptor
from laro_client.models.responses import Pagination


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def _now() -> datetime:
    return datetime.now(timezone.utc)


CAPTAIN: dict[str, Any] = {
    "id": "user1",
    "username": "CourtKing23",
    "email": "courtking@example.com",
    "avatar": "",
    "position": "PG",
    "skillLevel": 8,
    "rating": 1847,
    "locationLat": 40.7128,
    "locationLng": -74.0060,
    "city": "New York",
    "maxDistance": 25,
    "isVerified": True,
    "createdAt": "2023-01-15T00:00:00Z",
    "updatedAt": "2024-01-15T00:00:00Z",
}


def _page(items: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "data": {
            "data": items,
            "pagination": Pagination.build(page=1, limit=10, total=len(items)).model_dump(
                by_alias=True
            ),
        },
        "success": True,
        "message": "Success",
    }


def teams_fixture(_descriptor: RequestDescriptor) -> dict[str, Any]:
    return _page(
        [
            {
                "id": "team1",
                "name": "Street Ballers",
                "captainId": "user1",
                "maxSize": 12,
                "minSkillLevel": 6,
                "maxSkillLevel": 10,
                "description": "Competitive street basketball team",
                "isPublic": True,
                "rating": 1750,
                "gamesPlayed": 45,
                "wins": 32,
                "createdAt": "2023-06-01T00:00:00Z",
                "captain": CAPTAIN,
                "members": [],
                "memberCount": 8,
            }
        ]
    )


def games_fixture(_descriptor: RequestDescriptor) -> dict[str, Any]:
    now = _now()
    return _page(
        [
            {
                "id": "game1",
                "hostTeamId": "team1",
                "courtId": "court1",
                "scheduledTime": _iso(now + timedelta(days=1)),
                "durationMinutes": 120,
                "gameType": "pickup",
                "status": "open",
                "minSkillLevel": 6,
                "maxSkillLevel": 10,
                "maxDistance": 25,
                "createdAt": _iso(now),
            }
        ]
    )


def courts_fixture(_descriptor: RequestDescriptor) -> dict[str, Any]:
    return _page(
        [
            {
                "id": "court1",
                "name": "Central Park Basketball Courts",
                "address": "1 Central Park West, New York, NY 10023",
                "latitude": 40.7829,
                "longitude": -73.9654,
                "courtType": "outdoor",
                "surfaceType": "Asphalt",
                "hasLighting": True,
                "hasParking": False,
                "rating": 4.5,
                "reviewCount": 127,
                "isVerified": True,
                "createdAt": _iso(_now()),
                "photos": [],
                "amenities": ["Lighting", "Multiple Courts", "Water Fountain"],
            }
        ]
    )


def current_user_fixture(_descriptor: RequestDescriptor) -> dict[str, Any]:
    return {"data": dict(CAPTAIN), "success": True, "message": "Success"}


def default_registry() -> FixtureRegistry:
    """Registry pre-loaded with the built-in fixture set."""
    registry = FixtureRegistry()
    for resource, producer in (
        ("teams", teams_fixture),
        ("games", games_fixture),
        ("courts", courts_fixture),
    ):
        registry.register(f"/{resource}", producer)
        registry.register(f"/api/{resource}", producer)

    registry.register("/auth/me", current_user_fixture)
    registry.register("/users/me", current_user_fixture)
    return registry
