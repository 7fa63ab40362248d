"""Domain schemas for users, teams, courts and games.

Field names follow the backend's camelCase JSON through aliases. Optional
fields default to None so partial payloads (fixtures, list projections)
still validate.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from laro_client.models.responses import CamelModel


class Position(str, Enum):
    """Basketball positions."""

    PG = "PG"
    SG = "SG"
    SF = "SF"
    PF = "PF"
    C = "C"


class GameType(str, Enum):
    CASUAL = "casual"
    COMPETITIVE = "competitive"
    TOURNAMENT = "tournament"
    PICKUP = "pickup"


class GameStatus(str, Enum):
    OPEN = "open"
    MATCHED = "matched"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class User(CamelModel):
    id: str
    username: str
    email: str
    avatar: str | None = None
    position: Position | None = None
    skill_level: int = Field(default=1, ge=1, le=10)
    rating: float = 0
    location_lat: float | None = None
    location_lng: float | None = None
    city: str | None = None
    max_distance: float = 0
    is_verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserStats(CamelModel):
    user_id: str
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    mvp_count: int = 0
    current_streak: int = 0
    best_streak: int = 0
    total_points: int = 0
    total_assists: int = 0
    total_rebounds: int = 0
    updated_at: datetime | None = None


class Team(CamelModel):
    id: str
    name: str
    logo_url: str | None = None
    captain_id: str
    max_size: int
    min_skill_level: int
    max_skill_level: int
    description: str | None = None
    is_public: bool = True
    rating: float = 0
    games_played: int = 0
    wins: int = 0
    created_at: datetime | None = None


class TeamMember(CamelModel):
    id: str
    team_id: str
    user_id: str
    role: str = "member"  # captain | co_captain | member
    position: Position | None = None
    is_starter: bool = False
    joined_at: datetime | None = None
    user: User | None = None


class TeamWithMembers(Team):
    captain: User | None = None
    members: list[TeamMember] = []
    member_count: int = 0


class Court(CamelModel):
    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    court_type: str  # indoor | outdoor
    surface_type: str | None = None
    has_lighting: bool = False
    has_parking: bool = False
    rating: float = 0
    review_count: int = 0
    is_verified: bool = False
    created_by: str | None = None
    created_at: datetime | None = None
    photos: list[str] = []
    amenities: list[str] = []


class CourtReview(CamelModel):
    id: str
    court_id: str
    user_id: str
    rating: float
    comment: str
    photos: list[str] | None = None
    created_at: datetime | None = None
    user: dict[str, Any] | None = None


class Game(CamelModel):
    id: str
    host_team_id: str
    opponent_team_id: str | None = None
    court_id: str
    scheduled_time: datetime
    duration_minutes: int
    game_type: GameType
    status: GameStatus
    min_skill_level: int | None = None
    max_skill_level: int | None = None
    max_distance: float | None = None
    winner_team_id: str | None = None
    host_score: int | None = None
    opponent_score: int | None = None
    created_at: datetime | None = None


class GameWithDetails(Game):
    host_team: Team | None = None
    opponent_team: Team | None = None
    court: Court | None = None


class GameInvitation(CamelModel):
    id: str
    game_id: str
    invited_team_id: str
    invited_by: str
    status: str  # pending | accepted | declined | expired
    invitation_code: str | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None


class AuthTokens(CamelModel):
    """Access/refresh token pair issued by login and register."""

    access_token: str
    refresh_token: str
    expires_in: int  # seconds


class AuthResponse(CamelModel):
    user: User
    tokens: AuthTokens


class RefreshTokenResponse(CamelModel):
    access_token: str
    expires_in: int


# ---------------------------------------------------------------------------
# List filters, serialized into query parameters
# ---------------------------------------------------------------------------


class CourtFilters(CamelModel):
    court_type: str | None = None
    has_lighting: bool | None = None
    has_parking: bool | None = None
    max_distance: float | None = None
    min_rating: float | None = None


class GameFilters(CamelModel):
    game_type: GameType | None = None
    status: GameStatus | None = None
    skill_range: tuple[int, int] | None = None
    date_range: tuple[datetime, datetime] | None = None
    max_distance: float | None = None


class TeamFilters(CamelModel):
    is_public: bool | None = None
    skill_range: tuple[int, int] | None = None
    has_openings: bool | None = None
    max_distance: float | None = None
