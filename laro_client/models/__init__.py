"""Public models for the Laro API client."""

from laro_client.models.requests import HttpMethod, RequestDescriptor
from laro_client.models.responses import ApiResponse, PaginatedResponse, Pagination
from laro_client.models.schemas import (
    AuthResponse,
    AuthTokens,
    Court,
    CourtFilters,
    CourtReview,
    Game,
    GameFilters,
    GameInvitation,
    GameStatus,
    GameType,
    GameWithDetails,
    Position,
    RefreshTokenResponse,
    Team,
    TeamFilters,
    TeamMember,
    TeamWithMembers,
    User,
    UserStats,
)

__all__ = [
    "ApiResponse",
    "AuthResponse",
    "AuthTokens",
    "Court",
    "CourtFilters",
    "CourtReview",
    "Game",
    "GameFilters",
    "GameInvitation",
    "GameStatus",
    "GameType",
    "GameWithDetails",
    "HttpMethod",
    "PaginatedResponse",
    "Pagination",
    "Position",
    "RefreshTokenResponse",
    "RequestDescriptor",
    "Team",
    "TeamFilters",
    "TeamMember",
    "TeamWithMembers",
    "User",
    "UserStats",
]
