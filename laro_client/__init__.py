"""Resilient async client for the Laro basketball community API."""

from laro_client.api import LaroApi
from laro_client.config.settings import ClientSettings
from laro_client.errors import (
    ApiError,
    AuthenticationError,
    HttpError,
    InvalidResponseError,
    NetworkError,
    ValidationError,
)
from laro_client.integration.api_client import ApiClient
from laro_client.models.responses import ApiResponse, PaginatedResponse

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResponse",
    "AuthenticationError",
    "ClientSettings",
    "HttpError",
    "InvalidResponseError",
    "LaroApi",
    "NetworkError",
    "PaginatedResponse",
    "ValidationError",
]
