"""Pydantic Settings for the Laro API client.

All environment variables use the LARO_ prefix.
Example: LARO_API_URL=https://laro.app/api, LARO_ENVIRONMENT=development
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """API client configuration validated from environment variables."""

    # Backend
    api_url: str = "http://localhost:3000/api"
    log_level: str = "INFO"

    # Development mode
    environment: str = "production"
    use_mock_data: bool = False
    mock_latency_ms: int = Field(default=300, ge=0)
    mock_live_fallback: bool = False  # Try the backend first, fixtures on failure
    mock_fixtures_path: str | None = None  # Optional YAML fixture file

    # Retry controller
    retry_max_retries: int = Field(default=3, ge=0)
    retry_base_delay_seconds: float = Field(default=1.0, ge=0)
    retry_non_idempotent: bool = False

    # Cache layer
    default_cache_ttl_seconds: float = Field(default=300, ge=0)  # 5 minutes

    model_config = {"env_prefix": "LARO_"}

    @property
    def is_development_mode(self) -> bool:
        """Whether the dev mock responder is active."""
        return self.environment.lower() == "development" or self.use_mock_data
