"""Client context wiring settings, dispatcher and domain services.

One ``LaroApi`` owns one ApiClient, and with it one cache store and one
token manager; every service façade shares them.

    api = LaroApi.from_env()
    await api.auth.login({"email": "...", "password": "..."})
    teams = await api.teams.get_teams(page=1)
"""

from __future__ import annotations

import logging

import httpx

from laro_client.auth.tokens import AuthTokenManager, HeaderProvider
from laro_client.cache.store import CacheStore, ResponseCache
from laro_client.config.settings import ClientSettings
from laro_client.integration.api_client import ApiClient
from laro_client.logging_config import configure_logging
from laro_client.mock.registry import FixtureRegistry
from laro_client.services.auth import AuthService
from laro_client.services.courts import CourtsService
from laro_client.services.games import GamesService
from laro_client.services.teams import TeamsService
from laro_client.services.users import UsersService

logger = logging.getLogger(__name__)


class LaroApi:
    """Entry point bundling the API client and its service façades."""

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        auth: AuthTokenManager | None = None,
        header_provider: HeaderProvider | None = None,
        cache_store: CacheStore | None = None,
        fixtures: FixtureRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings if settings is not None else ClientSettings()
        cache = ResponseCache(store=cache_store, default_ttl=settings.default_cache_ttl_seconds)
        self.client = ApiClient(
            settings,
            auth=auth,
            header_provider=header_provider,
            cache=cache,
            fixtures=fixtures,
            transport=transport,
        )

        self.auth = AuthService(self.client)
        self.users = UsersService(self.client)
        self.games = GamesService(self.client)
        self.teams = TeamsService(self.client)
        self.courts = CourtsService(self.client)

    @classmethod
    def from_env(cls, *, configure_logs: bool = False) -> LaroApi:
        """Build a context from ``LARO_*`` environment variables."""
        settings = ClientSettings()
        if configure_logs:
            configure_logging(settings.log_level)
        logger.info("Laro API client targeting %s", settings.api_url)
        return cls(settings)

    @property
    def settings(self) -> ClientSettings:
        return self.client.settings

    def clear_cache(self, pattern: str | None = None) -> int:
        return self.client.clear_cache(pattern)
