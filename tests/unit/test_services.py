"""Unit tests for the domain service façades."""

from __future__ import annotations

import json

import httpx
import pytest

from laro_client.api import LaroApi
from laro_client.config.settings import ClientSettings
from laro_client.errors import ApiError, AuthenticationError, HttpError
from laro_client.models.schemas import CourtFilters, TeamFilters
from laro_client.services.base import build_params, cache_key


def _ok(data=None, message: str = "Success") -> httpx.Response:
    return httpx.Response(200, json={"data": data if data is not None else {}, "success": True, "message": message})


def _fail(status: int = 503) -> httpx.Response:
    return httpx.Response(status, json={"success": False, "message": "unavailable"})


@pytest.fixture
def api_factory(settings: ClientSettings, make_transport):
    def build(*responses: httpx.Response, **overrides) -> tuple[LaroApi, object]:
        transport = make_transport(*responses)
        api = LaroApi(settings.model_copy(update=overrides), transport=transport)
        return api, transport

    return build


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestHelpers:
    def test_build_params_merges_filters_and_drops_none(self) -> None:
        params = build_params(CourtFilters(has_lighting=True), page=1, limit=10, status=None)

        assert params == {"hasLighting": True, "page": 1, "limit": 10}

    def test_build_params_accepts_mappings(self) -> None:
        assert build_params({"city": "NYC", "x": None}) == {"city": "NYC"}

    def test_cache_key_is_order_independent(self) -> None:
        assert cache_key("teams", params={"page": 1, "limit": 10}) == cache_key(
            "teams", params={"limit": 10, "page": 1}
        )

    def test_cache_key_parts(self) -> None:
        assert cache_key("team-members", "t1", 1, 20) == "team-members-t1-1-20"


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------

class TestCachedReads:
    @pytest.mark.asyncio
    async def test_get_teams_cached_per_filters(self, api_factory) -> None:
        api, transport = api_factory(_ok({"data": [], "pagination": {}}))

        await api.teams.get_teams(TeamFilters(is_public=True))
        await api.teams.get_teams(TeamFilters(is_public=True))
        await api.teams.get_teams(TeamFilters(is_public=False))

        assert len(transport.requests) == 2
        assert transport.requests[0].url.params["isPublic"] == "true"

    @pytest.mark.asyncio
    async def test_pagination_is_part_of_the_key(self, api_factory) -> None:
        api, transport = api_factory(_ok())

        await api.courts.get_court_reviews("c1", page=1)
        await api.courts.get_court_reviews("c1", page=2)

        assert len(transport.requests) == 2
        assert set(api.client.cache.store.keys()) == {
            "court-reviews-c1-1-10",
            "court-reviews-c1-2-10",
        }

    @pytest.mark.asyncio
    async def test_clear_cache_invalidates_entity(self, api_factory) -> None:
        api, transport = api_factory(_ok({"id": "g1"}))

        await api.games.get_game_by_id("g1")
        api.clear_cache("game-g1")
        await api.games.get_game_by_id("g1")

        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_failed_reads_are_not_cached(self, api_factory) -> None:
        api, transport = api_factory(_fail(500), _ok({"id": "u1"}))

        with pytest.raises(HttpError):
            await api.users.get_user_profile("u1")
        response = await api.users.get_user_profile("u1")

        assert response.data == {"id": "u1"}
        assert len(transport.requests) == 2

    @pytest.mark.asyncio
    async def test_court_availability_key_includes_dates(self, api_factory) -> None:
        api, transport = api_factory(_ok())

        await api.courts.get_court_availability("c1", on_date="2024-06-01")
        await api.courts.get_court_availability("c1", on_date="2024-06-02")

        assert len(transport.requests) == 2
        assert transport.requests[0].url.params["date"] == "2024-06-01"


# ---------------------------------------------------------------------------
# Retries
# ---------------------------------------------------------------------------

class TestRetriedMutations:
    @pytest.mark.asyncio
    async def test_idempotent_mutation_is_retried(self, api_factory) -> None:
        api, transport = api_factory(_fail(), _ok({"id": "u1"}))

        response = await api.users.update_user_profile("u1", {"city": "Boston"})

        assert response.success is True
        assert [r.method for r in transport.requests] == ["PATCH", "PATCH"]

    @pytest.mark.asyncio
    async def test_post_sent_once_by_default(self, api_factory) -> None:
        api, transport = api_factory(_fail())

        with pytest.raises(HttpError):
            await api.games.create_game({"courtId": "c1"})

        assert len(transport.requests) == 1
        assert "Idempotency-Key" not in transport.requests[0].headers

    @pytest.mark.asyncio
    async def test_post_retry_shares_one_idempotency_key(self, api_factory) -> None:
        api, transport = api_factory(_fail(), _fail(), _ok({"id": "g1"}), retry_non_idempotent=True)

        response = await api.games.create_game({"courtId": "c1"})

        assert response.data == {"id": "g1"}
        keys = {r.headers["Idempotency-Key"] for r in transport.requests}
        assert len(transport.requests) == 3
        assert len(keys) == 1

    @pytest.mark.asyncio
    async def test_retry_budget_exhausted(self, api_factory) -> None:
        api, transport = api_factory(_fail(), retry_non_idempotent=True)

        with pytest.raises(HttpError) as exc_info:
            await api.courts.book_court("c1", {"date": "2024-06-01"})

        assert exc_info.value.status == 503
        # settings fixture: retry_max_retries=2
        assert len(transport.requests) == 3


# ---------------------------------------------------------------------------
# Auth token lifecycle
# ---------------------------------------------------------------------------

class TestAuthLifecycle:
    @pytest.fixture
    def api(self, settings: ClientSettings, stub_backend) -> LaroApi:
        return LaroApi(settings, transport=httpx.ASGITransport(app=stub_backend))

    @pytest.mark.asyncio
    async def test_login_installs_bearer_token(self, api: LaroApi) -> None:
        await api.auth.login({"email": "ck@example.com", "password": "hunter2"})

        assert api.client.auth.access_token == "access-1"
        me = await api.auth.get_current_user()
        assert me.success is True
        assert me.data["username"] == "CourtKing23"

    @pytest.mark.asyncio
    async def test_refresh_replaces_access_token(self, api: LaroApi) -> None:
        await api.auth.login({"email": "ck@example.com", "password": "hunter2"})

        await api.auth.refresh_token()

        assert api.client.auth.access_token == "access-2"
        assert api.client.auth.tokens.refresh_token == "refresh-1"

    @pytest.mark.asyncio
    async def test_refresh_without_stored_token(self, api: LaroApi) -> None:
        with pytest.raises(AuthenticationError) as exc_info:
            await api.auth.refresh_token()

        assert isinstance(exc_info.value, ApiError)
        assert exc_info.value.message == "No refresh token available"

    @pytest.mark.asyncio
    async def test_logout_clears_tokens_even_on_failure(self, api: LaroApi) -> None:
        await api.auth.login({"email": "ck@example.com", "password": "hunter2"})

        with pytest.raises(HttpError):
            await api.auth.logout()

        assert api.client.auth.tokens is None
        assert api.client.auth.is_authenticated is False

    @pytest.mark.asyncio
    async def test_get_current_user_failure_is_an_envelope(self, api: LaroApi) -> None:
        response = await api.auth.get_current_user()

        assert response.success is False
        assert response.data is None
        assert response.message == "Failed to get current user"


# ---------------------------------------------------------------------------
# Request shapes
# ---------------------------------------------------------------------------

class TestRequestShapes:
    @pytest.mark.asyncio
    async def test_delete_account_sends_password(self, api_factory) -> None:
        api, transport = api_factory(_ok())

        await api.auth.delete_account("hunter2")

        request = transport.requests[0]
        assert request.method == "DELETE"
        assert json.loads(request.content) == {"password": "hunter2"}

    @pytest.mark.asyncio
    async def test_availability_checks_are_url_encoded(self, api_factory) -> None:
        api, transport = api_factory(_ok({"available": True}))

        await api.auth.check_email_availability("a+b@example.com")
        await api.courts.check_court_name_availability("Rucker Park")

        assert transport.requests[0].url.raw_path == b"/api/auth/check-email/a%2Bb%40example.com"
        assert transport.requests[1].url.raw_path == b"/api/courts/check-name/Rucker%20Park"

    @pytest.mark.asyncio
    async def test_review_with_photos_is_multipart(self, api_factory) -> None:
        api, transport = api_factory(_ok())

        await api.courts.add_court_review(
            "c1", rating=5, comment="Great rims", photos=[("a.jpg", b"jpeg", "image/jpeg")]
        )

        request = transport.requests[0]
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b'name="photos[0]"' in request.content

    @pytest.mark.asyncio
    async def test_review_without_photos_is_json(self, api_factory) -> None:
        api, transport = api_factory(_ok())

        await api.courts.add_court_review("c1", rating=4, comment="Slippery")

        assert json.loads(transport.requests[0].content) == {"rating": 4, "comment": "Slippery"}

    @pytest.mark.asyncio
    async def test_join_team_omits_empty_message(self, api_factory) -> None:
        api, transport = api_factory(_ok())

        await api.teams.join_team("t1")

        assert transport.requests[0].url.path == "/api/teams/t1/join"
        assert json.loads(transport.requests[0].content) == {}

    @pytest.mark.asyncio
    async def test_search_sends_query(self, api_factory) -> None:
        api, transport = api_factory(_ok())

        await api.users.search_users("jordan", {"position": "SG"})

        assert dict(transport.requests[0].url.params) == {
            "q": "jordan",
            "position": "SG",
            "page": "1",
            "limit": "10",
        }

    @pytest.mark.asyncio
    async def test_end_game_scores(self, api_factory) -> None:
        api, transport = api_factory(_ok())

        await api.games.end_game("g1", host_score=21, opponent_score=17)

        assert json.loads(transport.requests[0].content) == {"hostScore": 21, "opponentScore": 17}


# ---------------------------------------------------------------------------
# Client context
# ---------------------------------------------------------------------------

class TestLaroApi:
    def test_services_share_one_client(self, settings: ClientSettings) -> None:
        api = LaroApi(settings)

        assert api.auth._client is api.client
        assert api.courts._client is api.client
        assert api.settings is settings

    def test_contexts_are_isolated(self, settings: ClientSettings) -> None:
        first = LaroApi(settings)
        second = LaroApi(settings)

        first.client.set_auth_token("t")

        assert second.client.auth.is_authenticated is False
        assert first.client.cache is not second.client.cache

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LARO_API_URL", "https://laro.app/api")

        api = LaroApi.from_env()

        assert api.client.base_url == "https://laro.app/api"
