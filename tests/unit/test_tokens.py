"""Unit tests for the auth token manager."""

from __future__ import annotations

from laro_client.auth.tokens import AuthTokenManager
from laro_client.models.schemas import AuthTokens


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestBearerHeader:
    def test_defaults_to_json_content_type_only(self) -> None:
        manager = AuthTokenManager()

        assert manager.headers() == {"Content-Type": "application/json"}
        assert manager.is_authenticated is False
        assert manager.access_token is None

    def test_set_replaces_previous_token(self) -> None:
        manager = AuthTokenManager()

        manager.set_auth_token("a")
        manager.set_auth_token("b")

        assert manager.headers()["Authorization"] == "Bearer b"
        assert manager.access_token == "b"

    def test_clear_removes_header(self) -> None:
        manager = AuthTokenManager()
        manager.set_auth_token("a")

        manager.clear_auth_token()
        manager.clear_auth_token()

        assert "Authorization" not in manager.headers()

    def test_headers_are_a_snapshot(self) -> None:
        manager = AuthTokenManager()
        manager.set_auth_token("a")

        snapshot = manager.headers()
        snapshot["Authorization"] = "tampered"
        manager.clear_auth_token()

        assert snapshot["Authorization"] == "tampered"
        assert "Authorization" not in manager.headers()


class TestTokenPair:
    def test_store_installs_access_token(self) -> None:
        manager = AuthTokenManager()

        manager.store_tokens(AuthTokens(access_token="acc", refresh_token="ref", expires_in=900))

        assert manager.headers()["Authorization"] == "Bearer acc"
        assert manager.tokens is not None
        assert manager.tokens.refresh_token == "ref"

    def test_refresh_keeps_refresh_token(self) -> None:
        manager = AuthTokenManager()
        manager.store_tokens(AuthTokens(access_token="acc", refresh_token="ref", expires_in=900))

        manager.update_access_token("acc-2", 600)

        assert manager.access_token == "acc-2"
        assert manager.tokens.access_token == "acc-2"
        assert manager.tokens.refresh_token == "ref"
        assert manager.tokens.expires_in == 600

    def test_clear_discards_both_tokens(self) -> None:
        manager = AuthTokenManager()
        manager.store_tokens(AuthTokens(access_token="acc", refresh_token="ref", expires_in=900))

        manager.clear()

        assert manager.tokens is None
        assert manager.is_authenticated is False
        assert manager.is_expired() is False

    def test_expiry_follows_clock(self) -> None:
        clock = FakeClock(100.0)
        manager = AuthTokenManager(clock=clock)
        manager.store_tokens(AuthTokens(access_token="acc", refresh_token="ref", expires_in=60))

        assert manager.is_expired() is False
        assert manager.is_expired(leeway_seconds=60) is True
        clock.now = 160.0
        assert manager.is_expired() is True

    def test_manual_token_never_expires(self) -> None:
        manager = AuthTokenManager()
        manager.set_auth_token("manual")

        assert manager.is_expired() is False
