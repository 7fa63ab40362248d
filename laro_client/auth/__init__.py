"""Credential state for outbound requests."""

from laro_client.auth.tokens import DEFAULT_HEADERS, AuthTokenManager, HeaderProvider

__all__ = ["DEFAULT_HEADERS", "AuthTokenManager", "HeaderProvider"]
