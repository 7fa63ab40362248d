"""HTTP dispatcher for the Laro backend API.

Builds one request per call from a RequestDescriptor, attaches the default
headers (JSON content type plus the bearer token when set), and normalizes
the outcome: a 2xx JSON envelope is returned verbatim, a non-2xx response
raises HttpError, any request-level httpx failure raises NetworkError.

In development mode dispatch is short-circuited by the mock responder. With
``mock_live_fallback`` the backend is tried first and a registered fixture
stands in for a failed call. Outside development mode no fixture is ever
consulted.

SECURITY: Never logs header values or request bodies.
"""

from __future__ import annotations

import json
import logging
import time
from datetime import date, datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, TypeVar

import httpx
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import to_jsonable_python

from laro_client.auth.tokens import AuthTokenManager, HeaderProvider
from laro_client.cache.store import ResponseCache
from laro_client.config.settings import ClientSettings
from laro_client.errors import ApiError, HttpError, InvalidResponseError, NetworkError
from laro_client.mock.fixtures import default_registry
from laro_client.mock.registry import FixtureRegistry, MockResponder
from laro_client.models.requests import HttpMethod, RequestDescriptor
from laro_client.models.responses import ApiResponse
from laro_client.resilience.retry import RetryStrategy

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _query_value(value: Any) -> str:
    """Render one query value the way the browser's URLSearchParams did."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(item) for item in value)
    return str(value)


def serialize_query(params: Mapping[str, Any]) -> dict[str, str]:
    """Flatten query params to strings, dropping unset (None) values."""
    return {key: _query_value(value) for key, value in params.items() if value is not None}


def encode_json(body: Any) -> bytes:
    """JSON-encode a request body; pydantic models are dumped by alias."""
    if isinstance(body, dict):
        body = {key: value for key, value in body.items() if value is not None}
    return json.dumps(to_jsonable_python(body, by_alias=True, exclude_none=True)).encode("utf-8")


class ApiClient:
    """Client context: dispatcher plus the shared cache and credential state.

    Parameters
    ----------
    settings:
        Client configuration (default: read from ``LARO_*`` environment variables).
    auth:
        Bearer token manager (default: a fresh one).
    header_provider:
        Source of default headers for each dispatch (default: ``auth``).
    cache:
        Response cache (default: in-memory, TTL from settings).
    fixtures:
        Development fixture registry (default: built-in set plus the
        optional YAML fixture file).
    transport:
        httpx transport override, e.g. ``httpx.MockTransport`` or
        ``httpx.ASGITransport`` in tests.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        auth: AuthTokenManager | None = None,
        header_provider: HeaderProvider | None = None,
        cache: ResponseCache | None = None,
        fixtures: FixtureRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings if settings is not None else ClientSettings()
        self._base_url = self._settings.api_url.rstrip("/")
        self._auth = auth if auth is not None else AuthTokenManager()
        self._header_provider: HeaderProvider = (
            header_provider if header_provider is not None else self._auth
        )
        self._cache = (
            cache
            if cache is not None
            else ResponseCache(default_ttl=self._settings.default_cache_ttl_seconds)
        )
        self._transport = transport

        if fixtures is None:
            fixtures = default_registry()
            if self._settings.mock_fixtures_path:
                fixtures.update(FixtureRegistry.from_yaml(self._settings.mock_fixtures_path))
        self._mock = MockResponder(fixtures, latency_seconds=self._settings.mock_latency_ms / 1000)

        if self._settings.is_development_mode:
            logger.info(
                "Development mode enabled (%s)",
                "live backend with fixture fallback"
                if self._settings.mock_live_fallback
                else "mock data only",
            )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def auth(self) -> AuthTokenManager:
        return self._auth

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    @property
    def mock(self) -> MockResponder:
        return self._mock

    # ------------------------------------------------------------------
    # Auth token
    # ------------------------------------------------------------------

    def set_auth_token(self, token: str) -> None:
        self._auth.set_auth_token(token)

    def clear_auth_token(self) -> None:
        self._auth.clear_auth_token()

    # ------------------------------------------------------------------
    # Cache / retry wrappers
    # ------------------------------------------------------------------

    async def with_cache(
        self,
        key: str,
        producer: Callable[[], Awaitable[T]],
        ttl: float | None = None,
    ) -> T:
        return await self._cache.with_cache(key, producer, ttl)

    def clear_cache(self, pattern: str | None = None) -> int:
        return self._cache.clear(pattern)

    async def with_retry(
        self,
        fn: Callable[[], Awaitable[T]],
        max_retries: int | None = None,
        base_delay: float | None = None,
    ) -> T:
        """Retry ``fn`` using the configured budget unless overridden."""
        strategy = RetryStrategy(
            max_retries=self._settings.retry_max_retries if max_retries is None else max_retries,
            base_delay=(
                self._settings.retry_base_delay_seconds if base_delay is None else base_delay
            ),
        )
        return await strategy.execute(fn)

    # ------------------------------------------------------------------
    # HTTP verbs
    # ------------------------------------------------------------------

    async def get(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ApiResponse:
        return await self.request(HttpMethod.GET, endpoint, params=params, headers=headers)

    async def post(
        self,
        endpoint: str,
        data: Any = None,
        headers: Mapping[str, str] | None = None,
        files: Any = None,
    ) -> ApiResponse:
        return await self.request(
            HttpMethod.POST, endpoint, json=data, headers=headers, files=files
        )

    async def put(
        self, endpoint: str, data: Any = None, headers: Mapping[str, str] | None = None
    ) -> ApiResponse:
        return await self.request(HttpMethod.PUT, endpoint, json=data, headers=headers)

    async def patch(
        self, endpoint: str, data: Any = None, headers: Mapping[str, str] | None = None
    ) -> ApiResponse:
        return await self.request(HttpMethod.PATCH, endpoint, json=data, headers=headers)

    async def delete(
        self, endpoint: str, headers: Mapping[str, str] | None = None
    ) -> ApiResponse:
        return await self.request(HttpMethod.DELETE, endpoint, headers=headers)

    async def request(
        self,
        method: HttpMethod | str,
        endpoint: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
        files: Any = None,
    ) -> ApiResponse:
        descriptor = RequestDescriptor(
            method=method,  # normalized to HttpMethod by the descriptor
            endpoint=endpoint,
            params=dict(params) if params else None,
            body=json,
            headers=dict(headers or {}),
            files=files,
        )
        return await self.dispatch(descriptor)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def dispatch(self, descriptor: RequestDescriptor) -> ApiResponse:
        """Execute one request, or answer it from fixtures in development mode."""
        development = self._settings.is_development_mode

        if development and not self._settings.mock_live_fallback:
            return await self._mock.respond(descriptor)

        try:
            return await self._send(descriptor)
        except ApiError as exc:
            logger.error(
                "API request failed: %s %s: %s",
                descriptor.method.value,
                descriptor.endpoint,
                exc.message,
                extra={
                    "method": descriptor.method.value,
                    "endpoint": descriptor.endpoint,
                    "status": getattr(exc, "status", None),
                },
            )
            if development:
                fallback = self._mock.fallback(descriptor)
                if fallback is not None:
                    return fallback
            raise

    async def _send(self, descriptor: RequestDescriptor) -> ApiResponse:
        url = f"{self._base_url}{descriptor.endpoint}"

        # Captured before the await: later token changes do not touch this request.
        # Case-insensitive so per-call values replace defaults regardless of spelling.
        request_headers = httpx.Headers(self._header_provider.headers())
        if descriptor.files:
            # Let httpx write the multipart boundary.
            request_headers.pop("Content-Type", None)
        request_headers.update(descriptor.headers)

        kwargs: dict[str, Any] = {}
        if descriptor.params:
            kwargs["params"] = serialize_query(descriptor.params)
        if descriptor.files:
            kwargs["files"] = descriptor.files
            if descriptor.body is not None:
                kwargs["data"] = {
                    key: _query_value(value)
                    for key, value in descriptor.body.items()
                    if value is not None
                }
        elif descriptor.body is not None:
            kwargs["content"] = encode_json(descriptor.body)

        start = time.monotonic()
        try:
            async with httpx.AsyncClient(
                transport=self._transport, follow_redirects=True
            ) as client:
                response = await client.request(
                    descriptor.method.value, url, headers=request_headers, **kwargs
                )
        except httpx.RequestError as exc:
            raise NetworkError(
                f"Network error: {exc}" if str(exc) else None,
                endpoint=descriptor.endpoint,
            ) from exc

        duration_ms = round((time.monotonic() - start) * 1000, 1)
        logger.debug(
            "%s %s -> %d (%.1fms)",
            descriptor.method.value,
            descriptor.endpoint,
            response.status_code,
            duration_ms,
            extra={
                "method": descriptor.method.value,
                "endpoint": descriptor.endpoint,
                "status": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        if not response.is_success:
            raise self._http_error(response)

        return self._parse_envelope(response)

    @staticmethod
    def _http_error(response: httpx.Response) -> HttpError:
        """Build an HttpError from a non-2xx response, preferring the body's message."""
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        message = body.get("message") or f"HTTP {response.status_code}: {response.reason_phrase}"
        return HttpError(
            status=response.status_code,
            message=message,
            code=body.get("code"),
            details=body.get("details"),
        )

    @staticmethod
    def _parse_envelope(response: httpx.Response) -> ApiResponse:
        if response.status_code == 204 or not response.content:
            return ApiResponse(data=None, success=True)

        try:
            payload = response.json()
        except ValueError as exc:
            raise InvalidResponseError(
                "Response body is not valid JSON", status=response.status_code
            ) from exc

        try:
            return ApiResponse.model_validate(payload)
        except PydanticValidationError as exc:
            raise InvalidResponseError(
                "Response body is not an API envelope", status=response.status_code
            ) from exc
