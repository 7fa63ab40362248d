"""Shared plumbing for the domain service façades."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Awaitable, Callable, Mapping, Union

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from laro_client.integration.api_client import ApiClient
from laro_client.models.requests import HttpMethod
from laro_client.models.responses import ApiResponse

logger = logging.getLogger(__name__)

MINUTE = 60.0

Filters = Union[BaseModel, Mapping[str, Any], None]


def build_params(filters: Filters = None, **extra: Any) -> dict[str, Any]:
    """Merge list filters and explicit params, dropping unset values.

    Filter models contribute their camelCase keys; explicit params win.
    """
    params: dict[str, Any] = {}
    if isinstance(filters, BaseModel):
        params.update(filters.model_dump(by_alias=True, exclude_none=True, mode="json"))
    elif filters:
        params.update(filters)
    params.update(extra)
    return {key: value for key, value in params.items() if value is not None}


def cache_key(prefix: str, *parts: Any, params: Mapping[str, Any] | None = None) -> str:
    """Join a key prefix, path parts and (optionally) canonical JSON of the params."""
    segments = [prefix, *(str(part) for part in parts)]
    if params is not None:
        segments.append(
            json.dumps(to_jsonable_python(dict(params)), sort_keys=True, separators=(",", ":"))
        )
    return "-".join(segments)


class BaseService:
    """Base façade over one ApiClient context."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    async def _cached(
        self,
        key: str,
        producer: Callable[[], Awaitable[ApiResponse]],
        ttl: float,
    ) -> ApiResponse:
        return await self._client.with_cache(key, producer, ttl)

    async def _retried(
        self,
        method: HttpMethod,
        endpoint: str,
        data: Any = None,
        files: Any = None,
    ) -> ApiResponse:
        """Dispatch a mutation with automatic retry.

        Idempotent verbs are always retried. A POST is sent once unless
        ``retry_non_idempotent`` is enabled; then every attempt carries the
        same ``Idempotency-Key`` so the backend can drop duplicates.
        """
        if method.is_idempotent:
            return await self._client.with_retry(
                lambda: self._client.request(method, endpoint, json=data, files=files)
            )

        if not self._client.settings.retry_non_idempotent:
            return await self._client.request(method, endpoint, json=data, files=files)

        headers = {"Idempotency-Key": str(uuid.uuid4())}
        logger.debug("Retrying %s %s under an idempotency key", method.value, endpoint)
        return await self._client.with_retry(
            lambda: self._client.request(
                method, endpoint, json=data, headers=headers, files=files
            )
        )
