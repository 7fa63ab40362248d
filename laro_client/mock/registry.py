"""Development fixture registry and mock responder.

Maps a request descriptor (HTTP method plus exact endpoint path) to a
fixture-producing function. Unregistered requests fall through to an explicit
default branch: an empty successful envelope.

Fixtures are hand-authored illustrative payloads, not a contract double.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

import yaml
from pydantic import BaseModel, ValidationError

from laro_client.models.requests import HttpMethod, RequestDescriptor
from laro_client.models.responses import ApiResponse

logger = logging.getLogger(__name__)

FixtureProducer = Callable[[RequestDescriptor], dict[str, Any]]

DEFAULT_MOCK_MESSAGE = "Mock response"


def empty_envelope() -> ApiResponse:
    """Envelope returned for paths with no registered fixture."""
    return ApiResponse(data={}, success=True, message=DEFAULT_MOCK_MESSAGE)


class FixtureSpec(BaseModel):
    """One fixture entry of a YAML fixture file."""

    path: str
    method: HttpMethod = HttpMethod.GET
    response: dict[str, Any]


class FixtureRegistry:
    """Typed (method, path) → fixture producer table."""

    def __init__(self) -> None:
        self._fixtures: dict[tuple[HttpMethod, str], FixtureProducer] = {}

    def register(
        self,
        path: str,
        producer: FixtureProducer,
        methods: Iterable[HttpMethod | str] = (HttpMethod.GET,),
    ) -> None:
        """Register ``producer`` for ``path`` under each of ``methods``."""
        for method in methods:
            self._fixtures[(HttpMethod(method), path)] = producer

    def register_payload(
        self,
        path: str,
        envelope: dict[str, Any],
        methods: Iterable[HttpMethod | str] = (HttpMethod.GET,),
    ) -> None:
        """Register a static envelope; each lookup returns a fresh copy."""
        self.register(path, lambda _descriptor: copy.deepcopy(envelope), methods)

    def lookup(self, descriptor: RequestDescriptor) -> FixtureProducer | None:
        return self._fixtures.get((descriptor.method, descriptor.path))

    def resolve(self, descriptor: RequestDescriptor) -> ApiResponse | None:
        """Fixture envelope for ``descriptor``, or None when nothing is registered."""
        producer = self.lookup(descriptor)
        if producer is None:
            return None
        return ApiResponse.model_validate(producer(descriptor))

    def update(self, other: FixtureRegistry) -> None:
        """Copy every fixture of ``other`` into this registry (``other`` wins)."""
        self._fixtures.update(other._fixtures)

    def __contains__(self, key: tuple[HttpMethod | str, str]) -> bool:
        method, path = key
        return (HttpMethod(method), path) in self._fixtures

    def __len__(self) -> int:
        return len(self._fixtures)

    @classmethod
    def from_yaml(cls, yaml_path: str) -> FixtureRegistry:
        """Load static fixtures from a YAML file.

        Expected layout::

            fixtures:
              - path: /teams
                method: GET
                response: {data: [...], success: true, message: Success}

        A missing or unparsable file yields an empty registry; invalid entries
        are skipped.
        """
        registry = cls()
        path = Path(yaml_path)

        if not path.exists():
            logger.warning("Fixture file not found at %s, no file fixtures loaded", yaml_path)
            return registry

        try:
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            logger.error("Failed to parse fixture YAML at %s: %s", yaml_path, exc)
            return registry

        if not isinstance(raw, dict) or not isinstance(raw.get("fixtures"), list):
            logger.warning("Fixture YAML missing 'fixtures' list, no file fixtures loaded")
            return registry

        for index, entry in enumerate(raw["fixtures"]):
            try:
                spec = FixtureSpec.model_validate(entry)
            except ValidationError as exc:
                logger.error("Invalid fixture #%d in %s: %s, skipping", index, yaml_path, exc)
                continue
            registry.register_payload(spec.path, spec.response, methods=(spec.method,))

        logger.info("Loaded %d fixtures from %s", len(registry), yaml_path)
        return registry


class MockResponder:
    """Answers dispatches from the fixture registry in development mode.

    Args:
        registry: Fixture table.
        latency_seconds: Simulated network delay before each mock response.
    """

    def __init__(self, registry: FixtureRegistry, latency_seconds: float = 0.3) -> None:
        self._registry = registry
        self._latency_seconds = latency_seconds

    @property
    def registry(self) -> FixtureRegistry:
        return self._registry

    async def respond(self, descriptor: RequestDescriptor) -> ApiResponse:
        """Short-circuit a dispatch: wait, then return the fixture or the default envelope."""
        logger.info(
            "Development mode: using mock data for %s %s",
            descriptor.method.value,
            descriptor.endpoint,
            extra={"method": descriptor.method.value, "endpoint": descriptor.endpoint},
        )
        if self._latency_seconds > 0:
            await asyncio.sleep(self._latency_seconds)

        response = self._registry.resolve(descriptor)
        if response is None:
            return empty_envelope()
        return response

    def fallback(self, descriptor: RequestDescriptor) -> ApiResponse | None:
        """Fixture standing in for a failed real dispatch, if one is registered."""
        response = self._registry.resolve(descriptor)
        if response is not None:
            logger.warning(
                "API failed, falling back to mock data for %s %s",
                descriptor.method.value,
                descriptor.endpoint,
                extra={"method": descriptor.method.value, "endpoint": descriptor.endpoint},
            )
        return response
