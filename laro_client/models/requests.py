"""Request descriptors built fresh for every dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlsplit


class HttpMethod(str, Enum):
    """HTTP verbs used by the service façades."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def is_idempotent(self) -> bool:
        return self is not HttpMethod.POST


@dataclass
class RequestDescriptor:
    """One outgoing request, owned solely by the call that built it.

    Query ``params`` apply to GET only; ``body`` and ``files`` to the
    mutating verbs.
    """

    method: HttpMethod
    endpoint: str
    params: dict[str, Any] | None = None
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    files: Any = None

    def __post_init__(self) -> None:
        self.method = HttpMethod(str(self.method.value if isinstance(self.method, Enum) else self.method).upper())
        if self.params and self.method is not HttpMethod.GET:
            raise ValueError(f"query params are only sent with GET, not {self.method.value}")
        if (self.body is not None or self.files) and self.method is HttpMethod.GET:
            raise ValueError("GET requests cannot carry a body")

    @property
    def path(self) -> str:
        """Endpoint path without any query string."""
        return urlsplit(self.endpoint).path
