"""Error hierarchy for the API client.

Every error the client raises extends ApiError. The dispatcher normalizes
request failures into NetworkError and non-2xx responses into HttpError;
the retry controller re-raises the last of them once its budget is spent.
"""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Base error for all client errors."""

    message: str = "API request failed"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class NetworkError(ApiError):
    """Transport-level failure; no response was received."""

    message = "Network error occurred"


class HttpError(ApiError):
    """Response received with a non-2xx status.

    ``code`` and ``details`` mirror the structured fields of the error body
    when the backend sends them.
    """

    message = "An error occurred"

    def __init__(
        self,
        status: int,
        message: str | None = None,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.details = details

    def __repr__(self) -> str:
        return f"HttpError(status={self.status}, message={self.message!r}, code={self.code!r})"


class InvalidResponseError(ApiError):
    """2xx response whose body is not a JSON envelope."""

    message = "Invalid response body"


class ValidationError(ApiError):
    """Form-level input validation failure.

    Raised by the calling form layer; the client itself never raises it.
    """

    message = "Validation error"


class AuthenticationError(ApiError):
    """A session operation needs credentials the client does not hold."""

    message = "Not authenticated"
