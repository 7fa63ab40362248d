"""Generic API response envelope models.

Every backend response is wrapped in this envelope:
{ data: T, success: bool, message: str }

List endpoints put a paginated payload inside ``data``:
{ data: [T, ...], pagination: { page, limit, total, totalPages } }
"""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")
U = TypeVar("U")


class CamelModel(BaseModel):
    """Base model mapping snake_case attributes to the backend's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """JSON envelope returned by every call.

    Callers must check ``success`` before trusting ``data``. Unknown keys sent
    by the backend are kept so the envelope round-trips verbatim.
    """

    model_config = ConfigDict(extra="allow")

    data: T | None = None
    success: bool
    message: str = ""

    def data_as(self, type_: type[U] | Any) -> U:
        """Validate ``data`` against a model or type annotation."""
        return TypeAdapter(type_).validate_python(self.data)


class Pagination(CamelModel):
    """Page metadata; ``total_pages`` must equal ceil(total / limit)."""

    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_total_pages(self) -> Pagination:
        expected = math.ceil(self.total / self.limit)
        if self.total_pages != expected:
            raise ValueError(
                f"totalPages={self.total_pages} does not match "
                f"ceil({self.total} / {self.limit}) = {expected}"
            )
        return self

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> Pagination:
        """Create pagination metadata with a derived page count."""
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


class PaginatedResponse(CamelModel, Generic[T]):
    """One page of results; never holds more items than ``pagination.limit``."""

    data: list[T]
    pagination: Pagination

    @model_validator(mode="after")
    def _check_page_size(self) -> PaginatedResponse[T]:
        if len(self.data) > self.pagination.limit:
            raise ValueError(
                f"page holds {len(self.data)} items but limit is {self.pagination.limit}"
            )
        return self
