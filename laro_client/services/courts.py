"""Courts API services."""

from __future__ import annotations

from datetime import date
from typing import Any, Sequence
from urllib.parse import quote

from laro_client.models.requests import HttpMethod
from laro_client.models.responses import ApiResponse
from laro_client.services.base import MINUTE, BaseService, Filters, build_params, cache_key


def _photo_files(photos: Sequence[Any] | None) -> dict[str, Any]:
    return {f"photos[{index}]": photo for index, photo in enumerate(photos or ())}


class CourtsService(BaseService):
    """Façade over the ``/courts`` endpoints."""

    async def get_courts(self, filters: Filters = None, page: int = 1, limit: int = 10) -> ApiResponse:
        params = build_params(filters, page=page, limit=limit)
        return await self._cached(
            cache_key("courts", params=params),
            lambda: self._client.get("/courts", params),
            5 * MINUTE,
        )

    async def get_court_by_id(self, court_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("court", court_id),
            lambda: self._client.get(f"/courts/{court_id}"),
            3 * MINUTE,
        )

    async def create_court(self, data: Any) -> ApiResponse:
        return await self._retried(HttpMethod.POST, "/courts", data)

    async def update_court(self, court_id: str, data: Any) -> ApiResponse:
        return await self._client.patch(f"/courts/{court_id}", data)

    async def delete_court(self, court_id: str) -> ApiResponse:
        return await self._client.delete(f"/courts/{court_id}")

    async def search_courts(
        self, query: str, filters: Filters = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = {"q": query, **build_params(filters, page=page, limit=limit)}
        return await self._client.get("/courts/search", params)

    async def get_nearby_courts(
        self,
        latitude: float,
        longitude: float,
        radius: float = 10,
        filters: Filters = None,
    ) -> ApiResponse:
        params = {"latitude": latitude, "longitude": longitude, "radius": radius, **build_params(filters)}
        return await self._cached(
            cache_key("nearby-courts", params=params),
            lambda: self._client.get("/courts/nearby", params),
            3 * MINUTE,
        )

    async def get_court_availability(
        self,
        court_id: str,
        on_date: str | date | None = None,
        start_date: str | date | None = None,
        end_date: str | date | None = None,
    ) -> ApiResponse:
        """Open booking slots for one day or a date range."""
        params = build_params(date=on_date, startDate=start_date, endDate=end_date)
        return await self._cached(
            cache_key("court-availability", court_id, params=params),
            lambda: self._client.get(f"/courts/{court_id}/availability", params),
            5 * MINUTE,
        )

    async def book_court(self, court_id: str, booking: Any) -> ApiResponse:
        """Reserve a slot; ``booking`` carries date, startTime, endTime and optional notes."""
        return await self._retried(HttpMethod.POST, f"/courts/{court_id}/book", booking)

    async def cancel_reservation(self, reservation_id: str) -> ApiResponse:
        return await self._client.delete(f"/courts/reservations/{reservation_id}")

    async def get_user_court_reservations(
        self, user_id: str, status: str | None = None, page: int = 1, limit: int = 10
    ) -> ApiResponse:
        params = build_params(status=status, page=page, limit=limit)
        return await self._client.get(f"/users/{user_id}/reservations", params)

    async def get_court_reviews(self, court_id: str, page: int = 1, limit: int = 10) -> ApiResponse:
        return await self._cached(
            cache_key("court-reviews", court_id, page, limit),
            lambda: self._client.get(f"/courts/{court_id}/reviews", {"page": page, "limit": limit}),
            5 * MINUTE,
        )

    async def add_court_review(
        self,
        court_id: str,
        rating: int,
        comment: str | None = None,
        photos: Sequence[Any] | None = None,
    ) -> ApiResponse:
        """Post a review; attached photos switch the request to multipart form data."""
        review = {"rating": rating, "comment": comment}
        if photos:
            return await self._client.post(
                f"/courts/{court_id}/reviews", review, files=_photo_files(photos)
            )
        return await self._client.post(f"/courts/{court_id}/reviews", review)

    async def update_court_review(self, review_id: str, data: Any) -> ApiResponse:
        return await self._client.patch(f"/courts/reviews/{review_id}", data)

    async def delete_court_review(self, review_id: str) -> ApiResponse:
        return await self._client.delete(f"/courts/reviews/{review_id}")

    async def get_court_stats(self, court_id: str) -> ApiResponse:
        return await self._cached(
            cache_key("court-stats", court_id),
            lambda: self._client.get(f"/courts/{court_id}/stats"),
            10 * MINUTE,
        )

    async def get_popular_courts(
        self,
        latitude: float | None = None,
        longitude: float | None = None,
        radius: float | None = None,
        limit: int = 10,
    ) -> ApiResponse:
        params = build_params(latitude=latitude, longitude=longitude, radius=radius, limit=limit)
        return await self._cached(
            cache_key("popular-courts", params=params),
            lambda: self._client.get("/courts/popular", params),
            15 * MINUTE,
        )

    async def upload_court_photos(self, court_id: str, photos: Sequence[Any]) -> ApiResponse:
        return await self._client.post(f"/courts/{court_id}/photos", files=_photo_files(photos))

    async def report_court_issue(
        self,
        court_id: str,
        issue_type: str,  # maintenance | safety | accessibility | other
        description: str,
        severity: str = "medium",
        photos: Sequence[Any] | None = None,
    ) -> ApiResponse:
        report = {"type": issue_type, "description": description, "severity": severity}
        if photos:
            return await self._client.post(
                f"/courts/{court_id}/report", report, files=_photo_files(photos)
            )
        return await self._client.post(f"/courts/{court_id}/report", report)

    async def check_court_name_availability(self, name: str) -> ApiResponse:
        return await self._client.get(f"/courts/check-name/{quote(name, safe='')}")
