"""
client/app/utils/api.py

HTTP client for the marketplace API.

Bot → Marketplace API (/api/...)

GET results go through QueryCache; booking writes invalidate the
/api/bookings and booked-slots prefixes.
"""

import logging
from datetime import date
from typing import Optional

import httpx
from pydantic import ValidationError

from client.app.config import settings
from client.app.schemas import (
    BookingCreate,
    BookingRead,
    BusinessHoursRead,
    BusinessRead,
    CategoryRead,
    HolidayRead,
    ServiceRead,
    UserRead,
)
from client.app.utils.cache import QueryCache, create_cache

logger = logging.getLogger(__name__)

USER_HEADER = "X-Telegram-User"
MIN_SEARCH_LENGTH = 2


class UnauthorizedError(Exception):
    """API answered 401: the user has to log in (again)."""


def booked_slot_labels(payload: list) -> list[str]:
    """
    Shape a booked-slots payload into "HH:MM" labels.

    Accepts ["10:00", ...] and [{"time": "10:00:00", "endTime": ...}, ...].
    """
    labels = []
    for item in payload or []:
        value = item.get("time") if isinstance(item, dict) else item
        if not isinstance(value, str):
            continue
        # "HH:MM:SS" → "HH:MM"
        if len(value) == 8 and value.count(":") == 2:
            value = value[:5]
        labels.append(value)
    return labels


class ApiClient:
    """Async client for the marketplace API."""

    def __init__(
        self,
        base_url: str = settings.API_URL,
        timeout: float = settings.API_TIMEOUT,
        cache: QueryCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.cache = cache if cache is not None else create_cache()
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        tg_id: int | None = None,
        **kwargs
    ) -> Optional[dict | list]:
        """
        Base HTTP request.

        Returns parsed JSON, or None on 204 / error.
        Raises UnauthorizedError on 401.
        """
        url = f"{self.base_url}{path}"

        headers = {}
        if tg_id is not None:
            headers[USER_HEADER] = str(tg_id)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                resp = await client.request(method, url, headers=headers, **kwargs)
            except httpx.HTTPError as e:
                logger.error(f"API request failed: {method} {path} -> {e}")
                return None

        if resp.status_code == 401:
            raise UnauthorizedError(f"{method} {path}")

        if resp.status_code == 204:
            return None

        if resp.status_code >= 400:
            logger.error(f"API error: {method} {path} -> {resp.status_code}")
            return None

        try:
            return resp.json()
        except ValueError:
            logger.error(f"API returned invalid JSON: {method} {path}")
            return None

    async def _get(self, path: str, tg_id: int | None = None, **kwargs) -> Optional[dict | list]:
        """Cached GET. Per-user results are cached per tg_id."""
        key = path if tg_id is None else f"{path}#{tg_id}"
        if kwargs.get("params"):
            key += "?" + "&".join(f"{k}={v}" for k, v in sorted(kwargs["params"].items()))

        cached = await self.cache.get(key)
        if cached is not None:
            return cached

        result = await self._request("GET", path, tg_id=tg_id, **kwargs)
        if result is not None:
            await self.cache.set(key, result)
        return result

    @staticmethod
    def _parse(model, data):
        if data is None:
            return None
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            return None

    @classmethod
    def _parse_list(cls, model, data) -> list:
        if not isinstance(data, list):
            return []
        items = (cls._parse(model, item) for item in data)
        return [item for item in items if item is not None]

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    async def get_current_user(self, tg_id: int) -> Optional[UserRead]:
        """GET /api/auth/user. None for anonymous users."""
        try:
            data = await self._request("GET", "/api/auth/user", tg_id=tg_id)
        except UnauthorizedError:
            return None
        return self._parse(UserRead, data)

    async def logout(self, tg_id: int) -> bool:
        """POST /api/logout"""
        try:
            await self._request("POST", "/api/logout", tg_id=tg_id)
        except UnauthorizedError:
            logger.info(f"Logout for tg_id={tg_id}: session already gone")
        await self.cache.invalidate("/api/bookings")
        return True

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    async def get_categories(self) -> list[CategoryRead]:
        """GET /api/categories"""
        return self._parse_list(CategoryRead, await self._get("/api/categories"))

    async def get_category(self, slug: str) -> Optional[CategoryRead]:
        """GET /api/categories/{slug}"""
        return self._parse(CategoryRead, await self._get(f"/api/categories/{slug}"))

    # ------------------------------------------------------------------
    # Businesses
    # ------------------------------------------------------------------

    async def get_businesses(self, category_slug: str | None = None) -> list[BusinessRead]:
        """GET /api/businesses?categorySlug=..."""
        params = {"categorySlug": category_slug} if category_slug else None
        return self._parse_list(BusinessRead, await self._get("/api/businesses", params=params))

    async def search_businesses(self, query: str) -> list[BusinessRead]:
        """GET /api/search?q=... Short queries return nothing."""
        query = query.strip()
        if len(query) < MIN_SEARCH_LENGTH:
            return []
        return self._parse_list(BusinessRead, await self._get("/api/search", params={"q": query}))

    async def get_business(self, business_id: str) -> Optional[BusinessRead]:
        """GET /api/businesses/{id}"""
        return self._parse(BusinessRead, await self._get(f"/api/businesses/{business_id}"))

    async def get_services(self, business_id: str) -> list[ServiceRead]:
        """GET /api/businesses/{id}/services (active only)."""
        services = self._parse_list(ServiceRead, await self._get(f"/api/businesses/{business_id}/services"))
        return [s for s in services if s.is_active]

    async def get_business_hours(self, business_id: str) -> list[BusinessHoursRead]:
        """GET /api/businesses/{id}/hours"""
        return self._parse_list(BusinessHoursRead, await self._get(f"/api/businesses/{business_id}/hours"))

    async def get_holidays(self, business_id: str) -> list[HolidayRead]:
        """GET /api/businesses/{id}/holidays"""
        return self._parse_list(HolidayRead, await self._get(f"/api/businesses/{business_id}/holidays"))

    # ------------------------------------------------------------------
    # Bookings
    # ------------------------------------------------------------------

    async def get_booked_slots(
        self,
        business_id: str,
        target_date: date,
        employee_id: str | None = None,
    ) -> list[str]:
        """GET /api/businesses/{id}/booked-slots/{date} → ["HH:MM", ...]"""
        path = f"/api/businesses/{business_id}/booked-slots/{target_date.isoformat()}"
        params = {"employeeId": employee_id} if employee_id else None
        return booked_slot_labels(await self._get(path, params=params))

    async def create_booking(self, tg_id: int, booking: BookingCreate) -> Optional[BookingRead]:
        """POST /api/bookings. None if the slot was taken or the request failed."""
        payload = booking.model_dump(mode="json", by_alias=True, exclude_none=True)
        try:
            data = await self._request("POST", "/api/bookings", tg_id=tg_id, json=payload)
        finally:
            await self.cache.invalidate("/api/bookings")
            await self.cache.invalidate(f"/api/businesses/{booking.business_id}/booked-slots")
        return self._parse(BookingRead, data)

    async def get_user_bookings(self, tg_id: int) -> list[BookingRead]:
        """GET /api/bookings (current user)."""
        return self._parse_list(BookingRead, await self._get("/api/bookings", tg_id=tg_id))

    async def cancel_booking(self, tg_id: int, booking_id: str) -> Optional[BookingRead]:
        """PATCH /api/bookings/{id}/cancel"""
        data = await self._request("PATCH", f"/api/bookings/{booking_id}/cancel", tg_id=tg_id)
        await self.cache.invalidate("/api/bookings")
        booking = self._parse(BookingRead, data)
        if booking is not None:
            await self.cache.invalidate(f"/api/businesses/{booking.business_id}/booked-slots")
        return booking


# Singleton
api = ApiClient()
