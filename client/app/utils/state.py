"""
client/app/utils/state.py

Booking drafts and user language with Redis persistence.

The draft owns the current selection (date + time); the slot grid is rebuilt
from it on every render.
"""

import json
import logging
from dataclasses import asdict, dataclass, replace
import datetime as dt
from typing import Optional

import redis.asyncio as redis

from client.app.config import settings

logger = logging.getLogger(__name__)

# TTL for language: 30 days
LANG_TTL = 60 * 60 * 24 * 30


@dataclass(frozen=True)
class BookingDraft:
    business_id: str
    service_id: Optional[str] = None
    date: Optional[str] = None  # "YYYY-MM-DD"
    time: Optional[str] = None  # "HH:MM"
    view_year: Optional[int] = None
    view_month: Optional[int] = None

    @property
    def selected_date(self) -> dt.date | None:
        return dt.date.fromisoformat(self.date) if self.date else None

    @property
    def can_book(self) -> bool:
        return bool(self.date and self.time)

    def with_service(self, service_id: str | None) -> "BookingDraft":
        return replace(self, service_id=service_id)

    def with_date(self, value: dt.date) -> "BookingDraft":
        """New date → the time picked for the old date no longer applies."""
        iso = value.isoformat()
        if iso == self.date:
            return self
        return replace(self, date=iso, time=None, view_year=value.year, view_month=value.month)

    def with_time(self, label: str | None) -> "BookingDraft":
        return replace(self, time=label)

    def with_view(self, year: int, month: int) -> "BookingDraft":
        return replace(self, view_year=year, view_month=month)

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, raw: str) -> "BookingDraft":
        return cls(**json.loads(raw))


class StateStore:
    """Redis wrapper for per-user state."""

    def __init__(self, client: redis.Redis, draft_ttl: int = settings.DRAFT_TTL):
        self.redis = client
        self.draft_ttl = draft_ttl

    # ------------------------------------------------------------------
    # Redis keys
    # ------------------------------------------------------------------

    def _draft_key(self, tg_id: int) -> str:
        return f"booking:draft:{tg_id}"

    def _lang_key(self, tg_id: int) -> str:
        return f"user:lang:{tg_id}"

    # ------------------------------------------------------------------
    # Booking draft
    # ------------------------------------------------------------------

    async def get_draft(self, tg_id: int) -> BookingDraft | None:
        raw = await self.redis.get(self._draft_key(tg_id))
        if raw is None:
            return None
        try:
            return BookingDraft.from_json(raw)
        except (TypeError, ValueError):
            logger.warning(f"Dropping unreadable booking draft for tg_id={tg_id}")
            await self.clear_draft(tg_id)
            return None

    async def save_draft(self, tg_id: int, draft: BookingDraft) -> None:
        await self.redis.setex(self._draft_key(tg_id), self.draft_ttl, draft.to_json())

    async def clear_draft(self, tg_id: int) -> None:
        await self.redis.delete(self._draft_key(tg_id))

    # ------------------------------------------------------------------
    # User language
    # ------------------------------------------------------------------

    async def get_lang(self, tg_id: int) -> str | None:
        return await self.redis.get(self._lang_key(tg_id))

    async def set_lang(self, tg_id: int, lang: str) -> None:
        await self.redis.setex(self._lang_key(tg_id), LANG_TTL, lang)


def create_store() -> StateStore:
    return StateStore(redis.from_url(settings.REDIS_URL, decode_responses=True))
