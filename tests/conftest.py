"""Shared test fixtures."""
import os

# Settings() requires the bot token at import time
os.environ.setdefault("TG_BOT_TOKEN", "123456:TEST-token")

from datetime import date
from fnmatch import fnmatch
from unittest.mock import AsyncMock, MagicMock

import pytest

from client.app.auth import Session
from client.app.i18n.loader import load_messages
from client.app.schemas import BusinessRead, UserRead
from client.app.utils.cache import QueryCache
from client.app.utils.state import StateStore


@pytest.fixture(autouse=True)
def messages():
    """Load the real message catalogue."""
    load_messages()
    yield


@pytest.fixture
def fake_redis():
    """AsyncMock Redis backed by a dict (get / setex / delete / scan_iter)."""
    data: dict[str, str] = {}

    async def _get(key):
        return data.get(key)

    async def _setex(key, ttl, value):
        data[key] = value
        return True

    async def _delete(*keys):
        return sum(1 for key in keys if data.pop(key, None) is not None)

    async def _scan_iter(match="*"):
        for key in list(data):
            if fnmatch(key, match):
                yield key

    client = AsyncMock()
    client.get.side_effect = _get
    client.setex.side_effect = _setex
    client.delete.side_effect = _delete
    client.scan_iter = MagicMock(side_effect=_scan_iter)
    client.data = data
    return client


@pytest.fixture
def store(fake_redis) -> StateStore:
    return StateStore(fake_redis, draft_ttl=600)


@pytest.fixture
def cache(fake_redis) -> QueryCache:
    return QueryCache(fake_redis, ttl=60)


@pytest.fixture
def customer() -> Session:
    return Session(tg_id=42, user=UserRead(id="u1", email="ana@example.com", role="customer"))


@pytest.fixture
def anonymous_session() -> Session:
    return Session(tg_id=42)


@pytest.fixture
def business() -> BusinessRead:
    return BusinessRead(
        id="b1",
        name="Studio Ana",
        open_time="09:00",
        close_time="11:00",
        slot_duration=30,
    )


@pytest.fixture
def today() -> date:
    # Monday
    return date(2026, 10, 19)
