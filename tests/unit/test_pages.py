"""Tests for the bot pages behind every route."""
from unittest.mock import AsyncMock

import pytest

from client.app import main
from client.app.auth import ROLE_ADMIN, ROLE_OWNER, Session
from client.app.i18n.loader import t
from client.app.router import LOGIN_PAGE, NOT_FOUND_PAGE, ROUTES
from client.app.schemas import UserRead


def routed_pages() -> set[str]:
    pages = {route.page for route in ROUTES}
    pages |= {route.auth_page for route in ROUTES if route.auth_page}
    # redirect targets of Router.resolve
    return pages | {LOGIN_PAGE, NOT_FOUND_PAGE, "home"}


def test_every_route_has_a_page():
    assert routed_pages() - set(main.PAGES) == set()


def test_no_unrouted_pages():
    assert set(main.PAGES) - routed_pages() == set()


def session_with(role: str, **user) -> Session:
    return Session(tg_id=42, user=UserRead(id="u1", role=role, **user))


@pytest.fixture
def open_as(monkeypatch):
    """open_as(session, path, lang) -> the message mock the page answered on."""
    async def opener(session: Session, path: str, lang: str = "en") -> AsyncMock:
        monkeypatch.setattr(main, "get_session", AsyncMock(return_value=session))
        monkeypatch.setattr(main, "get_lang", AsyncMock(return_value=lang))
        message = AsyncMock()
        await main.open_path(message, session.tg_id, path)
        return message

    return opener


class TestPages:
    async def test_owner_dashboard_links_to_web_app(self, open_as, monkeypatch):
        monkeypatch.setattr(main.settings, "WEB_URL", "https://web.test/")

        message = await open_as(session_with(ROLE_OWNER), "/owner/hours")

        text = message.answer.await_args.args[0]
        button = message.answer.await_args.kwargs["reply_markup"].inline_keyboard[0][0]
        assert text == t("dashboard:owner_hours", "en")
        assert button.url == "https://web.test/owner/hours"

    async def test_admin_pages(self, open_as):
        message = await open_as(session_with(ROLE_ADMIN), "/superadmin/businesses")

        assert message.answer.await_args.args[0] == t("dashboard:admin_businesses", "en")

    async def test_customer_on_owner_page_goes_home(self, open_as, monkeypatch):
        home = AsyncMock()
        monkeypatch.setitem(main.PAGES, "home", home)

        await open_as(session_with("customer"), "/owner")

        home.assert_awaited_once()

    async def test_anonymous_profile_asks_for_login(self, open_as, anonymous_session):
        message = await open_as(anonymous_session, "/profile")

        assert message.answer.await_args.args[0] == t("auth:login_required", "en")

    async def test_profile(self, open_as):
        session = session_with("customer", first_name="Ana", last_name="K", email="ana@example.com")

        message = await open_as(session, "/profile")

        text = message.answer.await_args.args[0]
        assert "Ana K" in text
        assert "ana@example.com" in text
        assert t("role:customer", "en") in text

    async def test_profile_without_name(self, open_as):
        message = await open_as(session_with(ROLE_OWNER), "/profile", lang="bs")

        text = message.answer.await_args.args[0]
        assert t("profile:no_name", "bs") in text
        assert t("role:business_owner", "bs") in text

    async def test_search_hint(self, open_as, anonymous_session):
        message = await open_as(anonymous_session, "/search")

        assert message.answer.await_args.args[0] == t("search:hint", "en")

    async def test_legal_pages(self, open_as, anonymous_session):
        privacy = await open_as(anonymous_session, "/privacy")
        terms = await open_as(anonymous_session, "/terms")

        assert privacy.answer.await_args.args[0] == t("legal:privacy", "en")
        assert terms.answer.await_args.args[0] == t("legal:terms", "en")

    async def test_unknown_path(self, open_as, anonymous_session):
        message = await open_as(anonymous_session, "/nowhere")

        assert message.answer.await_args.args[0] == t("common:not_found", "en")

    async def test_unregistered_page_falls_back_to_not_found(self, open_as, anonymous_session, monkeypatch):
        monkeypatch.delitem(main.PAGES, "terms")

        message = await open_as(anonymous_session, "/terms")

        assert message.answer.await_args.args[0] == t("common:not_found", "en")
