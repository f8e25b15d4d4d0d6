"""Tests for path routing and access levels."""
import pytest

from client.app.auth import Session
from client.app.router import LOGIN_PAGE, NOT_FOUND_PAGE, Route, Router, router
from client.app.schemas import UserRead


def session_with(role):
    return Session(tg_id=1, user=UserRead(id="u", role=role))


class TestResolve:
    def test_root_anonymous_is_landing(self, anonymous_session):
        assert router.resolve("/", anonymous_session).page == "landing"

    def test_root_authenticated_is_home(self, customer):
        assert router.resolve("/", customer).page == "home"

    def test_path_params(self, anonymous_session):
        match = router.resolve("/business/b42", anonymous_session)

        assert match.page == "business_detail"
        assert match.params == {"id": "b42"}

    def test_trailing_slash_and_query(self, anonymous_session):
        match = router.resolve("/category/barber/?ref=home", anonymous_session)

        assert match.page == "category"
        assert match.params == {"slug": "barber"}

    def test_auth_page_redirects_anonymous_to_login(self, anonymous_session):
        match = router.resolve("/book/b1", anonymous_session)

        assert match.page == LOGIN_PAGE
        assert match.redirect
        assert match.params == {"next": "/book/b1"}

    def test_auth_page_for_customer(self, customer):
        match = router.resolve("/book/b1", customer)

        assert match.page == "booking"
        assert match.params == {"id": "b1"}

    def test_unknown_path(self, customer):
        assert router.resolve("/nope/nope", customer).page == NOT_FOUND_PAGE

    def test_loading_session_is_not_authenticated(self):
        loading = Session(tg_id=1, user=UserRead(id="u"), is_loading=True)

        assert router.resolve("/bookings", loading).page == LOGIN_PAGE


class TestRoles:
    @pytest.mark.parametrize("role,page", [
        ("customer", "home"),
        ("business_owner", "owner_dashboard"),
        ("admin", "owner_dashboard"),
    ])
    def test_owner_area(self, role, page):
        assert router.resolve("/owner", session_with(role)).page == page

    def test_admin_area_denied_for_owner(self):
        match = router.resolve("/superadmin/users", session_with("business_owner"))

        assert match.page == "home"
        assert match.redirect

    def test_admin_area_for_admin(self):
        assert router.resolve("/superadmin/users", session_with("admin")).page == "admin_users"


def test_first_rule_wins(anonymous_session):
    custom = Router([Route("/x/:id", "first"), Route("/x/:id", "second")])

    assert custom.resolve("/x/1", anonymous_session).page == "first"
