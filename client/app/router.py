"""
client/app/router.py

Path → page table with access levels.

- match path pattern ("/business/:id"), first rule wins
- check the session against the access level
- unknown path = not_found
"""

import logging
import re
from dataclasses import dataclass, field

from client.app.auth import ROLE_ADMIN, ROLE_OWNER, Session

logger = logging.getLogger(__name__)

PUBLIC = "public"
AUTH = "auth"
OWNER = "owner"
ADMIN = "admin"

LOGIN_PAGE = "login"
NOT_FOUND_PAGE = "not_found"

PARAM_RE = re.compile(r":(\w+)")


@dataclass(frozen=True)
class Route:
    pattern: str
    page: str
    access: str = PUBLIC
    # Page shown instead for authenticated users (e.g. landing → home)
    auth_page: str | None = None

    @property
    def regex(self) -> re.Pattern:
        return re.compile("^" + PARAM_RE.sub(r"(?P<\1>[^/]+)", self.pattern) + "/?$")


@dataclass(frozen=True)
class RouteMatch:
    page: str
    params: dict[str, str] = field(default_factory=dict)
    redirect: bool = False
    path: str = "/"


ROUTES: list[Route] = [
    Route("/", "landing", auth_page="home"),
    Route("/login", LOGIN_PAGE),
    Route("/register", "register"),
    Route("/search", "search"),
    Route("/category/:slug", "category"),
    Route("/business/:id", "business_detail"),
    Route("/privacy", "privacy"),
    Route("/terms", "terms"),

    Route("/book/:id", "booking", AUTH),
    Route("/bookings", "user_bookings", AUTH),
    Route("/profile", "profile", AUTH),
    Route("/admin/create-business", "create_business", AUTH),

    Route("/admin", "owner_dashboard", OWNER),
    Route("/owner", "owner_dashboard", OWNER),
    Route("/owner/bookings", "owner_bookings", OWNER),
    Route("/owner/hours", "owner_working_hours", OWNER),

    Route("/superadmin/users", "admin_users", ADMIN),
    Route("/superadmin/businesses", "admin_business_approval", ADMIN),
]


def is_allowed(access: str, session: Session) -> bool:
    if access == PUBLIC:
        return True
    if access == AUTH:
        return session.is_authenticated
    if access == OWNER:
        return session.has_role(ROLE_OWNER)
    if access == ADMIN:
        return session.has_role(ROLE_ADMIN)
    return False


class Router:
    def __init__(self, routes: list[Route] | None = None):
        self.routes = routes if routes is not None else ROUTES
        self._compiled = [(r, r.regex) for r in self.routes]

    def resolve(self, path: str, session: Session) -> RouteMatch:
        path = path.split("?", 1)[0] or "/"

        for route, regex in self._compiled:
            m = regex.match(path)
            if not m:
                continue

            if not is_allowed(route.access, session):
                if not session.is_authenticated:
                    logger.info(f"Route {path}: login required")
                    return RouteMatch(LOGIN_PAGE, {"next": path}, redirect=True)
                logger.info(f"Route {path}: role {session.role} not allowed")
                return RouteMatch("home", redirect=True)

            page = route.auth_page if route.auth_page and session.is_authenticated else route.page
            return RouteMatch(page, m.groupdict(), path=path)

        return RouteMatch(NOT_FOUND_PAGE, path=path)


router = Router()
