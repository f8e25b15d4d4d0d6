"""
client/app/auth.py

Session of the current Telegram user.

The session is loaded once per update and passed explicitly to the router and
flows. The slot grid never sees it.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from client.app.schemas import UserRead

logger = logging.getLogger(__name__)

ROLE_CUSTOMER = "customer"
ROLE_OWNER = "business_owner"
ROLE_ADMIN = "admin"

# Higher rank includes the lower ones
ROLE_RANK = {
    ROLE_CUSTOMER: 0,
    ROLE_OWNER: 1,
    ROLE_ADMIN: 2,
}


@dataclass(frozen=True)
class Session:
    """Who is using the bot right now."""
    tg_id: int
    user: Optional[UserRead] = None
    is_loading: bool = False

    @property
    def is_authenticated(self) -> bool:
        return not self.is_loading and self.user is not None

    @property
    def role(self) -> str | None:
        if not self.is_authenticated:
            return None
        return self.user.role if self.user.role in ROLE_RANK else ROLE_CUSTOMER

    def has_role(self, role: str) -> bool:
        if self.role is None:
            return False
        return ROLE_RANK[self.role] >= ROLE_RANK[role]

    @property
    def is_owner(self) -> bool:
        return self.has_role(ROLE_OWNER)

    @property
    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)


def anonymous(tg_id: int) -> Session:
    return Session(tg_id=tg_id)


async def load_session(api, tg_id: int) -> Session:
    """
    Fetch the current user. Any failure means an anonymous session.
    """
    try:
        user = await api.get_current_user(tg_id)
    except Exception:
        logger.exception(f"load_session({tg_id}) failed")
        return anonymous(tg_id)

    if user is None:
        return anonymous(tg_id)

    logger.info(f"Session: tg_id={tg_id}, user_id={user.id}, role={user.role}")
    return Session(tg_id=tg_id, user=user)
