"""
client/app/main.py

Telegram bot entry point.

ONLY:
- bot, dp initialisation
- session + language per update
- path routing (commands → router → page)
- handler registration

Booking logic lives in flows/booking.py.
"""

import asyncio
import logging

from aiogram import Bot, Dispatcher, F
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message

from client.app.auth import Session, load_session
from client.app.categories import default_categories, load_categories
from client.app.config import BOT_TOKEN, settings
from client.app.flows import booking
from client.app.i18n.loader import load_messages, normalize_lang, t
from client.app.keyboards.common import (
    businesses_inline,
    categories_inline,
    language_inline,
    login_inline,
    user_bookings_inline,
    web_page_inline,
)
from client.app.router import LOGIN_PAGE, NOT_FOUND_PAGE, RouteMatch, router
from client.app.utils.api import UnauthorizedError, api
from client.app.utils.state import create_store


# ------------------------------------------------------------------
# Setup
# ------------------------------------------------------------------

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

bot = Bot(token=BOT_TOKEN)
dp = Dispatcher()
store = create_store()

load_messages()


async def get_session(tg_id: int) -> Session:
    return await load_session(api, tg_id)


async def get_lang(tg_id: int) -> str:
    return normalize_lang(await store.get_lang(tg_id))


booking_flow = booking.BookingFlow(api, store)


# ------------------------------------------------------------------
# Pages
# ------------------------------------------------------------------
# Every page takes (message, session, lang, match).

async def show_categories(message: Message, lang: str, text_key: str) -> None:
    categories = load_categories(await api.get_categories()) or default_categories()
    await message.answer(t(text_key, lang), reply_markup=categories_inline(categories, lang))


async def landing_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    await show_categories(message, lang, "landing:welcome")


async def home_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    await show_categories(message, lang, "home:welcome")


async def login_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    await message.answer(t("auth:login_required", lang), reply_markup=login_inline(lang))


async def register_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    await message.answer(t("auth:register", lang), reply_markup=login_inline(lang))


async def search_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    await message.answer(t("search:hint", lang))


async def category_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    slug = match.params["slug"]
    businesses = await api.get_businesses(category_slug=slug)
    if not businesses:
        await message.answer(t("category:empty", lang))
        return
    category = await api.get_category(slug)
    title = category.name_en if category and lang == "en" else (category.name if category else slug)
    await message.answer(title, reply_markup=businesses_inline(businesses))


async def booking_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    screen = await booking_flow.start(session, match.params["id"], lang)
    await message.answer(screen.text, reply_markup=screen.keyboard)


async def user_bookings_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    try:
        bookings = await api.get_user_bookings(session.tg_id)
    except UnauthorizedError:
        await login_page(message, session, lang, match)
        return

    if not bookings:
        await message.answer(t("bookings:empty", lang))
        return

    lines = [
        t("bookings:item", lang, b.business_id, b.date.strftime("%d.%m.%Y"), b.time[:5], b.status)
        for b in bookings
    ]
    await message.answer("\n".join(lines), reply_markup=user_bookings_inline(bookings, lang))


async def profile_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    user = session.user
    name = " ".join(filter(None, (user.first_name, user.last_name))) or t("profile:no_name", lang)
    await message.answer(t("profile:info", lang, name, user.email or "-", t(f"role:{session.role}", lang)))


def web_page(text_key: str):
    """Page that is only served by the web app: a short note and a link to it."""
    async def page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
        await message.answer(t(text_key, lang), reply_markup=web_page_inline(lang, match.path))
    return page


async def not_found_page(message: Message, session: Session, lang: str, match: RouteMatch) -> None:
    await message.answer(t("common:not_found", lang))


PAGES = {
    "landing": landing_page,
    "home": home_page,
    LOGIN_PAGE: login_page,
    "register": register_page,
    "search": search_page,
    "category": category_page,
    "business_detail": booking_page,
    "booking": booking_page,
    "user_bookings": user_bookings_page,
    "profile": profile_page,
    "privacy": web_page("legal:privacy"),
    "terms": web_page("legal:terms"),
    "create_business": web_page("dashboard:create_business"),
    "owner_dashboard": web_page("dashboard:owner"),
    "owner_bookings": web_page("dashboard:owner_bookings"),
    "owner_working_hours": web_page("dashboard:owner_hours"),
    "admin_users": web_page("dashboard:admin_users"),
    "admin_business_approval": web_page("dashboard:admin_businesses"),
    NOT_FOUND_PAGE: not_found_page,
}


async def open_path(message: Message, tg_id: int, path: str) -> None:
    """Resolve path for the user's session and show the page."""
    session = await get_session(tg_id)
    lang = await get_lang(tg_id)
    match = router.resolve(path, session)
    logger.info(f"Path {path} → {match.page} {match.params}")

    page = PAGES.get(match.page)
    if page is None:
        logger.error(f"No page registered for {match.page}")
        page = not_found_page
    await page(message, session, lang, match)


# ------------------------------------------------------------------
# Entry points
# ------------------------------------------------------------------

@dp.message(Command("start"))
async def start_handler(message: Message):
    tg_id = message.from_user.id

    if not await store.get_lang(tg_id):
        guess = normalize_lang(message.from_user.language_code)
        kb = language_inline()
        if kb:
            await message.answer(t("common:lang:choose", guess), reply_markup=kb)
            return
        await store.set_lang(tg_id, guess)

    await open_path(message, tg_id, "/")


@dp.callback_query(F.data.startswith("lang:"))
async def language_callback(callback: CallbackQuery):
    tg_id = callback.from_user.id
    lang = normalize_lang(callback.data.split(":", 1)[1])
    await store.set_lang(tg_id, lang)
    await callback.answer()
    await open_path(callback.message, tg_id, "/")


@dp.message(Command("book"))
async def book_handler(message: Message, command: CommandObject):
    business_id = (command.args or "").strip()
    await open_path(message, message.from_user.id, f"/book/{business_id}" if business_id else "/")


@dp.message(Command("bookings"))
async def bookings_handler(message: Message):
    await open_path(message, message.from_user.id, "/bookings")


@dp.message(Command("search"))
async def search_handler(message: Message, command: CommandObject):
    if not (command.args or "").strip():
        await open_path(message, message.from_user.id, "/search")
        return

    lang = await get_lang(message.from_user.id)
    businesses = await api.search_businesses(command.args or "")
    if not businesses:
        await message.answer(t("search:empty", lang))
        return
    await message.answer(command.args, reply_markup=businesses_inline(businesses))


@dp.message(Command("profile"))
async def profile_handler(message: Message):
    await open_path(message, message.from_user.id, "/profile")


@dp.message(Command("logout"))
async def logout_handler(message: Message):
    tg_id = message.from_user.id
    await api.logout(tg_id)
    await store.clear_draft(tg_id)
    await message.answer(t("auth:logged_out", await get_lang(tg_id)))


@dp.callback_query(F.data.startswith("cat:"))
async def category_callback(callback: CallbackQuery):
    slug = callback.data.split(":", 1)[1]
    await callback.answer()
    await open_path(callback.message, callback.from_user.id, f"/category/{slug}")


@dp.callback_query(F.data.startswith("bk:cancel:"))
async def cancel_booking_callback(callback: CallbackQuery):
    tg_id = callback.from_user.id
    lang = await get_lang(tg_id)
    booking_id = callback.data.split(":", 2)[2]

    try:
        booking = await api.cancel_booking(tg_id, booking_id)
    except UnauthorizedError:
        await callback.answer()
        await callback.message.answer(t("auth:login_required", lang), reply_markup=login_inline(lang))
        return

    if booking is None:
        await callback.answer(t("common:error", lang), show_alert=True)
        return

    logger.info(f"Booking {booking_id} cancelled by tg_id={tg_id}")
    await callback.answer(t("bookings:cancelled", lang))
    await open_path(callback.message, tg_id, "/bookings")


# ------------------------------------------------------------------
# Register handlers
# ------------------------------------------------------------------

dp.include_router(booking.setup(booking_flow, get_session, get_lang))


async def main():
    logger.info("Starting bot polling")
    await dp.start_polling(bot)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
