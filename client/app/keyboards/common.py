# client/app/keyboards/common.py

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from client.app.categories import CategoryInfo
from client.app.config import settings
from client.app.i18n.loader import get_available_langs, t


def language_inline() -> InlineKeyboardMarkup | None:
    langs = get_available_langs()

    # fewer than two languages: nothing to choose
    if len(langs) < 2:
        return None

    buttons = []

    for lang in langs:
        key = f"common:lang:{lang}"

        # no label for the language: no button
        label = t(key, lang)
        if label == key:
            continue

        buttons.append(
            InlineKeyboardButton(
                text=label,
                callback_data=f"lang:{lang}"
            )
        )

    if not buttons:
        return None

    return InlineKeyboardMarkup(inline_keyboard=[buttons])


def login_inline(lang: str) -> InlineKeyboardMarkup:
    """Opens the marketplace login page."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(
            text=t("auth:login_button", lang),
            url=f"{settings.API_URL.rstrip('/')}/api/login",
        )],
    ])


def categories_inline(categories: list[CategoryInfo], lang: str) -> InlineKeyboardMarkup:
    """Two categories per row."""
    buttons = []
    row = []
    for cat in categories:
        row.append(InlineKeyboardButton(
            text=f"{cat.icon} {cat.title(lang)}",
            callback_data=f"cat:{cat.slug}",
        ))
        if len(row) == 2:
            buttons.append(row)
            row = []
    if row:
        buttons.append(row)
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def businesses_inline(businesses: list) -> InlineKeyboardMarkup:
    """One business per row; pressing opens the booking flow."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=f"📍 {b.name}", callback_data=f"book:start:{b.id}")]
        for b in businesses
    ])


def user_bookings_inline(bookings: list, lang: str) -> InlineKeyboardMarkup | None:
    """Cancel button for every booking that is still active."""
    buttons = [
        [InlineKeyboardButton(
            text=t("bookings:cancel_button", lang, b.date.strftime("%d.%m."), b.time[:5]),
            callback_data=f"bk:cancel:{b.id}",
        )]
        for b in bookings
        if b.is_active
    ]
    if not buttons:
        return None
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def web_page_inline(lang: str, path: str) -> InlineKeyboardMarkup:
    """Opens a page of the marketplace web app."""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(
            text=t("web:open_button", lang),
            url=f"{settings.WEB_URL.rstrip('/')}{path}",
        )],
    ])
