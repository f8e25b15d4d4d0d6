"""
client/app/utils/pagination.py

Standard nav-row builder: [prev | page/total | next].
"""

import math

from aiogram.types import InlineKeyboardButton

from client.app.i18n.loader import t


def page_count(total: int, per_page: int) -> int:
    return max(1, math.ceil(total / per_page))


def clamp_page(page: int, total: int, per_page: int) -> int:
    return max(0, min(page, page_count(total, per_page) - 1))


def build_nav_row(
    page: int,
    total_pages: int,
    page_cb: str,
    noop_cb: str,
    lang: str,
) -> list[InlineKeyboardButton]:
    """
    Build a standard 3-button nav row.

    Returns empty list when total_pages <= 1 (no pagination needed).

    Args:
        page: current 0-based page index
        total_pages: total number of pages
        page_cb: callback template with ``{p}`` placeholder, e.g. ``"book:svc_page:{p}"``
        noop_cb: callback for disabled buttons, e.g. ``"book:noop"``
        lang: user language code
    """
    if total_pages <= 1:
        return []

    row: list[InlineKeyboardButton] = []

    # prev
    if page > 0:
        row.append(InlineKeyboardButton(
            text=t("common:prev", lang),
            callback_data=page_cb.format(p=page - 1),
        ))
    else:
        row.append(InlineKeyboardButton(text=" ", callback_data=noop_cb))

    # counter
    row.append(InlineKeyboardButton(
        text=f"{page + 1}/{total_pages}",
        callback_data=noop_cb,
    ))

    # next
    if page < total_pages - 1:
        row.append(InlineKeyboardButton(
            text=t("common:next", lang),
            callback_data=page_cb.format(p=page + 1),
        ))
    else:
        row.append(InlineKeyboardButton(text=" ", callback_data=noop_cb))

    return row
