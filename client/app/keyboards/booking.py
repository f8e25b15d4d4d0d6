# client/app/keyboards/booking.py
"""
Inline keyboards of the booking flow.

Slot grid (3 per row):

    [09:00] [✅ 09:30] [~10:00~]
    [10:30] [11:00]    [11:30]
    ─────────────────────────
    [◀️] [1/2] [▶️]
    [⬅️ Back]

Booked slots and disabled dates keep their regular callback; the flow
handler decides whether the press changes anything.
"""

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from client.app.i18n.loader import t, t_list
from client.app.schemas import ServiceRead
from client.app.services.calendar import CalendarMonth, next_month, prev_month
from client.app.services.slots import Slot, get_booking_config
from client.app.utils.pagination import build_nav_row, clamp_page, page_count

NOOP = "book:noop"
SERVICES_PER_PAGE = 5
SLOTS_PER_PAGE = 24

SELECTED_MARK = "✅"
TODAY_MARK = "•"


def strike(text: str) -> str:
    """Crossed-out text via combining long stroke overlay."""
    return "".join(ch + "̶" for ch in text)


def slot_button_text(slot: Slot) -> str:
    if slot.is_selected:
        return f"{SELECTED_MARK} {slot.label}"
    if slot.is_booked:
        return strike(slot.label)
    return slot.label


def time_slots_inline(
    slots: list[Slot],
    lang: str,
    page: int = 0,
    columns: int | None = None,
) -> InlineKeyboardMarkup:
    """Slot grid for the selected day."""
    columns = columns or get_booking_config().grid_columns

    if not slots:
        return InlineKeyboardMarkup(inline_keyboard=[
            [InlineKeyboardButton(text=t("client:booking:no_slots", lang), callback_data=NOOP)],
            [InlineKeyboardButton(text=t("common:back", lang), callback_data="book:back_day")],
        ])

    page = clamp_page(page, len(slots), SLOTS_PER_PAGE)
    start = page * SLOTS_PER_PAGE
    page_items = slots[start:start + SLOTS_PER_PAGE]

    buttons = []
    row = []
    for slot in page_items:
        row.append(InlineKeyboardButton(
            text=slot_button_text(slot),
            callback_data=f"book:time:{slot.label}",
        ))
        if len(row) == columns:
            buttons.append(row)
            row = []
    if row:
        buttons.append(row)

    nav = build_nav_row(page, page_count(len(slots), SLOTS_PER_PAGE), "book:time_page:{p}", NOOP, lang)
    if nav:
        buttons.append(nav)

    if any(s.is_selected for s in slots):
        buttons.append([InlineKeyboardButton(
            text=t("client:booking:confirm_button", lang),
            callback_data="book:confirm",
        )])

    buttons.append([InlineKeyboardButton(text=t("common:back", lang), callback_data="book:back_day")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def month_title(month: CalendarMonth, lang: str) -> str:
    names = t_list("calendar:months", lang, size=12)
    name = names[month.month - 1] if names else str(month.month)
    return f"{name} {month.year}"


def calendar_inline(month: CalendarMonth, lang: str) -> InlineKeyboardMarkup:
    """Month calendar: header with navigation, weekday labels, day grid."""
    py, pm = prev_month(month.year, month.month)
    ny, nm = next_month(month.year, month.month)

    buttons = [[
        InlineKeyboardButton(text=t("common:prev", lang), callback_data=f"book:month:{py}-{pm:02d}"),
        InlineKeyboardButton(text=month_title(month, lang), callback_data=NOOP),
        InlineKeyboardButton(text=t("common:next", lang), callback_data=f"book:month:{ny}-{nm:02d}"),
    ]]

    weekdays = t_list("calendar:weekdays", lang, size=7)
    if weekdays:
        buttons.append([InlineKeyboardButton(text=w, callback_data=NOOP) for w in weekdays])

    for week in month.weeks():
        row = []
        for day in week:
            if day is None:
                row.append(InlineKeyboardButton(text=" ", callback_data=NOOP))
                continue

            text = str(day.value.day)
            if day.is_selected:
                text = f"{SELECTED_MARK}{text}"
            elif day.is_disabled:
                text = strike(text)
            elif day.is_today:
                text = f"{TODAY_MARK}{text}"

            row.append(InlineKeyboardButton(text=text, callback_data=f"book:day:{day.iso}"))
        buttons.append(row)

    buttons.append([InlineKeyboardButton(text=t("common:cancel", lang), callback_data="book:cancel")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def format_price(price: float) -> str:
    return f"{int(price)} KM" if price == int(price) else f"{price:.2f} KM"


def services_inline(
    services: list[ServiceRead],
    lang: str,
    page: int = 0,
    selected_id: str | None = None,
) -> InlineKeyboardMarkup:
    """Service list; the selected one is marked."""
    page = clamp_page(page, len(services), SERVICES_PER_PAGE)
    start = page * SERVICES_PER_PAGE

    buttons = []
    for svc in services[start:start + SERVICES_PER_PAGE]:
        mark = f"{SELECTED_MARK} " if svc.id == selected_id else ""
        duration = t("client:booking:minutes", lang, svc.duration)
        buttons.append([InlineKeyboardButton(
            text=f"{mark}{svc.name} | {duration} | {format_price(svc.price)}",
            callback_data=f"book:svc:{svc.id}",
        )])

    nav = build_nav_row(page, page_count(len(services), SERVICES_PER_PAGE), "book:svc_page:{p}", NOOP, lang)
    if nav:
        buttons.append(nav)

    buttons.append([InlineKeyboardButton(text=t("common:cancel", lang), callback_data="book:cancel")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def confirm_booking_inline(lang: str) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=t("client:booking:confirm_button", lang), callback_data="book:confirm_yes")],
        [InlineKeyboardButton(text=t("common:back", lang), callback_data="book:back_time")],
    ])
