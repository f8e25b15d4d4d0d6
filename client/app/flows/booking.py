# client/app/flows/booking.py
"""
Booking flow for a customer.

Flow:
1. Service (skipped if the business has none)
2. Date (month calendar, holidays and past days disabled)
3. Time (slot grid; booked slots cannot be selected)
4. Confirm → POST /api/bookings

BookingFlow returns Screens; the aiogram router below only renders them.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Awaitable, Callable

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import CallbackQuery, InlineKeyboardMarkup

from client.app.auth import Session
from client.app.i18n.loader import DEFAULT_LANG, t
from client.app.keyboards.booking import (
    SLOTS_PER_PAGE,
    calendar_inline,
    confirm_booking_inline,
    services_inline,
    time_slots_inline,
)
from client.app.keyboards.common import login_inline
from client.app.schemas import BookingCreate
from client.app.services.calendar import build_month, can_select_date
from client.app.services.slots import (
    BookingConfig,
    ConfigurationError,
    Slot,
    SlotSelection,
    available_labels,
    generate_window_slots,
    get_booking_config,
    resolve_booking_window,
    resolve_slot_duration,
)
from client.app.services.slots.hours import closed_dates
from client.app.utils.api import ApiClient, UnauthorizedError
from client.app.utils.state import BookingDraft, StateStore

logger = logging.getLogger(__name__)


@dataclass
class Screen:
    """What to show: message text + keyboard, or a short alert with no change."""
    text: str = ""
    keyboard: InlineKeyboardMarkup | None = None
    alert: str | None = None
    changed: bool = True


@dataclass
class DayGrid:
    slots: list[Slot] = field(default_factory=list)
    is_closed: bool = False


def format_date(value: date) -> str:
    return value.strftime("%d.%m.%Y")


class BookingFlow:
    def __init__(
        self,
        api: ApiClient,
        store: StateStore,
        config: BookingConfig | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.api = api
        self.store = store
        self.config = config or get_booking_config()
        self.today = today

    # ==========================================================
    # START
    # ==========================================================

    async def start(self, session: Session, business_id: str, lang: str) -> Screen:
        """Entry point: /book/:id"""
        if not session.is_authenticated:
            return Screen(t("auth:login_required", lang), login_inline(lang))

        business = await self.api.get_business(business_id)
        if business is None:
            return Screen(t("client:booking:not_found", lang))

        logger.info(f"[BOOKING] Starting for tg_id={session.tg_id}, business={business_id}")

        draft = BookingDraft(business_id=business_id)
        await self.store.save_draft(session.tg_id, draft)

        services = await self.api.get_services(business_id)
        if services:
            return Screen(
                t("client:booking:title", lang, business.name) + "\n" + t("client:booking:select_service", lang),
                services_inline(services, lang),
            )
        return await self.calendar_screen(draft, lang)

    async def _draft(self, session: Session) -> BookingDraft | None:
        return await self.store.get_draft(session.tg_id)

    def _expired(self, lang: str) -> Screen:
        return Screen(alert=t("common:error", lang), changed=False)

    # ==========================================================
    # SERVICE
    # ==========================================================

    async def services_page(self, session: Session, page: int, lang: str) -> Screen:
        draft = await self._draft(session)
        if draft is None:
            return self._expired(lang)
        services = await self.api.get_services(draft.business_id)
        return Screen(t("client:booking:select_service", lang), services_inline(services, lang, page, draft.service_id))

    async def choose_service(self, session: Session, service_id: str, lang: str) -> Screen:
        draft = await self._draft(session)
        if draft is None:
            return self._expired(lang)

        services = await self.api.get_services(draft.business_id)
        if not any(s.id == service_id for s in services):
            return Screen(alert=t("common:error", lang), changed=False)

        logger.info(f"[BOOKING] Service: {service_id}")
        draft = draft.with_service(service_id)
        await self.store.save_draft(session.tg_id, draft)
        return await self.calendar_screen(draft, lang)

    # ==========================================================
    # DATE
    # ==========================================================

    async def calendar_screen(self, draft: BookingDraft, lang: str) -> Screen:
        today = self.today()
        year = draft.view_year or today.year
        month = draft.view_month or today.month

        holidays = await self.api.get_holidays(draft.business_id)
        cal = build_month(year, month, today, draft.selected_date, closed_dates(holidays))
        return Screen(t("client:booking:select_day", lang), calendar_inline(cal, lang))

    async def show_month(self, session: Session, year: int, month: int, lang: str) -> Screen:
        draft = await self._draft(session)
        if draft is None:
            return self._expired(lang)

        draft = draft.with_view(year, month)
        await self.store.save_draft(session.tg_id, draft)
        return await self.calendar_screen(draft, lang)

    async def choose_date(self, session: Session, value: date, lang: str) -> Screen:
        draft = await self._draft(session)
        if draft is None:
            return self._expired(lang)

        holidays = await self.api.get_holidays(draft.business_id)
        cal = build_month(value.year, value.month, self.today(), draft.selected_date, closed_dates(holidays))
        if not can_select_date(cal.day(value.day)):
            return Screen(alert=t("client:booking:date_disabled", lang), changed=False)

        logger.info(f"[BOOKING] Day: {value.isoformat()}")
        draft = draft.with_date(value)
        await self.store.save_draft(session.tg_id, draft)
        return await self.time_screen(draft, lang)

    # ==========================================================
    # TIME
    # ==========================================================

    async def build_grid(self, draft: BookingDraft) -> DayGrid:
        """Slot grid for the draft's date, rebuilt from fresh inputs."""
        target_date = draft.selected_date
        if target_date is None:
            return DayGrid(is_closed=True)

        business = await self.api.get_business(draft.business_id)
        if business is None:
            return DayGrid(is_closed=True)

        hours = await self.api.get_business_hours(business.id)
        holidays = await self.api.get_holidays(business.id)

        try:
            window = resolve_booking_window(business, hours, holidays, target_date, self.config)
            duration = resolve_slot_duration(business, self.config)
        except ConfigurationError as e:
            logger.warning(f"[BOOKING] Business {business.id} has invalid hours: {e}")
            return DayGrid(is_closed=True)

        if window is None or window.is_empty:
            return DayGrid(is_closed=True)

        booked = await self.api.get_booked_slots(business.id, target_date)
        return DayGrid(slots=generate_window_slots(window, duration, booked, draft.time))

    async def time_screen(self, draft: BookingDraft, lang: str, page: int = 0, grid: DayGrid | None = None) -> Screen:
        grid = grid or await self.build_grid(draft)
        if grid.is_closed:
            return Screen(t("client:booking:no_hours", lang), time_slots_inline([], lang))

        text = t("client:booking:select_time", lang, format_date(draft.selected_date))
        if not available_labels(grid.slots):
            # every slot of the day is taken
            text = t("client:booking:no_slots", lang) + "\n" + text
        return Screen(text, time_slots_inline(grid.slots, lang, page))

    async def time_page(self, session: Session, page: int, lang: str) -> Screen:
        draft = await self._draft(session)
        if draft is None or draft.date is None:
            return self._expired(lang)
        return await self.time_screen(draft, lang, page)

    async def on_select(self, session: Session, label: str, lang: str) -> Screen:
        """
        The only way a time gets selected.

        Booked (or unknown) labels leave the draft untouched.
        """
        draft = await self._draft(session)
        if draft is None or draft.date is None:
            return self._expired(lang)

        grid = await self.build_grid(draft)
        selection = SlotSelection(draft.time)
        if not selection.select(label, grid.slots):
            return Screen(alert=t("client:booking:slot_booked", lang), changed=False)
        if label == draft.time:
            return Screen(changed=False)

        logger.info(f"[BOOKING] Time: {label}")
        draft = draft.with_time(selection.selected)
        await self.store.save_draft(session.tg_id, draft)

        grid = DayGrid(slots=selection.apply(grid.slots))
        page = next((i for i, s in enumerate(grid.slots) if s.is_selected), 0) // SLOTS_PER_PAGE
        return await self.time_screen(draft, lang, page, grid)

    async def back_to_day(self, session: Session, lang: str) -> Screen:
        draft = await self._draft(session)
        if draft is None:
            return self._expired(lang)
        return await self.calendar_screen(draft, lang)

    async def back_to_time(self, session: Session, lang: str) -> Screen:
        draft = await self._draft(session)
        if draft is None or draft.date is None:
            return self._expired(lang)
        return await self.time_screen(draft, lang)

    # ==========================================================
    # CONFIRM
    # ==========================================================

    async def confirm_screen(self, session: Session, lang: str) -> Screen:
        draft = await self._draft(session)
        if draft is None or not draft.can_book:
            return Screen(alert=t("client:booking:select_first", lang), changed=False)

        business = await self.api.get_business(draft.business_id)
        name = business.name if business else "?"
        text = t("client:booking:confirm_text", lang, name, format_date(draft.selected_date), draft.time)
        return Screen(text, confirm_booking_inline(lang))

    async def confirm(self, session: Session, lang: str) -> Screen:
        """Create the booking."""
        if not session.is_authenticated:
            return Screen(t("auth:login_required", lang), login_inline(lang))

        draft = await self._draft(session)
        if draft is None or not draft.can_book:
            return Screen(alert=t("client:booking:select_first", lang), changed=False)

        logger.info(f"[BOOKING] Creating: tg_id={session.tg_id}, date={draft.date}, time={draft.time}")

        request = BookingCreate(
            business_id=draft.business_id,
            service_id=draft.service_id,
            date=draft.selected_date,
            time=draft.time,
        )
        try:
            booking = await self.api.create_booking(session.tg_id, request)
        except UnauthorizedError:
            return Screen(t("auth:login_required", lang), login_inline(lang))

        if booking is None:
            # Slot taken meanwhile: fresh grid without the selection
            draft = draft.with_time(None)
            await self.store.save_draft(session.tg_id, draft)
            screen = await self.time_screen(draft, lang)
            screen.text = t("client:booking:error", lang) + "\n\n" + screen.text
            return screen

        await self.store.clear_draft(session.tg_id)
        return Screen(t("client:booking:success", lang, format_date(booking.date), booking.time[:5]))

    async def cancel(self, session: Session, lang: str) -> Screen:
        await self.store.clear_draft(session.tg_id)
        return Screen(t("client:booking:cancelled", lang))


# ==============================================================
# Router
# ==============================================================

SessionLoader = Callable[[int], Awaitable[Session]]
LangLoader = Callable[[int], Awaitable[str | None]]


async def render(callback: CallbackQuery, screen: Screen) -> None:
    if not screen.changed:
        await callback.answer(screen.alert or "", show_alert=bool(screen.alert))
        return

    try:
        await callback.message.edit_text(text=screen.text, reply_markup=screen.keyboard)
    except TelegramBadRequest as e:
        logger.debug(f"[BOOKING] Screen not updated: {e.message}")
    await callback.answer()


def setup(flow: BookingFlow, get_session: SessionLoader, get_lang: LangLoader) -> Router:
    """Build the booking router."""
    router = Router(name="client_booking")

    async def context(callback: CallbackQuery) -> tuple[Session, str]:
        tg_id = callback.from_user.id
        session = await get_session(tg_id)
        lang = await get_lang(tg_id) or DEFAULT_LANG
        return session, lang

    @router.callback_query(F.data.startswith("book:start:"))
    async def handle_start(callback: CallbackQuery):
        session, lang = await context(callback)
        business_id = callback.data.split(":", 2)[2]
        await render(callback, await flow.start(session, business_id, lang))

    @router.callback_query(F.data.startswith("book:svc_page:"))
    async def handle_service_page(callback: CallbackQuery):
        session, lang = await context(callback)
        page = int(callback.data.split(":")[-1])
        await render(callback, await flow.services_page(session, page, lang))

    @router.callback_query(F.data.startswith("book:svc:"))
    async def handle_service_select(callback: CallbackQuery):
        session, lang = await context(callback)
        service_id = callback.data.split(":", 2)[2]
        await render(callback, await flow.choose_service(session, service_id, lang))

    @router.callback_query(F.data.startswith("book:month:"))
    async def handle_month(callback: CallbackQuery):
        session, lang = await context(callback)
        year, month = callback.data.split(":")[-1].split("-")
        await render(callback, await flow.show_month(session, int(year), int(month), lang))

    @router.callback_query(F.data.startswith("book:day:"))
    async def handle_day_select(callback: CallbackQuery):
        session, lang = await context(callback)
        value = date.fromisoformat(callback.data.split(":")[-1])
        await render(callback, await flow.choose_date(session, value, lang))

    @router.callback_query(F.data.startswith("book:time_page:"))
    async def handle_time_page(callback: CallbackQuery):
        session, lang = await context(callback)
        page = int(callback.data.split(":")[-1])
        await render(callback, await flow.time_page(session, page, lang))

    @router.callback_query(F.data.startswith("book:time:"))
    async def handle_time_select(callback: CallbackQuery):
        session, lang = await context(callback)
        # "book:time:HH:MM"
        label = callback.data.split(":", 2)[2]
        await render(callback, await flow.on_select(session, label, lang))

    @router.callback_query(F.data == "book:back_day")
    async def handle_back_to_day(callback: CallbackQuery):
        session, lang = await context(callback)
        await render(callback, await flow.back_to_day(session, lang))

    @router.callback_query(F.data == "book:back_time")
    async def handle_back_to_time(callback: CallbackQuery):
        session, lang = await context(callback)
        await render(callback, await flow.back_to_time(session, lang))

    @router.callback_query(F.data == "book:confirm")
    async def handle_confirm_screen(callback: CallbackQuery):
        session, lang = await context(callback)
        await render(callback, await flow.confirm_screen(session, lang))

    @router.callback_query(F.data == "book:confirm_yes")
    async def handle_confirm(callback: CallbackQuery):
        session, lang = await context(callback)
        await render(callback, await flow.confirm(session, lang))

    @router.callback_query(F.data == "book:cancel")
    async def handle_cancel(callback: CallbackQuery):
        session, lang = await context(callback)
        await render(callback, await flow.cancel(session, lang))

    @router.callback_query(F.data == "book:noop")
    async def handle_noop(callback: CallbackQuery):
        await callback.answer()

    return router
