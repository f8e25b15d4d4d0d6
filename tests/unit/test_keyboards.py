"""Tests for inline keyboards."""
from datetime import date

from client.app.keyboards.booking import (
    NOOP,
    SLOTS_PER_PAGE,
    calendar_inline,
    services_inline,
    slot_button_text,
    strike,
    time_slots_inline,
)
from client.app.keyboards.common import categories_inline, language_inline, user_bookings_inline
from client.app.categories import default_categories
from client.app.schemas import BookingRead, ServiceRead
from client.app.services.calendar import build_month
from client.app.services.slots import Slot, generate_slots


def callbacks(kb):
    return [[b.callback_data for b in row] for row in kb.inline_keyboard]


class TestTimeSlotsInline:
    def test_three_per_row(self):
        slots = generate_slots("09:00", "12:00", 30)

        kb = time_slots_inline(slots, "en")

        assert callbacks(kb)[:2] == [
            ["book:time:09:00", "book:time:09:30", "book:time:10:00"],
            ["book:time:10:30", "book:time:11:00", "book:time:11:30"],
        ]

    def test_booked_slot_is_struck_through(self):
        assert slot_button_text(Slot("10:00", is_booked=True)) == strike("10:00")
        assert slot_button_text(Slot("10:00")) == "10:00"

    def test_selected_slot_marked(self):
        assert slot_button_text(Slot("10:00", is_selected=True)).endswith("10:00")
        assert slot_button_text(Slot("10:00", is_selected=True)) != "10:00"

    def test_confirm_only_with_selection(self):
        def flat(kb):
            return [cb for row in callbacks(kb) for cb in row]

        assert "book:confirm" not in flat(time_slots_inline(generate_slots("09:00", "10:00", 30), "en"))
        assert "book:confirm" in flat(time_slots_inline(generate_slots("09:00", "10:00", 30, selected="09:30"), "en"))

    def test_empty_grid(self):
        kb = time_slots_inline([], "en")

        assert callbacks(kb) == [[NOOP], ["book:back_day"]]
        assert kb.inline_keyboard[0][0].text == "No free slots"

    def test_pagination(self):
        slots = generate_slots("00:00", "23:00", 30)
        assert len(slots) > SLOTS_PER_PAGE

        kb = time_slots_inline(slots, "en", page=1)

        assert kb.inline_keyboard[0][0].callback_data == f"book:time:{slots[SLOTS_PER_PAGE].label}"
        assert ["book:time_page:0", NOOP, NOOP] in callbacks(kb)


class TestCalendarInline:
    def test_layout(self):
        month = build_month(2026, 10, today=date(2026, 10, 19), blocked_dates={"2026-10-25"})

        kb = calendar_inline(month, "en")
        rows = kb.inline_keyboard

        assert rows[0][1].text == "October 2026"
        assert [b.text for b in rows[1]] == ["S", "M", "T", "W", "T", "F", "S"]
        # four blanks before Thursday the 1st
        assert [b.callback_data for b in rows[2][:5]] == [NOOP] * 4 + ["book:day:2026-10-01"]
        assert rows[0][0].callback_data == "book:month:2026-09"
        assert rows[0][2].callback_data == "book:month:2026-11"

    def test_disabled_days_struck(self):
        month = build_month(2026, 10, today=date(2026, 10, 19), blocked_dates={"2026-10-25"})
        texts = {b.callback_data: b.text for row in calendar_inline(month, "en").inline_keyboard for b in row}

        assert texts["book:day:2026-10-25"] == strike("25")
        assert texts["book:day:2026-10-05"] == strike("5")
        assert texts["book:day:2026-10-26"] == "26"


class TestServicesInline:
    def test_selected_service_marked(self):
        services = [
            ServiceRead(id="s1", business_id="b1", name="Cut", price=15, duration=30),
            ServiceRead(id="s2", business_id="b1", name="Beard", price=7.5, duration=20),
        ]

        kb = services_inline(services, "en", selected_id="s2")

        assert kb.inline_keyboard[0][0].text == "Cut | 30 min | 15 KM"
        assert kb.inline_keyboard[1][0].text.endswith("Beard | 20 min | 7.50 KM")
        assert kb.inline_keyboard[1][0].text != "Beard | 20 min | 7.50 KM"


class TestCommonKeyboards:
    def test_language_choice(self):
        kb = language_inline()

        assert callbacks(kb) == [["lang:bs", "lang:en"]]

    def test_categories_two_per_row(self):
        kb = categories_inline(default_categories(), "en")

        assert [len(row) for row in kb.inline_keyboard] == [2, 2, 2]
        assert kb.inline_keyboard[0][0].callback_data == "cat:barber"

    def test_cancel_only_active_bookings(self):
        bookings = [
            BookingRead(id="a", business_id="b1", date=date(2026, 10, 20), time="10:00", status="confirmed"),
            BookingRead(id="c", business_id="b1", date=date(2026, 10, 21), time="11:00", status="cancelled"),
        ]

        kb = user_bookings_inline(bookings, "en")

        assert callbacks(kb) == [["bk:cancel:a"]]

    def test_no_active_bookings(self):
        done = BookingRead(id="c", business_id="b1", date=date(2026, 10, 21), time="11:00", status="completed")

        assert user_bookings_inline([done], "en") is None
