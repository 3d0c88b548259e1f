"""Tests for venue ordering and specials selection."""

from datetime import UTC, date, datetime, timedelta

from chucks_status.domain.menu import MenuItem, VenueMenu
from chucks_status.domain.schedule import MealPhase
from chucks_status.domain.status import ChucksStatus
from chucks_status.services.specials import (
    HOME_COOKING,
    active_slot_venues,
    always_available_venues,
    available_dates,
    build_widget_summary,
    display_phase,
    display_slot,
    menu_for_date,
    specials_for_phase,
    venue_today,
)


def _status(
    *, is_open: bool, current: MealPhase, next_phase: MealPhase | None
) -> ChucksStatus:
    return ChucksStatus(
        current_phase=current,
        time_remaining=timedelta(hours=1),
        next_phase=next_phase,
        next_phase_start=None,
        is_open=is_open,
        current_meal_end=None,
    )


def test_active_slot_venues_sorted_by_name(menu) -> None:
    day = menu["2026-10-19"]

    lunch = active_slot_venues(day, "lunch")
    anytime = always_available_venues(day)

    assert [venue.venue for venue in lunch] == ["Grill", "Home Cooking"]
    assert [venue.venue for venue in anytime] == ["Bakery", "Deli"]


def test_specials_come_from_home_cooking(menu) -> None:
    day = menu["2026-10-19"]

    lunch = specials_for_phase(day, MealPhase.LUNCH)
    breakfast = specials_for_phase(day, MealPhase.BREAKFAST)

    assert [item.name for item in lunch] == ["Pizza", "Caesar Salad"]
    assert breakfast == []


def test_display_phase_follows_status() -> None:
    open_lunch = _status(is_open=True, current=MealPhase.LUNCH, next_phase=None)
    waiting = _status(
        is_open=False, current=MealPhase.CLOSED, next_phase=MealPhase.DINNER
    )
    nothing_next = _status(is_open=False, current=MealPhase.CLOSED, next_phase=None)

    assert display_phase(open_lunch) == MealPhase.LUNCH
    assert display_phase(waiting) == MealPhase.DINNER
    assert display_slot(nothing_next) == "lunch"


def test_menu_for_date_and_available_dates(menu) -> None:
    menus = dict(menu)
    menus["special-event"] = []

    assert menu_for_date(menus, date(2026, 10, 20))[0].items[0].name == "Pancakes"
    assert menu_for_date(menus, date(2026, 10, 21)) == []
    assert available_dates(menus) == [date(2026, 10, 19), date(2026, 10, 20)]


def test_venue_today_uses_venue_timezone() -> None:
    # 02:00 UTC on the 20th is still the evening of the 19th in venue time.
    assert venue_today(datetime(2026, 10, 20, 2, tzinfo=UTC)) == date(2026, 10, 19)


def test_build_widget_summary(menu) -> None:
    updated_at = datetime(2026, 10, 19, 15, tzinfo=UTC)
    waiting = _status(
        is_open=False, current=MealPhase.CLOSED, next_phase=MealPhase.DINNER
    )

    summary = build_widget_summary(waiting, menu["2026-10-19"], updated_at)

    assert summary.phase == MealPhase.DINNER
    assert summary.venue_name == HOME_COOKING
    assert summary.specials == [MenuItem(name="Roast Chicken")]
    assert summary.updated_at == updated_at


def test_widget_summary_with_empty_day() -> None:
    status = _status(is_open=True, current=MealPhase.BREAKFAST, next_phase=None)
    day = [VenueMenu(venue="Grill", slot="breakfast", items=[MenuItem(name="Eggs")])]

    summary = build_widget_summary(status, day, datetime(2026, 10, 19, tzinfo=UTC))

    assert summary.phase == MealPhase.BREAKFAST
    assert summary.specials == []
