"""Venue and specials selection for the active meal slot."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from chucks_status.domain.menu import ANYTIME_SLOT, MenuItem, MenuResponse, VenueMenu
from chucks_status.domain.schedule import VENUE_TIMEZONE, MealPhase
from chucks_status.domain.status import ChucksStatus

HOME_COOKING = "Home Cooking"


@dataclass(frozen=True)
class WidgetSummary:
    """Compact specials view rendered by home screen widgets."""

    phase: MealPhase
    venue_name: str
    specials: list[MenuItem]
    updated_at: datetime


def active_slot_venues(menu: list[VenueMenu], slot: str) -> list[VenueMenu]:
    """Return venues serving a slot, sorted by venue name."""
    return sorted((venue for venue in menu if venue.slot == slot), key=_venue_name)


def always_available_venues(menu: list[VenueMenu]) -> list[VenueMenu]:
    """Return venues serving all day, sorted by venue name."""
    return active_slot_venues(menu, ANYTIME_SLOT)


def specials_for_phase(menu: list[VenueMenu], phase: MealPhase) -> list[MenuItem]:
    """Return the Home Cooking items served during a phase."""
    return [
        item
        for venue in active_slot_venues(menu, phase.api_slot)
        if venue.venue == HOME_COOKING
        for item in venue.items
    ]


def display_phase(status: ChucksStatus) -> MealPhase:
    """Return the phase whose menu should be shown for a status.

    While closed this is the upcoming phase. Lunch is used when the schedule
    has nothing upcoming, so widgets never render an empty state.
    """
    if status.is_open:
        return status.current_phase
    return status.next_phase or MealPhase.LUNCH


def display_slot(status: ChucksStatus) -> str:
    """Return the API slot whose menu should be shown for a status."""
    return display_phase(status).api_slot


def venue_today(now: datetime | None = None) -> date:
    """Return the current venue-local date."""
    return (now or datetime.now(tz=UTC)).astimezone(VENUE_TIMEZONE).date()


def date_key(day: date) -> str:
    """Return the menu document key for a date."""
    return day.isoformat()


def menu_for_date(menus: MenuResponse, day: date) -> list[VenueMenu]:
    """Return a date's venues, or an empty list when the date is missing."""
    return menus.get(date_key(day), [])


def available_dates(menus: MenuResponse) -> list[date]:
    """Return the menu's dates in order, skipping malformed keys."""
    dates = []
    for key in menus:
        try:
            dates.append(date.fromisoformat(key))
        except ValueError:
            continue
    return sorted(dates)


def build_widget_summary(
    status: ChucksStatus, day_menu: list[VenueMenu], updated_at: datetime
) -> WidgetSummary:
    """Build the widget payload for the phase a status points at."""
    phase = display_phase(status)
    specials = [] if phase == MealPhase.CLOSED else specials_for_phase(day_menu, phase)
    return WidgetSummary(
        phase=phase,
        venue_name=HOME_COOKING,
        specials=specials,
        updated_at=updated_at,
    )


def _venue_name(venue: VenueMenu) -> str:
    return venue.venue
