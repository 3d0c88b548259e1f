"""Meal phases and the fixed dining schedule tables."""

from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from zoneinfo import ZoneInfo

VENUE_TIMEZONE = ZoneInfo("America/New_York")

SATURDAY = 6
SUNDAY = 7


class MealPhase(Enum):
    """Meal phase with its display name and API slot identifier."""

    BREAKFAST = ("Breakfast", "breakfast")
    LUNCH = ("Lunch", "lunch")
    DINNER = ("Dinner", "dinner")
    CLOSED = ("Closed", "")

    @property
    def display_name(self) -> str:
        return self.value[0]

    @property
    def api_slot(self) -> str:
        return self.value[1]

    @classmethod
    def from_slot(cls, slot: str) -> "MealPhase | None":
        """Return the phase served in an API slot, or None for "anytime"."""
        for phase in (cls.BREAKFAST, cls.LUNCH, cls.DINNER):
            if phase.api_slot == slot:
                return phase
        return None


@dataclass(frozen=True)
class MealPeriod:
    """A meal phase served between two venue-local wall times."""

    phase: MealPhase
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int

    @property
    def start_minutes(self) -> int:
        return self.start_hour * 60 + self.start_minute

    @property
    def end_minutes(self) -> int:
        return self.end_hour * 60 + self.end_minute

    @property
    def start_time(self) -> time:
        return time(self.start_hour, self.start_minute)

    @property
    def end_time(self) -> time:
        return time(self.end_hour, self.end_minute)


# Hot breakfast and continental are served back to back and count as one period.
WEEKDAY_SCHEDULE: tuple[MealPeriod, ...] = (
    MealPeriod(MealPhase.BREAKFAST, 7, 0, 9, 30),
    MealPeriod(MealPhase.LUNCH, 10, 30, 14, 30),
    MealPeriod(MealPhase.DINNER, 16, 30, 19, 30),
)

SATURDAY_SCHEDULE: tuple[MealPeriod, ...] = (
    MealPeriod(MealPhase.BREAKFAST, 8, 0, 9, 0),
    MealPeriod(MealPhase.LUNCH, 11, 0, 13, 0),
    MealPeriod(MealPhase.DINNER, 16, 30, 18, 30),
)

SUNDAY_SCHEDULE: tuple[MealPeriod, ...] = (
    MealPeriod(MealPhase.BREAKFAST, 8, 0, 9, 0),
    MealPeriod(MealPhase.LUNCH, 11, 30, 14, 0),
    MealPeriod(MealPhase.DINNER, 17, 0, 19, 30),
)


def schedule_for(weekday: int) -> tuple[MealPeriod, ...]:
    """Return the meal periods for an ISO weekday (Monday=1, Sunday=7)."""
    if weekday == SUNDAY:
        return SUNDAY_SCHEDULE
    if weekday == SATURDAY:
        return SATURDAY_SCHEDULE
    return WEEKDAY_SCHEDULE


def schedule_for_date(day: date) -> tuple[MealPeriod, ...]:
    """Return the meal periods served on a venue-local date."""
    return schedule_for(day.isoweekday())


def period_for_phase(
    schedule: tuple[MealPeriod, ...], phase: MealPhase
) -> MealPeriod | None:
    """Return the first period serving a phase, if any."""
    for period in schedule:
        if period.phase == phase:
            return period
    return None
