"""Open/closed status calculation for the dining hall."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta

from chucks_status.domain.schedule import (
    VENUE_TIMEZONE,
    MealPeriod,
    MealPhase,
    period_for_phase,
    schedule_for,
    schedule_for_date,
)


@dataclass(frozen=True)
class ChucksStatus:
    """Snapshot of the dining hall state at one instant."""

    current_phase: MealPhase
    time_remaining: timedelta | None
    next_phase: MealPhase | None
    next_phase_start: datetime | None
    is_open: bool
    current_meal_end: datetime | None


def compute_status(now: datetime | None = None) -> ChucksStatus:
    """Compute the status for an instant.

    The instant is converted to venue time before the weekday, hour and
    minute are read. Naive datetimes are taken as UTC. Periods are half-open,
    so a meal's end minute already belongs to whatever follows it.
    """
    instant = _as_aware(now or datetime.now(tz=UTC))
    local = instant.astimezone(VENUE_TIMEZONE)
    today = local.date()
    schedule = schedule_for(today.isoweekday())
    current_minutes = local.hour * 60 + local.minute

    for index, meal in enumerate(schedule):
        if meal.start_minutes <= current_minutes < meal.end_minutes:
            end = _at(today, meal.end_hour, meal.end_minute)
            next_phase = MealPhase.CLOSED
            next_start = None
            if index + 1 < len(schedule):
                following = schedule[index + 1]
                next_phase = following.phase
                next_start = _at(today, following.start_hour, following.start_minute)
            return ChucksStatus(
                current_phase=meal.phase,
                time_remaining=_between(instant, end),
                next_phase=next_phase,
                next_phase_start=next_start,
                is_open=True,
                current_meal_end=end,
            )

        if current_minutes < meal.start_minutes:
            start = _at(today, meal.start_hour, meal.start_minute)
            return ChucksStatus(
                current_phase=MealPhase.CLOSED,
                time_remaining=_between(instant, start),
                next_phase=meal.phase,
                next_phase_start=start,
                is_open=False,
                current_meal_end=None,
            )

    tomorrow = today + timedelta(days=1)
    tomorrow_schedule = schedule_for_date(tomorrow)
    if tomorrow_schedule:
        first = tomorrow_schedule[0]
        next_start = _at(tomorrow, first.start_hour, first.start_minute)
        if next_start <= instant:
            next_start = _at(
                tomorrow + timedelta(days=1), first.start_hour, first.start_minute
            )
        return ChucksStatus(
            current_phase=MealPhase.CLOSED,
            time_remaining=_between(instant, next_start),
            next_phase=first.phase,
            next_phase_start=next_start,
            is_open=False,
            current_meal_end=None,
        )

    return ChucksStatus(
        current_phase=MealPhase.CLOSED,
        time_remaining=None,
        next_phase=None,
        next_phase_start=None,
        is_open=False,
        current_meal_end=None,
    )


def period_start(day: date, period: MealPeriod) -> datetime:
    """Return the aware venue-local start of a period on a date."""
    return _at(day, period.start_hour, period.start_minute)


def compact_countdown(delta: timedelta) -> str:
    """Format a countdown with its largest unit only, e.g. "2h"."""
    hours, minutes, seconds = _split(delta)
    if hours > 0:
        return f"{hours}h"
    if minutes > 0:
        return f"{minutes}m"
    return f"{seconds}s"


def expanded_countdown(delta: timedelta) -> str:
    """Format a countdown with hours and minutes, e.g. "2h 15m"."""
    hours, minutes, seconds = _split(delta)
    if hours > 0 and minutes > 0:
        return f"{hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h"
    if minutes > 0:
        return f"{minutes}m"
    return f"{seconds}s"


def describe_status(status: ChucksStatus) -> str:
    """Return a one-line spoken summary of a status."""
    if status.is_open:
        name = status.current_phase.display_name
        if status.time_remaining is not None:
            return (
                f"Open for {name}. "
                f"Closes in {compact_countdown(status.time_remaining)}."
            )
        return f"Open for {name}."
    if (
        status.next_phase is not None
        and status.next_phase != MealPhase.CLOSED
        and status.time_remaining is not None
    ):
        return (
            f"Closed. {status.next_phase.display_name} starts in "
            f"{compact_countdown(status.time_remaining)}."
        )
    return "Closed for the day."


def format_meal_time(hour: int, minute: int) -> str:
    """Format a wall time as "7 AM" or "4:30 PM"."""
    period = "PM" if hour >= 12 else "AM"
    if hour > 12:
        display_hour = hour - 12
    elif hour == 0:
        display_hour = 12
    else:
        display_hour = hour
    if minute == 0:
        return f"{display_hour} {period}"
    return f"{display_hour}:{minute:02d} {period}"


def meal_hours(phase: MealPhase, weekday: int) -> str:
    """Return the serving window for a phase on an ISO weekday."""
    period = period_for_phase(schedule_for(weekday), phase)
    if period is None:
        return "Not served today"
    start = format_meal_time(period.start_hour, period.start_minute)
    end = format_meal_time(period.end_hour, period.end_minute)
    return f"{start} - {end}"


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _at(day: date, hour: int, minute: int) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=VENUE_TIMEZONE)


def _between(start: datetime, end: datetime) -> timedelta:
    # Same-tzinfo subtraction ignores UTC offsets, so compare in UTC.
    return end.astimezone(UTC) - start.astimezone(UTC)


def _split(delta: timedelta) -> tuple[int, int, int]:
    total_seconds = int(delta.total_seconds())
    return total_seconds // 3600, (total_seconds % 3600) // 60, total_seconds % 60
