"""Favorite item reminders ahead of each meal."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol

from chucks_status.domain.favorites import (
    FavoriteMealMatch,
    FavoriteSet,
    find_favorite_matches,
)
from chucks_status.domain.menu import MenuResponse
from chucks_status.domain.schedule import period_for_phase, schedule_for_date
from chucks_status.domain.status import period_start

FAVORITES_TAG = "favorites"
REMINDER_LEAD = timedelta(hours=1)
PREVIEW_LIMIT = 3

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class ScheduledReminder:
    """A local reminder handed to the notification center."""

    id: str
    fire_at: datetime
    title: str
    body: str
    tag: str = FAVORITES_TAG


class NotificationCenter(Protocol):
    """Interface for the platform's local notification delivery."""

    def schedule(self, reminder: ScheduledReminder) -> None:
        """Schedule a reminder, replacing any pending one with the same id."""

    def cancel_all(self, tag: str) -> None:
        """Cancel every pending reminder carrying a tag."""


@dataclass
class NotificationScheduler:
    """Schedules one reminder per meal that serves a favorite item."""

    center: NotificationCenter
    clock: Callable[[], datetime] = _utc_now

    def reschedule(
        self, menus: MenuResponse, favorites: FavoriteSet
    ) -> list[ScheduledReminder]:
        """Replace all favorite reminders with ones for the given menus.

        Reminders whose fire time has already passed are skipped. A failure
        on one meal is logged and does not stop the others.
        """
        self.center.cancel_all(FAVORITES_TAG)
        if favorites.is_empty:
            return []

        now = self.clock()
        scheduled: list[ScheduledReminder] = []
        for match in find_favorite_matches(menus, favorites):
            try:
                reminder = self._build_reminder(match, now)
                if reminder is None:
                    continue
                self.center.schedule(reminder)
            except Exception:
                _logger.exception(
                    "Failed to schedule reminder: date=%s meal=%s",
                    match.date_key,
                    match.phase.display_name,
                )
                continue
            scheduled.append(reminder)

        _logger.info("Scheduled %s favorite reminders", len(scheduled))
        return scheduled

    def _build_reminder(
        self, match: FavoriteMealMatch, now: datetime
    ) -> ScheduledReminder | None:
        try:
            day = date.fromisoformat(match.date_key)
        except ValueError:
            _logger.warning("Skipping menu date with bad key: %s", match.date_key)
            return None

        period = period_for_phase(schedule_for_date(day), match.phase)
        if period is None:
            return None

        fire_at = period_start(day, period) - REMINDER_LEAD
        if fire_at <= now:
            return None

        return ScheduledReminder(
            id=reminder_id(match),
            fire_at=fire_at,
            title=f"{match.phase.display_name} has your favorites!",
            body=reminder_body(match.matched_items),
        )


def reminder_id(match: FavoriteMealMatch) -> str:
    """Return the stable id for a (date, meal) reminder."""
    return f"fav-{match.date_key}-{match.phase.name.lower()}"


def reminder_body(item_names: list[str]) -> str:
    """Return reminder text listing the first few matched items."""
    shown = ", ".join(item_names[:PREVIEW_LIMIT])
    extra = len(item_names) - PREVIEW_LIMIT
    if extra > 0:
        return f"{shown} +{extra} more at Chuck's today."
    return f"{shown} at Chuck's today."
