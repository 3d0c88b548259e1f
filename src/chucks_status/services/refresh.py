"""One-shot refresh for periodic triggers and widget timelines."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from chucks_status.domain.status import ChucksStatus, compute_status
from chucks_status.services.favorites import FavoritesService
from chucks_status.services.menu import MenuService, MenuState
from chucks_status.services.notifications import (
    NotificationScheduler,
    ScheduledReminder,
)
from chucks_status.services.specials import (
    WidgetSummary,
    build_widget_summary,
    menu_for_date,
    venue_today,
)

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class RefreshResult:
    """Outputs of one refresh run."""

    status: ChucksStatus
    state: MenuState
    widget: WidgetSummary | None
    reminders: list[ScheduledReminder]


@dataclass
class RefreshService:
    """Refreshes the menu, the widget summary and favorite reminders."""

    menu_service: MenuService
    favorites_service: FavoritesService
    notification_scheduler: NotificationScheduler
    clock: Callable[[], datetime] = _utc_now

    async def run_once(self, *, force_refresh: bool = False) -> RefreshResult:
        """Run a refresh; menu errors are reported in the result, not raised."""
        now = self.clock()
        status = compute_status(now)
        state = await self.menu_service.load_state(force_refresh=force_refresh)
        if state.menu is None:
            _logger.warning("Refresh has no menu to show: %s", state.error)
            return RefreshResult(status=status, state=state, widget=None, reminders=[])

        day_menu = menu_for_date(state.menu, venue_today(now))
        widget = build_widget_summary(status, day_menu, updated_at=now)
        reminders = self.notification_scheduler.reschedule(
            state.menu, self.favorites_service.favorites()
        )
        return RefreshResult(
            status=status, state=state, widget=widget, reminders=reminders
        )
