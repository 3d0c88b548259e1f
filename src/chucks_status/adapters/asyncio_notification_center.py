"""In-process notification center backed by the asyncio event loop."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from chucks_status.services.notifications import NotificationCenter, ScheduledReminder

_logger = logging.getLogger(__name__)


async def log_delivery(reminder: ScheduledReminder) -> None:
    """Default delivery that writes the reminder to the log."""
    _logger.info("Reminder %s: %s %s", reminder.id, reminder.title, reminder.body)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class AsyncioNotificationCenter(NotificationCenter):
    """Delivers reminders at their fire time on the running event loop.

    `schedule` must be called from inside a running loop.
    """

    deliver: Callable[[ScheduledReminder], Awaitable[None]] = log_delivery
    clock: Callable[[], datetime] = _utc_now
    _pending: dict[str, tuple[ScheduledReminder, asyncio.TimerHandle]] = field(
        default_factory=dict, init=False
    )
    _deliveries: set[asyncio.Task] = field(default_factory=set, init=False)

    def schedule(self, reminder: ScheduledReminder) -> None:
        """Schedule delivery, replacing a pending reminder with the same id."""
        loop = asyncio.get_running_loop()
        self._cancel(reminder.id)
        delay = max((reminder.fire_at - self.clock()).total_seconds(), 0.0)
        handle = loop.call_later(delay, self._fire, reminder)
        self._pending[reminder.id] = (reminder, handle)

    def cancel_all(self, tag: str) -> None:
        """Cancel pending reminders with a tag."""
        for reminder_id, (reminder, _handle) in list(self._pending.items()):
            if reminder.tag == tag:
                self._cancel(reminder_id)

    def pending(self) -> list[ScheduledReminder]:
        """Return reminders that have not fired yet, soonest first."""
        reminders = [reminder for reminder, _handle in self._pending.values()]
        return sorted(reminders, key=lambda reminder: reminder.fire_at)

    def _cancel(self, reminder_id: str) -> None:
        pending = self._pending.pop(reminder_id, None)
        if pending is not None:
            pending[1].cancel()

    def _fire(self, reminder: ScheduledReminder) -> None:
        self._pending.pop(reminder.id, None)
        task = asyncio.get_running_loop().create_task(self.deliver(reminder))
        self._deliveries.add(task)
        task.add_done_callback(self._on_delivered)

    def _on_delivered(self, task: asyncio.Task) -> None:
        self._deliveries.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Reminder delivery failed: %s", exc)
