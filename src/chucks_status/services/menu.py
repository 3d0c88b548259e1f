"""Menu service with two-tier caching and stale fallback."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta

from chucks_status.adapters.chucks_client import ChucksClient
from chucks_status.domain.menu import MenuItem, MenuResponse, VenueMenu
from chucks_status.domain.schedule import MealPhase
from chucks_status.errors import ChucksError, NetworkError
from chucks_status.services.cache import CacheEntry, MenuCacheStore
from chucks_status.services.specials import menu_for_date, specials_for_phase

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class MenuState:
    """Menu document to display plus the error from the latest attempt."""

    menu: MenuResponse | None
    fetched_at: datetime | None
    error: ChucksError | None


@dataclass
class MenuService:
    """Fetches the menu document through the memory and persistent tiers.

    Every cache decision and the network call itself run under one lock, so
    concurrent callers wait for an in-flight fetch instead of repeating it.
    The lock ties a service to a single event loop; build one per loop.
    """

    client: ChucksClient
    memory: MenuCacheStore
    persistent: MenuCacheStore
    days: int = 5
    expiration: timedelta = timedelta(hours=12)
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3
    clock: Callable[[], datetime] = _utc_now
    last_error: ChucksError | None = field(default=None, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def fetch_menu(self) -> MenuResponse:
        """Return the menu, preferring fresh cache over the network.

        A network failure falls back to the freshest cached document in
        either tier, however old. Decoding failures always propagate.
        """
        async with self._lock:
            now = self.clock()
            cached = self.memory.load()
            if cached is not None and cached.is_fresh(now, self.expiration):
                return cached.menu

            stored = self.persistent.load()
            if stored is not None and stored.is_fresh(now, self.expiration):
                _logger.info("Menu loaded from persistent cache: %s", stored.fetched_at)
                self.memory.save(stored)
                return stored.menu

            try:
                menu = await self._fetch_with_retry()
            except NetworkError as exc:
                self.last_error = exc
                stale = _freshest(cached, stored)
                if stale is None:
                    raise
                _logger.warning(
                    "Menu fetch failed, serving cache from %s: %s",
                    stale.fetched_at,
                    exc,
                )
                return stale.menu
            except ChucksError as exc:
                self.last_error = exc
                _logger.error("Menu fetch failed: %s", exc)
                raise

            entry = CacheEntry(menu=menu, fetched_at=self.clock())
            self.memory.save(entry)
            self._save_persistent(entry)
            self.last_error = None
            _logger.info("Menu fetched: dates=%s", len(menu))
            return menu

    def invalidate_cache(self) -> None:
        """Drop both cache tiers so the next fetch goes to the network."""
        self.memory.clear()
        self.persistent.clear()

    def cached_entry(self) -> CacheEntry | None:
        """Return the freshest cached entry without any network I/O."""
        return _freshest(self.memory.load(), self.persistent.load())

    async def load_state(self, *, force_refresh: bool = False) -> MenuState:
        """Return whatever menu can be shown along with the latest error."""
        if force_refresh:
            self.invalidate_cache()
        try:
            menu = await self.fetch_menu()
        except ChucksError as exc:
            entry = self.cached_entry()
            if entry is None:
                return MenuState(menu=None, fetched_at=None, error=exc)
            return MenuState(menu=entry.menu, fetched_at=entry.fetched_at, error=exc)
        entry = self.cached_entry()
        return MenuState(
            menu=menu,
            fetched_at=entry.fetched_at if entry else None,
            error=self.last_error,
        )

    async def menu_for_date(self, day: date) -> list[VenueMenu]:
        """Return the venues serving on a date."""
        return menu_for_date(await self.fetch_menu(), day)

    async def specials(self, day: date, phase: MealPhase) -> list[MenuItem]:
        """Return the Home Cooking items for a date and phase."""
        return specials_for_phase(await self.menu_for_date(day), phase)

    async def _fetch_with_retry(self) -> MenuResponse:
        """Call the client, retrying network errors only."""
        attempt = 0
        while True:
            try:
                return await self.client.fetch_menus(days=self.days)
            except NetworkError as exc:
                attempt += 1
                _logger.warning(
                    "Menu fetch failed (attempt %s/%s, status=%s)",
                    attempt,
                    self.retry_attempts + 1,
                    exc.status_code if exc.status_code is not None else "n/a",
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)

    def _save_persistent(self, entry: CacheEntry) -> None:
        try:
            self.persistent.save(entry)
        except Exception:
            _logger.exception("Failed to write persistent menu cache")


def _freshest(*entries: CacheEntry | None) -> CacheEntry | None:
    present = [entry for entry in entries if entry is not None]
    if not present:
        return None
    return max(present, key=lambda entry: entry.fetched_at)
