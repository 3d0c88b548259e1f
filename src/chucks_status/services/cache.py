"""Menu cache tiers."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from chucks_status.domain.menu import MenuResponse


@dataclass(frozen=True)
class CacheEntry:
    """A fetched menu document and when it was fetched."""

    menu: MenuResponse
    fetched_at: datetime

    def is_fresh(self, now: datetime, expiration: timedelta) -> bool:
        """Return True while the entry is inside the expiration window."""
        return now - self.fetched_at < expiration


class MenuCacheStore(Protocol):
    """Storage interface shared by the volatile and persistent tiers."""

    def load(self) -> CacheEntry | None:
        """Return the stored entry, expired or not, if present."""

    def save(self, entry: CacheEntry) -> None:
        """Replace the stored entry."""

    def clear(self) -> None:
        """Remove the stored entry."""


@dataclass
class InMemoryMenuCacheStore(MenuCacheStore):
    """Process-memory cache tier."""

    _entry: CacheEntry | None

    def __init__(self, entry: CacheEntry | None = None) -> None:
        self._entry = entry

    def load(self) -> CacheEntry | None:
        return self._entry

    def save(self, entry: CacheEntry) -> None:
        self._entry = entry

    def clear(self) -> None:
        self._entry = None
