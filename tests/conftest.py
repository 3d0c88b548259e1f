"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from chucks_status.adapters.chucks_client import ChucksClient
from chucks_status.config import Settings
from chucks_status.domain.favorites import FavoriteSet
from chucks_status.domain.menu import MenuResponse, VenueMenu
from chucks_status.errors import ChucksError
from chucks_status.services.favorites import FavoritesRepository
from chucks_status.services.notifications import NotificationCenter, ScheduledReminder


def build_menu() -> MenuResponse:
    """Two days of menus covering meal slots and the anytime slot."""
    raw = {
        "2026-10-19": [
            {
                "venue": "Home Cooking",
                "meal": "Lunch",
                "slot": "lunch",
                "items": [
                    {
                        "name": "Pizza",
                        "allergens": [
                            {"url": "/icons/gluten.png", "alt": "gluten"},
                            {"url": "/icons/dairy.png", "alt": "dairy"},
                        ],
                    },
                    {"name": "Caesar Salad", "allergens": []},
                ],
            },
            {
                "venue": "Grill",
                "meal": "Lunch",
                "slot": "lunch",
                "items": [{"name": "Cheeseburger", "allergens": []}],
            },
            {
                "venue": "Home Cooking",
                "meal": "Dinner",
                "slot": "dinner",
                "items": [{"name": "Roast Chicken", "allergens": []}],
            },
            {
                "venue": "Deli",
                "meal": None,
                "slot": "anytime",
                "items": [{"name": "Turkey Sub", "allergens": []}],
            },
            {
                "venue": "Bakery",
                "meal": None,
                "slot": "anytime",
                "items": [{"name": "Pizza Bagel", "allergens": []}],
            },
        ],
        "2026-10-20": [
            {
                "venue": "Home Cooking",
                "meal": "Breakfast",
                "slot": "breakfast",
                "items": [{"name": "Pancakes", "allergens": []}],
            }
        ],
    }
    return {
        key: [VenueMenu.model_validate(venue) for venue in venues]
        for key, venues in raw.items()
    }


@dataclass
class FakeChucksClient(ChucksClient):
    """Fake dining API client that counts calls."""

    menu: MenuResponse = field(default_factory=build_menu)
    errors: list[ChucksError] = field(default_factory=list)
    calls: int = 0

    async def fetch_menus(self, days: int = 5) -> MenuResponse:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.menu


@dataclass
class MutableClock:
    """Clock that tests can move forward."""

    # Monday 2026-10-19 08:00 in venue time.
    now: datetime = field(
        default_factory=lambda: datetime(2026, 10, 19, 12, tzinfo=UTC)
    )

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@dataclass
class FakeNotificationCenter(NotificationCenter):
    """Notification center recording scheduled reminders by id."""

    reminders: dict[str, ScheduledReminder] = field(default_factory=dict)
    cancelled_tags: list[str] = field(default_factory=list)
    fail_ids: set[str] = field(default_factory=set)

    def schedule(self, reminder: ScheduledReminder) -> None:
        if reminder.id in self.fail_ids:
            raise RuntimeError("delivery unavailable")
        self.reminders[reminder.id] = reminder

    def cancel_all(self, tag: str) -> None:
        self.cancelled_tags.append(tag)
        self.reminders = {
            key: reminder
            for key, reminder in self.reminders.items()
            if reminder.tag != tag
        }


@dataclass
class InMemoryFavoritesRepository(FavoritesRepository):
    """In-memory favorites repository for tests."""

    stored: FavoriteSet = field(default_factory=FavoriteSet)

    def load(self) -> FavoriteSet:
        return self.stored

    def save(self, favorites: FavoriteSet) -> None:
        self.stored = favorites


@pytest.fixture
def menu() -> MenuResponse:
    return build_menu()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        cache_dir=tmp_path / "cache",
        favorites_path=tmp_path / "favorites.json",
    )
