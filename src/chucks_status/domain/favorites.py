"""Favorite item matching across the multi-day menu."""

from dataclasses import dataclass, field

from chucks_status.domain.menu import MenuItem, MenuResponse, VenueMenu
from chucks_status.domain.schedule import MealPhase


@dataclass(frozen=True)
class FavoriteSet:
    """Exact favorite item names plus case-insensitive keywords."""

    items: frozenset[str] = field(default_factory=frozenset)
    keywords: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.keywords


@dataclass(frozen=True)
class FavoriteMealMatch:
    """Favorite items served during one meal on one date."""

    date_key: str
    phase: MealPhase
    matched_items: list[str]


def is_favorite(item: MenuItem, favorites: FavoriteSet) -> bool:
    """Return True when an item is an exact favorite or contains a keyword."""
    if item.name in favorites.items:
        return True
    lowered = item.name.lower()
    return any(keyword.lower() in lowered for keyword in favorites.keywords)


def find_favorite_matches(
    menus: MenuResponse, favorites: FavoriteSet
) -> list[FavoriteMealMatch]:
    """Find favorite items per date and meal phase.

    Slots without a meal phase (such as "anytime") are skipped since they have
    no serving time to remind about.
    """
    if favorites.is_empty:
        return []

    results: list[FavoriteMealMatch] = []
    for date_key, venues in menus.items():
        for slot, slot_venues in _group_by_slot(venues).items():
            phase = MealPhase.from_slot(slot)
            if phase is None:
                continue
            matched = [
                item.name
                for venue in slot_venues
                for item in venue.items
                if is_favorite(item, favorites)
            ]
            if matched:
                results.append(
                    FavoriteMealMatch(
                        date_key=date_key, phase=phase, matched_items=matched
                    )
                )
    return results


def _group_by_slot(venues: list[VenueMenu]) -> dict[str, list[VenueMenu]]:
    grouped: dict[str, list[VenueMenu]] = {}
    for venue in venues:
        grouped.setdefault(venue.slot, []).append(venue)
    return grouped
