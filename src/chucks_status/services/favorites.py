"""Favorite items and keywords."""

from dataclasses import dataclass
from typing import Protocol

from chucks_status.domain.favorites import FavoriteSet, is_favorite
from chucks_status.domain.menu import MenuItem


class FavoritesRepository(Protocol):
    """Persistence interface for the user's favorites."""

    def load(self) -> FavoriteSet:
        """Return the stored favorites."""

    def save(self, favorites: FavoriteSet) -> None:
        """Replace the stored favorites."""


@dataclass
class FavoritesService:
    """Service for reading and editing favorites."""

    repository: FavoritesRepository

    def favorites(self) -> FavoriteSet:
        """Return the current favorites."""
        return self.repository.load()

    def toggle_item(self, name: str) -> FavoriteSet:
        """Add an exact item name, or remove it if already a favorite."""
        current = self.repository.load()
        if name in current.items:
            items = current.items - {name}
        else:
            items = current.items | {name}
        updated = FavoriteSet(items=items, keywords=current.keywords)
        self.repository.save(updated)
        return updated

    def add_keyword(self, keyword: str) -> FavoriteSet:
        """Add a trimmed keyword; blank keywords are ignored."""
        current = self.repository.load()
        trimmed = keyword.strip()
        if not trimmed:
            return current
        updated = FavoriteSet(
            items=current.items, keywords=current.keywords | {trimmed}
        )
        self.repository.save(updated)
        return updated

    def remove_keyword(self, keyword: str) -> FavoriteSet:
        """Remove a keyword if present."""
        current = self.repository.load()
        updated = FavoriteSet(
            items=current.items, keywords=current.keywords - {keyword}
        )
        self.repository.save(updated)
        return updated

    def is_favorite(self, item: MenuItem) -> bool:
        """Return True when an item should be highlighted as a favorite."""
        return is_favorite(item, self.repository.load())
