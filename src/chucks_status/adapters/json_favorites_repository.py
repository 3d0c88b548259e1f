"""JSON file repository for favorites."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from chucks_status.domain.favorites import FavoriteSet
from chucks_status.services.favorites import FavoritesRepository

_logger = logging.getLogger(__name__)


@dataclass
class JsonFavoritesRepository(FavoritesRepository):
    """Stores favorite item names and keywords in one JSON file."""

    path: Path

    def load(self) -> FavoriteSet:
        """Return stored favorites, or an empty set when missing or unreadable."""
        if not self.path.exists():
            return FavoriteSet()
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return FavoriteSet(
                items=frozenset(payload.get("items", [])),
                keywords=frozenset(payload.get("keywords", [])),
            )
        except (OSError, ValueError, AttributeError, TypeError) as exc:
            _logger.warning("Ignoring unreadable favorites in %s: %s", self.path, exc)
            return FavoriteSet()

    def save(self, favorites: FavoriteSet) -> None:
        """Write favorites, replacing the file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "items": sorted(favorites.items),
            "keywords": sorted(favorites.keywords),
        }
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)
