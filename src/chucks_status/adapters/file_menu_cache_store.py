"""File-backed persistent menu cache tier."""

import json
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from chucks_status.domain.menu import dump_menu_json, parse_menu_json
from chucks_status.services.cache import CacheEntry, MenuCacheStore

MENU_FILENAME = "menu_cache.json"
META_FILENAME = "menu_cache_meta.json"

_logger = logging.getLogger(__name__)


@dataclass
class FileMenuCacheStore(MenuCacheStore):
    """Stores the menu document and its fetch time as two JSON files."""

    directory: Path

    @property
    def menu_path(self) -> Path:
        return self.directory / MENU_FILENAME

    @property
    def meta_path(self) -> Path:
        return self.directory / META_FILENAME

    def load(self) -> CacheEntry | None:
        """Return the cached entry, or None if missing or unreadable."""
        if not self.menu_path.exists() or not self.meta_path.exists():
            return None
        try:
            menu = parse_menu_json(self.menu_path.read_bytes())
            meta = json.loads(self.meta_path.read_text(encoding="utf-8"))
            fetched_at = datetime.fromisoformat(meta["fetched_at"])
            if fetched_at.tzinfo is None:
                raise ValueError(f"fetched_at has no timezone: {fetched_at}")
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as exc:
            _logger.warning(
                "Ignoring unreadable menu cache in %s: %s", self.directory, exc
            )
            return None
        return CacheEntry(menu=menu, fetched_at=fetched_at)

    def save(self, entry: CacheEntry) -> None:
        """Write both files, each replaced atomically."""
        self.directory.mkdir(parents=True, exist_ok=True)
        _write_atomic(self.menu_path, dump_menu_json(entry.menu))
        meta = {"fetched_at": entry.fetched_at.isoformat()}
        _write_atomic(self.meta_path, json.dumps(meta).encode("utf-8"))

    def clear(self) -> None:
        """Delete both cache files if present."""
        self.menu_path.unlink(missing_ok=True)
        self.meta_path.unlink(missing_ok=True)


def _write_atomic(path: Path, data: bytes) -> None:
    tmp_path = path.with_name(f"{path.name}.tmp")
    tmp_path.write_bytes(data)
    os.replace(tmp_path, path)
