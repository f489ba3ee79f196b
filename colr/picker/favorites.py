from __future__ import annotations

import logging
from typing import List, Optional

from colr.color.model import Color
from colr.models.entry import ColorEntry
from colr.repos.favorites_repo import FavoritesRepo

log = logging.getLogger(__name__)

FAVORITES_CAP = 20


class FavoritesStore:
    """
    Favorites keyed by hex, newest first, capped at `cap` (oldest evicted).

    Every change is written through `repo` when one is given. A failed write
    raises JsonWriteError; the in-memory list keeps the change.
    """

    def __init__(self, repo: Optional[FavoritesRepo] = None, *, cap: int = FAVORITES_CAP) -> None:
        self._repo = repo
        self._cap = max(1, int(cap))
        self._items: List[ColorEntry] = []
        if repo is not None:
            self._items = self._dedupe(repo.load())[: self._cap]

    @property
    def cap(self) -> int:
        return self._cap

    @staticmethod
    def _dedupe(entries: List[ColorEntry]) -> List[ColorEntry]:
        seen = set()
        out: List[ColorEntry] = []
        for e in entries:
            if e.hex in seen:
                continue
            seen.add(e.hex)
            out.append(e)
        return out

    def entries(self) -> List[ColorEntry]:
        return list(self._items)

    def contains(self, hex_str: str) -> bool:
        key = (hex_str or "").strip().lower()
        return any(e.hex == key for e in self._items)

    def add(self, color: Color) -> Optional[ColorEntry]:
        """Returns the new entry, or None when the hex is already saved."""
        if self.contains(color.hex):
            return None
        entry = ColorEntry.new(color)
        self._items.insert(0, entry)
        evicted = self._items[self._cap:]
        del self._items[self._cap:]
        if evicted:
            log.info("favorites full, evicted %s", ", ".join(e.hex for e in evicted))
        self._persist()
        return entry

    def remove(self, entry_id: str) -> bool:
        before = len(self._items)
        self._items = [e for e in self._items if e.id != entry_id]
        if len(self._items) == before:
            return False
        self._persist()
        return True

    def _persist(self) -> None:
        if self._repo is None:
            return
        self._repo.save(self._items)

    def __len__(self) -> int:
        return len(self._items)
