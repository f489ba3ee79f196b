from __future__ import annotations

from collections import deque
from typing import Deque, List

from colr.color.model import Color
from colr.models.entry import ColorEntry

HISTORY_CAP = 10


class ColorHistory:
    """Recent picks, oldest first. FIFO eviction beyond `cap`; duplicates allowed."""

    def __init__(self, cap: int = HISTORY_CAP) -> None:
        self._items: Deque[ColorEntry] = deque(maxlen=max(1, int(cap)))

    @property
    def cap(self) -> int:
        return int(self._items.maxlen or 0)

    def add(self, color: Color) -> ColorEntry:
        entry = ColorEntry.new(color)
        self._items.append(entry)
        return entry

    def entries(self) -> List[ColorEntry]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)
