from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from colr.io.json_store import JsonReadError, atomic_write_json, ensure_dir, read_json
from colr.models.entry import ColorEntry, FavoritesFile

log = logging.getLogger(__name__)


class FavoritesRepo:
    """<app_data>/favorites.json (ordered, newest first)."""

    def __init__(self, app_data_dir: Path) -> None:
        self._app_data_dir = app_data_dir
        ensure_dir(self._app_data_dir)

    @property
    def path(self) -> Path:
        return self._app_data_dir / "favorites.json"

    def load(self) -> List[ColorEntry]:
        try:
            data = read_json(self.path, default={})
        except JsonReadError:
            # 文件损坏：从空列表开始，下一次保存会覆盖
            log.exception("favorites file unreadable, starting empty")
            return []
        return list(FavoritesFile.from_dict(data).favorites)

    def save(self, entries: List[ColorEntry]) -> None:
        atomic_write_json(self.path, FavoritesFile(favorites=list(entries)).to_dict())
