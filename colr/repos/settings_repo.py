from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from colr.io.json_store import JsonReadError, atomic_write_json, ensure_dir, read_json
from colr.models.settings import SettingsFile

log = logging.getLogger(__name__)


class SettingsRepo:
    """
    <app_data>/settings.json. Missing keys are filled with defaults and the
    canonical form is written back on first run.

    An unreadable file is left on disk untouched; the app runs on defaults and
    `load_error` keeps the reason so it can be logged once logging is up.
    """

    def __init__(self, app_data_dir: Path) -> None:
        self._app_data_dir = app_data_dir
        self.load_error: Optional[JsonReadError] = None
        ensure_dir(self._app_data_dir)

    @property
    def path(self) -> Path:
        return self._app_data_dir / "settings.json"

    def load_or_create(self) -> SettingsFile:
        existed = self.path.exists()
        try:
            data = read_json(self.path, default={})
        except JsonReadError as e:
            self.load_error = e
            log.warning("settings unreadable, using defaults: %s", e)
            return SettingsFile()

        self.load_error = None
        settings = SettingsFile.from_dict(data)
        if not existed:
            self.save(settings, backup=False)
        return settings

    def save(self, settings: SettingsFile, *, backup: bool = True) -> None:
        atomic_write_json(self.path, settings.to_dict(), backup=backup)
