# main.py
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from colr.event_bus import EventBus
from colr.input.hotkeys import GlobalHotkeyService
from colr.logging_setup import setup_logging
from colr.pick.capture import PrimaryDisplayBounds, ScreenCaptureSource
from colr.pick.cursor import CursorPositionProvider
from colr.pick.session import ColorPickingSession
from colr.picker.controller import PickerController
from colr.picker.favorites import FavoritesStore
from colr.repos.favorites_repo import FavoritesRepo
from colr.repos.settings_repo import SettingsRepo
from colrqt.event_pump import QtEventPump
from colrqt.main_window import MainWindow
from colrqt.theme import apply_theme
from colrqt.timer import QtTickTimer

log = logging.getLogger(__name__)


def app_data_dir() -> Path:
    return Path(os.environ.get("COLR_APP_DATA", "") or "app_data")


def main() -> int:
    data_dir = app_data_dir()
    settings_repo = SettingsRepo(data_dir)
    settings = settings_repo.load_or_create()

    log_rt = setup_logging(
        app_data_dir=data_dir,
        level=settings.logging.level,
        console=settings.logging.console,
    )
    if settings_repo.load_error is not None:
        log.error("settings.json unreadable, running on defaults: %s", settings_repo.load_error)

    app = QApplication(sys.argv)
    apply_theme(app, settings.ui.theme)

    bus = EventBus()
    capture = ScreenCaptureSource(limits=settings.capture.limits())
    session = ColorPickingSession(
        capture=capture,
        cursor=CursorPositionProvider(to_local=capture.abs_to_rel),
        bounds=PrimaryDisplayBounds(capture),
        timer=QtTickTimer(app),
        interval_ms=settings.pick.tick_interval_ms,
    )
    controller = PickerController(
        session=session,
        favorites=FavoritesStore(FavoritesRepo(data_dir)),
        bus=bus,
        color_format=settings.ui.color_format,
    )

    win = MainWindow(controller=controller, bus=bus, toggle_hotkey=settings.hotkeys.toggle_pick)
    pump = QtEventPump(bus=bus, parent=app)
    hotkeys = GlobalHotkeyService(bus=bus, config_provider=lambda: settings.hotkeys)

    pump.start()
    hotkeys.start()
    win.show()

    try:
        return int(app.exec())
    finally:
        hotkeys.stop()
        pump.stop()
        controller.close()
        capture.close()
        log.info("shutdown")
        log_rt.stop()


if __name__ == "__main__":
    sys.exit(main())
