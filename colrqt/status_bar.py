# colrqt/status_bar.py
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QLabel, QMainWindow, QStatusBar


class StatusController:
    """
    QStatusBar wrapper:
    - left: cursor position while picking
    - right: message with optional TTL, then back to "ready"
    """

    def __init__(self, main_window: QMainWindow) -> None:
        self._bar: QStatusBar = main_window.statusBar()

        self._lbl_cursor = QLabel("[-, -]")
        self._lbl_status = QLabel("ready")
        self._bar.addWidget(self._lbl_cursor)
        self._bar.addPermanentWidget(self._lbl_status, 1)

        self._timer = QTimer(main_window)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._reset_status)

    def set_cursor(self, x: int, y: int) -> None:
        self._lbl_cursor.setText(f"[{int(x)}, {int(y)}]")

    def set_status(self, text: str, *, ttl_ms: Optional[int] = None) -> None:
        self._lbl_status.setText(text)
        self._timer.stop()
        if ttl_ms is not None and ttl_ms > 0:
            self._timer.start(ttl_ms)

    def info(self, msg: str, ttl_ms: int = 3000) -> None:
        s = (msg or "").strip()
        if s:
            self.set_status(s, ttl_ms=ttl_ms)

    def error(self, msg: str, detail: str = "", ttl_ms: int = 6000) -> None:
        s = (msg or "").strip()
        if not s:
            return
        d = (detail or "").strip()
        self.set_status(f"ERROR: {s}" if not d else f"ERROR: {s}: {d}", ttl_ms=ttl_ms)

    def _reset_status(self) -> None:
        self._lbl_status.setText("ready")
