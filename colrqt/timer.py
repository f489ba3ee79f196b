# colrqt/timer.py
from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, Qt, QTimer


class QtTimerHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer: Optional[QTimer] = timer

    def cancel(self) -> None:
        t = self._timer
        self._timer = None
        if t is None:
            return
        t.stop()
        t.deleteLater()


class QtTickTimer:
    """
    TickTimer backed by a repeating QTimer on the Qt main thread.
    Ticks never overlap: each timeout runs to completion inside the event loop.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent

    def start(self, interval_ms: int, fn: Callable[[], None]) -> QtTimerHandle:
        t = QTimer(self._parent)
        t.setTimerType(Qt.TimerType.PreciseTimer)
        t.setInterval(max(1, int(interval_ms)))
        t.timeout.connect(fn)
        t.start()
        return QtTimerHandle(t)
