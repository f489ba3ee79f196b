# colrqt/event_pump.py
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

from colr.event_bus import Event, EventBus

log = logging.getLogger(__name__)


class QtEventPump(QObject):
    """
    Drains EventBus on the Qt main thread with a QTimer.
    Handler exceptions are logged with stacktrace and never stop the pump.
    """

    def __init__(
        self,
        *,
        bus: EventBus,
        tick_ms: int = 16,
        on_handler_error: Optional[Callable[[Event, BaseException], None]] = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._bus = bus
        self._on_handler_error = on_handler_error or self._on_error_default

        self._timer = QTimer(self)
        self._timer.setInterval(int(max(5, tick_ms)))
        self._timer.timeout.connect(self._tick)

    def start(self) -> None:
        if not self._timer.isActive():
            self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @staticmethod
    def _on_error_default(ev: Event, err: BaseException) -> None:
        log.error("event handler failed: %s", ev.type.value, exc_info=err)

    def _tick(self) -> None:
        try:
            self._bus.dispatch_pending(max_events=200, on_error=self._on_handler_error)
        except Exception:
            log.exception("event pump tick failed")
