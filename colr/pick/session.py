# File: colr/pick/session.py
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from colr.color.model import Color
from colr.logging_context import log_context, new_corr_id
from colr.pick.buffer import PixelBuffer, Point2D, ScreenBounds
from colr.pick.capture import CaptureUnavailable
from colr.pick.models import (
    TICK_INTERVAL_MS,
    ColorPicked,
    CursorColorUpdate,
    SessionCallbacks,
    SessionState,
)
from colr.pick.sampler import sample_at

log = logging.getLogger(__name__)


class CaptureSource(Protocol):
    def capture(self) -> PixelBuffer: ...


class CursorSource(Protocol):
    def current(self) -> Point2D: ...


class BoundsSource(Protocol):
    def get(self) -> ScreenBounds: ...


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class TickTimer(Protocol):
    """
    Repeating timer on the caller's event loop.
    start() must not invoke `fn` synchronously.
    """

    def start(self, interval_ms: int, fn: Callable[[], None]) -> TimerHandle: ...


class ColorPickingSession:
    """
    Picking-mode state machine: IDLE <-> CAPTURING.

    - activate(): capture one frame, start the repeating tick
    - each tick: cursor -> sample_at(frame) -> on_color_update
    - pick_and_deactivate(): one final sample -> on_color_picked, then IDLE
    - deactivate(): IDLE, idempotent

    Every exit transition cancels the timer handle and bumps the generation, so
    a tick that was already queued by the event loop finds a stale generation
    and does nothing.
    """

    def __init__(
        self,
        *,
        capture: CaptureSource,
        cursor: CursorSource,
        bounds: BoundsSource,
        timer: TickTimer,
        callbacks: Optional[SessionCallbacks] = None,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        self._capture = capture
        self._cursor = cursor
        self._bounds = bounds
        self._timer = timer
        self._cbs = callbacks or SessionCallbacks()
        self._interval_ms = max(1, int(interval_ms))

        self._state = SessionState.IDLE
        self._buffer: Optional[PixelBuffer] = None
        self._handle: Optional[TimerHandle] = None
        self._generation = 0
        self._corr_id = "-"

    # ---------- introspection ----------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_capturing(self) -> bool:
        return self._state is SessionState.CAPTURING

    @property
    def buffer(self) -> Optional[PixelBuffer]:
        return self._buffer

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def set_callbacks(self, callbacks: SessionCallbacks) -> None:
        self._cbs = callbacks

    # ---------- transitions ----------
    def activate(self) -> bool:
        if self._state is SessionState.CAPTURING:
            log.debug("activate ignored: already capturing")
            return False

        corr = new_corr_id()
        with log_context(corr_id=corr, action="activate"):
            try:
                buf = self._capture.capture()
            except CaptureUnavailable as e:
                log.warning("picking mode not started: %s", e)
                self._cbs.on_capture_unavailable(str(e))
                return False

            self._corr_id = corr
            self._buffer = buf
            self._state = SessionState.CAPTURING
            self._generation += 1
            gen = self._generation

            try:
                self._handle = self._timer.start(self._interval_ms, lambda: self._on_tick(gen))
            except Exception:
                log.exception("failed to start sampling timer")
                self._enter_idle(notify=False)
                raise

            log.info("picking mode entered (buffer %dx%d, tick=%dms)", buf.width, buf.height, self._interval_ms)

        self._cbs.on_state_changed(self._state)
        return True

    def deactivate(self) -> None:
        if self._state is SessionState.IDLE:
            return
        with log_context(corr_id=self._corr_id, action="deactivate"):
            self._enter_idle()
            log.info("picking mode exited")

    def pick_and_deactivate(self) -> Optional[Color]:
        if self._state is not SessionState.CAPTURING:
            return None

        with log_context(corr_id=self._corr_id, action="pick"):
            color: Optional[Color] = None
            try:
                point = self._cursor_point()
                if point is not None:
                    color = self._sample(point)
                if point is not None and color is not None:
                    log.info("color picked %s at (%d, %d)", color.hex, point.x, point.y)
                    self._cbs.on_color_picked(ColorPicked(point=point, color=color))
                else:
                    log.info("pick produced no color; leaving picking mode")
            finally:
                self._enter_idle()
        return color

    def toggle(self) -> bool:
        """Activate when idle, deactivate when capturing. Returns True if now capturing."""
        if self._state is SessionState.CAPTURING:
            self.deactivate()
        else:
            self.activate()
        return self.is_capturing

    # ---------- internals ----------
    def _enter_idle(self, *, notify: bool = True) -> None:
        handle = self._handle
        self._handle = None
        self._generation += 1
        self._buffer = None
        self._state = SessionState.IDLE

        if handle is not None:
            handle.cancel()
        if notify:
            self._cbs.on_state_changed(self._state)

    def _cursor_point(self) -> Optional[Point2D]:
        try:
            return self._cursor.current()
        except Exception:
            log.debug("cursor position unavailable", exc_info=True)
            return None

    def _sample(self, point: Point2D) -> Optional[Color]:
        buf = self._buffer
        if buf is None:
            return None
        try:
            bounds = self._bounds.get()
        except Exception:
            log.debug("display bounds unavailable", exc_info=True)
            return None
        return sample_at(buf, point, bounds)

    def _on_tick(self, generation: int) -> None:
        if generation != self._generation or self._state is not SessionState.CAPTURING:
            return

        point = self._cursor_point()
        if point is None:
            return
        color = self._sample(point)
        if color is None:
            return
        self._cbs.on_color_update(CursorColorUpdate(point=point, color=color))
