from __future__ import annotations

from typing import Any, Callable, Optional

from pynput import mouse

from colr.pick.buffer import Point2D


class CursorPositionProvider:
    """
    Live cursor position via pynput. The Controller is created lazily so that
    constructing the provider never touches the display server.

    pynput reports desktop coordinates; `to_local` maps them onto the captured
    display (ScreenCaptureSource.abs_to_rel), since the primary monitor need
    not sit at (0, 0).
    """

    def __init__(
        self,
        *,
        to_local: Optional[Callable[[Point2D], Point2D]] = None,
        factory: Callable[[], Any] = mouse.Controller,
    ) -> None:
        self._to_local = to_local
        self._factory = factory
        self._ctrl: Optional[Any] = None

    def current(self) -> Point2D:
        if self._ctrl is None:
            self._ctrl = self._factory()
        x, y = self._ctrl.position
        p = Point2D(int(x), int(y))
        if self._to_local is not None:
            p = self._to_local(p)
        return p
