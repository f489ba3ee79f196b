# File: colr/pick/models.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from colr.color.model import Color
from colr.pick.buffer import Point2D

# ~20 samples/second
TICK_INTERVAL_MS = 50


class SessionState(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CursorColorUpdate:
    point: Point2D
    color: Color

    @property
    def hex(self) -> str:
        return self.color.hex


@dataclass(frozen=True)
class ColorPicked(CursorColorUpdate):
    pass


def _noop(*_args) -> None:
    return None


@dataclass(frozen=True)
class SessionCallbacks:
    """
    Consumers of ColorPickingSession. Called synchronously on the session's
    (single) thread, so a tick finishes delivering before the next one runs.
    """
    on_color_update: Callable[[CursorColorUpdate], None] = _noop
    on_color_picked: Callable[[ColorPicked], None] = _noop
    on_capture_unavailable: Callable[[str], None] = _noop
    on_state_changed: Callable[[SessionState], None] = _noop
