# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List

import pytest

# 项目根目录 = tests 上一层目录，保证 `import colr` 可用
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from colr.pick.buffer import BGRA, PixelBuffer  # noqa: E402


class ManualHandle:
    """Timer handle that only fires when the test says so."""

    def __init__(self, interval_ms: int, fn: Callable[[], None]) -> None:
        self.interval_ms = interval_ms
        self.fn = fn
        self.canceled = False

    def cancel(self) -> None:
        self.canceled = True

    def fire(self) -> None:
        if not self.canceled:
            self.fn()

    def fire_queued(self) -> None:
        # 模拟事件循环里已经排队的一次 tick：无视 cancel 直接调用
        self.fn()


class ManualTimer:
    """TickTimer stand-in: records every start(), never fires on its own."""

    def __init__(self) -> None:
        self.handles: List[ManualHandle] = []

    def start(self, interval_ms: int, fn: Callable[[], None]) -> ManualHandle:
        h = ManualHandle(interval_ms, fn)
        self.handles.append(h)
        return h

    def active(self) -> List[ManualHandle]:
        return [h for h in self.handles if not h.canceled]

    def fire_all(self) -> None:
        for h in list(self.handles):
            h.fire()


def bgra_buffer(width: int, height: int, pixels: List[tuple]) -> PixelBuffer:
    """pixels: row-major list of (r, g, b, a)."""
    raw = bytearray()
    for r, g, b, a in pixels:
        raw += bytes((b, g, r, a))
    return PixelBuffer.packed(width, height, BGRA, bytes(raw))


@pytest.fixture
def manual_timer() -> ManualTimer:
    return ManualTimer()
