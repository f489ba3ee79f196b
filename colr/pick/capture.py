from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List

import mss

from colr.pick.buffer import BGRA, PixelBuffer, Point2D, ScreenBounds

log = logging.getLogger(__name__)

MAX_CAPTURE_WIDTH = 1920
MAX_CAPTURE_HEIGHT = 1080


class CaptureUnavailable(Exception):
    """No capturable primary display (or the grab itself failed)."""


@dataclass(frozen=True)
class CaptureLimits:
    max_width: int = MAX_CAPTURE_WIDTH
    max_height: int = MAX_CAPTURE_HEIGHT


def decimation_step(width: int, height: int, limits: CaptureLimits) -> int:
    """
    Smallest integer step so that the decimated frame fits into `limits`.
    """
    if width <= 0 or height <= 0:
        return 1
    mw = max(1, int(limits.max_width))
    mh = max(1, int(limits.max_height))
    return max(1, math.ceil(width / mw), math.ceil(height / mh))


def decimate_bgra(raw: bytes, width: int, height: int, step: int) -> PixelBuffer:
    """
    Nearest-neighbour downsample of a packed BGRA frame by taking every `step`-th
    pixel of every `step`-th row.
    """
    if step <= 1:
        return PixelBuffer.packed(width, height, BGRA, raw)

    px = memoryview(raw)[:width * height * 4].cast("I")  # one uint32 per BGRA pixel
    out_w = len(range(0, width, step))
    rows: List[bytes] = []
    for y in range(0, height, step):
        start = y * width
        rows.append(px[start:start + width:step].tobytes())
    return PixelBuffer.packed(out_w, len(rows), BGRA, b"".join(rows))


class ScreenCaptureSource:
    """
    Primary-display capture (mss) with a thread-local mss handle.

    capture() grabs the whole primary monitor once and returns an immutable
    BGRA PixelBuffer, downsampled to fit CaptureLimits.
    """

    def __init__(
        self,
        *,
        limits: CaptureLimits | None = None,
        factory: Callable[[], Any] = mss.mss,
    ) -> None:
        self._limits = limits or CaptureLimits()
        self._factory = factory
        self._local = threading.local()

    @property
    def limits(self) -> CaptureLimits:
        return self._limits

    def _get_sct(self) -> Any:
        sct = getattr(self._local, "sct", None)
        if sct is None:
            sct = self._factory()
            self._local.sct = sct
        return sct

    def close(self) -> None:
        """Close the mss handle bound to the current thread. Safe to call repeatedly."""
        sct = getattr(self._local, "sct", None)
        self._local.sct = None
        if sct is not None:
            try:
                sct.close()
            except Exception:
                log.debug("mss close failed", exc_info=True)

    def primary_monitor(self) -> Dict[str, int]:
        try:
            monitors = self._get_sct().monitors
        except Exception as e:
            raise CaptureUnavailable(f"cannot enumerate displays: {e}") from e

        if not monitors:
            raise CaptureUnavailable("no display found")
        # monitors[0] 是全部屏幕的虚拟矩形；[1] 才是主屏
        m = monitors[1] if len(monitors) > 1 else monitors[0]
        rect = {
            "left": int(m["left"]),
            "top": int(m["top"]),
            "width": int(m["width"]),
            "height": int(m["height"]),
        }
        if rect["width"] <= 0 or rect["height"] <= 0:
            raise CaptureUnavailable("primary display has empty geometry")
        return rect

    def bounds(self) -> ScreenBounds:
        rect = self.primary_monitor()
        return ScreenBounds(rect["width"], rect["height"])

    def abs_to_rel(self, p: Point2D) -> Point2D:
        """Desktop coordinate -> coordinate relative to the primary display's top-left."""
        rect = self.primary_monitor()
        return Point2D(p.x - rect["left"], p.y - rect["top"])

    def capture(self) -> PixelBuffer:
        rect = self.primary_monitor()
        try:
            shot = self._get_sct().grab(rect)
        except Exception as e:
            raise CaptureUnavailable(f"screen grab failed: {e}") from e

        width = int(shot.width)
        height = int(shot.height)
        raw = bytes(shot.raw)
        if width <= 0 or height <= 0 or len(raw) < width * height * BGRA.bytes_per_pixel:
            raise CaptureUnavailable(f"screen grab returned an incomplete frame ({width}x{height}, {len(raw)} bytes)")

        step = decimation_step(width, height, self._limits)
        buf = decimate_bgra(raw, width, height, step)
        log.info(
            "captured primary display %dx%d -> buffer %dx%d (step=%d)",
            width, height, buf.width, buf.height, step,
        )
        return buf


class PrimaryDisplayBounds:
    """Logical size of the primary display, read from the capture source's monitor table."""

    def __init__(self, source: ScreenCaptureSource) -> None:
        self._source = source

    def get(self) -> ScreenBounds:
        return self._source.bounds()
