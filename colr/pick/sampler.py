# File: colr/pick/sampler.py
from __future__ import annotations

import math
from typing import Optional

from colr.color.model import Color
from colr.pick.buffer import PixelBuffer, Point2D, ScreenBounds


def _clamp(v: int, lo: int, hi: int) -> int:
    if v < lo:
        return lo
    if v > hi:
        return hi
    return v


def _round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def map_to_buffer(buffer: PixelBuffer, screen_point: Point2D, screen_bounds: ScreenBounds) -> Optional[Point2D]:
    """
    Screen coordinate -> buffer pixel coordinate.

    The captured buffer may be smaller than the screen (downsampled), so the
    point is scaled first and then clamped into the buffer. Points outside the
    primary display (other monitors) clamp to the nearest edge pixel.
    """
    if buffer.width <= 0 or buffer.height <= 0:
        return None
    if screen_bounds.width <= 0 or screen_bounds.height <= 0:
        return None

    scale_x = buffer.width / screen_bounds.width
    scale_y = buffer.height / screen_bounds.height

    bx = _round_half_up(screen_point.x * scale_x)
    by = _round_half_up(screen_point.y * scale_y)

    bx = _clamp(bx, 0, buffer.width - 1)
    by = _clamp(by, 0, buffer.height - 1)
    return Point2D(bx, by)


def sample_at(buffer: PixelBuffer, screen_point: Point2D, screen_bounds: ScreenBounds) -> Optional[Color]:
    """
    Decode the color under `screen_point`.

    Pure; never raises for bad geometry or truncated data, returns None instead.
    """
    pt = map_to_buffer(buffer, screen_point, screen_bounds)
    if pt is None:
        return None

    fmt = buffer.fmt
    bpp = fmt.bytes_per_pixel
    ir = fmt.channel_index("R")
    ig = fmt.channel_index("G")
    ib = fmt.channel_index("B")
    if bpp <= 0 or ir < 0 or ig < 0 or ib < 0:
        return None

    offset = pt.y * buffer.stride + pt.x * bpp
    data = buffer.data
    # truncated / malformed buffer
    if offset < 0 or offset + bpp > len(data):
        return None

    ia = fmt.channel_index("A")
    return Color(
        r=data[offset + ir],
        g=data[offset + ig],
        b=data[offset + ib],
        a=data[offset + ia] if fmt.has_alpha else None,
    )
