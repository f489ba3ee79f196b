# tests/test_pixel_sampler.py
from __future__ import annotations

from conftest import bgra_buffer

from colr.color.model import Color
from colr.pick.buffer import BGRA, RGB, RGBA, PixelBuffer, PixelFormat, Point2D, ScreenBounds
from colr.pick.sampler import map_to_buffer, sample_at

# 2x2: (0,0)=red (1,0)=green (0,1)=blue (1,1)=白色半透明
PIXELS_2X2 = [
    (255, 0, 0, 255), (0, 255, 0, 255),
    (0, 0, 255, 255), (250, 251, 252, 128),
]


def make_2x2() -> PixelBuffer:
    return bgra_buffer(2, 2, PIXELS_2X2)


def test_corner_point_clamps_to_last_pixel() -> None:
    buf = make_2x2()
    c = sample_at(buf, Point2D(3, 3), ScreenBounds(4, 4))
    assert c == Color(250, 251, 252, 128)


def test_origin_maps_to_first_pixel() -> None:
    buf = make_2x2()
    assert sample_at(buf, Point2D(0, 0), ScreenBounds(4, 4)) == Color(255, 0, 0, 255)


def test_scaling_picks_matching_quadrant() -> None:
    buf = make_2x2()
    bounds = ScreenBounds(4, 4)
    # 0.5 的缩放：x=1 -> round(0.5)=1
    assert map_to_buffer(buf, Point2D(1, 0), bounds) == Point2D(1, 0)
    assert sample_at(buf, Point2D(0, 2), bounds) == Color(0, 0, 255, 255)
    assert sample_at(buf, Point2D(2, 0), bounds) == Color(0, 255, 0, 255)


def test_points_outside_primary_display_are_clamped() -> None:
    buf = make_2x2()
    bounds = ScreenBounds(4, 4)
    assert sample_at(buf, Point2D(-50, -1), bounds) == Color(255, 0, 0, 255)
    assert sample_at(buf, Point2D(5000, 0), bounds) == Color(0, 255, 0, 255)
    assert sample_at(buf, Point2D(0, 9999), bounds) == Color(0, 0, 255, 255)


def test_same_resolution_is_identity() -> None:
    buf = make_2x2()
    assert map_to_buffer(buf, Point2D(1, 1), ScreenBounds(2, 2)) == Point2D(1, 1)


def test_truncated_buffer_returns_none() -> None:
    full = make_2x2()
    truncated = PixelBuffer(width=2, height=2, stride=8, fmt=BGRA, data=full.data[:12])
    assert not truncated.is_complete()
    # 最后一个像素缺失
    assert sample_at(truncated, Point2D(1, 1), ScreenBounds(2, 2)) is None
    # 之前的像素仍可读
    assert sample_at(truncated, Point2D(0, 1), ScreenBounds(2, 2)) == Color(0, 0, 255, 255)


def test_empty_buffer_and_degenerate_bounds_return_none() -> None:
    empty = PixelBuffer(width=0, height=0, stride=0, fmt=BGRA, data=b"")
    assert sample_at(empty, Point2D(0, 0), ScreenBounds(4, 4)) is None
    assert sample_at(make_2x2(), Point2D(0, 0), ScreenBounds(0, 4)) is None


def test_stride_with_row_padding() -> None:
    # 每行 2 像素 + 4 字节填充
    row0 = bytes((1, 2, 3, 255, 4, 5, 6, 255)) + b"\xee" * 4
    row1 = bytes((7, 8, 9, 255, 10, 11, 12, 255)) + b"\xee" * 4
    buf = PixelBuffer(width=2, height=2, stride=12, fmt=BGRA, data=row0 + row1)
    assert sample_at(buf, Point2D(1, 1), ScreenBounds(2, 2)) == Color(12, 11, 10, 255)


def test_channel_order_follows_format() -> None:
    data = bytes((10, 20, 30, 40))
    bounds = ScreenBounds(1, 1)
    assert sample_at(PixelBuffer.packed(1, 1, RGBA, data), Point2D(0, 0), bounds) == Color(10, 20, 30, 40)
    assert sample_at(PixelBuffer.packed(1, 1, BGRA, data), Point2D(0, 0), bounds) == Color(30, 20, 10, 40)
    assert sample_at(PixelBuffer.packed(1, 1, RGB, data[:3]), Point2D(0, 0), bounds) == Color(10, 20, 30)


def test_format_without_color_channels_returns_none() -> None:
    gray = PixelFormat("L")
    buf = PixelBuffer.packed(1, 1, gray, b"\x80")
    assert sample_at(buf, Point2D(0, 0), ScreenBounds(1, 1)) is None
