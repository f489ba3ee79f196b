# tests/test_color_space.py
from __future__ import annotations

import itertools

import pytest

from colr.color.model import Color
from colr.color.space import (
    hex_to_rgb,
    hsl_to_rgb,
    hsv_to_rgb,
    normalize_hue,
    rgb_to_hex,
    rgb_to_hsl,
    rgb_to_hsv,
)

# 0..255 的稀疏网格 + 边界值
GRID = sorted(set(list(range(0, 256, 17)) + [1, 127, 128, 254, 255]))


def test_rgb_to_hex_lowercase_zero_padded() -> None:
    assert rgb_to_hex(0, 0, 0) == "#000000"
    assert rgb_to_hex(255, 255, 255) == "#ffffff"
    assert rgb_to_hex(1, 2, 171) == "#0102ab"


def test_rgb_to_hex_clamps_out_of_range() -> None:
    assert rgb_to_hex(-5, 300, 254.6) == "#00ffff"


def test_hex_round_trip_every_channel_value() -> None:
    for v in range(256):
        for r, g, b in ((v, 0, 0), (0, v, 0), (0, 0, v), (v, 255 - v, v // 2)):
            c = hex_to_rgb(rgb_to_hex(r, g, b))
            assert c is not None
            assert c.rgb == (r, g, b)


@pytest.mark.parametrize("text", ["#6A4C93", "6a4c93", "  #6a4c93 "])
def test_hex_to_rgb_accepts_optional_hash_and_any_case(text: str) -> None:
    assert hex_to_rgb(text) == Color(106, 76, 147)


@pytest.mark.parametrize("text", ["notacolor", "#12", "#gggggg", "", "#1234567", "##123456", None, 123456])
def test_hex_to_rgb_rejects_malformed(text) -> None:
    assert hex_to_rgb(text) is None


def test_hsv_round_trip_within_one() -> None:
    for r, g, b in itertools.product(GRID, repeat=3):
        h, s, v = rgb_to_hsv(r, g, b)
        assert 0 <= h < 360
        assert 0 <= s <= 100 and 0 <= v <= 100
        c = hsv_to_rgb(h, s, v)
        assert abs(c.r - r) <= 1 and abs(c.g - g) <= 1 and abs(c.b - b) <= 1, (r, g, b, c)


def test_hsl_round_trip_within_one() -> None:
    for r, g, b in itertools.product(GRID, repeat=3):
        h, s, l = rgb_to_hsl(r, g, b)  # noqa: E741
        assert 0 <= h < 360
        assert 0 <= s <= 100 and 0 <= l <= 100
        c = hsl_to_rgb(h, s, l)
        assert abs(c.r - r) <= 1 and abs(c.g - g) <= 1 and abs(c.b - b) <= 1, (r, g, b, c)


def test_known_values() -> None:
    assert rgb_to_hsv(255, 0, 0) == (0.0, 100.0, 100.0)
    h, s, v = rgb_to_hsv(0, 0, 255)
    assert h == pytest.approx(240.0)
    h, s, l = rgb_to_hsl(0, 255, 0)  # noqa: E741
    assert (h, s, l) == (pytest.approx(120.0), pytest.approx(100.0), pytest.approx(50.0))
    assert hsl_to_rgb(0, 0, 50).rgb == (128, 128, 128)
    assert hsv_to_rgb(300, 100, 100).rgb == (255, 0, 255)


def test_negative_hue_is_normalized() -> None:
    # magenta-ish: max == r and g < b -> negative intermediate hue
    h, _, _ = rgb_to_hsv(255, 0, 128)
    assert 300 < h < 360
    assert normalize_hue(-30) == 330
    assert normalize_hue(360) == 0
    assert normalize_hue(720.5) == pytest.approx(0.5)


def test_out_of_range_inputs_are_clamped_not_rejected() -> None:
    assert hsv_to_rgb(-60, 150, 120).rgb == hsv_to_rgb(300, 100, 100).rgb
    assert hsl_to_rgb(480, -10, 200).rgb == (255, 255, 255)
    assert Color.clamped(-1, 256, 12.5).rgb == (0, 255, 13)
