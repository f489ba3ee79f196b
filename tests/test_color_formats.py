# tests/test_color_formats.py
from __future__ import annotations

import pytest

from colr.color.formats import (
    ColorFormat,
    as_color_format,
    components,
    format_color,
    from_components,
    parse_color_input,
)
from colr.color.model import Color

PURPLE = Color(106, 76, 147)


def test_format_color_each_format() -> None:
    assert format_color(PURPLE, ColorFormat.HEX) == "#6a4c93"
    assert format_color(PURPLE, "RGB") == "rgb(106, 76, 147)"
    assert format_color(Color(255, 0, 0), ColorFormat.HSV) == "hsv(0, 100%, 100%)"
    assert format_color(Color(0, 255, 0), ColorFormat.HSL) == "hsl(120, 100%, 50%)"


def test_unknown_format_falls_back_to_hex() -> None:
    assert as_color_format("cmyk") is ColorFormat.HEX
    assert format_color(PURPLE, "cmyk") == "#6a4c93"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#6a4c93", (106, 76, 147)),
        ("6A4C93", (106, 76, 147)),
        ("rgb(106, 76, 147)", (106, 76, 147)),
        ("RGB( 1,2 ,3 )", (1, 2, 3)),
        ("rgb(300, -4, 12)", (255, 0, 12)),
        ("hsv(0, 100%, 100%)", (255, 0, 0)),
        ("hsl(120, 100, 50)", (0, 255, 0)),
    ],
)
def test_parse_color_input_accepts(text: str, expected: tuple) -> None:
    c = parse_color_input(text)
    assert c is not None
    assert c.rgb == expected


@pytest.mark.parametrize("text", ["", "   ", "rgb(1, 2)", "rgb(a, b, c)", "hsv(1,2,3", "purple", None])
def test_parse_color_input_rejects(text) -> None:
    assert parse_color_input(text) is None


def test_components_and_back() -> None:
    assert components(PURPLE, ColorFormat.RGB) == (106, 76, 147)
    assert components(PURPLE, ColorFormat.HEX) == (106, 76, 147)

    h, s, v = components(Color(255, 0, 0), ColorFormat.HSV)
    assert (h, s, v) == (0, 100, 100)
    assert from_components(ColorFormat.HSV, h, s, v) == Color(255, 0, 0)
    assert from_components(ColorFormat.HSL, 240, 100, 50) == Color(0, 0, 255)
    assert from_components("RGB", 10, 20, 30) == Color(10, 20, 30)
