from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from colr.color.model import Color
from colr.color.space import hex_to_rgb, hsl_to_rgb, hsv_to_rgb, rgb_to_hsl, rgb_to_hsv


class ColorFormat(str, Enum):
    HEX = "HEX"
    RGB = "RGB"
    HSV = "HSV"
    HSL = "HSL"

    def __str__(self) -> str:
        return self.value


def as_color_format(v: Any, default: ColorFormat = ColorFormat.HEX) -> ColorFormat:
    if isinstance(v, ColorFormat):
        return v
    s = (v if isinstance(v, str) else "").strip().upper()
    try:
        return ColorFormat(s)
    except ValueError:
        return default


# slider maximums per color space (component1, component2, component3)
SLIDER_RANGES: Dict[ColorFormat, Tuple[int, int, int]] = {
    ColorFormat.RGB: (255, 255, 255),
    ColorFormat.HSV: (360, 100, 100),
    ColorFormat.HSL: (360, 100, 100),
}

SLIDER_LABELS: Dict[ColorFormat, Tuple[str, str, str]] = {
    ColorFormat.RGB: ("R", "G", "B"),
    ColorFormat.HSV: ("H", "S", "V"),
    ColorFormat.HSL: ("H", "S", "L"),
}


def format_color(color: Color, fmt: ColorFormat | str = ColorFormat.HEX) -> str:
    f = as_color_format(fmt)
    if f is ColorFormat.RGB:
        return f"rgb({color.r}, {color.g}, {color.b})"
    if f is ColorFormat.HSV:
        h, s, v = rgb_to_hsv(*color.rgb)
        return f"hsv({round(h) % 360}, {round(s)}%, {round(v)}%)"
    if f is ColorFormat.HSL:
        h, s, l = rgb_to_hsl(*color.rgb)  # noqa: E741
        return f"hsl({round(h) % 360}, {round(s)}%, {round(l)}%)"
    return color.hex


_NUM = r"\s*(-?\d+(?:\.\d+)?)\s*"
_FUNC_RE = re.compile(
    rf"^(rgb|hsv|hsl)\({_NUM},{_NUM}%?\s*,{_NUM}%?\s*\)$",
    re.IGNORECASE,
)


def parse_color_input(text: Any) -> Optional[Color]:
    """
    Parse what a user typed into the color field.

    Accepts "#rrggbb", "rrggbb", "rgb(r, g, b)", "hsv(h, s%, v%)", "hsl(h, s%, l%)".
    Out-of-range components are clamped. Returns None on anything else.
    """
    if not isinstance(text, str):
        return None
    s = text.strip()
    if not s:
        return None

    m = _FUNC_RE.match(s)
    if m is None:
        return hex_to_rgb(s)

    kind = m.group(1).lower()
    a, b, c = float(m.group(2)), float(m.group(3)), float(m.group(4))
    if kind == "rgb":
        return Color.clamped(a, b, c)
    if kind == "hsv":
        return hsv_to_rgb(a, b, c)
    return hsl_to_rgb(a, b, c)


def components(color: Color, space: ColorFormat | str) -> Tuple[int, int, int]:
    """Slider positions for `color` in `space` (HEX is treated as RGB)."""
    f = as_color_format(space, ColorFormat.RGB)
    if f is ColorFormat.HSV:
        h, s, v = rgb_to_hsv(*color.rgb)
        return round(h) % 360, round(s), round(v)
    if f is ColorFormat.HSL:
        h, s, l = rgb_to_hsl(*color.rgb)  # noqa: E741
        return round(h) % 360, round(s), round(l)
    return color.r, color.g, color.b


def from_components(space: ColorFormat | str, c1: Any, c2: Any, c3: Any) -> Color:
    f = as_color_format(space, ColorFormat.RGB)
    if f is ColorFormat.HSV:
        return hsv_to_rgb(c1, c2, c3)
    if f is ColorFormat.HSL:
        return hsl_to_rgb(c1, c2, c3)
    return Color.clamped(c1, c2, c3)
