from __future__ import annotations

import re
from typing import Any, Optional, Tuple

from colr.color.model import Color, clamp_channel

HUE_MAX = 360.0
PERCENT_MAX = 100.0

_HEX_RE = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)


def _as_float(v: Any, default: float = 0.0) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError):
        return default
    if f != f:
        return default
    return f


def _clamp(v: float, lo: float, hi: float) -> float:
    if v < lo:
        return lo
    if v > hi:
        return hi
    return v


def normalize_hue(h: Any) -> float:
    """Reduce any hue to [0, 360)."""
    hf = _as_float(h) % HUE_MAX
    if hf < 0:
        hf += HUE_MAX
    if hf >= HUE_MAX:
        hf = 0.0
    return hf


def _percent(v: Any) -> float:
    return _clamp(_as_float(v), 0.0, PERCENT_MAX) / PERCENT_MAX


# -------- hex --------

def rgb_to_hex(r: Any, g: Any, b: Any) -> str:
    return f"#{clamp_channel(r):02x}{clamp_channel(g):02x}{clamp_channel(b):02x}"


def hex_to_rgb(hex_str: Any) -> Optional[Color]:
    """
    Parse "#rrggbb" / "rrggbb" (case-insensitive).
    Returns None on malformed input; callers keep their previous color.
    """
    if not isinstance(hex_str, str):
        return None
    m = _HEX_RE.match(hex_str.strip())
    if m is None:
        return None
    return Color(int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))


# -------- cylindrical --------

def _hue_from_rgb(rf: float, gf: float, bf: float, mx: float, diff: float) -> float:
    if diff == 0:
        return 0.0
    if mx == rf:
        h = ((gf - bf) / diff) % 6
    elif mx == gf:
        h = (bf - rf) / diff + 2
    else:
        h = (rf - gf) / diff + 4
    return normalize_hue(h * 60.0)


def _unit_rgb(r: Any, g: Any, b: Any) -> Tuple[float, float, float]:
    return clamp_channel(r) / 255.0, clamp_channel(g) / 255.0, clamp_channel(b) / 255.0


def _sector_rgb(h: float, c: float, x: float) -> Tuple[float, float, float]:
    sector = int(h // 60.0)
    if sector == 0:
        return c, x, 0.0
    if sector == 1:
        return x, c, 0.0
    if sector == 2:
        return 0.0, c, x
    if sector == 3:
        return 0.0, x, c
    if sector == 4:
        return x, 0.0, c
    return c, 0.0, x


def rgb_to_hsv(r: Any, g: Any, b: Any) -> Tuple[float, float, float]:
    """
    Returns (h, s, v): h in [0, 360), s/v in [0, 100]. Values are not rounded.
    """
    rf, gf, bf = _unit_rgb(r, g, b)
    mx = max(rf, gf, bf)
    mn = min(rf, gf, bf)
    diff = mx - mn

    h = _hue_from_rgb(rf, gf, bf, mx, diff)
    s = 0.0 if mx == 0 else diff / mx * PERCENT_MAX
    v = mx * PERCENT_MAX
    return h, s, v


def hsv_to_rgb(h: Any, s: Any, v: Any) -> Color:
    hf = normalize_hue(h)
    sf = _percent(s)
    vf = _percent(v)

    c = vf * sf
    x = c * (1 - abs((hf / 60.0) % 2 - 1))
    m = vf - c

    r1, g1, b1 = _sector_rgb(hf, c, x)
    return Color.clamped((r1 + m) * 255, (g1 + m) * 255, (b1 + m) * 255)


def rgb_to_hsl(r: Any, g: Any, b: Any) -> Tuple[float, float, float]:
    """
    Returns (h, s, l): h in [0, 360), s/l in [0, 100]. Values are not rounded.
    """
    rf, gf, bf = _unit_rgb(r, g, b)
    mx = max(rf, gf, bf)
    mn = min(rf, gf, bf)
    diff = mx - mn
    lf = (mx + mn) / 2

    if diff == 0:
        return 0.0, 0.0, lf * PERCENT_MAX

    sf = diff / (2 - mx - mn) if lf > 0.5 else diff / (mx + mn)
    h = _hue_from_rgb(rf, gf, bf, mx, diff)
    return h, _clamp(sf * PERCENT_MAX, 0.0, PERCENT_MAX), lf * PERCENT_MAX


def hsl_to_rgb(h: Any, s: Any, l: Any) -> Color:  # noqa: E741
    hf = normalize_hue(h)
    sf = _percent(s)
    lf = _percent(l)

    c = (1 - abs(2 * lf - 1)) * sf
    x = c * (1 - abs((hf / 60.0) % 2 - 1))
    m = lf - c / 2

    r1, g1, b1 = _sector_rgb(hf, c, x)
    return Color.clamped((r1 + m) * 255, (g1 + m) * 255, (b1 + m) * 255)
