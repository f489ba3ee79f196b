from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple


def clamp_channel(v: Any) -> int:
    """
    Coerce to an 8-bit channel value. Floats are rounded half-up, then clamped to [0, 255].
    """
    try:
        f = float(v)
    except (TypeError, ValueError):
        return 0
    if f != f:  # NaN
        return 0
    i = int(f + 0.5) if f >= 0 else 0
    if i > 255:
        return 255
    return i


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: Optional[int] = None

    @staticmethod
    def clamped(r: Any, g: Any, b: Any, a: Any = None) -> "Color":
        return Color(
            r=clamp_channel(r),
            g=clamp_channel(g),
            b=clamp_channel(b),
            a=None if a is None else clamp_channel(a),
        )

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def without_alpha(self) -> "Color":
        if self.a is None:
            return self
        return Color(self.r, self.g, self.b)
