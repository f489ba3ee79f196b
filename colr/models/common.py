# colr/models/common.py
"""
Coercion for hand-edited JSON (settings.json, favorites.json).

Nothing here raises: a wrong type or an out-of-range number falls back to the
default or is clamped, so one bad key never costs the user the whole file.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

_TRUE_WORDS = frozenset(("1", "true", "yes", "y", "on"))
_FALSE_WORDS = frozenset(("0", "false", "no", "n", "off"))


def as_dict(v: Any) -> Dict[str, Any]:
    return v if isinstance(v, dict) else {}


def as_list(v: Any) -> List[Any]:
    return v if isinstance(v, list) else []


def as_str(v: Any, default: str = "") -> str:
    if v is None:
        return default
    return v if isinstance(v, str) else str(v)


def as_int(v: Any, default: int = 0, *, lo: Optional[int] = None, hi: Optional[int] = None) -> int:
    """
    int(v) or `default`; bools are rejected (JSON `true` is not a tick interval).
    The result is clamped into [lo, hi] when bounds are given.
    """
    if v is None or isinstance(v, bool):
        n = default
    else:
        try:
            n = int(v)
        except (TypeError, ValueError):
            n = default
    if lo is not None and n < lo:
        n = lo
    if hi is not None and n > hi:
        n = hi
    return n


def as_bool(v: Any, default: bool = False) -> bool:
    """Accepts JSON bools, 0/1 and the usual yes/no words."""
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        return v != 0
    if isinstance(v, str):
        s = v.strip().lower()
        if s in _TRUE_WORDS:
            return True
        if s in _FALSE_WORDS:
            return False
    return default
