from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import uuid4

from colr.color.model import Color
from colr.color.space import hex_to_rgb
from colr.io.json_store import now_iso_utc
from colr.models.common import as_dict, as_int, as_list, as_str


@dataclass(frozen=True)
class ColorEntry:
    """
    One history/favorites row: hex + rgb triple + creation time + identity.
    """
    id: str
    hex: str
    r: int
    g: int
    b: int
    created_at: str = ""

    @staticmethod
    def new(color: Color) -> "ColorEntry":
        return ColorEntry(
            id=uuid4().hex,
            hex=color.hex,
            r=color.r,
            g=color.g,
            b=color.b,
            created_at=now_iso_utc(),
        )

    @property
    def color(self) -> Color:
        return Color(self.r, self.g, self.b)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> Optional["ColorEntry"]:
        """
        Rebuild from JSON. The hex field is authoritative; rows without a valid
        hex are dropped (None).
        """
        d = as_dict(d)
        c = hex_to_rgb(as_str(d.get("hex", "")))
        if c is None:
            return None
        return ColorEntry(
            id=as_str(d.get("id", "")) or uuid4().hex,
            hex=c.hex,
            r=c.r,
            g=c.g,
            b=c.b,
            created_at=as_str(d.get("created_at", "")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "hex": self.hex,
            "r": int(self.r),
            "g": int(self.g),
            "b": int(self.b),
            "created_at": self.created_at,
        }


@dataclass
class FavoritesFile:
    """favorites.json root; entries are newest first."""
    schema_version: int = 1
    favorites: List[ColorEntry] = field(default_factory=list)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "FavoritesFile":
        d = as_dict(d)
        items: List[ColorEntry] = []
        for raw in as_list(d.get("favorites", [])):
            e = ColorEntry.from_dict(raw)
            if e is not None:
                items.append(e)
        return FavoritesFile(
            schema_version=as_int(d.get("schema_version", 1), 1),
            favorites=items,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": int(self.schema_version),
            "favorites": [e.to_dict() for e in self.favorites],
        }
