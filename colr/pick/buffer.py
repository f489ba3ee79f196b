from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    x: int
    y: int


@dataclass(frozen=True)
class ScreenBounds:
    width: int
    height: int


@dataclass(frozen=True)
class PixelFormat:
    """
    Byte layout of one pixel: channel order (one byte per channel), e.g. "BGRA".
    """
    order: str

    @property
    def bytes_per_pixel(self) -> int:
        return len(self.order)

    def channel_index(self, channel: str) -> int:
        """Byte index of channel ("R"/"G"/"B"/"A") within a pixel, -1 if absent."""
        return self.order.upper().find(channel.upper())

    @property
    def has_alpha(self) -> bool:
        return self.channel_index("A") >= 0


BGRA = PixelFormat("BGRA")
RGBA = PixelFormat("RGBA")
RGB = PixelFormat("RGB")


@dataclass(frozen=True)
class PixelBuffer:
    """
    Immutable captured frame.

    - stride: bytes per row (>= width * bytes_per_pixel; may include padding)
    - data: raw bytes, expected length >= stride * height
    """
    width: int
    height: int
    stride: int
    fmt: PixelFormat
    data: bytes

    @staticmethod
    def packed(width: int, height: int, fmt: PixelFormat, data: bytes) -> "PixelBuffer":
        """Buffer without row padding."""
        return PixelBuffer(
            width=int(width),
            height=int(height),
            stride=int(width) * fmt.bytes_per_pixel,
            fmt=fmt,
            data=bytes(data),
        )

    def is_complete(self) -> bool:
        return len(self.data) >= self.stride * self.height
