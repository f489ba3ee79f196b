from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from colr.color.formats import ColorFormat, as_color_format
from colr.models.common import as_bool, as_dict, as_int, as_str
from colr.pick.capture import MAX_CAPTURE_HEIGHT, MAX_CAPTURE_WIDTH, CaptureLimits
from colr.pick.models import TICK_INTERVAL_MS


@dataclass
class PickSettings:
    tick_interval_ms: int = TICK_INTERVAL_MS

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "PickSettings":
        d = as_dict(d)
        return PickSettings(
            tick_interval_ms=as_int(d.get("tick_interval_ms"), TICK_INTERVAL_MS, lo=10, hi=1000),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"tick_interval_ms": int(self.tick_interval_ms)}


@dataclass
class CaptureSettings:
    max_width: int = MAX_CAPTURE_WIDTH
    max_height: int = MAX_CAPTURE_HEIGHT

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "CaptureSettings":
        d = as_dict(d)
        return CaptureSettings(
            max_width=as_int(d.get("max_width"), MAX_CAPTURE_WIDTH, lo=16, hi=16384),
            max_height=as_int(d.get("max_height"), MAX_CAPTURE_HEIGHT, lo=16, hi=16384),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"max_width": int(self.max_width), "max_height": int(self.max_height)}

    def limits(self) -> CaptureLimits:
        return CaptureLimits(max_width=self.max_width, max_height=self.max_height)


@dataclass
class HotkeySettings:
    toggle_pick: str = "ctrl+shift+c"
    confirm_pick: str = "space"
    cancel_pick: str = "esc"

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "HotkeySettings":
        d = as_dict(d)
        return HotkeySettings(
            toggle_pick=as_str(d.get("toggle_pick", "ctrl+shift+c"), "ctrl+shift+c"),
            confirm_pick=as_str(d.get("confirm_pick", "space"), "space"),
            cancel_pick=as_str(d.get("cancel_pick", "esc"), "esc"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "toggle_pick": self.toggle_pick,
            "confirm_pick": self.confirm_pick,
            "cancel_pick": self.cancel_pick,
        }


@dataclass
class UISettings:
    theme: str = "darkly"
    color_format: ColorFormat = ColorFormat.HEX

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "UISettings":
        d = as_dict(d)
        return UISettings(
            theme=as_str(d.get("theme", "darkly"), "darkly"),
            color_format=as_color_format(d.get("color_format", "HEX")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"theme": self.theme, "color_format": self.color_format.value}


@dataclass
class LoggingSettings:
    level: str = "INFO"
    console: bool = False

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "LoggingSettings":
        d = as_dict(d)
        return LoggingSettings(
            level=as_str(d.get("level", "INFO"), "INFO").upper(),
            console=as_bool(d.get("console", False), False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "console": bool(self.console)}


@dataclass
class SettingsFile:
    """
    settings.json root object.
    """
    schema_version: int = 1
    pick: PickSettings = field(default_factory=PickSettings)
    capture: CaptureSettings = field(default_factory=CaptureSettings)
    hotkeys: HotkeySettings = field(default_factory=HotkeySettings)
    ui: UISettings = field(default_factory=UISettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "SettingsFile":
        d = as_dict(d)
        return SettingsFile(
            schema_version=as_int(d.get("schema_version", 1), 1),
            pick=PickSettings.from_dict(d.get("pick", {}) or {}),
            capture=CaptureSettings.from_dict(d.get("capture", {}) or {}),
            hotkeys=HotkeySettings.from_dict(d.get("hotkeys", {}) or {}),
            ui=UISettings.from_dict(d.get("ui", {}) or {}),
            logging=LoggingSettings.from_dict(d.get("logging", {}) or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": int(self.schema_version),
            "pick": self.pick.to_dict(),
            "capture": self.capture.to_dict(),
            "hotkeys": self.hotkeys.to_dict(),
            "ui": self.ui.to_dict(),
            "logging": self.logging.to_dict(),
        }
