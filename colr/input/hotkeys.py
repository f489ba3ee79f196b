from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional

from pynput import keyboard

from colr.event_bus import EventBus
from colr.event_types import EventType
from colr.models.settings import HotkeySettings

log = logging.getLogger(__name__)

# "ctrl+shift+c" -> "<ctrl>+<shift>+c" (pynput GlobalHotKeys 的组合键格式)
# https://pynput.readthedocs.io/en/latest/keyboard.html#global-hotkeys

_MOD_ALIASES = {
    "ctrl": "<ctrl>",
    "control": "<ctrl>",
    "cmdorctrl": "<ctrl>",
    "alt": "<alt>",
    "shift": "<shift>",
    "cmd": "<cmd>",
    "command": "<cmd>",
    "win": "<cmd>",
    "super": "<cmd>",
}

_SPECIAL_KEYS = {
    "esc": "<esc>",
    "escape": "<esc>",
    "enter": "<enter>",
    "return": "<enter>",
    "tab": "<tab>",
    "space": "<space>",
    "backspace": "<backspace>",
    "delete": "<delete>",
    "del": "<delete>",
    "home": "<home>",
    "end": "<end>",
}

_FKEY_RE = re.compile(r"^f([1-9]|1[0-2])$")


def normalize_hotkey(s: str) -> str:
    s = (s or "").strip().lower()
    s = s.replace(" ", "").replace("-", "+").replace("_", "+")
    while "++" in s:
        s = s.replace("++", "+")
    return s.strip("+")


def to_pynput_hotkey(s: str) -> str:
    """
    'ctrl+shift+c' -> '<ctrl>+<shift>+c'; 'esc' -> '<esc>'.
    Raises ValueError on an empty string.
    """
    s = normalize_hotkey(s)
    if not s:
        raise ValueError("empty hotkey")

    out: List[str] = []
    for p in s.split("+"):
        if p in _MOD_ALIASES:
            tok = _MOD_ALIASES[p]
        elif p in _SPECIAL_KEYS:
            tok = _SPECIAL_KEYS[p]
        elif _FKEY_RE.match(p):
            tok = f"<{p}>"
        elif len(p) == 1:
            tok = p
        else:
            tok = f"<{p}>"
        if tok not in out:
            out.append(tok)
    return "+".join(out)


def build_mapping(cfg: HotkeySettings, bus: EventBus) -> Dict[str, Callable[[], None]]:
    """
    Hotkey -> bus request. Raises ValueError on malformed or conflicting keys.
    """
    pairs = [
        (cfg.toggle_pick, EventType.PICK_TOGGLE_REQUEST),
        (cfg.confirm_pick, EventType.PICK_CONFIRM_REQUEST),
        (cfg.cancel_pick, EventType.PICK_CANCEL_REQUEST),
    ]
    mapping: Dict[str, Callable[[], None]] = {}
    for raw, et in pairs:
        hk = to_pynput_hotkey(raw)
        if hk in mapping:
            raise ValueError(f"hotkey conflict: {raw!r} is bound twice")
        mapping[hk] = (lambda et=et: bus.post(et, source="hotkey"))
    return mapping


class GlobalHotkeyService:
    """
    Global hotkeys via pynput.keyboard.GlobalHotKeys.
    Callbacks run on the listener thread and only post to the bus.
    start() can be called again to reload the bindings.
    """

    def __init__(self, *, bus: EventBus, config_provider: Callable[[], HotkeySettings]) -> None:
        self._bus = bus
        self._config_provider = config_provider
        self._listener: Optional[keyboard.GlobalHotKeys] = None

    def start(self) -> bool:
        self.stop()

        try:
            mapping = build_mapping(self._config_provider(), self._bus)
        except ValueError as e:
            log.warning("hotkeys not registered: %s", e)
            self._bus.post(EventType.ERROR, msg="Invalid hotkey settings", detail=str(e))
            return False

        try:
            self._listener = keyboard.GlobalHotKeys(mapping)
            self._listener.start()
        except Exception as e:
            self._listener = None
            log.exception("global hotkey listener failed to start")
            self._bus.post(EventType.ERROR, msg="Global hotkeys unavailable", exc=e)
            return False

        log.info("global hotkeys registered: %s", ", ".join(mapping))
        return True

    def stop(self) -> None:
        if self._listener is not None:
            try:
                self._listener.stop()
            except Exception:
                log.debug("hotkey listener stop failed", exc_info=True)
            self._listener = None
