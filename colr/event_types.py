# File: colr/event_types.py
from __future__ import annotations

from enum import Enum


class EventType(str, Enum):
    """
    Requests that arrive from non-UI threads (global hotkeys) plus
    user-facing notices. Session output does NOT go through the bus.
    """

    ANY = "*"

    INFO = "INFO"
    ERROR = "ERROR"

    PICK_TOGGLE_REQUEST = "PICK_TOGGLE_REQUEST"
    PICK_CONFIRM_REQUEST = "PICK_CONFIRM_REQUEST"
    PICK_CANCEL_REQUEST = "PICK_CANCEL_REQUEST"

    def __str__(self) -> str:
        return self.value


def as_event_type(t: "EventType | str") -> EventType:
    if isinstance(t, EventType):
        return t

    s = (t or "").strip()
    if s == "*":
        return EventType.ANY
    try:
        return EventType(s)
    except ValueError as e:
        raise ValueError(f"Unknown event type: {t!r}") from e
