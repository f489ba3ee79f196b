# File: colr/events/payloads.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InfoPayload:
    msg: str


@dataclass(frozen=True)
class ErrorPayload:
    msg: str
    detail: str = ""


@dataclass(frozen=True)
class PickRequestPayload:
    source: str = ""  # "hotkey" | "ui"
