# File: colr/picker/controller.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from colr.color.formats import ColorFormat, as_color_format, format_color, from_components, parse_color_input
from colr.color.model import Color
from colr.color.space import hex_to_rgb
from colr.event_bus import Event, EventBus
from colr.event_types import EventType
from colr.io.json_store import JsonStoreError
from colr.models.entry import ColorEntry
from colr.pick.buffer import Point2D
from colr.pick.models import ColorPicked, CursorColorUpdate, SessionCallbacks, SessionState
from colr.pick.session import ColorPickingSession
from colr.picker.favorites import FavoritesStore
from colr.picker.history import ColorHistory

log = logging.getLogger(__name__)

DEFAULT_COLOR = Color(106, 76, 147)


def _noop(*_args: Any) -> None:
    return None


@dataclass(frozen=True)
class PickerView:
    """
    What the UI layer wants to hear about. All calls happen on the controller's thread.
    """
    on_color_changed: Callable[[Color], None] = _noop
    on_cursor_moved: Callable[[Point2D], None] = _noop
    on_picking_changed: Callable[[bool], None] = _noop
    on_history_changed: Callable[[List[ColorEntry]], None] = _noop
    on_favorites_changed: Callable[[List[ColorEntry]], None] = _noop
    on_notice: Callable[[str], None] = _noop
    on_error: Callable[[str, str], None] = _noop


class PickerController:
    """
    Current color + history + favorites around one injected ColorPickingSession.

    - cursor updates only change the current color
    - a pick changes the current color and appends to history
    - malformed user input leaves the current color unchanged
    """

    def __init__(
        self,
        *,
        session: ColorPickingSession,
        favorites: FavoritesStore,
        history: Optional[ColorHistory] = None,
        bus: Optional[EventBus] = None,
        color_format: ColorFormat = ColorFormat.HEX,
        initial: Color = DEFAULT_COLOR,
    ) -> None:
        self._session = session
        self._favorites = favorites
        self._history = history if history is not None else ColorHistory()
        self._format = as_color_format(color_format)
        self._color = initial.without_alpha()
        self._view = PickerView()

        session.set_callbacks(
            SessionCallbacks(
                on_color_update=self._on_color_update,
                on_color_picked=self._on_color_picked,
                on_capture_unavailable=self._on_capture_unavailable,
                on_state_changed=self._on_state_changed,
            )
        )

        self._bus = bus
        if bus is not None:
            bus.subscribe(EventType.PICK_TOGGLE_REQUEST, self._on_toggle_request)
            bus.subscribe(EventType.PICK_CONFIRM_REQUEST, self._on_confirm_request)
            bus.subscribe(EventType.PICK_CANCEL_REQUEST, self._on_cancel_request)

    def close(self) -> None:
        if self._bus is not None:
            self._bus.unsubscribe(EventType.PICK_TOGGLE_REQUEST, self._on_toggle_request)
            self._bus.unsubscribe(EventType.PICK_CONFIRM_REQUEST, self._on_confirm_request)
            self._bus.unsubscribe(EventType.PICK_CANCEL_REQUEST, self._on_cancel_request)
        self._session.deactivate()

    def attach_view(self, view: PickerView) -> None:
        self._view = view

    # ---------- state ----------
    @property
    def color(self) -> Color:
        return self._color

    @property
    def color_format(self) -> ColorFormat:
        return self._format

    @property
    def is_picking(self) -> bool:
        return self._session.is_capturing

    def history(self) -> List[ColorEntry]:
        return self._history.entries()

    def favorites(self) -> List[ColorEntry]:
        return self._favorites.entries()

    def display_value(self) -> str:
        return format_color(self._color, self._format)

    # ---------- picking ----------
    def toggle_picking(self) -> bool:
        return self._session.toggle()

    def pick_at_cursor(self) -> Optional[Color]:
        return self._session.pick_and_deactivate()

    def cancel_picking(self) -> None:
        self._session.deactivate()

    # ---------- editing ----------
    def set_color(self, color: Color) -> None:
        c = color.without_alpha()
        if c == self._color:
            return
        self._color = c
        self._view.on_color_changed(c)

    def set_color_from_hex(self, hex_str: str) -> bool:
        c = hex_to_rgb(hex_str)
        if c is None:
            return False
        self.set_color(c)
        return True

    def set_color_from_input(self, text: str) -> bool:
        c = parse_color_input(text)
        if c is None:
            log.debug("ignored malformed color input %r", text)
            return False
        self.set_color(c)
        return True

    def set_from_components(self, space: ColorFormat | str, c1: Any, c2: Any, c3: Any) -> Color:
        c = from_components(space, c1, c2, c3)
        self.set_color(c)
        return c

    def set_color_format(self, fmt: ColorFormat | str) -> None:
        f = as_color_format(fmt, self._format)
        if f is self._format:
            return
        self._format = f
        self._view.on_color_changed(self._color)

    def select_entry(self, entry: ColorEntry) -> None:
        self.set_color(entry.color)

    # ---------- favorites ----------
    def save_current_to_favorites(self) -> bool:
        try:
            entry = self._favorites.add(self._color)
        except JsonStoreError as e:
            # kept in memory, just not on disk
            log.exception("saving favorites failed")
            self._view.on_error("Could not save favorites", str(e))
            self._view.on_favorites_changed(self._favorites.entries())
            return True
        if entry is None:
            self._view.on_notice(f"{self._color.hex.upper()} is already a favorite")
            return False
        self._view.on_favorites_changed(self._favorites.entries())
        return True

    def remove_favorite(self, entry_id: str) -> bool:
        try:
            removed = self._favorites.remove(entry_id)
        except JsonStoreError as e:
            log.exception("saving favorites failed")
            self._view.on_error("Could not save favorites", str(e))
            removed = True
        if removed:
            self._view.on_favorites_changed(self._favorites.entries())
        return removed

    # ---------- session callbacks ----------
    def _on_color_update(self, ev: CursorColorUpdate) -> None:
        self._view.on_cursor_moved(ev.point)
        self.set_color(ev.color)

    def _on_color_picked(self, ev: ColorPicked) -> None:
        self._view.on_cursor_moved(ev.point)
        self.set_color(ev.color)
        self._history.add(self._color)
        self._view.on_history_changed(self._history.entries())

    def _on_capture_unavailable(self, reason: str) -> None:
        self._view.on_error("Screen capture unavailable", reason)

    def _on_state_changed(self, state: SessionState) -> None:
        self._view.on_picking_changed(state is SessionState.CAPTURING)

    # ---------- bus handlers ----------
    def _on_toggle_request(self, _ev: Event) -> None:
        self.toggle_picking()

    def _on_confirm_request(self, _ev: Event) -> None:
        if self._session.is_capturing:
            self.pick_at_cursor()

    def _on_cancel_request(self, _ev: Event) -> None:
        self.cancel_picking()
