# tests/test_controller.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from conftest import ManualTimer, bgra_buffer

from colr.color.formats import ColorFormat
from colr.color.model import Color
from colr.event_bus import EventBus
from colr.event_types import EventType
from colr.io.json_store import JsonWriteError
from colr.pick.buffer import PixelBuffer, Point2D, ScreenBounds
from colr.pick.capture import CaptureUnavailable
from colr.pick.session import ColorPickingSession
from colr.picker.controller import DEFAULT_COLOR, PickerController, PickerView
from colr.picker.favorites import FavoritesStore
from colr.repos.favorites_repo import FavoritesRepo

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)


class StubCapture:
    def __init__(self) -> None:
        self.fail = False

    def capture(self) -> PixelBuffer:
        if self.fail:
            raise CaptureUnavailable("display asleep")
        return bgra_buffer(2, 2, [RED, GREEN, BLUE, WHITE])


class StubCursor:
    def __init__(self) -> None:
        self.point = Point2D(0, 0)

    def current(self) -> Point2D:
        return self.point


class StubBounds:
    def get(self) -> ScreenBounds:
        return ScreenBounds(4, 4)


class ViewSpy:
    def __init__(self) -> None:
        self.colors: List[Color] = []
        self.cursor: List[Point2D] = []
        self.picking: List[bool] = []
        self.history: List[list] = []
        self.favorites: List[list] = []
        self.notices: List[str] = []
        self.errors: List[Tuple[str, str]] = []

    def view(self) -> PickerView:
        return PickerView(
            on_color_changed=self.colors.append,
            on_cursor_moved=self.cursor.append,
            on_picking_changed=self.picking.append,
            on_history_changed=self.history.append,
            on_favorites_changed=self.favorites.append,
            on_notice=self.notices.append,
            on_error=lambda msg, detail: self.errors.append((msg, detail)),
        )


class Rig:
    def __init__(self, favorites: Optional[FavoritesStore] = None, with_bus: bool = False) -> None:
        self.timer = ManualTimer()
        self.capture = StubCapture()
        self.cursor = StubCursor()
        self.session = ColorPickingSession(
            capture=self.capture,
            cursor=self.cursor,
            bounds=StubBounds(),
            timer=self.timer,
        )
        self.bus = EventBus() if with_bus else None
        self.ctrl = PickerController(
            session=self.session,
            favorites=favorites if favorites is not None else FavoritesStore(),
            bus=self.bus,
        )
        self.spy = ViewSpy()
        self.ctrl.attach_view(self.spy.view())


def test_initial_state() -> None:
    rig = Rig()
    assert rig.ctrl.color == DEFAULT_COLOR
    assert rig.ctrl.display_value() == "#6a4c93"
    assert rig.ctrl.is_picking is False
    assert rig.ctrl.history() == [] and rig.ctrl.favorites() == []


def test_cursor_updates_change_color_but_not_history() -> None:
    rig = Rig()
    rig.ctrl.toggle_picking()
    assert rig.spy.picking == [True]

    rig.timer.fire_all()
    rig.cursor.point = Point2D(2, 0)
    rig.timer.fire_all()

    assert rig.ctrl.color == Color(0, 255, 0)
    assert [c.rgb for c in rig.spy.colors] == [(255, 0, 0), (0, 255, 0)]
    assert rig.spy.cursor == [Point2D(0, 0), Point2D(2, 0)]
    assert rig.ctrl.history() == []


def test_pick_sets_color_and_appends_history() -> None:
    rig = Rig()
    rig.ctrl.toggle_picking()
    rig.cursor.point = Point2D(3, 3)

    picked = rig.ctrl.pick_at_cursor()
    assert picked is not None and picked.rgb == (255, 255, 255)
    assert rig.ctrl.color == Color(255, 255, 255)
    # 存储的颜色不带 alpha
    assert rig.ctrl.color.a is None
    assert [e.hex for e in rig.ctrl.history()] == ["#ffffff"]
    assert len(rig.spy.history) == 1
    assert rig.spy.picking == [True, False]
    assert rig.ctrl.is_picking is False


def test_cancel_leaves_color_and_history() -> None:
    rig = Rig()
    rig.ctrl.toggle_picking()
    rig.ctrl.cancel_picking()
    rig.timer.fire_all()

    assert rig.ctrl.color == DEFAULT_COLOR
    assert rig.ctrl.history() == []
    assert rig.spy.picking == [True, False]


def test_capture_unavailable_is_reported() -> None:
    rig = Rig()
    rig.capture.fail = True
    assert rig.ctrl.toggle_picking() is False
    assert rig.spy.errors == [("Screen capture unavailable", "display asleep")]
    assert rig.spy.picking == []


def test_malformed_input_keeps_current_color() -> None:
    rig = Rig()
    assert rig.ctrl.set_color_from_input("notacolor") is False
    assert rig.ctrl.set_color_from_hex("#12") is False
    assert rig.ctrl.color == DEFAULT_COLOR
    assert rig.spy.colors == []

    assert rig.ctrl.set_color_from_input("rgb(1, 2, 3)") is True
    assert rig.ctrl.color == Color(1, 2, 3)
    assert rig.ctrl.set_color_from_hex("FF8800") is True
    assert rig.ctrl.display_value() == "#ff8800"


def test_set_same_color_does_not_notify() -> None:
    rig = Rig()
    rig.ctrl.set_color(DEFAULT_COLOR)
    assert rig.spy.colors == []


def test_format_and_components() -> None:
    rig = Rig()
    rig.ctrl.set_color_format("RGB")
    assert rig.ctrl.color_format is ColorFormat.RGB
    assert rig.ctrl.display_value() == "rgb(106, 76, 147)"
    assert rig.spy.colors == [DEFAULT_COLOR]

    rig.ctrl.set_from_components(ColorFormat.HSL, 0, 100, 50)
    assert rig.ctrl.color == Color(255, 0, 0)
    assert rig.ctrl.display_value() == "rgb(255, 0, 0)"


def test_favorites_save_and_duplicate_notice() -> None:
    rig = Rig()
    assert rig.ctrl.save_current_to_favorites() is True
    assert [e.hex for e in rig.ctrl.favorites()] == ["#6a4c93"]
    assert len(rig.spy.favorites) == 1

    assert rig.ctrl.save_current_to_favorites() is False
    assert rig.spy.notices == ["#6A4C93 is already a favorite"]
    assert len(rig.ctrl.favorites()) == 1

    entry = rig.ctrl.favorites()[0]
    rig.ctrl.set_color(Color(0, 0, 0))
    rig.ctrl.select_entry(entry)
    assert rig.ctrl.color == DEFAULT_COLOR

    assert rig.ctrl.remove_favorite(entry.id) is True
    assert rig.ctrl.remove_favorite(entry.id) is False
    assert rig.ctrl.favorites() == []


def test_favorites_write_failure_reports_error(tmp_path: Path) -> None:
    class FailingRepo(FavoritesRepo):
        def save(self, entries) -> None:
            raise JsonWriteError(path=self.path, message="disk full")

    rig = Rig(favorites=FavoritesStore(FailingRepo(tmp_path)))
    assert rig.ctrl.save_current_to_favorites() is True
    assert len(rig.ctrl.favorites()) == 1
    assert rig.spy.errors and rig.spy.errors[0][0] == "Could not save favorites"
    assert "disk full" in rig.spy.errors[0][1]


def test_bus_requests_drive_the_session() -> None:
    rig = Rig(with_bus=True)
    bus = rig.bus

    # 空闲时 confirm 什么都不做
    bus.post(EventType.PICK_CONFIRM_REQUEST, source="hotkey")
    bus.dispatch_pending()
    assert rig.ctrl.is_picking is False
    assert rig.ctrl.history() == []

    bus.post(EventType.PICK_TOGGLE_REQUEST, source="hotkey")
    bus.dispatch_pending()
    assert rig.ctrl.is_picking is True

    bus.post(EventType.PICK_CONFIRM_REQUEST, source="hotkey")
    bus.dispatch_pending()
    assert rig.ctrl.is_picking is False
    assert [e.hex for e in rig.ctrl.history()] == ["#ff0000"]

    bus.post(EventType.PICK_TOGGLE_REQUEST)
    bus.post(EventType.PICK_CANCEL_REQUEST)
    assert bus.dispatch_pending() == 2
    assert rig.ctrl.is_picking is False
    assert len(rig.ctrl.history()) == 1


def test_close_stops_picking_and_unsubscribes() -> None:
    rig = Rig(with_bus=True)
    rig.ctrl.toggle_picking()
    rig.ctrl.close()
    assert rig.ctrl.is_picking is False
    assert rig.timer.active() == []

    rig.bus.post(EventType.PICK_TOGGLE_REQUEST)
    rig.bus.dispatch_pending()
    assert rig.ctrl.is_picking is False
