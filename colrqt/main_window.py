# colrqt/main_window.py
from __future__ import annotations

import logging
from typing import List

from PySide6.QtCore import QEvent, QObject, Qt
from PySide6.QtGui import QCloseEvent, QGuiApplication, QKeyEvent
from PySide6.QtWidgets import (
    QAbstractButton,
    QButtonGroup,
    QComboBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QPushButton,
    QRadioButton,
    QSlider,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from colr.color.formats import SLIDER_LABELS, SLIDER_RANGES, ColorFormat, components
from colr.color.model import Color
from colr.event_bus import Event, EventBus
from colr.event_types import EventType
from colr.events.payloads import ErrorPayload, InfoPayload
from colr.models.entry import ColorEntry
from colr.pick.buffer import Point2D
from colr.picker.controller import PickerController, PickerView
from colrqt.status_bar import StatusController
from colrqt.theme import button_style
from colrqt.widgets.color_swatch import ColorSwatch

log = logging.getLogger(__name__)

_ENTRY_ROLE = Qt.ItemDataRole.UserRole


class MainWindow(QMainWindow):
    """
    Picker tab (preview / value field / sliders), History tab, Favorites tab.
    Everything goes through PickerController; the window only renders.
    """

    def __init__(self, *, controller: PickerController, bus: EventBus, toggle_hotkey: str = "") -> None:
        super().__init__()
        self._ctrl = controller
        self._bus = bus
        self._toggle_hotkey = (toggle_hotkey or "").upper()
        self._space = ColorFormat.RGB

        self.setWindowTitle("colr")
        self.resize(400, 520)
        self.setMinimumSize(350, 400)

        self._tabs = QTabWidget(self)
        self.setCentralWidget(self._tabs)
        self._tabs.addTab(self._build_picker_tab(), "Picker")
        self._tabs.addTab(self._build_history_tab(), "History")
        self._tabs.addTab(self._build_favorites_tab(), "Favorites")

        self._status = StatusController(self)
        self._install_picking_keys()

        controller.attach_view(
            PickerView(
                on_color_changed=self._on_color_changed,
                on_cursor_moved=self._on_cursor_moved,
                on_picking_changed=self._on_picking_changed,
                on_history_changed=self._render_history,
                on_favorites_changed=self._render_favorites,
                on_notice=lambda msg: self._status.info(msg),
                on_error=lambda msg, detail: self._status.error(msg, detail),
            )
        )
        bus.subscribe(EventType.INFO, self._on_bus_info)
        bus.subscribe(EventType.ERROR, self._on_bus_error)

        self._on_color_changed(controller.color)
        self._on_picking_changed(controller.is_picking)
        self._render_history(controller.history())
        self._render_favorites(controller.favorites())

    # ---------- layout ----------
    def _build_picker_tab(self) -> QWidget:
        page = QWidget(self)
        root = QVBoxLayout(page)

        self._swatch = ColorSwatch(page, width=120, height=64)
        root.addWidget(self._swatch)

        row = QHBoxLayout()
        self._cmb_format = QComboBox(page)
        self._cmb_format.addItems([f.value for f in ColorFormat])
        self._cmb_format.setCurrentText(self._ctrl.color_format.value)
        self._cmb_format.currentTextChanged.connect(self._ctrl.set_color_format)
        row.addWidget(self._cmb_format)

        self._edit_value = QLineEdit(page)
        self._edit_value.textEdited.connect(self._ctrl.set_color_from_input)
        self._edit_value.returnPressed.connect(lambda: self._ctrl.set_color_from_input(self._edit_value.text()))
        row.addWidget(self._edit_value, 1)

        self._btn_copy = QPushButton("Copy", page)
        self._btn_copy.clicked.connect(self._copy_value)
        row.addWidget(self._btn_copy)
        root.addLayout(row)

        spaces = QHBoxLayout()
        self._space_group = QButtonGroup(page)
        for fmt in (ColorFormat.RGB, ColorFormat.HSV, ColorFormat.HSL):
            rb = QRadioButton(fmt.value, page)
            rb.setChecked(fmt is self._space)
            rb.toggled.connect(lambda on, f=fmt: on and self._set_space(f))
            self._space_group.addButton(rb)
            spaces.addWidget(rb)
        root.addLayout(spaces)

        grid = QGridLayout()
        self._slider_labels: List[QLabel] = []
        self._sliders: List[QSlider] = []
        self._slider_values: List[QLabel] = []
        for i in range(3):
            lbl = QLabel(page)
            sld = QSlider(Qt.Orientation.Horizontal, page)
            val = QLabel("0", page)
            sld.valueChanged.connect(self._on_slider_moved)
            grid.addWidget(lbl, i, 0)
            grid.addWidget(sld, i, 1)
            grid.addWidget(val, i, 2)
            self._slider_labels.append(lbl)
            self._sliders.append(sld)
            self._slider_values.append(val)
        root.addLayout(grid)

        self._btn_pick = QPushButton(page)
        self._btn_pick.clicked.connect(self._ctrl.toggle_picking)
        root.addWidget(self._btn_pick)

        btn_fav = QPushButton("Save to favorites (F)", page)
        btn_fav.clicked.connect(self._ctrl.save_current_to_favorites)
        root.addWidget(btn_fav)

        root.addStretch(1)
        self._apply_space_labels()
        return page

    def _build_history_tab(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout(page)
        self._list_history = QListWidget(page)
        self._list_history.itemActivated.connect(self._on_entry_activated)
        layout.addWidget(self._list_history)
        return page

    def _build_favorites_tab(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout(page)
        self._list_favorites = QListWidget(page)
        self._list_favorites.itemActivated.connect(self._on_entry_activated)
        layout.addWidget(self._list_favorites)

        btn_remove = QPushButton("Remove selected", page)
        btn_remove.clicked.connect(self._remove_selected_favorite)
        layout.addWidget(btn_remove)
        return page

    # ---------- controller -> view ----------
    def _on_color_changed(self, color: Color) -> None:
        self._swatch.set_color(color)
        if not self._edit_value.hasFocus():
            self._edit_value.setText(self._ctrl.display_value())
        self._sync_sliders(color)

    def _on_cursor_moved(self, p: Point2D) -> None:
        self._status.set_cursor(p.x, p.y)

    def _on_picking_changed(self, picking: bool) -> None:
        hint = f" ({self._toggle_hotkey})" if self._toggle_hotkey else ""
        self._btn_pick.setText(("Stop picking" if picking else "Start picking") + hint)
        self._btn_pick.setStyleSheet(button_style(picking))
        self.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, picking)
        self.show()
        if picking:
            self._status.info("Move the cursor, Space to pick, Esc to cancel", ttl_ms=4000)

    def _render_history(self, entries: List[ColorEntry]) -> None:
        self._fill_list(self._list_history, list(reversed(entries)), "No color history yet")

    def _render_favorites(self, entries: List[ColorEntry]) -> None:
        self._fill_list(self._list_favorites, entries, "No saved colors yet")

    @staticmethod
    def _fill_list(widget: QListWidget, entries: List[ColorEntry], empty_text: str) -> None:
        widget.clear()
        if not entries:
            item = QListWidgetItem(empty_text)
            item.setFlags(Qt.ItemFlag.NoItemFlags)
            widget.addItem(item)
            return
        for e in entries:
            item = QListWidgetItem(f"{e.hex.upper()}  RGB({e.r},{e.g},{e.b})")
            item.setData(_ENTRY_ROLE, e)
            widget.addItem(item)

    # ---------- view -> controller ----------
    def _set_space(self, fmt: ColorFormat) -> None:
        self._space = fmt
        self._apply_space_labels()
        self._sync_sliders(self._ctrl.color)

    def _apply_space_labels(self) -> None:
        labels = SLIDER_LABELS[self._space]
        maxes = SLIDER_RANGES[self._space]
        for lbl, sld, text, mx in zip(self._slider_labels, self._sliders, labels, maxes):
            lbl.setText(f"{text}:")
            sld.blockSignals(True)
            sld.setRange(0, mx)
            sld.blockSignals(False)

    def _sync_sliders(self, color: Color) -> None:
        for sld, val, v in zip(self._sliders, self._slider_values, components(color, self._space)):
            sld.blockSignals(True)
            sld.setValue(int(v))
            sld.blockSignals(False)
            val.setText(str(int(v)))

    def _on_slider_moved(self, _value: int) -> None:
        c1, c2, c3 = (s.value() for s in self._sliders)
        for val, v in zip(self._slider_values, (c1, c2, c3)):
            val.setText(str(v))
        self._ctrl.set_from_components(self._space, c1, c2, c3)

    def _on_entry_activated(self, item: QListWidgetItem) -> None:
        entry = item.data(_ENTRY_ROLE)
        if isinstance(entry, ColorEntry):
            self._ctrl.select_entry(entry)
            self._tabs.setCurrentIndex(0)

    def _remove_selected_favorite(self) -> None:
        item = self._list_favorites.currentItem()
        entry = item.data(_ENTRY_ROLE) if item is not None else None
        if isinstance(entry, ColorEntry):
            self._ctrl.remove_favorite(entry.id)

    def _copy_value(self) -> None:
        QGuiApplication.clipboard().setText(self._ctrl.display_value())
        self._status.info("Copied!", ttl_ms=1000)

    # ---------- bus ----------
    def _on_bus_info(self, ev: Event) -> None:
        if isinstance(ev.payload, InfoPayload):
            self._status.info(ev.payload.msg)

    def _on_bus_error(self, ev: Event) -> None:
        if isinstance(ev.payload, ErrorPayload):
            self._status.error(ev.payload.msg, ev.payload.detail)

    # ---------- keyboard ----------
    def _install_picking_keys(self) -> None:
        """
        Space/Esc belong to picking mode, not to whatever child has focus.
        Buttons never take focus; the filter covers combo box, sliders and lists.
        """
        for btn in self.findChildren(QAbstractButton):
            btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        for w in self.findChildren(QWidget):
            if not isinstance(w, QLineEdit):
                w.installEventFilter(self)

    def _handle_picking_key(self, key: int) -> bool:
        if not self._ctrl.is_picking:
            return False
        if key == Qt.Key.Key_Space:
            self._ctrl.pick_at_cursor()
            return True
        if key == Qt.Key.Key_Escape:
            self._ctrl.cancel_picking()
            return True
        return False

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.KeyPress and isinstance(event, QKeyEvent):
            if self._handle_picking_key(event.key()):
                event.accept()
                return True
        return super().eventFilter(watched, event)

    # ---------- Qt overrides ----------
    def keyPressEvent(self, event: QKeyEvent) -> None:
        if isinstance(self.focusWidget(), QLineEdit):
            super().keyPressEvent(event)
            return

        key = event.key()
        picking = self._ctrl.is_picking
        if self._handle_picking_key(key):
            pass
        elif not picking and key == Qt.Key.Key_F:
            self._ctrl.save_current_to_favorites()
        elif not picking and key == Qt.Key.Key_C and event.modifiers() == Qt.KeyboardModifier.NoModifier:
            self._copy_value()
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def closeEvent(self, event: QCloseEvent) -> None:
        self._bus.unsubscribe(EventType.INFO, self._on_bus_info)
        self._bus.unsubscribe(EventType.ERROR, self._on_bus_error)
        self._ctrl.close()
        super().closeEvent(event)
