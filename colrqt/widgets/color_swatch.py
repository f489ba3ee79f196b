# colrqt/widgets/color_swatch.py
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QWidget

from colr.color.model import Color


class ColorSwatch(QWidget):
    """
    Filled rectangle plus an "#RRGGBB" label.
    """

    def __init__(self, parent: QWidget | None = None, *, width: int = 64, height: int = 24, show_label: bool = True) -> None:
        super().__init__(parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self._frame = QFrame(self)
        self._frame.setFixedSize(width, height)
        self._frame.setFrameShape(QFrame.Shape.Box)
        self._frame.setFrameShadow(QFrame.Shadow.Sunken)
        self._frame.setAutoFillBackground(True)
        layout.addWidget(self._frame)

        self._label = QLabel("#000000", self)
        self._label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)
        self._label.setVisible(show_label)
        layout.addWidget(self._label)

        self.set_color(Color(0, 0, 0))

    def set_color(self, color: Color) -> None:
        pal = self._frame.palette()
        pal.setColor(QPalette.ColorRole.Window, QColor(color.r, color.g, color.b))
        self._frame.setPalette(pal)
        self._label.setText(color.hex.upper())
