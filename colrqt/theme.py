# colrqt/theme.py
from __future__ import annotations

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication

DARK_THEMES = ("darkly", "dark", "terminal")

# 拾色模式时窗口高亮色
PICKING_ACCENT = "#e74c3c"
IDLE_ACCENT = "#0078d4"


def _dark_palette() -> QPalette:
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(30, 30, 30))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(0, 255, 0))
    palette.setColor(QPalette.ColorRole.Base, QColor(20, 20, 20))
    palette.setColor(QPalette.ColorRole.AlternateBase, QColor(45, 45, 45))
    palette.setColor(QPalette.ColorRole.Text, QColor(220, 220, 220))
    palette.setColor(QPalette.ColorRole.Button, QColor(40, 40, 40))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(0, 255, 0))
    palette.setColor(QPalette.ColorRole.Highlight, QColor(0, 120, 212))
    palette.setColor(QPalette.ColorRole.HighlightedText, QColor(255, 255, 255))
    return palette


def apply_theme(app: QApplication, theme_name: str) -> None:
    """Anything in DARK_THEMES gets the dark palette, everything else the style default."""
    name = (theme_name or "").strip().lower()
    app.setStyle("Fusion")
    if name in DARK_THEMES:
        app.setPalette(_dark_palette())
    else:
        app.setPalette(app.style().standardPalette())


def button_style(picking: bool) -> str:
    return f"background-color: {PICKING_ACCENT if picking else IDLE_ACCENT}; color: white;"
