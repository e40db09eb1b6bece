"""
Оформлення GUI градієнтного спуску.

Полотна графіків білі, як у pyplot, тому кольори ліній рівня та стрілок,
обрані в панелі керування, виглядають однаково в обох режимах. Решта
віконних елементів нейтральні й не сперечаються з цими кольорами.

Стан віджетів (другорядна кнопка, режим вибору x₀, підписи статистики)
передається через objectName / динамічні властивості, а самі правила
зібрані в одному stylesheet.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from PyQt6.QtGui import QColor, QFont, QIcon, QPalette, QPixmap
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QWidget,
)

MARGIN = 10
SPACING = 8
CORNER = 4
SWATCH_SIZE = 12

FONT_FAMILY = "Segoe UI"
FONT_SIZE = 10


@dataclass(frozen=True)
class DescentTheme:
    window: str = "#f4f5f7"
    panel: str = "#ffffff"
    canvas: str = "#ffffff"       # фон фігур matplotlib
    canvas_grid: str = "#d5dae2"  # сітка на графіку f(k)
    row_alt: str = "#eef1f5"

    ink: str = "#1d2330"
    ink_dim: str = "#6b7485"
    ink_on_accent: str = "#ffffff"

    accent: str = "#2f6fdb"
    accent_hover: str = "#4d8af0"
    picking: str = "#e8f0fd"      # фон перемикача, поки чекаємо клік
    warn: str = "#c62828"         # вичерпано max_iter

    frame: str = "#d5dae2"


THEME = DescentTheme()

# Значення динамічної властивості "role" у QLabel
ROLE_DIM = "dim"
ROLE_WARN = "warn"

SECONDARY_BUTTON = "secondary"
PICK_TOGGLE = "pickStart"


def build_stylesheet(t: DescentTheme = THEME) -> str:
    """Правила для віджетів цього застосунку."""
    rules = [
        f"QMainWindow, QDialog {{ background: {t.window}; color: {t.ink}; }}",

        # Ліва панель та групи параметрів
        f"#controlPanel {{ background: {t.window}; }}",
        f"QGroupBox {{ background: {t.panel}; border: 1px solid {t.frame};"
        f" border-radius: {CORNER}px; margin-top: 14px; padding-top: 6px; }}",
        f"QGroupBox::title {{ subcontrol-origin: margin; left: 8px; padding: 0 3px;"
        f" color: {t.accent}; font-weight: bold; }}",

        # Поля вводу параметрів спуску
        f"QLineEdit, QDoubleSpinBox, QSpinBox, QComboBox {{ background: {t.panel};"
        f" border: 1px solid {t.frame}; border-radius: {CORNER}px; padding: 3px 5px; }}",
        f"QLineEdit:focus, QDoubleSpinBox:focus, QSpinBox:focus, QComboBox:focus"
        f" {{ border-color: {t.accent}; }}",
        f"QDoubleSpinBox:disabled {{ color: {t.ink_dim}; background: {t.row_alt}; }}",

        # Перемикач "обрати x₀ кліком"
        f"QCheckBox#{PICK_TOGGLE} {{ padding: 3px; border-radius: {CORNER}px; }}",
        f"QCheckBox#{PICK_TOGGLE}:checked {{ background: {t.picking}; color: {t.accent}; }}",

        # Кнопки: "Запустити" акцентна, "Очистити" / "Вихід" другорядні
        f"QPushButton {{ background: {t.accent}; color: {t.ink_on_accent};"
        f" border: 1px solid {t.accent}; border-radius: {CORNER}px; padding: 5px 12px; }}",
        f"QPushButton:hover {{ background: {t.accent_hover}; }}",
        f"QPushButton#{SECONDARY_BUTTON} {{ background: {t.row_alt}; color: {t.ink};"
        f" border-color: {t.frame}; }}",
        f"QPushButton#{SECONDARY_BUTTON}:hover {{ border-color: {t.accent}; }}",

        # Карусель графіків
        f"#plotView {{ background: {t.canvas}; border: 1px solid {t.frame};"
        f" border-radius: {CORNER}px; }}",

        # Таблиця ітерацій
        f"QTableWidget {{ background: {t.panel}; alternate-background-color: {t.row_alt};"
        f" gridline-color: {t.frame}; selection-background-color: {t.accent};"
        f" selection-color: {t.ink_on_accent}; }}",
        f"QHeaderView::section {{ background: {t.row_alt}; border: none;"
        f" border-right: 1px solid {t.frame}; padding: 3px; font-weight: bold; }}",

        # Підписи статистики під таблицею
        f'QLabel[role="{ROLE_DIM}"] {{ color: {t.ink_dim}; }}',
        f'QLabel[role="{ROLE_WARN}"] {{ color: {t.warn}; font-weight: bold; }}',

        f"QStatusBar {{ background: {t.panel}; color: {t.ink_dim}; }}",
    ]
    return "\n".join(rules)


def install_theme(app: QApplication) -> None:
    palette = app.palette()
    palette.setColor(QPalette.ColorRole.Window, QColor(THEME.window))
    palette.setColor(QPalette.ColorRole.Base, QColor(THEME.panel))
    palette.setColor(QPalette.ColorRole.Text, QColor(THEME.ink))
    app.setPalette(palette)
    app.setFont(QFont(FONT_FAMILY, FONT_SIZE))
    app.setStyleSheet(build_stylesheet())


# ---------------------------------------------------------------------------
# Хелпери для окремих віджетів
# ---------------------------------------------------------------------------

def set_label_role(lbl: QLabel, role: str) -> None:
    """Перемкнути вигляд підпису (ROLE_DIM / ROLE_WARN) без власного stylesheet."""
    lbl.setProperty("role", role)
    lbl.style().unpolish(lbl)
    lbl.style().polish(lbl)


def mark_secondary(btn: QPushButton) -> None:
    btn.setObjectName(SECONDARY_BUTTON)


def mark_pick_toggle(widget: QWidget) -> None:
    widget.setObjectName(PICK_TOGGLE)


def fill_color_combo(combo: QComboBox, names: Iterable[str]) -> None:
    """Додати кольори matplotlib у комбобокс разом зі зразком кольору."""
    for name in names:
        swatch = QPixmap(SWATCH_SIZE, SWATCH_SIZE)
        swatch.fill(QColor(name))
        combo.addItem(QIcon(swatch), name)


def style_iterations_table(table: QTableWidget) -> None:
    table.verticalHeader().setVisible(False)
    table.setAlternatingRowColors(True)
    table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)


__all__ = [
    "MARGIN",
    "SPACING",
    "THEME",
    "ROLE_DIM",
    "ROLE_WARN",
    "SECONDARY_BUTTON",
    "PICK_TOGGLE",
    "DescentTheme",
    "build_stylesheet",
    "install_theme",
    "set_label_role",
    "mark_secondary",
    "mark_pick_toggle",
    "fill_color_combo",
    "style_iterations_table",
]
