"""
ui/dialogs.py

Стандартні діалоги для GUI-застосунку:

    - show_error            – повідомлення про помилку
    - show_about            – вікно "Про програму"
    - humanize_stop_reason  – людський опис причини зупинки спуску
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget,
    QMessageBox,
    QDialog,
    QVBoxLayout,
    QLabel,
    QDialogButtonBox,
    QFrame,
)

from graddesc import __version__
from graddesc.core.engine import STOP_F_CHANGE, STOP_MAX_ITER
from .styles import MARGIN, SPACING, ROLE_DIM, set_label_role


def show_error(parent: Optional[QWidget], message: str, title: str = "Помилка") -> None:
    """Показати діалог помилки."""
    dlg = QMessageBox(parent)
    dlg.setIcon(QMessageBox.Icon.Critical)
    dlg.setWindowTitle(title)
    dlg.setText(message)
    dlg.setStandardButtons(QMessageBox.StandardButton.Ok)
    dlg.exec()


def show_about(parent: Optional[QWidget]) -> None:
    dlg = AboutDialog(parent)
    dlg.exec()


def humanize_stop_reason(code: Optional[str]) -> str:
    """Перетворити машинний код причини зупинки на людське пояснення."""
    if not code:
        return "Невідомо"

    mapping = {
        STOP_F_CHANGE: "Зміна значення функції стала меншою за tol",
        STOP_MAX_ITER: "Досягнуто max_iter — результат може бути ненадійним",
    }
    return mapping.get(code, f"Інша причина ({code})")


class AboutDialog(QDialog):
    """Вікно "Про програму"."""

    def __init__(self, parent: Optional[QWidget]) -> None:
        super().__init__(parent)
        self.setWindowTitle("Про програму")
        self.setModal(True)
        self.resize(520, 420)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        layout.setSpacing(SPACING)

        title = QLabel("<b>Градієнтний спуск для функцій двох змінних</b>", self)
        title.setWordWrap(True)

        subtitle = QLabel("Навчальна візуалізація мінімізації гладкої функції.", self)
        subtitle.setWordWrap(True)
        set_label_role(subtitle, ROLE_DIM)

        separator = QFrame(self)
        separator.setFrameShape(QFrame.Shape.HLine)
        separator.setFrameShadow(QFrame.Shadow.Sunken)

        description = QLabel(
            (
                "<p>На кожній ітерації точка зсувається проти градієнта: "
                "x<sub>k+1</sub> = x<sub>k</sub> − γ·∇f(x<sub>k</sub>). "
                "Стрілки на лініях рівня показують кроки; процес зупиняється, "
                "коли |f(x<sub>k+1</sub>) − f(x<sub>k</sub>)| ≤ tol, або після "
                "max_iter ітерацій.</p>"
                "<p>Градієнт будується символьно (sympy) або чисельно. "
                "Функція повинна бути диференційовною у всіх точках траєкторії.</p>"
            ),
            self,
        )
        description.setWordWrap(True)

        footer = QLabel(f"<p><b>Версія:</b> {__version__}</p>", self)
        set_label_role(footer, ROLE_DIM)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok,
            orientation=Qt.Orientation.Horizontal,
            parent=self,
        )
        buttons.accepted.connect(self.accept)

        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addWidget(separator)
        layout.addWidget(description)
        layout.addStretch(1)
        layout.addWidget(footer)
        layout.addWidget(buttons, alignment=Qt.AlignmentFlag.AlignRight)
