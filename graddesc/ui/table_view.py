"""
table_view.py

Таблиця ітерацій градієнтного спуску.

Функціонал:
    - відображає послідовність IterationResult;
    - колонки:
        k, x, y, f(x, y), |Δf|, ||∇f||;
    - хелпери:
        clear_table()
        set_variable_names(names)
        add_iteration(iteration)
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QHeaderView,
    QAbstractItemView,
)

from graddesc.core.iteration_result import IterationResult
from .styles import MARGIN, SPACING, ROLE_DIM, set_label_role, style_iterations_table


class IterationsTableWidget(QWidget):
    """
    Обгортка над QTableWidget для траси спуску.

    Колонки:
        0: k       – номер ітерації
        1: x       – перша координата (підпис — ім'я змінної)
        2: y       – друга координата
        3: f       – значення цільової функції
        4: |Δf|    – зміна функції відносно попередньої ітерації
        5: ||∇f||  – норма градієнта у точці, з якої зроблено крок
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        root.setSpacing(SPACING)

        header_row = QHBoxLayout()
        header_row.setContentsMargins(0, 0, 0, 0)

        title = QLabel("Ітерації спуску", self)
        subtitle = QLabel("k, координати, f, |Δf| та ||∇f||", self)
        set_label_role(subtitle, ROLE_DIM)

        header_row.addWidget(title)
        header_row.addStretch(1)
        header_row.addWidget(subtitle)
        root.addLayout(header_row)

        self.table = QTableWidget(self)
        self.table.setColumnCount(6)
        style_iterations_table(self.table)
        self.set_variable_names(("x", "y"))

        h_header = self.table.horizontalHeader()
        h_header.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)

        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setDefaultSectionSize(22)

        root.addWidget(self.table)

    # ------------------------------------------------------------------
    # Публічне API
    # ------------------------------------------------------------------

    def clear_table(self) -> None:
        """Очистити всі рядки таблиці."""
        self.table.setRowCount(0)

    def set_variable_names(self, names: Tuple[str, str]) -> None:
        self.table.setHorizontalHeaderLabels(
            ["k", names[0], names[1], "f", "|Δf|", "||∇f||"]
        )

    def add_iteration(self, iteration: IterationResult) -> None:
        """Додати один рядок у таблицю за IterationResult."""
        row = self.table.rowCount()
        self.table.insertRow(row)

        def _item(text: Any, align: Qt.AlignmentFlag = Qt.AlignmentFlag.AlignRight) -> QTableWidgetItem:
            it = QTableWidgetItem(str(text))
            it.setTextAlignment(align | Qt.AlignmentFlag.AlignVCenter)
            return it

        x1, x2 = iteration.x
        grad_norm = iteration.meta.get("grad_norm")

        self.table.setItem(row, 0, _item(iteration.index, Qt.AlignmentFlag.AlignHCenter))
        self.table.setItem(row, 1, _item(f"{x1:.6f}"))
        self.table.setItem(row, 2, _item(f"{x2:.6f}"))
        self.table.setItem(row, 3, _item(f"{iteration.f:.6e}"))
        if iteration.index == 0:
            self.table.setItem(row, 4, _item("—", Qt.AlignmentFlag.AlignHCenter))
        else:
            self.table.setItem(row, 4, _item(f"{iteration.delta:.3e}"))
        if grad_norm is None:
            self.table.setItem(row, 5, _item("—", Qt.AlignmentFlag.AlignHCenter))
        else:
            self.table.setItem(row, 5, _item(f"{float(grad_norm):.3e}"))

