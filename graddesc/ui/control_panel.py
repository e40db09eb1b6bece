"""
control_panel.py

Панель керування для GUI:
    - приклад функції або власний вираз f(x, y);
    - область для контурів (x0, y0, x1, y1) та кількість вузлів сітки;
    - початкова точка або вибір кліком на графіку;
    - γ (крок), tol, max_iter;
    - спосіб побудови градієнта;
    - пауза анімації та кольори контурів / стрілок;
    - кнопки: Запустити, Очистити, Вихід.

Видає назовні:
    - сигнал runRequested(DescentConfig)
    - сигнал clearRequested()
    - сигнал exitRequested()
"""

from __future__ import annotations

from typing import List, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QGridLayout,
    QGroupBox,
    QComboBox,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QDoubleSpinBox,
    QCheckBox,
)

from graddesc.core.config import DescentConfig
from graddesc.core.defaults import (
    COLOR_CHOICES,
    DEFAULT_COL_ARROW,
    DEFAULT_COL_CONTOUR,
    DEFAULT_GRID_LENGTH,
    DEFAULT_INTERVAL,
)
from graddesc.core.functions import FUNCTIONS, TargetFunction
from graddesc.core.gradient import GRADIENT_METHODS
from .styles import (
    MARGIN,
    SPACING,
    fill_color_combo,
    mark_pick_toggle,
    mark_secondary,
)

_GRADIENT_LABELS = {
    "symbolic": "Символьний (sympy)",
    "numerical": "Чисельний (центральні різниці)",
}


def _spin(parent: QWidget, low: float, high: float, decimals: int, value: float) -> QDoubleSpinBox:
    box = QDoubleSpinBox(parent)
    box.setRange(low, high)
    box.setDecimals(decimals)
    box.setValue(value)
    return box


class ControlPanelWidget(QWidget):
    """
    Ліва панель керування.

    Сигнали:
        runRequested(DescentConfig)  – натиснуто "Запустити"
        clearRequested()             – натиснуто "Очистити"
        exitRequested()              – натиснуто "Вихід"
    """

    runRequested = pyqtSignal(DescentConfig)
    clearRequested = pyqtSignal()
    exitRequested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._presets: List[TargetFunction] = list(FUNCTIONS.values())
        self._gradient_keys: List[str] = list(GRADIENT_METHODS)
        self._build_ui()
        self._connect_signals()
        self.apply_preset(0)

    # ------------------------------------------------------------------
    # Побудова UI
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self.setObjectName("controlPanel")

        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        main_layout.setSpacing(SPACING)

        # ------------------------------------------------------------------
        # Блок 1. Цільова функція та область
        # ------------------------------------------------------------------
        self.problem_group = QGroupBox("Цільова функція", self)
        self.problem_group.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        problem_layout = QVBoxLayout(self.problem_group)
        problem_layout.setSpacing(SPACING)

        self.combo_function = QComboBox(self.problem_group)
        self.combo_function.addItems([tf.name for tf in self._presets])

        self.input_expression = QLineEdit(self.problem_group)
        self.input_expression.setPlaceholderText("наприклад: x**2 + 3*sin(y)")

        problem_layout.addWidget(QLabel("Приклад:", self.problem_group))
        problem_layout.addWidget(self.combo_function)
        problem_layout.addWidget(QLabel("f(x, y) =", self.problem_group))
        problem_layout.addWidget(self.input_expression)

        range_grid = QGridLayout()
        range_grid.setSpacing(SPACING)
        self.input_x_min = _spin(self.problem_group, -1e6, 1e6, 4, -3.0)
        self.input_x_max = _spin(self.problem_group, -1e6, 1e6, 4, 3.0)
        self.input_y_min = _spin(self.problem_group, -1e6, 1e6, 4, -3.0)
        self.input_y_max = _spin(self.problem_group, -1e6, 1e6, 4, 3.0)
        range_grid.addWidget(QLabel("x від", self.problem_group), 0, 0)
        range_grid.addWidget(self.input_x_min, 0, 1)
        range_grid.addWidget(QLabel("до", self.problem_group), 0, 2)
        range_grid.addWidget(self.input_x_max, 0, 3)
        range_grid.addWidget(QLabel("y від", self.problem_group), 1, 0)
        range_grid.addWidget(self.input_y_min, 1, 1)
        range_grid.addWidget(QLabel("до", self.problem_group), 1, 2)
        range_grid.addWidget(self.input_y_max, 1, 3)
        problem_layout.addLayout(range_grid)

        main_layout.addWidget(self.problem_group)

        # ------------------------------------------------------------------
        # Блок 2. Старт і параметри спуску
        # ------------------------------------------------------------------
        self.params_group = QGroupBox("Параметри спуску", self)
        self.params_group.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        params_layout = QGridLayout(self.params_group)
        params_layout.setSpacing(SPACING)

        self.input_init_x = _spin(self.params_group, -1e6, 1e6, 4, -3.0)
        self.input_init_y = _spin(self.params_group, -1e6, 1e6, 4, 3.0)
        self.check_interactive = QCheckBox("Обрати x₀ кліком на графіку", self.params_group)
        mark_pick_toggle(self.check_interactive)

        self.input_gamma = _spin(self.params_group, 1e-6, 1e3, 6, 0.05)
        self.input_tol = _spin(self.params_group, 1e-10, 1e3, 10, 1e-3)
        self.input_max_iter = QSpinBox(self.params_group)
        self.input_max_iter.setRange(1, 100000)

        self.combo_gradient = QComboBox(self.params_group)
        self.combo_gradient.addItems([_GRADIENT_LABELS.get(k, k) for k in self._gradient_keys])

        params_layout.addWidget(QLabel("x₀:", self.params_group), 0, 0)
        params_layout.addWidget(self.input_init_x, 0, 1)
        params_layout.addWidget(self.input_init_y, 0, 2)
        params_layout.addWidget(self.check_interactive, 1, 0, 1, 3)
        params_layout.addWidget(QLabel("γ (крок):", self.params_group), 2, 0)
        params_layout.addWidget(self.input_gamma, 2, 1, 1, 2)
        params_layout.addWidget(QLabel("tol:", self.params_group), 3, 0)
        params_layout.addWidget(self.input_tol, 3, 1, 1, 2)
        params_layout.addWidget(QLabel("max_iter:", self.params_group), 4, 0)
        params_layout.addWidget(self.input_max_iter, 4, 1, 1, 2)
        params_layout.addWidget(QLabel("Градієнт:", self.params_group), 5, 0)
        params_layout.addWidget(self.combo_gradient, 5, 1, 1, 2)

        main_layout.addWidget(self.params_group)

        # ------------------------------------------------------------------
        # Блок 3. Відображення
        # ------------------------------------------------------------------
        self.display_group = QGroupBox("Відображення", self)
        self.display_group.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        display_layout = QGridLayout(self.display_group)
        display_layout.setSpacing(SPACING)

        self.input_length = QSpinBox(self.display_group)
        self.input_length.setRange(2, 500)
        self.input_length.setValue(DEFAULT_GRID_LENGTH)

        self.input_interval = _spin(self.display_group, 0.0, 10.0, 2, DEFAULT_INTERVAL)
        self.input_interval.setSuffix(" с")

        self.combo_col_contour = QComboBox(self.display_group)
        fill_color_combo(self.combo_col_contour, COLOR_CHOICES)
        self.combo_col_contour.setCurrentText(DEFAULT_COL_CONTOUR)

        self.combo_col_arrow = QComboBox(self.display_group)
        fill_color_combo(self.combo_col_arrow, COLOR_CHOICES)
        self.combo_col_arrow.setCurrentText(DEFAULT_COL_ARROW)

        display_layout.addWidget(QLabel("Вузлів сітки:", self.display_group), 0, 0)
        display_layout.addWidget(self.input_length, 0, 1)
        display_layout.addWidget(QLabel("Пауза:", self.display_group), 1, 0)
        display_layout.addWidget(self.input_interval, 1, 1)
        display_layout.addWidget(QLabel("Колір контурів:", self.display_group), 2, 0)
        display_layout.addWidget(self.combo_col_contour, 2, 1)
        display_layout.addWidget(QLabel("Колір стрілок:", self.display_group), 3, 0)
        display_layout.addWidget(self.combo_col_arrow, 3, 1)

        main_layout.addWidget(self.display_group)

        # ------------------------------------------------------------------
        # Нижній ряд кнопок
        # ------------------------------------------------------------------
        buttons_row = QHBoxLayout()
        buttons_row.setSpacing(SPACING)

        self.button_run = QPushButton("Запустити", self)
        self.button_clear = QPushButton("Очистити", self)
        self.button_exit = QPushButton("Вихід", self)
        mark_secondary(self.button_clear)
        mark_secondary(self.button_exit)

        buttons_row.addWidget(self.button_run)
        buttons_row.addWidget(self.button_clear)
        buttons_row.addStretch(1)
        buttons_row.addWidget(self.button_exit)

        main_layout.addLayout(buttons_row)
        main_layout.addStretch(1)

    # ------------------------------------------------------------------
    # Сигнали
    # ------------------------------------------------------------------

    def _connect_signals(self) -> None:
        self.combo_function.currentIndexChanged.connect(self.apply_preset)
        self.check_interactive.toggled.connect(self._on_interactive_toggled)
        self.button_run.clicked.connect(self._on_run_clicked)
        self.button_clear.clicked.connect(self._on_clear_clicked)
        self.button_exit.clicked.connect(self._on_exit_clicked)

    # ------------------------------------------------------------------
    # Внутрішні хелпери
    # ------------------------------------------------------------------

    def apply_preset(self, index: int) -> None:
        """Заповнити поля рекомендованими параметрами прикладу."""
        if not 0 <= index < len(self._presets):
            return
        tf = self._presets[index]
        x0, y0, x1, y1 = tf.rg

        self.input_expression.setText(tf.expression)
        self.input_x_min.setValue(x0)
        self.input_y_min.setValue(y0)
        self.input_x_max.setValue(x1)
        self.input_y_max.setValue(y1)
        self.input_init_x.setValue(tf.init[0])
        self.input_init_y.setValue(tf.init[1])
        self.input_gamma.setValue(tf.gamma)
        self.input_tol.setValue(tf.tol)
        self.input_max_iter.setValue(tf.max_iter)

    def _on_interactive_toggled(self, checked: bool) -> None:
        self.input_init_x.setEnabled(not checked)
        self.input_init_y.setEnabled(not checked)

    def build_config(self) -> DescentConfig:
        """Зібрати DescentConfig з поточного стану контролів."""
        return DescentConfig(
            expression=self.input_expression.text().strip(),
            rg=(
                self.input_x_min.value(),
                self.input_y_min.value(),
                self.input_x_max.value(),
                self.input_y_max.value(),
            ),
            init=(self.input_init_x.value(), self.input_init_y.value()),
            gamma=float(self.input_gamma.value()),
            tol=float(self.input_tol.value()),
            max_iter=int(self.input_max_iter.value()),
            length=int(self.input_length.value()),
            interval=float(self.input_interval.value()),
            gradient_method=self._gradient_keys[self.combo_gradient.currentIndex()],
            col_contour=self.combo_col_contour.currentText(),
            col_arrow=self.combo_col_arrow.currentText(),
            interactive=self.check_interactive.isChecked(),
        )

    def _on_run_clicked(self) -> None:
        self.runRequested.emit(self.build_config())

    def _on_clear_clicked(self) -> None:
        self.clearRequested.emit()

    def _on_exit_clicked(self) -> None:
        self.exitRequested.emit()
