"""
Головне вікно:
    - зліва: панель керування;
    - справа: карусель графіків над таблицею ітерацій.
"""

from __future__ import annotations
from typing import Optional, Tuple

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QMainWindow,
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QStatusBar,
    QLabel,
    QSplitter,
)

from graddesc.core.config import DescentConfig
from graddesc.core.engine import DescentRunResult
from graddesc.core.iteration_result import IterationResult
from .control_panel import ControlPanelWidget
from .table_view import IterationsTableWidget
from .plot_view import PlotView
from .dialogs import show_about, humanize_stop_reason
from .styles import MARGIN, SPACING, ROLE_DIM, ROLE_WARN, set_label_role


class MainWindow(QMainWindow):
    """
    Головне вікно GUI градієнтного спуску.

    Сигнали:
        descentRequested(DescentConfig) – користувач натиснув "Запустити"
    """

    descentRequested = pyqtSignal(DescentConfig)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.setWindowTitle("Градієнтний спуск")
        self.resize(1400, 880)

        self._create_actions()
        self._create_menu()
        self._create_status_bar()
        self._create_content()
        self._connect_signals()

    # ----------------------------------------------------------------------
    # Menu + actions
    # ----------------------------------------------------------------------
    def _create_actions(self) -> None:
        self.action_exit = QAction("Вихід", self, shortcut="Ctrl+Q")
        self.action_about = QAction("Про програму", self)

    def _create_menu(self) -> None:
        menu = self.menuBar()
        menu.addMenu("Файл").addAction(self.action_exit)
        menu.addMenu("Довідка").addAction(self.action_about)

    def _create_status_bar(self) -> None:
        status = QStatusBar(self)
        self.setStatusBar(status)
        status.showMessage("Готово")

    # ----------------------------------------------------------------------
    # CONTENT LAYOUT
    # ----------------------------------------------------------------------
    def _create_content(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        root.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        root.setSpacing(SPACING)

        self.control_panel = ControlPanelWidget(central)
        self.control_panel.setMinimumWidth(360)
        root.addWidget(self.control_panel, stretch=2)
        root.addWidget(self._build_right_panel(), stretch=5)

        self.update_run_stats(None)

    def _build_right_panel(self) -> QWidget:
        widget = QWidget(self)
        widget.setMinimumWidth(760)

        layout = QVBoxLayout(widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(SPACING)

        splitter = QSplitter(Qt.Orientation.Vertical, widget)
        splitter.setHandleWidth(6)

        self.plot_view = PlotView(widget)
        splitter.addWidget(self.plot_view)

        bottom = QWidget(widget)
        bottom_layout = QVBoxLayout(bottom)
        bottom_layout.setContentsMargins(0, 0, 0, 0)
        bottom_layout.setSpacing(SPACING)

        self.iterations_table = IterationsTableWidget(bottom)
        bottom_layout.addWidget(self.iterations_table)
        bottom_layout.addLayout(self._build_stats_row())

        splitter.addWidget(bottom)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)

        layout.addWidget(splitter)
        return widget

    def _build_stats_row(self) -> QHBoxLayout:
        row = QHBoxLayout()
        row.setContentsMargins(0, 0, 0, 0)
        row.setSpacing(SPACING)

        self.label_iters = QLabel(self)
        self.label_evals = QLabel(self)
        self.label_stop = QLabel(self)
        self.label_gradient = QLabel(self)

        for lbl in (self.label_iters, self.label_evals, self.label_stop, self.label_gradient):
            set_label_role(lbl, ROLE_DIM)
            row.addWidget(lbl)

        row.addStretch()
        return row

    # ------------------------------------------------------------------
    # Signals
    # ------------------------------------------------------------------
    def _connect_signals(self) -> None:
        self.action_exit.triggered.connect(self.close)
        self.action_about.triggered.connect(lambda: show_about(self))

        self.control_panel.exitRequested.connect(self.close)
        self.control_panel.clearRequested.connect(self._on_clear_requested)
        self.control_panel.runRequested.connect(self._on_run_requested)

    def _on_run_requested(self, cfg: DescentConfig) -> None:
        self.clear_results()
        self.statusBar().showMessage(f"Запуск: f = {cfg.expression}, x0 = {cfg.init}")
        self.descentRequested.emit(cfg)

    def _on_clear_requested(self) -> None:
        self.clear_results()
        self.statusBar().showMessage("Очищено")

    # ------------------------------------------------------------------
    # PUBLIC API (для app.py)
    # ------------------------------------------------------------------
    def clear_results(self) -> None:
        """Очистити таблицю, графіки та статистику."""
        self.iterations_table.clear_table()
        self.plot_view.show_placeholder()
        self.update_run_stats(None)

    def set_variable_names(self, names: Tuple[str, str]) -> None:
        self.iterations_table.set_variable_names(names)

    def add_iteration(self, iteration: IterationResult) -> None:
        self.iterations_table.add_iteration(iteration)

    def update_run_stats(
        self,
        result: Optional[DescentRunResult],
        gradient_text: Optional[str] = None,
    ) -> None:
        """
        Оновити підписи під таблицею:
            - кількість ітерацій (з позначкою, якщо вичерпано max_iter);
            - кількість викликів f та ∇f;
            - причину зупинки;
            - запис градієнта.
        """
        if result is None:
            set_label_role(self.label_iters, ROLE_DIM)
            self.label_iters.setText("ітерацій: –")
            self.label_evals.setText("виклики f / ∇f: –")
            self.label_stop.setText("зупинка: –")
            self.label_gradient.setText("")
            return

        suffix = "" if result.reliable else " (max_iter!)"
        if result.reliable:
            set_label_role(self.label_iters, ROLE_DIM)
        else:
            set_label_role(self.label_iters, ROLE_WARN)
        self.label_iters.setText(f"ітерацій: {result.n_iter}{suffix}")
        self.label_evals.setText(f"виклики f / ∇f: {result.func_evals} / {result.grad_evals}")
        self.label_stop.setText(f"зупинка: {humanize_stop_reason(result.stopped_by)}")
        self.label_gradient.setText(gradient_text or "")
