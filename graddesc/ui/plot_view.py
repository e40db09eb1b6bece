"""
Віджет графіків спуску у вигляді каруселі:
    - лінії рівня + стрілки кроків (анімуються покроково);
    - поверхня f(x, y) + траєкторія;
    - графік f(k).

Вибір стартової точки кліком: show_start_picker(...) малює контури й чекає
на клік, після чого випускає сигнал startPicked(x, y).
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np
from PyQt6.QtCore import QTimer, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QStackedWidget,
    QComboBox,
)

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from graddesc.core.defaults import DEFAULT_COL_ARROW, DEFAULT_COL_CONTOUR
from graddesc.core.render import draw_arrows, draw_contour, draw_surface, draw_values
from graddesc.core.surface import SurfaceGrid
from .styles import MARGIN, SPACING, THEME


class PlotPage:
    def __init__(self, figure: Figure, canvas: FigureCanvas, axes):
        self.figure = figure
        self.canvas = canvas
        self.axes = axes


class PlotView(QWidget):
    startPicked = pyqtSignal(float, float)
    animationFinished = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("plotView")
        self.pages_order = ["contour", "surface", "fk"]
        self.pages: dict[str, PlotPage] = {}

        self._picking = False
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_animation_tick)
        self._anim_points: Optional[np.ndarray] = None
        self._anim_step = 0
        self._anim_color = DEFAULT_COL_ARROW

        self._build_ui()

    # ------------------------------------------------------------------
    # UI
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        layout.setSpacing(SPACING)

        nav = QHBoxLayout()
        nav.setSpacing(SPACING)
        nav.addWidget(QLabel("Графік:", self))

        self.combo_mode = QComboBox(self)
        self.combo_mode.addItems([
            "Лінії рівня та кроки",
            "Поверхня f(x, y)",
            "Графік f(k)",
        ])
        self.combo_mode.currentIndexChanged.connect(self._on_combo_changed)
        nav.addWidget(self.combo_mode, stretch=1)

        self.btn_prev = QPushButton("◀")
        self.btn_next = QPushButton("▶")
        for btn in (self.btn_prev, self.btn_next):
            btn.setFixedWidth(34)
        self.btn_prev.clicked.connect(lambda: self._shift_page(-1))
        self.btn_next.clicked.connect(lambda: self._shift_page(1))
        nav.addWidget(self.btn_prev)
        nav.addWidget(self.btn_next)

        layout.addLayout(nav)

        self.stacked = QStackedWidget(self)
        layout.addWidget(self.stacked, stretch=1)

        self.pages["contour"] = self._create_page()
        self.pages["surface"] = self._create_page(projection="3d")
        self.pages["fk"] = self._create_page()
        for key in self.pages_order:
            self.stacked.addWidget(self.pages[key].canvas)

        self.pages["contour"].canvas.mpl_connect("button_press_event", self._on_canvas_click)

        self.show_placeholder()

    def _create_page(self, projection: Optional[str] = None) -> PlotPage:
        figure = Figure(facecolor=THEME.canvas)
        if projection == "3d":
            ax = figure.add_subplot(111, projection="3d")
        else:
            ax = figure.add_subplot(111)
        return PlotPage(figure, FigureCanvas(figure), ax)

    # ------------------------------------------------------------------
    # Навігація
    # ------------------------------------------------------------------
    def _on_combo_changed(self, index: int) -> None:
        self.stacked.setCurrentIndex(index)

    def _shift_page(self, delta: int) -> None:
        idx = (self.stacked.currentIndex() + delta) % len(self.pages_order)
        self._set_index(idx)

    def _set_page(self, key: str) -> None:
        self._set_index(self.pages_order.index(key))

    def _set_index(self, idx: int) -> None:
        self.stacked.setCurrentIndex(idx)
        self.combo_mode.setCurrentIndex(idx)

    def _redraw(self, key: str) -> None:
        page = self.pages[key]
        page.figure.tight_layout()
        page.canvas.draw_idle()

    # ------------------------------------------------------------------
    # Публічні методи
    # ------------------------------------------------------------------
    def show_placeholder(self) -> None:
        self.stop_animation()
        self._picking = False
        messages = {
            "contour": "Лінії рівня з'являться після запуску",
            "surface": "Поверхня з'явиться після запуску",
            "fk": "Графік f(k) з'явиться після запуску",
        }
        for key, msg in messages.items():
            ax = self.pages[key].axes
            ax.clear()
            if key == "surface":
                ax.text(0.5, 0.5, 0.5, msg, ha="center", va="center", color=THEME.ink_dim)
            else:
                ax.text(0.5, 0.5, msg, ha="center", va="center", transform=ax.transAxes, color=THEME.ink_dim)
            self.pages[key].canvas.draw_idle()

    def show_start_picker(self, grid: SurfaceGrid, col_contour: str = DEFAULT_COL_CONTOUR) -> None:
        """Показати контури та чекати на клік, що задає x₀."""
        self.stop_animation()
        ax = self.pages["contour"].axes
        ax.clear()
        draw_contour(ax, grid, color=col_contour, title="Клацніть, щоб обрати початкову точку")
        self._redraw("contour")
        self._set_page("contour")
        self._picking = True

    def animate_descent(
        self,
        grid: SurfaceGrid,
        trajectory: np.ndarray,
        title: str,
        col_contour: str = DEFAULT_COL_CONTOUR,
        col_arrow: str = DEFAULT_COL_ARROW,
        interval: float = 0.0,
    ) -> None:
        """
        Лінії рівня + стрілки; при interval > 0 стрілки додаються по одній
        кожні interval секунд.
        """
        self.stop_animation()
        self._picking = False

        ax = self.pages["contour"].axes
        ax.clear()
        draw_contour(ax, grid, color=col_contour, title=title)
        self._set_page("contour")

        points = np.asarray(trajectory, dtype=float)
        if interval <= 0.0 or len(points) < 2:
            draw_arrows(ax, points, color=col_arrow)
            self._redraw("contour")
            self.animationFinished.emit()
            return

        self._redraw("contour")
        self._anim_points = points
        self._anim_step = 0
        self._anim_color = col_arrow
        self._timer.start(int(interval * 1000))

    def stop_animation(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
        self._anim_points = None

    def _on_animation_tick(self) -> None:
        points = self._anim_points
        if points is None:
            self._timer.stop()
            return

        # лише нова стрілка, попередні вже на осях
        self._anim_step += 1
        ax = self.pages["contour"].axes
        draw_arrows(ax, points[self._anim_step - 1:self._anim_step + 1], color=self._anim_color)
        self.pages["contour"].canvas.draw_idle()

        if self._anim_step >= len(points) - 1:
            self.stop_animation()
            self.animationFinished.emit()

    def plot_surface(
        self,
        grid: SurfaceGrid,
        trajectory: Optional[np.ndarray] = None,
        values: Optional[np.ndarray] = None,
        col_arrow: str = DEFAULT_COL_ARROW,
    ) -> None:
        ax = self.pages["surface"].axes
        ax.clear()
        draw_surface(ax, grid, trajectory=trajectory, trajectory_values=values, line_color=col_arrow)
        ax.set_title("Поверхня f + траєкторія")
        self._redraw("surface")

    def plot_fk(self, values: List[float], col_arrow: str = DEFAULT_COL_ARROW) -> None:
        ax = self.pages["fk"].axes
        ax.clear()
        if len(values) == 0:
            self.pages["fk"].canvas.draw_idle()
            return
        draw_values(ax, values, color=col_arrow)
        ax.grid(True, color=THEME.canvas_grid, linestyle="--", linewidth=0.5)
        ax.set_title("Графік f(k)")
        self._redraw("fk")

    # ------------------------------------------------------------------
    # Вибір стартової точки
    # ------------------------------------------------------------------
    def _on_canvas_click(self, event) -> None:
        if not self._picking:
            return
        if event.inaxes is not self.pages["contour"].axes or event.xdata is None:
            return
        self._picking = False
        self.startPicked.emit(float(event.xdata), float(event.ydata))
