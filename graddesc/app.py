"""
app.py

Контролер для GUI-застосунку градієнтного спуску.

Зв'язує:
    - ui.MainWindow (PyQt6)
    - core.DescentEngine + FixedStepDescent
    - core.gradient.build_gradient (символьний / чисельний градієнт)

Функціонал:
    - реагує на сигнал MainWindow.descentRequested(DescentConfig);
    - перевіряє параметри до запуску;
    - якщо обрано вибір x₀ кліком — показує контури і чекає на клік;
    - запускає DescentEngine, у callback заповнює таблицю ітерацій;
    - після завершення — анімує стрілки на лініях рівня, малює поверхню і f(k).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import numpy as np
from PyQt6.QtWidgets import QApplication

from graddesc.core.config import DescentConfig, as_point
from graddesc.core.engine import DescentEngine, DescentRunResult
from graddesc.core.errors import GradDescError
from graddesc.core.fixed_step import FixedStepDescent
from graddesc.core.functions import Objective
from graddesc.core.gradient import Gradient, build_gradient
from graddesc.core.render import format_title
from graddesc.core.surface import SurfaceGrid
from graddesc.ui.dialogs import show_error
from graddesc.ui.main_window import MainWindow
from graddesc.ui.styles import install_theme

logger = logging.getLogger(__name__)


class DescentController:
    """
    Зв'язує MainWindow та DescentEngine.

    Схема:
        GUI (MainWindow) --[DescentConfig]--> Controller
        Controller -- будує Objective, Gradient, SurfaceGrid
        (опційно) PlotView.startPicked --> Controller
        Controller -- запускає Engine; callback -> таблиця ітерацій
        Після завершення: анімація стрілок, поверхня, f(k)
    """

    def __init__(self, window: MainWindow, engine: DescentEngine) -> None:
        self.window = window
        self.engine = engine

        # Очікуваний запуск, поки користувач обирає x0 кліком
        self._pending: Optional[tuple] = None

        self.window.descentRequested.connect(self.on_descent_requested)
        self.window.plot_view.startPicked.connect(self.on_start_picked)
        self.window.plot_view.animationFinished.connect(self.on_animation_finished)

    def _fail(self, title: str, exc: Exception) -> None:
        logger.warning("%s: %s", title, exc)
        show_error(self.window, str(exc), title=title)
        self.window.statusBar().showMessage(f"Помилка: {exc}")
        self.window.update_run_stats(None)

    # ------------------------------------------------------------------
    # Обробники сигналів
    # ------------------------------------------------------------------

    def on_descent_requested(self, cfg: DescentConfig) -> None:
        """Натиснуто "Запустити"."""
        self._pending = None
        try:
            cfg.validate()
            objective = Objective.from_expression(cfg.expression)
            gradient = build_gradient(objective, method=cfg.gradient_method)
            grid = SurfaceGrid.from_range(objective, cfg.rg, cfg.length)
        except GradDescError as exc:
            self._fail("Некоректні параметри", exc)
            return

        self.window.set_variable_names(objective.variables)

        if cfg.interactive:
            self._pending = (cfg, objective, gradient, grid)
            self.window.plot_view.show_start_picker(grid, cfg.col_contour)
            self.window.statusBar().showMessage("Оберіть початкову точку кліком на лініях рівня")
            return

        self._run(cfg, objective, gradient, grid, cfg.init)

    def on_start_picked(self, x: float, y: float) -> None:
        if self._pending is None:
            return
        cfg, objective, gradient, grid = self._pending
        self._pending = None
        self._run(cfg, objective, gradient, grid, (x, y))

    def on_animation_finished(self) -> None:
        logger.debug("Анімацію спуску завершено")

    # ------------------------------------------------------------------
    # Запуск
    # ------------------------------------------------------------------

    def _run(
        self,
        cfg: DescentConfig,
        objective: Objective,
        gradient: Gradient,
        grid: SurfaceGrid,
        start: Sequence[float],
    ) -> None:
        self.window.iterations_table.clear_table()

        try:
            x0 = as_point(start)
            optimizer = FixedStepDescent(objective, gradient, gamma=cfg.gamma)
            result: DescentRunResult = self.engine.run(
                optimizer=optimizer,
                x0=x0,
                max_iter=cfg.max_iter,
                tol=cfg.tol,
                callback=self.window.add_iteration,
            )
        except GradDescError as exc:
            self._fail("Помилка під час спуску", exc)
            return

        trajectory = result.trajectory
        plot_view = self.window.plot_view
        plot_view.plot_surface(grid, trajectory, result.values, cfg.col_arrow)
        plot_view.plot_fk(result.values.tolist(), cfg.col_arrow)
        plot_view.animate_descent(
            grid,
            trajectory,
            title=format_title(objective),
            col_contour=cfg.col_contour,
            col_arrow=cfg.col_arrow,
            interval=cfg.interval,
        )

        self.window.update_run_stats(result, gradient.describe())

        msg = (
            f"зупинка: {result.stopped_by}, ітерацій: {result.n_iter}, "
            f"f* = {result.f_star:.6e}, x* = {np.round(result.x_star, 6).tolist()}"
        )
        self.window.statusBar().showMessage(msg)


# ---------------------------------------------------------------------------
# Точка входу
# ---------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Візуалізація градієнтного спуску")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="рівень логування (default: WARNING)",
    )
    args, qt_args = parser.parse_known_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication([sys.argv[0], *qt_args])
    install_theme(app)

    window = MainWindow()
    engine = DescentEngine()

    # Контролер прив'язується до сигналів вікна і до движка
    _controller = DescentController(window, engine)

    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
