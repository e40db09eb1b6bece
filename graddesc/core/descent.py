"""
descent.py

Публічні точки входу градієнтного спуску без GUI.

    run_descent(f, grad, start, step, tol, max_iter)
        -> (final_point, final_value, iterations, trajectory)

    grad_desc(objective, rg, init, gamma, tol, ...)
        -> GradDescResult(par, value, n_iter, gradient, persp, ...)

grad_desc додатково будує градієнт (символьно за замовчуванням), сітку для
контурів і, якщо show=True, малює лінії рівня та стрілки після кожної
ітерації з паузою interval.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np

from .config import as_point, as_range, require_int, require_non_negative, require_positive
from .defaults import (
    DEFAULT_COL_ARROW,
    DEFAULT_COL_CONTOUR,
    DEFAULT_GAMMA,
    DEFAULT_GRADIENT_METHOD,
    DEFAULT_GRID_LENGTH,
    DEFAULT_INIT,
    DEFAULT_MAX_ITER,
    DEFAULT_RANGE,
    DEFAULT_TOL,
)
from .engine import DescentEngine, DescentRunResult
from .errors import InvalidArgumentError
from .fixed_step import FixedStepDescent
from .functions import Objective, as_objective
from .gradient import AnalyticGradient, Gradient, GradientFunction, build_gradient
from .iteration_result import IterationResult
from .render import draw_arrows, draw_contour, format_title
from .surface import SurfaceGrid

logger = logging.getLogger(__name__)

StartPicker = Callable[[SurfaceGrid], Sequence[float]]


# ---------------------------------------------------------------------------
# Мінімальний контракт
# ---------------------------------------------------------------------------

def run_descent(
    f: Callable[[float, float], float],
    grad: Union[Gradient, GradientFunction],
    start: Sequence[float],
    step: float,
    tol: float,
    max_iter: int,
) -> Tuple[np.ndarray, float, int, np.ndarray]:
    """
    Градієнтний спуск з фіксованим кроком.

    f(x, y) -> float, grad(x, y) -> (∂f/∂x, ∂f/∂y).
    Повертає (остання точка, її значення, кількість ітерацій, траєкторія).
    Якщо кількість ітерацій дорівнює max_iter, збіжність не гарантована.
    """
    step = require_positive(step, "step")
    tol = require_positive(tol, "tol")
    max_iter = require_int(max_iter, "max_iter", 1)

    objective = f if isinstance(f, Objective) else Objective(name="f", variables=("x", "y"), func=f)
    gradient = grad if isinstance(grad, Gradient) else AnalyticGradient(grad).build(objective)

    optimizer = FixedStepDescent(objective, gradient, gamma=step)
    run = DescentEngine().run(optimizer, start, max_iter=max_iter, tol=tol)
    return run.x_star, run.f_star, run.n_iter, run.trajectory


# ---------------------------------------------------------------------------
# Повна процедура з візуалізацією
# ---------------------------------------------------------------------------

@dataclass
class GradDescResult:
    """
    Атрибути:
        par        - знайдена точка (локальний мінімум, якщо спуск збігся)
        value      - значення f у par
        n_iter     - кількість ітерацій; якщо дорівнює max_iter, результат
                     ймовірно ненадійний
        gradient   - побудований градієнт, grad(x, y) -> np.ndarray
        persp      - функція для 3-D графіка f: persp(ax=None, **kwargs)
        trajectory - усі відвідані точки, форма (n_iter + 1, 2)
        converged  - True, якщо зупинились за критерієм зміни f
        run        - повний DescentRunResult
        grid       - сітка значень f для контурів
    """
    par: np.ndarray
    value: float
    n_iter: int
    gradient: Gradient
    persp: Callable[..., Any]
    trajectory: np.ndarray
    converged: bool
    run: DescentRunResult
    grid: SurfaceGrid


def pick_start_by_click(
    grid: SurfaceGrid,
    ax=None,
    col_contour: str = DEFAULT_COL_CONTOUR,
    timeout: float = -1,
) -> np.ndarray:
    """Показати контури та повернути точку, на якій клацнув користувач."""
    if ax is None:
        ax = plt.figure().add_subplot(111)
    ax.clear()
    draw_contour(ax, grid, color=col_contour, title="Оберіть початкову точку кліком на графіку")
    points = plt.ginput(1, timeout=timeout)
    if not points:
        raise InvalidArgumentError("Початкову точку не обрано.")
    return np.asarray(points[0], dtype=float)


def _resolve_gradient(
    objective: Objective,
    gradient: Union[str, Gradient, GradientFunction],
) -> Gradient:
    if isinstance(gradient, Gradient):
        return gradient
    if isinstance(gradient, str):
        return build_gradient(objective, method=gradient)
    if callable(gradient):
        return build_gradient(objective, analytic=gradient)
    raise InvalidArgumentError(f"Непідтримуваний градієнт: {gradient!r}")


def grad_desc(
    objective: Union[None, str, Objective, Callable[[Any, Any], Any]] = None,
    rg: Sequence[float] = DEFAULT_RANGE,
    init: Sequence[float] = DEFAULT_INIT,
    gamma: float = DEFAULT_GAMMA,
    tol: float = DEFAULT_TOL,
    length: int = DEFAULT_GRID_LENGTH,
    max_iter: int = DEFAULT_MAX_ITER,
    interval: float = 0.0,
    col_contour: str = DEFAULT_COL_CONTOUR,
    col_arrow: str = DEFAULT_COL_ARROW,
    gradient: Union[str, Gradient, GradientFunction] = DEFAULT_GRADIENT_METHOD,
    interactive: bool = False,
    start_picker: Optional[StartPicker] = None,
    show: bool = False,
    ax=None,
) -> GradDescResult:
    """
    Мінімізувати функцію двох змінних градієнтним спуском і (за бажанням)
    показати процес стрілками на лініях рівня.

    Parameters
    ----------
    objective : None | str | Objective | callable
        Цільова функція; за замовчуванням x**2 + 2*y**2.
    rg : (x0, y0, x1, y1)
        Область для контурів.
    init : (x, y)
        Стартова точка; ігнорується, якщо задано start_picker / interactive.
    gamma : float
        Розмір кроку, > 0.
    tol : float
        Мінімальна зміна f між сусідніми ітераціями, > 0.
    length : int
        Кількість вузлів сітки по кожній осі.
    max_iter : int
        Максимальна кількість ітерацій, >= 1.
    interval : float
        Пауза між кадрами (секунди), лише при show=True.
    gradient : "symbolic" | "numerical" | Gradient | callable
        Спосіб отримати градієнт.
    interactive : bool
        Обрати стартову точку кліком (pick_start_by_click).
    start_picker : callable(SurfaceGrid) -> (x, y)
        Довільне джерело стартової точки.
    show : bool
        Малювати контури та стрілки після кожної ітерації.
    """
    gamma = require_positive(gamma, "gamma")
    tol = require_positive(tol, "tol")
    max_iter = require_int(max_iter, "max_iter", 1)
    rg = as_range(rg)
    interval = require_non_negative(interval, "interval")

    objective = as_objective(objective)
    grad = _resolve_gradient(objective, gradient)
    grid = SurfaceGrid.from_range(objective, rg, length)

    if start_picker is None and interactive:
        start_picker = functools.partial(pick_start_by_click, ax=ax, col_contour=col_contour)
    x0 = as_point(start_picker(grid) if start_picker is not None else init)

    callback = None
    if show:
        if ax is None:
            ax = plt.figure().add_subplot(111)
        title = format_title(objective)
        visited: List[np.ndarray] = []

        def callback(rec: IterationResult) -> None:
            visited.append(rec.x)
            if rec.index == 0:
                return
            ax.clear()
            draw_contour(ax, grid, color=col_contour, title=title)
            draw_arrows(ax, visited, color=col_arrow)
            plt.pause(max(interval, 1e-3))

    logger.info("Спуск для %s з x0=%s, gamma=%g, tol=%g", objective.label, x0.tolist(), gamma, tol)

    optimizer = FixedStepDescent(objective, grad, gamma=gamma)
    run = DescentEngine().run(optimizer, x0, max_iter=max_iter, tol=tol, callback=callback)

    return GradDescResult(
        par=run.x_star,
        value=run.f_star,
        n_iter=run.n_iter,
        gradient=grad,
        persp=grid.persp,
        trajectory=run.trajectory,
        converged=run.converged,
        run=run,
        grid=grid,
    )


__all__ = [
    "StartPicker",
    "run_descent",
    "GradDescResult",
    "pick_start_by_click",
    "grad_desc",
]
