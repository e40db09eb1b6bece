"""
surface.py

Сітка значень f над прямокутною областю для контурів і поверхні.

z має форму (len(y), len(x)): z[j, i] = f(x[i], y[j]) — саме так, як чекають
contour / plot_surface з matplotlib.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .config import as_range, require_int
from .defaults import DEFAULT_GRID_LENGTH
from .functions import Objective
from .render import draw_surface


def _evaluate(objective: Objective, X: np.ndarray, Y: np.ndarray) -> np.ndarray:
    """
    Обчислити f на сітці: спершу векторно, а для функцій, що приймають лише
    скаляри (math.sin, if x > 0, ...) — поелементно.
    """
    try:
        with np.errstate(all="ignore"):
            Z = np.asarray(objective(X, Y), dtype=float)
    except (TypeError, ValueError):
        Z = None

    if Z is not None and Z.ndim == 0:
        return np.full(X.shape, float(Z))
    if Z is not None and Z.shape == X.shape:
        return Z

    def scalar(x: float, y: float) -> float:
        try:
            return objective.value((x, y))
        except (ArithmeticError, ValueError, TypeError):
            return np.nan

    return np.vectorize(scalar, otypes=[float])(X, Y)


@dataclass
class SurfaceGrid:
    """
    Атрибути:
        x, y      - вузли сітки по осях
        z         - значення f, форма (len(y), len(x)); NaN там, де f невизначена
        variables - підписи осей
    """
    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    variables: Tuple[str, str] = ("x", "y")

    @classmethod
    def from_range(
        cls,
        objective: Objective,
        rg: Sequence[float],
        length: int = DEFAULT_GRID_LENGTH,
    ) -> "SurfaceGrid":
        """rg = (x0, y0, x1, y1); length вузлів по кожній осі."""
        x0, y0, x1, y1 = as_range(rg)
        length = require_int(length, "length", 2)

        x = np.linspace(x0, x1, length)
        y = np.linspace(y0, y1, length)
        X, Y = np.meshgrid(x, y)
        return cls(x=x, y=y, z=_evaluate(objective, X, Y), variables=objective.variables)

    def mesh(self) -> Tuple[np.ndarray, np.ndarray]:
        return np.meshgrid(self.x, self.y)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        return float(self.x[0]), float(self.y[0]), float(self.x[-1]), float(self.y[-1])

    def persp(self, ax=None, **kwargs: Any):
        """
        Перспективний 3-D графік f.

        Якщо ax не задано, створюється нова фігура pyplot. kwargs передаються
        у plot_surface (color, cmap, alpha, ...), elev / azim — кут огляду.
        Повертає осі.
        """
        if ax is None:
            fig = plt.figure()
            ax = fig.add_subplot(111, projection="3d")
        return draw_surface(ax, self, **kwargs)


__all__ = [
    "SurfaceGrid",
]
