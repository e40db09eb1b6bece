"""
render.py

Малювання на осях matplotlib: лінії рівня, стрілки кроків, поверхня.

Функції не створюють фігур самі — осі передає викликач (GUI-полотно,
pyplot-фігура чи тест з бекендом Agg).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Sequence

import numpy as np

from .defaults import CONTOUR_LEVELS, DEFAULT_COL_ARROW, DEFAULT_COL_CONTOUR

if TYPE_CHECKING:
    from .functions import Objective
    from .surface import SurfaceGrid


def format_title(objective: "Objective") -> str:
    """Заголовок графіка у вигляді 'z = <формула>'."""
    return f"z = {objective.label or objective.name}"


def draw_contour(
    ax,
    grid: "SurfaceGrid",
    color: str = DEFAULT_COL_CONTOUR,
    title: Optional[str] = None,
    levels: int = CONTOUR_LEVELS,
):
    """Лінії рівня f над сіткою з підписами рівнів."""
    X, Y = grid.mesh()
    finite = np.isfinite(grid.z)
    if not finite.any():
        ax.text(0.5, 0.5, "f не визначена в області", ha="center", va="center", transform=ax.transAxes)
        return None

    cs = ax.contour(X, Y, np.ma.masked_invalid(grid.z), levels=levels, colors=color, linewidths=0.8)
    ax.clabel(cs, inline=True, fontsize=7)
    ax.set_xlim(grid.x[0], grid.x[-1])
    ax.set_ylim(grid.y[0], grid.y[-1])
    ax.set_xlabel(grid.variables[0])
    ax.set_ylabel(grid.variables[1])
    if title:
        ax.set_title(title)
    return cs


def draw_arrows(
    ax,
    trajectory: Sequence[Sequence[float]],
    color: str = DEFAULT_COL_ARROW,
    upto: Optional[int] = None,
) -> List[Any]:
    """
    Стрілка на кожен крок trajectory[i] -> trajectory[i+1].

    upto обмежує кількість намальованих кроків (для покадрової анімації).
    """
    points = np.asarray(trajectory, dtype=float)
    n_steps = len(points) - 1
    if upto is not None:
        n_steps = min(n_steps, int(upto))

    arrows = []
    for i in range(max(n_steps, 0)):
        arrows.append(
            ax.annotate(
                "",
                xy=tuple(points[i + 1]),
                xytext=tuple(points[i]),
                arrowprops=dict(arrowstyle="->", color=color, linewidth=1.2),
            )
        )
    return arrows


def draw_surface(
    ax,
    grid: "SurfaceGrid",
    trajectory: Optional[np.ndarray] = None,
    trajectory_values: Optional[np.ndarray] = None,
    line_color: str = DEFAULT_COL_ARROW,
    **kwargs: Any,
):
    """
    3-D поверхня f на осях з projection="3d".

    kwargs передаються у plot_surface; elev / azim — у view_init.
    Якщо задано trajectory та trajectory_values, поверх малюється траєкторія.
    """
    elev = kwargs.pop("elev", None)
    azim = kwargs.pop("azim", None)
    if "color" not in kwargs:
        kwargs.setdefault("cmap", "viridis")
    kwargs.setdefault("rstride", 1)
    kwargs.setdefault("cstride", 1)
    kwargs.setdefault("linewidth", 0.2)
    kwargs.setdefault("alpha", 0.85)

    X, Y = grid.mesh()
    ax.plot_surface(X, Y, np.ma.masked_invalid(grid.z), **kwargs)

    if trajectory is not None and trajectory_values is not None:
        pts = np.asarray(trajectory, dtype=float)
        ax.plot(pts[:, 0], pts[:, 1], np.asarray(trajectory_values, dtype=float),
                color=line_color, marker="o", markersize=3, linewidth=1.5)

    if elev is not None or azim is not None:
        ax.view_init(elev=elev, azim=azim)

    ax.set_xlabel(grid.variables[0])
    ax.set_ylabel(grid.variables[1])
    ax.set_zlabel("f")
    return ax


def draw_values(ax, values: Sequence[float], color: str = DEFAULT_COL_ARROW):
    """Графік f(k) за номером ітерації."""
    ks = np.arange(len(values))
    ax.plot(ks, values, marker="o", linestyle="-", linewidth=1.2, markersize=3, color=color)
    ax.set_xlabel("k")
    ax.set_ylabel("f(x_k)")
    return ax


__all__ = [
    "format_title",
    "draw_contour",
    "draw_arrows",
    "draw_surface",
    "draw_values",
]
