"""Tests for the value grid and matplotlib drawing helpers."""

import math

import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.text import Annotation

from graddesc.core.errors import InvalidArgumentError
from graddesc.core.functions import Objective
from graddesc.core.render import draw_arrows, draw_contour, draw_surface, draw_values, format_title
from graddesc.core.surface import SurfaceGrid


def test_grid_layout_matches_matplotlib(bowl):
    objective, _ = bowl
    grid = SurfaceGrid.from_range(objective, (-3, -2, 3, 2), length=7)

    assert grid.x.shape == (7,)
    assert grid.z.shape == (7, 7)
    assert grid.bounds == (-3.0, -2.0, 3.0, 2.0)
    # z[j, i] = f(x[i], y[j])
    assert grid.z[0, 6] == pytest.approx(objective.value((grid.x[6], grid.y[0])))
    assert grid.z[6, 0] == pytest.approx(9.0 + 2 * 4.0)


def test_grid_for_scalar_only_function():
    objective = Objective.from_callable(lambda x, y: math.hypot(x, y) if x > 0 else 0.0)
    grid = SurfaceGrid.from_range(objective, (-1, -1, 1, 1), length=5)

    assert grid.z.shape == (5, 5)
    assert grid.z[2, 4] == pytest.approx(1.0)
    assert grid.z[2, 0] == 0.0


def test_grid_for_constant_expression_result():
    objective = Objective.from_callable(lambda x, y: 1.0, name="flat")
    grid = SurfaceGrid.from_range(objective, (0, 0, 1, 1), length=3)
    np.testing.assert_array_equal(grid.z, np.ones((3, 3)))


def test_grid_marks_undefined_values():
    objective = Objective.from_expression("log(x) + y")
    grid = SurfaceGrid.from_range(objective, (-1, -1, 1, 1), length=5)

    assert np.isnan(grid.z[:, 0]).all()
    assert np.isfinite(grid.z[:, 4]).all()


@pytest.mark.parametrize("rg, length", [
    ((1, 0, 0, 1), 10),
    ((0, 0, 1, 1), 1),
    ((0, 0, 1, float("nan")), 10),
])
def test_grid_rejects_bad_range(bowl, rg, length):
    objective, _ = bowl
    with pytest.raises(InvalidArgumentError):
        SurfaceGrid.from_range(objective, rg, length)


def test_format_title():
    assert format_title(Objective.from_expression("x**2 + 2*y**2")) == "z = x**2 + 2*y**2"


def test_draw_contour_labels_axes():
    objective = Objective.from_expression("u**2 + v**2")
    grid = SurfaceGrid.from_range(objective, (-1, -1, 1, 1), length=10)
    fig, ax = plt.subplots()

    cs = draw_contour(ax, grid, color="red", title="contours")

    assert cs is not None
    assert ax.get_xlabel() == "u"
    assert ax.get_ylabel() == "v"
    assert ax.get_title() == "contours"
    assert ax.get_xlim() == (-1.0, 1.0)


def test_draw_contour_without_finite_values():
    grid = SurfaceGrid(
        x=np.linspace(0, 1, 3), y=np.linspace(0, 1, 3), z=np.full((3, 3), np.nan)
    )
    fig, ax = plt.subplots()
    assert draw_contour(ax, grid) is None


def test_draw_arrows_one_per_step():
    fig, ax = plt.subplots()
    trajectory = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 1.5], [2.5, 1.6]])

    arrows = draw_arrows(ax, trajectory, color="blue")
    assert len(arrows) == 3
    assert all(isinstance(a, Annotation) for a in arrows)
    assert arrows[0].xy == (1.0, 1.0)

    assert len(draw_arrows(ax, trajectory, upto=1)) == 1
    assert draw_arrows(ax, trajectory[:1]) == []


def test_draw_surface_with_trajectory(bowl):
    objective, _ = bowl
    grid = SurfaceGrid.from_range(objective, (-3, -3, 3, 3), length=10)
    fig = plt.figure()
    ax = fig.add_subplot(111, projection="3d")
    trajectory = np.array([[-3.0, 3.0], [-2.7, 2.4]])
    values = np.array([27.0, 18.81])

    assert draw_surface(ax, grid, trajectory, values, line_color="green", azim=45) is ax
    assert len(ax.lines) == 1
    assert ax.get_zlabel() == "f"


def test_persp_creates_figure(bowl):
    objective, _ = bowl
    grid = SurfaceGrid.from_range(objective, (-3, -3, 3, 3), length=10)
    ax = grid.persp(cmap="coolwarm")
    assert ax.name == "3d"


def test_draw_values():
    fig, ax = plt.subplots()
    draw_values(ax, [3.0, 2.0, 1.5])
    xdata, ydata = ax.lines[0].get_data()
    np.testing.assert_array_equal(xdata, [0, 1, 2])
    np.testing.assert_array_equal(ydata, [3.0, 2.0, 1.5])


def test_grid_complex_values_become_nan():
    def f(x, y):
        if x < 0:
            return complex(x, y)
        return math.sqrt(x) + y

    grid = SurfaceGrid.from_range(Objective.from_callable(f), (-1, -1, 1, 1), length=5)

    assert np.isnan(grid.z[:, 0]).all()
    assert grid.z[2, 4] == pytest.approx(1.0)
