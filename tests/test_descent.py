"""Tests for the public entry points run_descent and grad_desc."""

import logging

import numpy as np
import pytest

import graddesc
from graddesc import DifferentiationError, InvalidArgumentError, grad_desc, run_descent
from graddesc.core.gradient import Gradient


def _f(x, y):
    return x ** 2 + 2 * y ** 2


def _grad(x, y):
    return (2 * x, 4 * y)


def test_run_descent_contract():
    point, value, n_iter, trajectory = run_descent(_f, _grad, (-3.0, 3.0), 0.05, 1e-3, 50)

    assert n_iter == 37
    assert trajectory.shape == (n_iter + 1, 2)
    np.testing.assert_allclose(trajectory[-1], point)
    assert value == pytest.approx(_f(*point))


def test_run_descent_max_iter_is_not_an_error():
    point, value, n_iter, trajectory = run_descent(_f, _grad, (-3.0, 3.0), 0.05, 1e-12, 10)
    assert n_iter == 10
    assert len(trajectory) == 11


@pytest.mark.parametrize("step, tol, max_iter", [
    (0.0, 1e-3, 50),
    (0.05, 0.0, 50),
    (0.05, 1e-3, 0),
])
def test_run_descent_rejects_invalid_arguments(step, tol, max_iter):
    with pytest.raises(InvalidArgumentError):
        run_descent(_f, _grad, (-3.0, 3.0), step, tol, max_iter)


def test_run_descent_reports_undefined_gradient():
    def grad(x, y):
        return (float("nan"), 0.0)

    with pytest.raises(DifferentiationError):
        run_descent(_f, grad, (1.0, 1.0), 0.1, 1e-3, 10)


def test_grad_desc_defaults():
    result = grad_desc()

    assert result.n_iter == 37
    assert result.converged
    assert result.par[0] == pytest.approx(-3.0 * 0.9 ** 37)
    assert abs(result.par[1]) < 1e-3
    assert result.value == pytest.approx(result.par[0] ** 2 + 2 * result.par[1] ** 2)
    assert result.trajectory.shape == (38, 2)


def test_grad_desc_returns_callable_gradient():
    result = grad_desc("x**2 + 3*sin(y)", rg=(-6, -6, 6, 6), init=(-6.0, 2.0))

    assert isinstance(result.gradient, Gradient)
    np.testing.assert_allclose(result.gradient(1.0, 0.0), [2.0, 3.0])


def test_grad_desc_numerical_gradient_agrees():
    symbolic = grad_desc("x**2 + 2*y**2")
    numerical = grad_desc("x**2 + 2*y**2", gradient="numerical")

    assert numerical.n_iter == symbolic.n_iter
    np.testing.assert_allclose(numerical.par, symbolic.par, atol=1e-6)


def test_grad_desc_accepts_python_function():
    result = grad_desc(lambda a, b: (a - 1) ** 2 + (b + 2) ** 2, rg=(-5, -5, 5, 5), init=(3.0, 3.0),
                       gamma=0.1, tol=1e-8, max_iter=500)

    assert result.converged
    np.testing.assert_allclose(result.par, [1.0, -2.0], atol=1e-3)
    assert result.grid.variables == ("a", "b")


def test_grad_desc_start_picker_overrides_init():
    picked = []

    def picker(grid):
        picked.append(grid)
        return (1.0, -1.0)

    result = grad_desc(init=(-3.0, 3.0), start_picker=picker)

    assert len(picked) == 1
    np.testing.assert_allclose(result.trajectory[0], [1.0, -1.0])


def test_grad_desc_persp_draws_surface():
    result = grad_desc(length=20)
    ax = result.persp(elev=30, azim=-60, color="lightblue")

    assert ax.name == "3d"
    assert ax.get_xlabel() == "x"


def test_grad_desc_show_draws_arrows(monkeypatch):
    import matplotlib.pyplot as plt
    from matplotlib.text import Annotation

    pauses = []
    monkeypatch.setattr(plt, "pause", lambda interval: pauses.append(interval))

    fig, ax = plt.subplots()
    result = grad_desc(show=True, ax=ax, interval=0.25, max_iter=5, tol=1e-9)

    assert result.n_iter == 5
    assert pauses == [0.25] * 5
    assert len([t for t in ax.texts if isinstance(t, Annotation)]) == 5
    assert ax.get_title() == "z = x**2 + 2*y**2"


@pytest.mark.parametrize("kwargs", [
    {"gamma": -1.0},
    {"tol": 0.0},
    {"max_iter": 0},
    {"rg": (3, -3, -3, 3)},
    {"rg": (0, 0, 1)},
    {"init": (0.0, float("inf"))},
    {"interval": -0.1},
    {"gradient": "magic"},
    {"length": 1},
])
def test_grad_desc_rejects_invalid_arguments(kwargs):
    with pytest.raises(InvalidArgumentError):
        grad_desc(**kwargs)


def test_grad_desc_non_differentiable_at_start():
    with pytest.raises(DifferentiationError):
        grad_desc("sqrt(x**2 + y**2)", init=(0.0, 0.0))


def test_package_exports():
    assert graddesc.__version__
    assert set(graddesc.__all__) >= {"grad_desc", "run_descent", "GradDescResult"}


def test_grad_desc_single_variable_expression():
    result = grad_desc("x**2")

    assert result.converged
    assert abs(result.par[0]) < 0.1
    assert result.par[1] == pytest.approx(3.0)
    np.testing.assert_allclose(result.gradient(1.0, 5.0), [2.0, 0.0])


def test_grad_desc_constant_objective_stops_at_once():
    result = grad_desc("3", init=(1.0, 2.0))

    assert result.n_iter == 1
    assert result.value == pytest.approx(3.0)
    np.testing.assert_allclose(result.par, [1.0, 2.0])


def test_grad_desc_complex_value_is_undefined():
    # при x < 0 x**1.5 стає комплексним
    with pytest.raises(DifferentiationError):
        grad_desc("x**1.5 + y**2", init=(0.5, 1.0), gamma=1.0, rg=(-1, -1, 1, 1))


def test_run_descent_complex_value_is_undefined():
    def f(x, y):
        return x ** 1.5 + y ** 2

    def grad(x, y):
        return (1.5 * abs(x) ** 0.5, 2 * y)

    with pytest.raises(DifferentiationError):
        run_descent(f, grad, (0.5, 1.0), 1.0, 1e-3, 10)


def test_grad_desc_numpy_callable_uses_numerical_gradient(caplog):
    with caplog.at_level(logging.WARNING, logger="graddesc.core.gradient"):
        result = grad_desc(lambda x, y: np.exp(x) + y ** 2, max_iter=5)

    assert result.gradient.method == "numerical"
    np.testing.assert_allclose(result.gradient(0.0, 1.0), [1.0, 2.0], rtol=1e-6)
    assert any("чисельний градієнт" in rec.getMessage() for rec in caplog.records)


def test_grad_desc_rejects_non_numeric_interval():
    with pytest.raises(InvalidArgumentError):
        grad_desc(interval="slow")
