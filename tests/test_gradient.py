"""Tests for gradient construction strategies."""

import math

import numpy as np
import pytest

from graddesc.core.errors import DifferentiationError, InvalidArgumentError
from graddesc.core.functions import Objective
from graddesc.core.gradient import (
    GRADIENT_METHODS,
    AnalyticGradient,
    NumericalGradient,
    SymbolicGradient,
    build_gradient,
)


@pytest.fixture
def wavy():
    return Objective.from_expression("sin(x**2/2 - y**2/4 + 3)*cos(2*x + 1 - exp(y))")


def test_symbolic_gradient_of_bowl(bowl):
    _, gradient = bowl
    np.testing.assert_allclose(gradient(-3.0, 3.0), [-6.0, 12.0])
    assert gradient.method == "symbolic"
    assert gradient.expressions is not None


def test_symbolic_gradient_is_deterministic(wavy):
    first = build_gradient(wavy)
    second = build_gradient(wavy)
    for point in [(0.1, 0.2), (-1.0, 0.5), (1.5, -1.5)]:
        np.testing.assert_array_equal(first(*point), second(*point))


@pytest.mark.parametrize("point", [(0.1, 0.2), (-1.0, 0.5), (1.5, -1.5)])
def test_numerical_matches_symbolic(wavy, point):
    symbolic = build_gradient(wavy, method="symbolic")
    numerical = build_gradient(wavy, method="numerical")
    np.testing.assert_allclose(numerical(*point), symbolic(*point), rtol=1e-5, atol=1e-6)


def test_numerical_gradient_step_option(bowl):
    objective, _ = bowl
    gradient = build_gradient(objective, method="numerical", h=1e-4)
    np.testing.assert_allclose(gradient(1.0, 1.0), [2.0, 4.0], rtol=1e-6)


def test_numerical_gradient_rejects_bad_step():
    with pytest.raises(InvalidArgumentError):
        NumericalGradient(h=0.0)


def test_gradient_uses_variable_names_not_positions():
    objective = Objective.from_expression("u**2 + 3*v")
    gradient = build_gradient(objective)
    assert objective.variables == ("u", "v")
    np.testing.assert_allclose(gradient(2.0, 5.0), [4.0, 3.0])


def test_constant_partial_derivative():
    objective = Objective.from_expression("x + 2*y")
    gradient = build_gradient(objective)
    np.testing.assert_allclose(gradient(7.0, -1.0), [1.0, 2.0])


def test_non_finite_gradient_raises():
    gradient = build_gradient(Objective.from_expression("sqrt(x**2 + y**2)"))
    with pytest.raises(DifferentiationError):
        gradient(0.0, 0.0)


def test_analytic_gradient_is_validated():
    gradient = build_gradient(
        Objective.from_expression("x**2 + y**2"),
        analytic=lambda x, y: (math.inf, 0.0),
    )
    assert gradient.method == "analytic"
    with pytest.raises(DifferentiationError):
        gradient(1.0, 1.0)


def test_analytic_gradient_wrong_shape_raises():
    gradient = AnalyticGradient(lambda x, y: (1.0, 2.0, 3.0)).build(
        Objective.from_expression("x**2 + y**2")
    )
    with pytest.raises(DifferentiationError):
        gradient(1.0, 1.0)


def test_analytic_gradient_errors_are_wrapped():
    gradient = AnalyticGradient(lambda x, y: (1.0 / (x - x), 0.0)).build(
        Objective.from_expression("x**2 + y**2")
    )
    with pytest.raises(DifferentiationError):
        gradient(1.0, 1.0)


def test_symbolic_gradient_requires_expression():
    objective = Objective.from_callable(lambda x, y: math.sin(x) + y ** 2)
    assert not objective.is_symbolic
    with pytest.raises(DifferentiationError):
        SymbolicGradient().build(objective)

    gradient = build_gradient(objective, method="numerical")
    np.testing.assert_allclose(gradient(0.0, 1.0), [1.0, 2.0], rtol=1e-6)


def test_unknown_method_rejected(bowl):
    objective, _ = bowl
    with pytest.raises(InvalidArgumentError):
        build_gradient(objective, method="automatic")


def test_registered_methods():
    assert set(GRADIENT_METHODS) == {"symbolic", "numerical"}


def test_describe_shows_partials(bowl):
    _, gradient = bowl
    text = gradient.describe()
    assert "2*x" in text
    assert "4*y" in text
