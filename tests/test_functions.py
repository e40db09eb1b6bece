"""Tests for objective parsing and the example registry."""

import math

import numpy as np
import pytest
import sympy

from graddesc.core.errors import InvalidArgumentError
from graddesc.core.functions import FUNCTIONS, Objective, as_objective


def test_expression_is_evaluated():
    objective = Objective.from_expression("x**2 + 2*y**2")
    assert objective.variables == ("x", "y")
    assert objective.value((-3.0, 3.0)) == pytest.approx(27.0)
    assert objective(1.0, 1.0) == pytest.approx(3.0)


def test_caret_means_power():
    objective = Objective.from_expression("x^2 + y^2")
    assert objective.value((2.0, 1.0)) == pytest.approx(5.0)


def test_implicit_multiplication():
    objective = Objective.from_expression("2x + 3y")
    assert objective.value((1.0, 1.0)) == pytest.approx(5.0)


def test_vectorized_evaluation():
    objective = Objective.from_expression("x**2 + 3*sin(y)")
    X, Y = np.meshgrid(np.linspace(-1, 1, 4), np.linspace(-1, 1, 5))
    Z = objective(X, Y)
    assert Z.shape == (5, 4)
    np.testing.assert_allclose(Z, X ** 2 + 3 * np.sin(Y))


def test_variables_are_sorted_free_symbols():
    objective = Objective.from_expression("b**2 + a")
    assert objective.variables == ("a", "b")


def test_explicit_variable_order():
    objective = Objective.from_expression("b**2 + a", variables=("b", "a"))
    assert objective.value((2.0, 1.0)) == pytest.approx(5.0)


@pytest.mark.parametrize("expr", [
    "",
    "   ",
    "x**2 +",
    "u**2",
    "x + y + z",
    "a + b + c",
])
def test_bad_expressions_rejected(expr):
    with pytest.raises(InvalidArgumentError):
        Objective.from_expression(expr)


def test_unknown_variable_rejected():
    with pytest.raises(InvalidArgumentError):
        Objective.from_expression("x + z", variables=("x", "y"))


def test_invalid_error_is_value_error():
    with pytest.raises(ValueError):
        Objective.from_expression("x + y + z")


def test_from_callable_traces_expression():
    objective = Objective.from_callable(lambda p, q: p ** 2 + sympy.sin(q))
    assert objective.variables == ("p", "q")
    assert objective.is_symbolic
    assert objective.value((1.0, 0.0)) == pytest.approx(1.0)


def test_from_callable_keeps_plain_function():
    def height(x, y):
        return math.cos(x) * y

    objective = Objective.from_callable(height)
    assert objective.name == "height"
    assert not objective.is_symbolic
    assert objective.label == "height(x, y)"
    assert objective.value((0.0, 2.0)) == pytest.approx(2.0)


def test_from_callable_requires_two_arguments():
    with pytest.raises(InvalidArgumentError):
        Objective.from_callable(lambda x: x ** 2)


def test_as_objective_dispatch():
    default = as_objective(None)
    assert default.value((1.0, 1.0)) == pytest.approx(3.0)

    parsed = as_objective("x*y")
    assert as_objective(parsed) is parsed

    with pytest.raises(InvalidArgumentError):
        as_objective(42)


@pytest.mark.parametrize("key", sorted(FUNCTIONS))
def test_registry_entries_are_valid(key):
    tf = FUNCTIONS[key]
    objective = tf.objective()
    x0, y0, x1, y1 = tf.rg
    assert x0 < x1 and y0 < y1
    assert math.isfinite(objective.value(tf.init))
    assert tf.gamma > 0 and tf.tol > 0 and tf.max_iter >= 1


@pytest.mark.parametrize("expr", ["x**2", "y**2 + 1", "x**2 + 0*y"])
def test_expression_in_x_or_y_only_is_a_function_of_both(expr):
    objective = Objective.from_expression(expr)
    assert objective.variables == ("x", "y")
    assert math.isfinite(objective.value((1.0, 2.0)))


def test_constant_expression():
    objective = Objective.from_expression("3")
    assert objective.variables == ("x", "y")
    assert objective.value((5.0, -5.0)) == pytest.approx(3.0)
