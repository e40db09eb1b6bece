"""Tests for parameter checks and DescentConfig."""

import numpy as np
import pytest

from graddesc.core.config import (
    DescentConfig,
    as_point,
    as_range,
    require_int,
    require_non_negative,
    require_positive,
)
from graddesc.core.defaults import DEFAULT_EXPRESSION, DEFAULT_INIT, DEFAULT_RANGE
from graddesc.core.errors import GradDescError, InvalidArgumentError


def test_defaults_validate():
    cfg = DescentConfig()
    cfg.validate()
    assert cfg.expression == DEFAULT_EXPRESSION
    assert cfg.rg == DEFAULT_RANGE
    assert cfg.init == DEFAULT_INIT


@pytest.mark.parametrize("changes", [
    {"gamma": 0.0},
    {"tol": -1.0},
    {"max_iter": 0},
    {"length": 1},
    {"rg": (0, 0, 0, 1)},
    {"init": (float("nan"), 0.0)},
    {"interval": -1.0},
    {"expression": "  "},
])
def test_validate_rejects(changes):
    cfg = DescentConfig(**changes)
    with pytest.raises(InvalidArgumentError):
        cfg.validate()


def test_interactive_config_ignores_init():
    DescentConfig(init=(float("nan"), 0.0), interactive=True).validate()


def test_require_positive():
    assert require_positive("0.5", "gamma") == 0.5
    for bad in (None, "abc", float("inf"), 0, -2):
        with pytest.raises(InvalidArgumentError):
            require_positive(bad, "gamma")


def test_require_int():
    assert require_int(5.0, "max_iter", 1) == 5
    for bad in (True, 2.5, "x", None, 0):
        with pytest.raises(InvalidArgumentError):
            require_int(bad, "max_iter", 1)


def test_as_point_and_range():
    np.testing.assert_array_equal(as_point([1, 2]), [1.0, 2.0])
    assert as_range([-1, -2, 1, 2]) == (-1.0, -2.0, 1.0, 2.0)
    with pytest.raises(InvalidArgumentError):
        as_point("ab")
    with pytest.raises(InvalidArgumentError):
        as_range(None)


def test_errors_share_base_class():
    assert issubclass(InvalidArgumentError, GradDescError)
    assert issubclass(InvalidArgumentError, ValueError)


def test_require_int_accepts_numeric_strings():
    assert require_int("5.0", "max_iter", 1) == 5
    assert require_int("7", "max_iter", 1) == 7


def test_non_numeric_interval_rejected():
    with pytest.raises(InvalidArgumentError):
        require_non_negative("slow", "interval")
    with pytest.raises(InvalidArgumentError):
        DescentConfig(interval="slow").validate()
    assert require_non_negative(0, "interval") == 0.0
