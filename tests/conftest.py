"""Test configuration for graddesc."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from graddesc.core.functions import Objective
from graddesc.core.gradient import build_gradient


@pytest.fixture(autouse=True)
def close_figures():
    """Close pyplot figures created by a test."""
    yield
    plt.close("all")


@pytest.fixture
def bowl():
    """f(x, y) = x**2 + 2*y**2 with its symbolic gradient."""
    objective = Objective.from_expression("x**2 + 2*y**2")
    return objective, build_gradient(objective, method="symbolic")
