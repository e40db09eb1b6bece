"""
graddesc

Навчальна візуалізація градієнтного спуску для функцій двох змінних.
"""

from .core.descent import GradDescResult, grad_desc, run_descent
from .core.errors import DifferentiationError, GradDescError, InvalidArgumentError
from .core.functions import Objective

__version__ = "1.0.0"

__all__ = [
    "GradDescResult",
    "grad_desc",
    "run_descent",
    "Objective",
    "GradDescError",
    "DifferentiationError",
    "InvalidArgumentError",
]
