"""
errors.py

Ієрархія винятків пакета.
"""


class GradDescError(Exception):
    """Базовий клас для помилок градієнтного спуску."""
    pass


class InvalidArgumentError(GradDescError, ValueError):
    """Некоректні параметри запуску (крок, точність, діапазон, x0, ...)."""
    pass


class DifferentiationError(GradDescError, ArithmeticError):
    """Градієнт неможливо побудувати або він невизначений у точці."""
    pass


__all__ = [
    "GradDescError",
    "InvalidArgumentError",
    "DifferentiationError",
]
