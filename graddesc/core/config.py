"""
config.py

Конфігурація запуску та перевірка параметрів.

Усі перевірки кидають InvalidArgumentError і виконуються до першої ітерації.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

import numpy as np

from .defaults import (
    DEFAULT_COL_ARROW,
    DEFAULT_COL_CONTOUR,
    DEFAULT_EXPRESSION,
    DEFAULT_GAMMA,
    DEFAULT_GRADIENT_METHOD,
    DEFAULT_GRID_LENGTH,
    DEFAULT_INIT,
    DEFAULT_INTERVAL,
    DEFAULT_MAX_ITER,
    DEFAULT_RANGE,
    DEFAULT_TOL,
)
from .errors import InvalidArgumentError


# ---------------------------------------------------------------------------
# Перевірки окремих параметрів
# ---------------------------------------------------------------------------

def require_positive(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name} має бути числом, отримано {value!r}") from exc
    if not math.isfinite(number) or number <= 0.0:
        raise InvalidArgumentError(f"{name} має бути додатним, отримано {value!r}")
    return number


def require_int(value: Any, name: str, minimum: int) -> int:
    try:
        as_float = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name} має бути цілим числом, отримано {value!r}") from exc
    if isinstance(value, bool) or not as_float.is_integer():
        raise InvalidArgumentError(f"{name} має бути цілим числом, отримано {value!r}")
    number = int(as_float)
    if number < minimum:
        raise InvalidArgumentError(f"{name} має бути не меншим за {minimum}, отримано {number}")
    return number


def require_non_negative(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name} має бути числом, отримано {value!r}") from exc
    if not math.isfinite(number) or number < 0.0:
        raise InvalidArgumentError(f"{name} не може бути від'ємним, отримано {value!r}")
    return number


def as_point(value: Any, name: str = "init") -> np.ndarray:
    """Перетворити value на скінченну точку (x, y)."""
    try:
        point = np.asarray(value, dtype=float).reshape(-1)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name}: очікується пара чисел, отримано {value!r}") from exc
    if point.shape != (2,):
        raise InvalidArgumentError(
            f"{name} повинна мати дві компоненти (x, y), отримано {point.size}"
        )
    if not np.all(np.isfinite(point)):
        raise InvalidArgumentError(f"{name} містить нескінченні значення: {point.tolist()}")
    return point


def as_range(value: Sequence[float]) -> Tuple[float, float, float, float]:
    """Перевірити межі області (x0, y0, x1, y1): x0 < x1, y0 < y1."""
    try:
        rg = tuple(float(v) for v in value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"rg: очікується (x0, y0, x1, y1), отримано {value!r}") from exc
    if len(rg) != 4 or not all(math.isfinite(v) for v in rg):
        raise InvalidArgumentError(f"rg: очікується чотири скінченні числа, отримано {value!r}")
    x0, y0, x1, y1 = rg
    if x0 >= x1 or y0 >= y1:
        raise InvalidArgumentError(
            f"rg: має виконуватись x0 < x1 та y0 < y1, отримано {rg}"
        )
    return rg


# ---------------------------------------------------------------------------
# Конфігурація запуску
# ---------------------------------------------------------------------------

@dataclass
class DescentConfig:
    """
    Параметри одного запуску, зібрані з GUI.

    Атрибути:
        expression      - вираз цільової функції
        rg              - область для контурів (x0, y0, x1, y1)
        init            - стартова точка
        gamma           - розмір кроку
        tol             - мінімальна зміна f, нижче якої зупиняємось
        max_iter        - максимальна кількість ітерацій
        length          - кількість вузлів сітки по кожній осі
        interval        - пауза між кадрами анімації, секунди
        gradient_method - "symbolic" або "numerical"
        col_contour     - колір ліній рівня
        col_arrow       - колір стрілок
        interactive     - обрати стартову точку кліком на графіку
    """
    expression: str = DEFAULT_EXPRESSION
    rg: Tuple[float, float, float, float] = DEFAULT_RANGE
    init: Tuple[float, float] = DEFAULT_INIT
    gamma: float = DEFAULT_GAMMA
    tol: float = DEFAULT_TOL
    max_iter: int = DEFAULT_MAX_ITER
    length: int = DEFAULT_GRID_LENGTH
    interval: float = DEFAULT_INTERVAL
    gradient_method: str = DEFAULT_GRADIENT_METHOD
    col_contour: str = DEFAULT_COL_CONTOUR
    col_arrow: str = DEFAULT_COL_ARROW
    interactive: bool = False

    def validate(self) -> None:
        """Кинути InvalidArgumentError, якщо якийсь параметр некоректний."""
        require_positive(self.gamma, "gamma")
        require_positive(self.tol, "tol")
        require_int(self.max_iter, "max_iter", 1)
        require_int(self.length, "length", 2)
        as_range(self.rg)
        if not self.interactive:
            as_point(self.init)
        require_non_negative(self.interval, "interval")
        if not str(self.expression).strip():
            raise InvalidArgumentError("Вираз цільової функції порожній.")


__all__ = [
    "require_positive",
    "require_int",
    "require_non_negative",
    "as_point",
    "as_range",
    "DescentConfig",
]
