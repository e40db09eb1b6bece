"""
gradient.py

Побудова градієнта цільової функції (Strategy).

Ідея:
    - GradientProvider перетворює Objective на Gradient;
    - реалізовані стратегії:
        * SymbolicGradient  — sympy.diff + lambdify (за замовчуванням);
        * NumericalGradient — центральні різниці;
        * AnalyticGradient  — градієнт, заданий користувачем у замкненій формі;
    - будь-який Gradient викликається як grad(x, y) -> np.ndarray форми (2,)
      і кидає DifferentiationError, якщо у точці градієнт невизначений.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Type

import numpy as np
import sympy

from .defaults import DEFAULT_GRADIENT_METHOD, NUMERICAL_GRADIENT_STEP
from .errors import DifferentiationError, InvalidArgumentError
from .functions import Objective

logger = logging.getLogger(__name__)

GradientFunction = Callable[[float, float], Sequence[float]]


# ---------------------------------------------------------------------------
# Обчислювач градієнта
# ---------------------------------------------------------------------------

class Gradient:
    """
    Градієнт ∇f(x, y), побудований однією зі стратегій.

    Атрибути:
        method      - "symbolic", "numerical" або "analytic"
        expressions - часткові похідні (∂f/∂x, ∂f/∂y) як вирази sympy;
                      лише для символьного градієнта
    """

    def __init__(
        self,
        func: GradientFunction,
        method: str,
        expressions: Optional[Tuple[sympy.Expr, sympy.Expr]] = None,
    ) -> None:
        self._func = func
        self.method = method
        self.expressions = expressions

    def __call__(self, x: float, y: float) -> np.ndarray:
        try:
            with np.errstate(all="ignore"):
                raw = self._func(float(x), float(y))
            g = np.asarray(raw, dtype=float).reshape(-1)
        except DifferentiationError:
            raise
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise DifferentiationError(
                f"Не вдалося обчислити градієнт у точці ({x:g}, {y:g}): {exc}"
            ) from exc

        if g.shape != (2,):
            raise DifferentiationError(
                f"Градієнт повинен мати дві компоненти, отримано форму {g.shape}."
            )
        if not np.all(np.isfinite(g)):
            raise DifferentiationError(
                f"Функція не диференційовна у точці ({x:g}, {y:g}): ∇f = {g.tolist()}"
            )
        return g

    def describe(self) -> str:
        """Запис градієнта для підказок у GUI."""
        if self.expressions is None:
            return f"∇f ({self.method})"
        dfx, dfy = self.expressions
        return f"∇f = ({dfx}, {dfy})"

    def __repr__(self) -> str:
        return f"Gradient(method={self.method!r})"


# ---------------------------------------------------------------------------
# Стратегії побудови
# ---------------------------------------------------------------------------

class GradientProvider(ABC):
    """Базовий клас стратегій побудови градієнта."""

    method: str = ""

    @abstractmethod
    def build(self, objective: Objective) -> Gradient:
        raise NotImplementedError


class SymbolicGradient(GradientProvider):
    """
    Символьне диференціювання через sympy.

    Потребує, щоб Objective мав expression (рядок або функція, яку вдалося
    простежити символами sympy).
    """

    method = "symbolic"

    def build(self, objective: Objective) -> Gradient:
        if objective.expression is None:
            raise DifferentiationError(
                f"Функція '{objective.name}' не має символьного виразу; "
                "оберіть чисельний градієнт або задайте його явно."
            )

        symbols = objective.symbols
        partials = tuple(sympy.diff(objective.expression, s) for s in symbols)

        # sympy залишає Derivative(...), якщо не вміє взяти похідну
        if any(p.has(sympy.Derivative) for p in partials):
            raise DifferentiationError(
                f"sympy не зміг продиференціювати {objective.label}"
            )

        func = sympy.lambdify(symbols, list(partials), modules="numpy")
        return Gradient(func, self.method, expressions=partials)


class NumericalGradient(GradientProvider):
    """
    Чисельний градієнт за центральною різницею.

    ∂f/∂x ≈ (f(x + h, y) - f(x - h, y)) / (2h)
    """

    method = "numerical"

    def __init__(self, h: float = NUMERICAL_GRADIENT_STEP) -> None:
        if not h > 0:
            raise InvalidArgumentError(f"Крок диференціювання h має бути > 0, отримано {h}")
        self.h = float(h)

    def build(self, objective: Objective) -> Gradient:
        f = objective.func
        h = self.h

        def central_difference(x: float, y: float) -> Tuple[float, float]:
            dfx = (f(x + h, y) - f(x - h, y)) / (2.0 * h)
            dfy = (f(x, y + h) - f(x, y - h)) / (2.0 * h)
            return dfx, dfy

        return Gradient(central_difference, self.method)


class AnalyticGradient(GradientProvider):
    """Градієнт, заданий користувачем: grad(x, y) -> (∂f/∂x, ∂f/∂y)."""

    method = "analytic"

    def __init__(self, grad: GradientFunction) -> None:
        if not callable(grad):
            raise InvalidArgumentError(f"Очікується функція градієнта, отримано: {grad!r}")
        self._grad = grad

    def build(self, objective: Objective) -> Gradient:
        return Gradient(self._grad, self.method)


GRADIENT_METHODS: Dict[str, Type[GradientProvider]] = {
    SymbolicGradient.method: SymbolicGradient,
    NumericalGradient.method: NumericalGradient,
}


def build_gradient(
    objective: Objective,
    method: str = DEFAULT_GRADIENT_METHOD,
    analytic: Optional[GradientFunction] = None,
    **options: Any,
) -> Gradient:
    """
    Побудувати градієнт objective.

    analytic має пріоритет над method. options передаються у конструктор
    стратегії (наприклад, h для NumericalGradient).

    Якщо обрано "symbolic", а функція не має символьного виразу (наприклад,
    записана через numpy), градієнт рахується чисельно з попередженням у лог.
    """
    if analytic is not None:
        return AnalyticGradient(analytic).build(objective)

    provider_cls = GRADIENT_METHODS.get(str(method).lower().strip())
    if provider_cls is None:
        raise InvalidArgumentError(
            f"Невідомий спосіб побудови градієнта: '{method}'. "
            f"Доступні: {sorted(GRADIENT_METHODS)}"
        )
    if provider_cls is SymbolicGradient and not objective.is_symbolic:
        logger.warning(
            "Функція '%s' не має символьного виразу; використовується чисельний градієнт",
            objective.name,
        )
        provider_cls = NumericalGradient
    return provider_cls(**options).build(objective)


__all__ = [
    "GradientFunction",
    "Gradient",
    "GradientProvider",
    "SymbolicGradient",
    "NumericalGradient",
    "AnalyticGradient",
    "GRADIENT_METHODS",
    "build_gradient",
]
