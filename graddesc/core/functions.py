"""
functions.py

Цільові функції двох змінних.

Формат:
    - Objective — функція f(x, y) разом з іменами змінних та (якщо вдалося
      отримати) символьним виразом sympy;
    - Objective.from_expression("x**2 + 2*y**2") — з рядка;
    - Objective.from_callable(fn) — з Python-функції, імена двох параметрів
      якої стають іменами змінних (не обов'язково 'x' та 'y');
    - реєстр FUNCTIONS з навчальними прикладами для GUI / прикладів.
"""

from __future__ import annotations

import inspect
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np
import sympy
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication,
    parse_expr,
    standard_transformations,
)

from .defaults import DEFAULT_EXPRESSION
from .errors import InvalidArgumentError

ArrayLike = np.ndarray
BivariateFunction = Callable[[Any, Any], Any]

DEFAULT_VARIABLES: Tuple[str, str] = ("x", "y")

# "x^2" трактуємо як степінь, "2x" як добуток
_TRANSFORMATIONS = standard_transformations + (
    convert_xor,
    implicit_multiplication,
)


def _real_symbols(names: Tuple[str, str]) -> Tuple[sympy.Symbol, sympy.Symbol]:
    return tuple(sympy.Symbol(name, real=True) for name in names)


# ---------------------------------------------------------------------------
# Цільова функція
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Objective:
    """
    Цільова функція f(x, y).

    Атрибути:
        name       - коротка назва (для логів / заголовків)
        variables  - імена двох змінних (підписи осей)
        func       - f(x, y); приймає скаляри або numpy-масиви
        expression - символьний вираз sympy або None
        label      - людяний запис формули
    """
    name: str
    variables: Tuple[str, str]
    func: BivariateFunction
    expression: Optional[sympy.Expr] = None
    label: str = ""

    def __call__(self, x: Any, y: Any) -> Any:
        return self.func(x, y)

    @property
    def symbols(self) -> Tuple[sympy.Symbol, sympy.Symbol]:
        return _real_symbols(self.variables)

    @property
    def is_symbolic(self) -> bool:
        return self.expression is not None

    def value(self, point: ArrayLike) -> float:
        """Значення f у точці point = (x, y) як float."""
        x, y = point
        with np.errstate(all="ignore"):
            return float(self.func(float(x), float(y)))

    # ------------------------------------------------------------------
    # Конструктори
    # ------------------------------------------------------------------

    @classmethod
    def from_expression(
        cls,
        expr: str,
        variables: Optional[Tuple[str, str]] = None,
        name: Optional[str] = None,
    ) -> "Objective":
        """
        Побудувати Objective з рядка.

        Якщо variables не задано і вираз містить лише x та/або y (або жодної
        змінної), змінними є (x, y). Інакше змінними вважаються два вільні
        символи виразу в алфавітному порядку.
        """
        text = str(expr).strip()
        if not text:
            raise InvalidArgumentError("Вираз цільової функції порожній.")

        try:
            parsed = parse_expr(text, transformations=_TRANSFORMATIONS)
        except (SyntaxError, TypeError, ValueError, sympy.SympifyError) as exc:
            raise InvalidArgumentError(
                f"Не вдалося розібрати вираз '{text}': {exc}"
            ) from exc

        if not isinstance(parsed, sympy.Expr):
            raise InvalidArgumentError(f"'{text}' не є числовим виразом.")

        free_names = sorted(s.name for s in parsed.free_symbols)

        if variables is None:
            if set(free_names) <= set(DEFAULT_VARIABLES):
                # "x**2" чи константа: друга змінна просто не входить у вираз
                names = DEFAULT_VARIABLES
            elif len(free_names) == 2:
                names = (free_names[0], free_names[1])
            else:
                raise InvalidArgumentError(
                    "Функція повинна залежати від двох змінних (x, y або двох інших імен), "
                    f"знайдено: {free_names}."
                )
        else:
            names = tuple(str(v) for v in variables)
            if len(names) != 2 or names[0] == names[1]:
                raise InvalidArgumentError(
                    f"Потрібно два різні імені змінних, отримано: {variables}."
                )
            extra = set(free_names) - set(names)
            if extra:
                raise InvalidArgumentError(
                    f"Вираз містить невідомі змінні: {sorted(extra)}."
                )

        symbols = _real_symbols(names)
        expression = parsed.subs(
            {sympy.Symbol(n): s for n, s in zip(names, symbols)}
        )
        func = sympy.lambdify(symbols, expression, modules="numpy")

        return cls(
            name=name or text,
            variables=names,
            func=func,
            expression=expression,
            label=str(expression),
        )

    @classmethod
    def from_callable(
        cls,
        fn: BivariateFunction,
        name: Optional[str] = None,
    ) -> "Objective":
        """
        Обгорнути Python-функцію двох аргументів.

        Функція викликається один раз із символами sympy; якщо вона записана
        через арифметику та функції sympy, отримуємо символьний вираз
        (потрібен для SymbolicGradient). Інакше expression = None.
        """
        if not callable(fn):
            raise InvalidArgumentError(f"Очікується функція, отримано: {fn!r}")

        try:
            params = inspect.signature(fn).parameters.values()
        except (TypeError, ValueError) as exc:
            raise InvalidArgumentError(
                f"Не вдалося визначити аргументи функції {fn!r}"
            ) from exc

        positional = [
            p.name
            for p in params
            if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
            and p.default is p.empty
        ]
        if len(positional) != 2:
            raise InvalidArgumentError(
                "Цільова функція повинна мати рівно два аргументи, "
                f"отримано: {positional}."
            )
        names = (positional[0], positional[1])

        expression: Optional[sympy.Expr] = None
        try:
            traced = sympy.sympify(fn(*_real_symbols(names)))
        except (TypeError, AttributeError, ValueError, sympy.SympifyError):
            traced = None
        if isinstance(traced, sympy.Expr):
            expression = traced

        fn_name = getattr(fn, "__name__", "f")
        if fn_name == "<lambda>":
            fn_name = "f"

        return cls(
            name=name or fn_name,
            variables=names,
            func=fn,
            expression=expression,
            label=str(expression) if expression is not None else f"{fn_name}({names[0]}, {names[1]})",
        )


def as_objective(value: Any) -> Objective:
    """
    Привести value до Objective:
        None -> функція за замовчуванням (x**2 + 2*y**2),
        str  -> Objective.from_expression,
        callable -> Objective.from_callable.
    """
    if value is None:
        return Objective.from_expression(DEFAULT_EXPRESSION)
    if isinstance(value, Objective):
        return value
    if isinstance(value, str):
        return Objective.from_expression(value)
    if callable(value):
        return Objective.from_callable(value)
    raise InvalidArgumentError(f"Непідтримуваний тип цільової функції: {type(value)!r}")


# ---------------------------------------------------------------------------
# Реєстр навчальних функцій для вибору в GUI
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TargetFunction:
    """
    Приклад цільової функції разом з рекомендованими параметрами запуску.
    """
    key: str
    name: str
    expression: str
    rg: Tuple[float, float, float, float]
    init: Tuple[float, float]
    gamma: float
    tol: float
    max_iter: int = 50

    def objective(self) -> Objective:
        return Objective.from_expression(self.expression, name=self.key)


FUNCTIONS: Dict[str, TargetFunction] = {
    "bowl": TargetFunction(
        key="bowl",
        name="x² + 2y²",
        expression="x**2 + 2*y**2",
        rg=(-3.0, -3.0, 3.0, 3.0),
        init=(-3.0, 3.0),
        gamma=0.05,
        tol=1e-3,
    ),
    "sine_valley": TargetFunction(
        key="sine_valley",
        name="x² + 3·sin(y)",
        expression="x**2 + 3*sin(y)",
        rg=(-2 * math.pi, -2 * math.pi, 2 * math.pi, 2 * math.pi),
        init=(-2 * math.pi, 2.0),
        gamma=0.05,
        tol=1e-3,
    ),
    "wavy": TargetFunction(
        key="wavy",
        name="sin(x²/2 − y²/4 + 3)·cos(2x + 1 − eʸ)",
        expression="sin(x**2/2 - y**2/4 + 3)*cos(2*x + 1 - exp(y))",
        rg=(-2.0, -2.0, 2.0, 2.0),
        init=(-1.0, 0.5),
        gamma=0.1,
        tol=1e-4,
        max_iter=200,
    ),
    "shifted_bowl": TargetFunction(
        key="shifted_bowl",
        name="(x − 4)² + (y − 4)²",
        expression="(x - 4)**2 + (y - 4)**2",
        rg=(0.0, 0.0, 8.0, 8.0),
        init=(1.0, 7.0),
        gamma=0.1,
        tol=1e-4,
    ),
    "rosenbrock": TargetFunction(
        key="rosenbrock",
        name="100·(y − x²)² + (1 − x)²   [Розенброк]",
        expression="100*(y - x**2)**2 + (1 - x)**2",
        rg=(-2.0, -1.0, 2.0, 3.0),
        init=(-1.5, 2.0),
        gamma=0.001,
        tol=1e-6,
        max_iter=2000,
    ),
}

__all__ = [
    "ArrayLike",
    "BivariateFunction",
    "Objective",
    "as_objective",
    "TargetFunction",
    "FUNCTIONS",
]
