"""
optimizer_base.py

Базові класи та типи для кроку спуску (Strategy).

Ідея:
    - Є абстрактний клас Optimizer, від якого наслідуються правила кроку
      (зараз — FixedStepDescent з фіксованим кроком γ).
    - Кожне правило реалізує _step_impl(), а движок викликає step().
    - Optimizer рахує виклики f та ∇f і перетворює невизначені значення
      на DifferentiationError.

Формат:
    step(x_k: np.ndarray) -> StepResult
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from .errors import DifferentiationError
from .functions import ArrayLike, Objective
from .gradient import Gradient


# ---------------------------------------------------------------------------
# Результат одного кроку
# ---------------------------------------------------------------------------

@dataclass
class StepResult:
    """
    Результат одного кроку.

    Атрибути:
        x_new     - нова точка x_{k+1}
        f_new     - значення функції f(x_{k+1})
        step_norm - норма кроку ||x_{k+1} - x_k||
        meta      - додаткова інформація (градієнт, γ, ...)
    """
    x_new: np.ndarray
    f_new: float
    step_norm: float
    meta: Dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Базовий клас Optimizer (Strategy)
# ---------------------------------------------------------------------------

class Optimizer(ABC):
    """
    Абстрактний базовий клас для правил кроку.

    Використання:
        opt = FixedStepDescent(objective, gradient, gamma=0.05)
        opt.reset()
        res = opt.step(x_k)  # StepResult
    """

    def __init__(
        self,
        objective: Objective,
        gradient: Gradient,
        name: Optional[str] = None,
    ) -> None:
        self.objective = objective
        self.gradient = gradient
        self.name: str = name or self.__class__.__name__

        # Лічильники викликів
        self.func_evals: int = 0
        self.grad_evals: int = 0

    # ------------------------------------------------------------------
    # Обчислення f та ∇f із підрахунком викликів
    # ------------------------------------------------------------------

    def eval_f(self, x: ArrayLike) -> float:
        """Обчислити f(x) та збільшити лічильник викликів функції."""
        self.func_evals += 1
        try:
            value = self.objective.value(x)
        except (ArithmeticError, ValueError, TypeError) as exc:
            raise DifferentiationError(
                f"Функцію не визначено у точці {np.asarray(x).tolist()}: {exc}"
            ) from exc
        if not math.isfinite(value):
            raise DifferentiationError(
                f"Функцію не визначено у точці {np.asarray(x).tolist()}: f = {value}"
            )
        return value

    def eval_grad(self, x: ArrayLike) -> np.ndarray:
        """Обчислити ∇f(x); DifferentiationError, якщо градієнт невизначений."""
        self.grad_evals += 1
        x1, x2 = np.asarray(x, dtype=float)
        return self.gradient(x1, x2)

    # ------------------------------------------------------------------
    # Життєвий цикл
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Скинути лічильники перед новим запуском."""
        self.func_evals = 0
        self.grad_evals = 0

    def step(self, x_k: ArrayLike) -> StepResult:
        """
        Виконати один крок з поточної точки x_k.

        Повертає:
            StepResult(x_new, f_new, step_norm, meta)
        """
        x_k_arr = np.asarray(x_k, dtype=float)
        result = self._step_impl(x_k_arr)

        if not isinstance(result, StepResult):
            raise TypeError(
                f"{self.__class__.__name__}._step_impl() "
                f"повинен повертати StepResult, отримано: {type(result)}"
            )

        return result

    @abstractmethod
    def _step_impl(self, x_k: np.ndarray) -> StepResult:
        """
        Реалізація одного кроку.

        Parameters
        ----------
        x_k : np.ndarray
            Поточна точка x_k.

        Returns
        -------
        StepResult
            x_{k+1}, f(x_{k+1}), ||x_{k+1} - x_k||, meta.
        """
        raise NotImplementedError


__all__ = [
    "StepResult",
    "Optimizer",
]
