"""
fixed_step.py

Градієнтний спуск з фіксованим кроком як стратегія Optimizer.

Ідея:
    x_{k+1} = x_k - γ · ∇f(x_k),
    γ > 0 не змінюється між ітераціями (без лінійного пошуку).
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from .config import require_positive
from .defaults import DEFAULT_GAMMA
from .functions import Objective
from .gradient import Gradient
from .optimizer_base import Optimizer, StepResult


class FixedStepDescent(Optimizer):
    """
    Градієнтний спуск з постійним кроком γ.

    Великий γ може призвести до розбіжності або осциляцій, малий —
    до повільного руху; обидва випадки видно на анімації стрілок.
    """

    def __init__(
        self,
        objective: Objective,
        gradient: Gradient,
        gamma: float = DEFAULT_GAMMA,
        name: Optional[str] = None,
    ) -> None:
        gamma = require_positive(gamma, "gamma")
        super().__init__(
            objective=objective,
            gradient=gradient,
            name=name or "Gradient descent (fixed step)",
        )
        self.gamma = gamma

    def _step_impl(self, x_k: np.ndarray) -> StepResult:
        g_k = self.eval_grad(x_k)
        x_new = x_k - self.gamma * g_k
        f_new = self.eval_f(x_new)

        return StepResult(
            x_new=x_new,
            f_new=f_new,
            step_norm=float(np.linalg.norm(x_new - x_k, ord=2)),
            meta={
                "gamma": self.gamma,
                "grad": g_k,
                "grad_norm": float(np.linalg.norm(g_k, ord=2)),
            },
        )


__all__ = [
    "FixedStepDescent",
]
