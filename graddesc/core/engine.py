"""
engine.py

Ітераційний двигун градієнтного спуску.

Функціонал:
    - виконує цикл x_{k+1} = step(x_k) для довільного Optimizer;
    - зупиняється, коли |f(x_{k+1}) - f(x_k)| <= tol або k == max_iter;
    - формує трасу ітерацій (для таблиці, стрілок і поверхні);
    - рахує кількість викликів f та ∇f;
    - підтримує callback для оновлення GUI / анімації на кожній ітерації.

Критерій зупинки порівнює сусідні значення функції, а не норму градієнта,
тому на пологих ділянках спуск може завершитись передчасно.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from .config import as_point, require_int, require_positive
from .defaults import DEFAULT_MAX_ITER, DEFAULT_TOL
from .iteration_result import IterationResult
from .optimizer_base import Optimizer, StepResult

logger = logging.getLogger(__name__)

STOP_F_CHANGE = "f_change"
STOP_MAX_ITER = "max_iter"


@dataclass
class DescentRunResult:
    """
    Підсумок одного запуску.

    Атрибути:
        method_name  - назва правила кроку (Optimizer.name)
        iterations   - список IterationResult, починаючи зі стартової точки
        x_star       - остання досягнута точка
        f_star       - f(x_star)
        n_iter       - кількість кроків (без k=0)
        func_evals   - кількість викликів цільової функції
        grad_evals   - кількість викликів градієнта
        stopped_by   - "f_change" або "max_iter"
        max_iter     - ліміт ітерацій цього запуску
    """
    method_name: str
    iterations: List[IterationResult]
    x_star: np.ndarray
    f_star: float
    n_iter: int
    func_evals: int
    grad_evals: int
    stopped_by: str
    max_iter: int

    @property
    def trajectory(self) -> np.ndarray:
        """Усі відвідані точки, форма (n_iter + 1, 2)."""
        return np.array([it.x for it in self.iterations], dtype=float)

    @property
    def values(self) -> np.ndarray:
        return np.array([it.f for it in self.iterations], dtype=float)

    @property
    def converged(self) -> bool:
        return self.stopped_by == STOP_F_CHANGE

    @property
    def reliable(self) -> bool:
        """False, якщо вичерпано ліміт ітерацій — результат сумнівний."""
        return self.n_iter < self.max_iter


# Тип callback'а для GUI/анімації
IterationCallback = Callable[[IterationResult], None]


class DescentEngine:
    """
    Движок, який керує ітераційним процесом для заданого Optimizer.

    Налаштування за замовчуванням (можуть бути переозначені у run()):
        tol      : поріг для |f_{k+1} - f_k| (default: 1e-3)
        max_iter : максимальна кількість ітерацій (default: 50)
    """

    def __init__(
        self,
        tol: float = DEFAULT_TOL,
        max_iter: int = DEFAULT_MAX_ITER,
    ) -> None:
        self.tol_default = require_positive(tol, "tol")
        self.max_iter_default = require_int(max_iter, "max_iter", 1)

    def run(
        self,
        optimizer: Optimizer,
        x0,
        max_iter: Optional[int] = None,
        tol: Optional[float] = None,
        callback: Optional[IterationCallback] = None,
    ) -> DescentRunResult:
        """
        Запустити спуск з точки x0.

        Параметри перевіряються до першого виклику f чи ∇f.
        """
        max_iter = require_int(
            max_iter if max_iter is not None else self.max_iter_default, "max_iter", 1
        )
        tol = require_positive(tol if tol is not None else self.tol_default, "tol")
        x0 = as_point(x0, "x0")

        optimizer.reset()

        iterations: List[IterationResult] = []

        # Стартова точка (k = 0)
        f0 = optimizer.eval_f(x0)
        rec0 = IterationResult(index=0, x=x0.copy(), f=f0, meta={"initial": True})
        iterations.append(rec0)
        if callback is not None:
            callback(rec0)

        x_k = x0.copy()
        f_k = f0
        stopped_by = STOP_MAX_ITER

        for k in range(1, max_iter + 1):
            step_res: StepResult = optimizer.step(x_k)
            delta = abs(step_res.f_new - f_k)

            rec = IterationResult(
                index=k,
                x=step_res.x_new.copy(),
                f=step_res.f_new,
                step_norm=float(step_res.step_norm),
                delta=delta,
                meta=dict(step_res.meta or {}),
            )
            iterations.append(rec)
            logger.debug("k=%d x=%s f=%.6g delta=%.3g", k, rec.x.tolist(), rec.f, delta)

            if callback is not None:
                callback(rec)

            x_k = step_res.x_new
            f_k = step_res.f_new

            if delta <= tol:
                stopped_by = STOP_F_CHANGE
                break

        last_rec = iterations[-1]
        result = DescentRunResult(
            method_name=optimizer.name,
            iterations=iterations,
            x_star=last_rec.x.copy(),
            f_star=float(last_rec.f),
            n_iter=len(iterations) - 1,
            func_evals=optimizer.func_evals,
            grad_evals=optimizer.grad_evals,
            stopped_by=stopped_by,
            max_iter=max_iter,
        )

        if result.n_iter >= max_iter:
            logger.warning(
                "Досягнуто max_iter=%d; результат x*=%s може бути ненадійним",
                max_iter,
                result.x_star.tolist(),
            )
        else:
            logger.info(
                "%s: зупинка %s після %d ітерацій, f*=%.6g",
                result.method_name,
                result.stopped_by,
                result.n_iter,
                result.f_star,
            )

        return result


__all__ = [
    "STOP_F_CHANGE",
    "STOP_MAX_ITER",
    "DescentRunResult",
    "IterationCallback",
    "DescentEngine",
]
