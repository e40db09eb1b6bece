"""
iteration_result.py

Структура даних для представлення однієї ітерації спуску.
Використовується як у движку, так і в GUI (таблиця, анімація стрілок).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np


@dataclass
class IterationResult:
    """
    Опис однієї ітерації градієнтного спуску.

    Атрибути:
        index      - номер ітерації (0 — стартова точка)
        x          - точка (x, y) після кроку
        f          - значення функції у цій точці
        step_norm  - довжина кроку ||x_k - x_{k-1}|| (для k=0 = 0.0)
        delta      - |f(x_k) - f(x_{k-1})| (для k=0 = 0.0)
        meta       - довільна додаткова інформація (γ, градієнт, ...)
    """
    index: int
    x: np.ndarray
    f: float
    step_norm: float = 0.0
    delta: float = 0.0
    meta: Dict[str, Any] = field(default_factory=dict)


__all__ = [
    "IterationResult",
]
