"""Значення параметрів за замовчуванням для спуску та візуалізації."""

# Цільова функція та область
DEFAULT_EXPRESSION: str = "x**2 + 2*y**2"
DEFAULT_RANGE: tuple[float, float, float, float] = (-3.0, -3.0, 3.0, 3.0)  # (x0, y0, x1, y1)
DEFAULT_INIT: tuple[float, float] = (-3.0, 3.0)

# Параметри спуску
DEFAULT_GAMMA: float = 0.05
DEFAULT_TOL: float = 1e-3
DEFAULT_MAX_ITER: int = 50

# Градієнт
DEFAULT_GRADIENT_METHOD: str = "symbolic"
NUMERICAL_GRADIENT_STEP: float = 1e-6

# Візуалізація
DEFAULT_GRID_LENGTH: int = 50
DEFAULT_INTERVAL: float = 0.3  # секунди між кадрами в GUI
DEFAULT_COL_CONTOUR: str = "red"
DEFAULT_COL_ARROW: str = "blue"
CONTOUR_LEVELS: int = 10
COLOR_CHOICES: tuple[str, ...] = (
    "red", "blue", "green", "black", "orange", "purple", "gray",
)
