"""
Numerical Safeguards — безопасные примитивы для арифметики масс и моментов

Модуль защищает каждое деление движка от нулевого или исчезающе малого
знаменателя:
- centroid = moment / volume (полости нулевого объёма)
- CoG = moment / mass
- fill fraction = недостающая масса / ёмкость полости (нулевая ёмкость)
- правило Крамера для системы двух полостей (почти вырожденный определитель)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (возвращается fallback)
2. NaN/Inf не выходят за пределы защищённой операции
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Объёмы меньше порога считаются пустыми (length^3)
EPS_VOLUME: Final[float] = 1e-15

# Массы меньше порога считаются нулевыми
EPS_MASS: Final[float] = 1e-15

# Порог определителя для линейной системы двух полостей
EPS_DETERMINANT: Final[float] = 1e-10

# Толерантность при построении точек сетки из целых индексов
EPS_GRID: Final[float] = 1e-9


# =============================================================================
# БЕЗОПАСНОЕ ДЕЛЕНИЕ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True, если значение конечно (не NaN, не Inf)."""
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Замена NaN/Inf на fallback.

    Examples:
        >>> sanitize_float(10.0)
        10.0
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


def safe_divide(
    numerator: float,
    denominator: float,
    eps: float = EPS_VOLUME,
    fallback: float = 0.0,
) -> float:
    """
    Деление, возвращающее fallback вместо деления на (почти) ноль.

    Исчезающий знаменатель здесь означает, что частное не определено
    (например, центроид пустой области), поэтому возвращается fallback
    вызывающего кода, а не огромное число.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        eps: Знаменатели с abs() <= eps считаются нулевыми
        fallback: Результат при нулевом знаменателе или неконечном частном

    Returns:
        numerator / denominator, или fallback

    Examples:
        >>> safe_divide(10.0, 2.0)
        5.0
        >>> safe_divide(10.0, 0.0)
        0.0
        >>> safe_divide(1.0, 1e-20, fallback=-1.0)
        -1.0
    """
    if eps < 0:
        raise ValueError(f"eps must be non-negative, got {eps}")

    num_clean = sanitize_float(numerator, fallback=0.0)
    denom_clean = sanitize_float(denominator, fallback=0.0)

    if abs(denom_clean) <= eps:
        return fallback

    return sanitize_float(num_clean / denom_clean, fallback=fallback)


# =============================================================================
# ДОПУСТИМОСТЬ
# =============================================================================


def in_unit_interval(value: float | None, lower: float = 0.0) -> bool:
    """
    Проверка допустимости доли заполнения.

    Args:
        value: Проверяемая доля (None = не определена)
        lower: Нижняя граница (default: 0.0; часть поисков требует
            минимального заполнения)

    Returns:
        True, если value конечно и lower <= value <= 1.0

    Examples:
        >>> in_unit_interval(0.5)
        True
        >>> in_unit_interval(1.0000001)
        False
        >>> in_unit_interval(0.005, lower=0.01)
        False
        >>> in_unit_interval(None)
        False
    """
    if value is None or not is_valid_float(value):
        return False
    return lower <= value <= 1.0


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_positive(value: float, name: str, eps: float = 0.0) -> None:
    """
    ValueError, если значение не конечно или не больше eps.

    Args:
        value: Проверяемое значение
        name: Имя параметра для сообщения об ошибке
        eps: Нижний порог (default: 0.0)
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")
