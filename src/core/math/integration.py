"""
Integration — составная формула Симпсона

Определённый интеграл фиксированного порядка; через него считаются все
объёмы и моменты движка. Число панелей входит в численный контракт:
1000 панелей — нижняя граница точности, относительно которой заданы
эталонные результаты, вызывающий код её не понижает.

ФОРМУЛА:
    h = (b - a) / n,  n чётное
    ∫[a,b] f ≈ h/3 · (f(x_0) + 4 f(x_1) + 2 f(x_2) + ... + 4 f(x_{n-1}) + f(x_n))

Вырожденный и обратный интервалы дают ноль, это не ошибка.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Final

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

# Число панелей по умолчанию
DEFAULT_PANELS: Final[int] = 1000


def even_panels(n: int) -> int:
    """
    Округление числа панелей вверх до чётного.

    Raises:
        ValueError: Если n < 1

    Examples:
        >>> even_panels(1000)
        1000
        >>> even_panels(7)
        8
    """
    if n < 1:
        raise ValueError(f"panel count must be >= 1, got {n}")
    return n + 1 if n % 2 else n


def simpson_weights(n: int) -> npt.NDArray[np.float64]:
    """Веса Симпсона 1, 4, 2, ..., 2, 4, 1 для n (чётного) панелей."""
    weights = np.full(n + 1, 2.0)
    weights[1:n:2] = 4.0
    weights[0] = 1.0
    weights[n] = 1.0
    return weights


def integrate(
    f: Callable,
    a: float,
    b: float,
    n: int = DEFAULT_PANELS,
    vectorized: bool = False,
) -> float:
    """
    Приближение ∫[a,b] f(x) dx составной формулой Симпсона.

    Args:
        f: Подынтегральная функция. Вызывается на каждом узле с float или
            один раз со всем массивом узлов, если vectorized=True.
        a: Нижний предел
        b: Верхний предел
        n: Число панелей, округляется вверх до чётного (default: 1000)
        vectorized: Вычислять f на numpy-массиве узлов за один вызов

    Returns:
        Значение интеграла, или 0.0 при a >= b

    Raises:
        ValueError: Если n < 1

    Examples:
        >>> abs(integrate(lambda x: 3.0, 0.0, 2.0) - 6.0) < 1e-12
        True
        >>> integrate(lambda x: x, 1.0, 1.0)
        0.0
    """
    panels = even_panels(n)

    if a >= b:
        return 0.0

    h = (b - a) / panels

    if vectorized:
        nodes = a + h * np.arange(panels + 1)
        values = np.broadcast_to(np.asarray(f(nodes), dtype=np.float64), nodes.shape)
        return float(np.dot(simpson_weights(panels), values) * h / 3.0)

    total = f(a) + f(b)
    for i in range(1, panels):
        x = a + i * h
        total += (2.0 if i % 2 == 0 else 4.0) * f(x)

    return float(total * h / 3.0)
