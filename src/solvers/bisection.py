"""
Bisection — конец полости для требуемого объёма

По началу полости и объёму, который она должна иметь, двоичным поиском
подбирается позиция конца, пока проинтегрированный объём не совпадёт.
Цикл выполняет фиксированное число итераций (без порога сходимости);
100 делений сужают любой брекет далеко ниже разрешения float по позиции.

Нижняя граница брекета начинается на lower_offset после начала полости.
Если уже [start, start + lower_offset] вмещает больше требуемого объёма,
брекет начинается от самого start, иначе конец проскочил бы цель.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.mass.cavity_analyzer import cut_volume

if TYPE_CHECKING:
    from src.core.domain.object_spec import ObjectSpec


@dataclass(frozen=True)
class BisectionConfig:
    """Конфигурация бисекции конца полости."""

    # Фиксированное число делений
    iterations: int = 100

    # Нижняя граница брекета отстоит от начала полости на эту величину
    lower_offset: float = 0.001


def bisect_end(
    spec: ObjectSpec,
    start: float,
    required_volume: float,
    upper: float,
    width: float | None = None,
    depth: float | None = None,
    config: BisectionConfig | None = None,
) -> float | None:
    """
    Позиция конца, при которой полость [start, end] имеет требуемый объём.

    Args:
        spec: Конфигурация тела
        start: Начало полости
        required_volume: Требуемый объём полости
        upper: Наибольший допустимый конец (например, конец региона)
        width: Ширина полости (None: ширина тела)
        depth: Глубина кармана (None: сквозной вырез)
        config: Конфигурация бисекции

    Returns:
        Позиция конца, или None, если даже [start, upper] вмещает меньше
        требуемого объёма

    Raises:
        ValueError: Если iterations < 1
    """
    cfg = config or BisectionConfig()
    if cfg.iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {cfg.iterations}")

    if cut_volume(spec, start, upper, width, depth) < required_volume:
        return None

    lo = min(start + cfg.lower_offset, upper)
    if cut_volume(spec, start, lo, width, depth) > required_volume:
        lo = start
    hi = upper
    for _ in range(cfg.iterations):
        mid = (lo + hi) / 2
        if cut_volume(spec, start, mid, width, depth) < required_volume:
            lo = mid
        else:
            hi = mid

    end = (lo + hi) / 2
    if end > upper:
        return None
    return end
