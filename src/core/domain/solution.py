"""
Solution — назначения заполнения и результаты солверов

- CavityFill: одна запись назначения (полость + доля заполнения)
- SolutionCandidate: результат любого солвера

Недопустимость — это данные: кандидат с feasible=False несёт причину,
исключение не бросается. Неопределённые величины (вырожденная система,
полость нулевой ёмкости) — None для значений и +inf для ошибок, поэтому
кандидаты всегда ранжируются по ошибке.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, Field

from src.core.domain.cavity import Cavity


# =============================================================================
# ENUMS / ПРИЧИНЫ
# =============================================================================


class SolverStrategy(str, Enum):
    """Стратегия, построившая кандидата"""

    SINGLE_FILL = "single_fill"
    GRID_SINGLE = "grid_single"
    GRID_PAIR = "grid_pair"
    DIFFERENTIAL_FILL = "differential_fill"
    PRECISE_VOLUME = "precise_volume"


REASON_FRACTION_OUT_OF_RANGE: Final[str] = "fraction_out_of_range"
REASON_ZERO_CAPACITY: Final[str] = "zero_capacity"
REASON_SINGULAR_SYSTEM: Final[str] = "singular_system"
REASON_OUTSIDE_REGION: Final[str] = "outside_permitted_region"


# =============================================================================
# НАЗНАЧЕНИЕ ЗАПОЛНЕНИЯ
# =============================================================================


class CavityFill(BaseModel):
    """
    Полость с заполненной долей её ёмкости.

    Номинально fraction в [0, 1]; солверы могут выдать значения вне
    диапазона (недопустимо) или None (не определено).
    """

    cavity: Cavity = Field(..., description="Проанализированная полость")
    fraction: float | None = Field(..., description="Доля заполнения ёмкости")

    model_config = {"frozen": True}

    @property
    def fill_mass(self) -> float:
        """Масса заполнения в полости (0.0, если доля не определена)."""
        if self.fraction is None:
            return 0.0
        return self.cavity.mass_added_full * self.fraction

    @property
    def fill_volume(self) -> float:
        if self.fraction is None:
            return 0.0
        return self.cavity.volume * self.fraction


# =============================================================================
# SOLUTION CANDIDATE
# =============================================================================


@dataclass(frozen=True)
class SolutionCandidate:
    """Результат солвера для одной геометрии."""

    strategy: SolverStrategy
    fills: tuple[CavityFill, ...]

    # Итог (None, если не определён)
    total_mass: float | None
    cog: float | None

    # Абсолютные ошибки относительно целей (inf, если не определены)
    mass_error: float
    cog_error: float

    feasible: bool
    infeasible_reason: str

    # Метка региона(ов) поиска ("" для фиксированной геометрии)
    region: str = ""

    details: str = ""

    @property
    def cavities(self) -> tuple[Cavity, ...]:
        return tuple(f.cavity for f in self.fills)

    @property
    def fractions(self) -> tuple[float | None, ...]:
        return tuple(f.fraction for f in self.fills)

    @property
    def fill_mass(self) -> float:
        """Суммарная масса заполнения по всем полостям."""
        return sum(f.fill_mass for f in self.fills)

    def ranking_key(self) -> tuple[float, float]:
        """Ключ сортировки: ошибка CoG, затем ошибка массы."""
        return (self.cog_error, self.mass_error)

    def to_contract(self) -> dict[str, Any]:
        """
        JSON-совместимый dict по contracts/schema/solution_candidate.json.

        Бесконечные ошибки экспортируются как None (в JSON нет infinity).
        """

        def _finite_or_none(value: float | None) -> float | None:
            if value is None or not math.isfinite(value):
                return None
            return value

        return {
            "strategy": self.strategy.value,
            "feasible": self.feasible,
            "infeasible_reason": self.infeasible_reason,
            "region": self.region,
            "total_mass": _finite_or_none(self.total_mass),
            "cog": _finite_or_none(self.cog),
            "mass_error": _finite_or_none(self.mass_error),
            "cog_error": _finite_or_none(self.cog_error),
            "cavities": [
                {
                    "label": f.cavity.label,
                    "shape": f.cavity.shape.value,
                    "start": f.cavity.start,
                    "end": f.cavity.end,
                    "width": f.cavity.width,
                    "depth": f.cavity.depth,
                    "volume": f.cavity.volume,
                    "centroid": f.cavity.centroid,
                    "mass_removed": f.cavity.mass_removed,
                    "mass_added_full": f.cavity.mass_added_full,
                    "fraction": _finite_or_none(f.fraction),
                    "fill_mass": f.fill_mass,
                }
                for f in self.fills
            ],
        }
