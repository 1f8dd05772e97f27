"""
Single-Fill Solve — общая доля заполнения под целевую массу

Замкнутая форма: для фиксированной геометрии полостей общая доля f, при
которой полная масса точно попадает в цель.

ФОРМУЛА:
    f = (target_mass − residual_mass − aux_mass) / Σ (cavity.volume × fill_density)

Допустимо iff f ∈ [min_fill, 1], а все полости лежат в допустимых регионах.
CoG получается каким получится; гарантий по CoG нет.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from src.core.domain.object_spec import permitted_regions
from src.core.domain.solution import (
    REASON_FRACTION_OUT_OF_RANGE,
    REASON_OUTSIDE_REGION,
    REASON_ZERO_CAPACITY,
    CavityFill,
    SolutionCandidate,
    SolverStrategy,
)
from src.core.math.numerical_safeguards import EPS_MASS, in_unit_interval
from src.mass.aggregator import residual_budget
from src.mass.cavity_analyzer import BodyProperties, analyze_body
from src.solvers.candidates import build_candidate

if TYPE_CHECKING:
    from src.core.domain.cavity import Cavity
    from src.core.domain.object_spec import ObjectSpec

logger = logging.getLogger(__name__)


# =============================================================================
# ЗАМКНУТАЯ ФОРМА
# =============================================================================


def solve_fill_fraction(
    spec: ObjectSpec,
    cavities: Sequence[Cavity],
    body: BodyProperties | None = None,
) -> float | None:
    """
    Общая для всех полостей доля заполнения, дающая целевую массу.

    Args:
        spec: Конфигурация тела
        cavities: Проанализированные полости
        body: Предвычисленные свойства тела

    Returns:
        Доля (возможно вне [0, 1]), или None, если у полостей нет ёмкости
        (полостей нет или все пустые)

    Examples:
        >>> spec = pinewood_derby_spec()  # doctest: +SKIP
        >>> cav = analyze_through_cut(spec, 2.0, 5.75)  # doctest: +SKIP
        >>> round(solve_fill_fraction(spec, [cav]), 4)  # doctest: +SKIP
        0.1525
    """
    capacity = sum(c.mass_added_full for c in cavities)
    if capacity <= EPS_MASS:
        return None

    residual = residual_budget(spec, cavities, body)
    needed_fill = spec.target_mass - residual.mass - spec.auxiliary_mass
    return needed_fill / capacity


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class SingleFillConfig:
    """Конфигурация single-fill солвера."""

    # Минимально допустимая доля заполнения
    min_fill: float = 0.0

    # Полости обязаны лежать в допустимых регионах (вне зон осей)
    enforce_permitted_regions: bool = True


# =============================================================================
# СОЛВЕР
# =============================================================================


class SingleFillSolver:
    """Single-fill для фиксированной геометрии, результат — SolutionCandidate."""

    def __init__(self, spec: ObjectSpec, config: SingleFillConfig | None = None):
        """
        Args:
            spec: Конфигурация тела
            config: Конфигурация солвера (по умолчанию, если не задана)
        """
        self.spec = spec
        self.config = config or SingleFillConfig()

    def solve(
        self,
        cavities: Sequence[Cavity],
        body: BodyProperties | None = None,
        region: str = "",
    ) -> SolutionCandidate:
        """
        Решение общей доли заполнения и оценка получившегося тела.

        Args:
            cavities: Проанализированные полости фиксированной геометрии
            body: Предвычисленные свойства тела
            region: Метка региона для кандидата

        Returns:
            SolutionCandidate; недопустим, если доля не определена (в т.ч.
            для пустого списка полостей), вне [min_fill, 1], или полость
            заходит в зарезервированную зону
        """
        body = body or analyze_body(self.spec)
        fraction = solve_fill_fraction(self.spec, cavities, body)
        fills = [CavityFill(cavity=c, fraction=fraction) for c in cavities]

        if fraction is None:
            logger.debug("single fill: zero capacity for %d cavities", len(cavities))
            return build_candidate(
                self.spec,
                SolverStrategy.SINGLE_FILL,
                fills,
                body,
                infeasible_reason=REASON_ZERO_CAPACITY,
                region=region,
            )

        reason = ""
        if self.config.enforce_permitted_regions and not _inside_permitted_regions(self.spec, cavities):
            reason = REASON_OUTSIDE_REGION
        elif not in_unit_interval(fraction, self.config.min_fill):
            reason = REASON_FRACTION_OUT_OF_RANGE

        return build_candidate(
            self.spec,
            SolverStrategy.SINGLE_FILL,
            fills,
            body,
            infeasible_reason=reason,
            region=region,
        )


def _inside_permitted_regions(spec: ObjectSpec, cavities: Sequence[Cavity]) -> bool:
    regions = permitted_regions(spec)
    return all(any(r.contains(c.start, c.end) for r in regions) for c in cavities)
