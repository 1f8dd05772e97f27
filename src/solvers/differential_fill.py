"""
Differential Fill — точное решение для двух полостей с независимыми долями

Для двух полостей фиксированной геометрии решается своя доля заполнения
каждой полости, чтобы масса И CoG точно попали в цели.

FORMULAS:
    P_i = volume_i × fill_density              (ёмкость по массе)
    M_i = centroid_i × P_i                     (ёмкость по моменту)

    f1·P1 + f2·P2 = target_mass − residual_mass − aux_mass
    f1·M1 + f2·M2 = target_mass·target_cog − residual_moment − aux_moment

    det = P1·M2 − P2·M1
    f1  = (R1·M2 − R2·P2) / det
    f2  = (R2·P1 − R1·M1) / det

residual_* — тело после вырезов: каждая полость снимает свой материал
(по своей ширине), а не срез на всю ширину.

CRITICAL INVARIANTS:
1. |det| < det_eps → недопустимо (singular_system), доли не определены
2. Допустимо тогда и только тогда, когда f1 ∈ [0, 1] и f2 ∈ [0, 1]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from src.core.domain.solution import (
    REASON_FRACTION_OUT_OF_RANGE,
    REASON_SINGULAR_SYSTEM,
    CavityFill,
    SolutionCandidate,
    SolverStrategy,
)
from src.core.math.numerical_safeguards import EPS_DETERMINANT, in_unit_interval
from src.mass.aggregator import residual_budget
from src.mass.cavity_analyzer import BodyProperties, analyze_body, analyze_cavity
from src.solvers.candidates import build_candidate

if TYPE_CHECKING:
    from src.core.domain.cavity import Cavity, CavityGeometry
    from src.core.domain.object_spec import ObjectSpec

logger = logging.getLogger(__name__)


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


@dataclass(frozen=True)
class DifferentialFillConfig:
    """Конфигурация differential fill."""

    # Определители меньше порога (по модулю) считаются вырожденными
    det_eps: float = EPS_DETERMINANT


# =============================================================================
# ЛИНЕЙНАЯ СИСТЕМА
# =============================================================================


class FillSystem(NamedTuple):
    """Коэффициенты системы заполнения 2×2."""

    p1: float
    p2: float
    m1: float
    m2: float
    rhs_mass: float
    rhs_moment: float

    @property
    def determinant(self) -> float:
        return self.p1 * self.m2 - self.p2 * self.m1


def build_fill_system(
    spec: ObjectSpec,
    first: Cavity,
    second: Cavity,
    body: BodyProperties | None = None,
) -> FillSystem:
    """Сборка системы 2×2 для двух проанализированных полостей."""
    residual = residual_budget(spec, [first, second], body)
    return FillSystem(
        p1=first.mass_added_full,
        p2=second.mass_added_full,
        m1=first.fill_capacity_moment,
        m2=second.fill_capacity_moment,
        rhs_mass=spec.target_mass - residual.mass - spec.auxiliary_mass,
        rhs_moment=spec.target_moment - residual.moment - spec.auxiliary_moment,
    )


def solve_fill_system(system: FillSystem, det_eps: float = EPS_DETERMINANT) -> tuple[float, float] | None:
    """
    Правило Крамера.

    Returns:
        (f1, f2), или None, если |det| < det_eps
    """
    det = system.determinant
    if abs(det) < det_eps:
        return None

    f1 = (system.rhs_mass * system.m2 - system.rhs_moment * system.p2) / det
    f2 = (system.rhs_moment * system.p1 - system.rhs_mass * system.m1) / det
    return f1, f2


# =============================================================================
# СОЛВЕР
# =============================================================================


def solve_differential_fill(
    spec: ObjectSpec,
    first: Cavity,
    second: Cavity,
    body: BodyProperties | None = None,
    config: DifferentialFillConfig | None = None,
) -> SolutionCandidate:
    """
    Независимые доли заполнения для двух фиксированных полостей.

    Args:
        spec: Конфигурация тела
        first: Первая проанализированная полость
        second: Вторая проанализированная полость
        body: Заранее вычисленные свойства тела
        config: Конфигурация солвера

    Returns:
        SolutionCandidate; для вырожденной системы доли None
    """
    cfg = config or DifferentialFillConfig()
    body = body or analyze_body(spec)

    system = build_fill_system(spec, first, second, body)
    solution = solve_fill_system(system, cfg.det_eps)

    if solution is None:
        logger.debug(
            "differential fill: singular system (det=%.3e) for [%g, %g] + [%g, %g]",
            system.determinant,
            first.start,
            first.end,
            second.start,
            second.end,
        )
        return build_candidate(
            spec,
            SolverStrategy.DIFFERENTIAL_FILL,
            [CavityFill(cavity=first, fraction=None), CavityFill(cavity=second, fraction=None)],
            body,
            infeasible_reason=REASON_SINGULAR_SYSTEM,
        )

    f1, f2 = solution
    feasible = in_unit_interval(f1) and in_unit_interval(f2)

    return build_candidate(
        spec,
        SolverStrategy.DIFFERENTIAL_FILL,
        [CavityFill(cavity=first, fraction=f1), CavityFill(cavity=second, fraction=f2)],
        body,
        infeasible_reason="" if feasible else REASON_FRACTION_OUT_OF_RANGE,
    )


class DifferentialFillSolver:
    """Differential fill по геометриям: каждая пара анализируется против одного тела."""

    def __init__(self, spec: ObjectSpec, config: DifferentialFillConfig | None = None):
        self.spec = spec
        self.config = config or DifferentialFillConfig()

    def solve(
        self,
        first: CavityGeometry,
        second: CavityGeometry,
        body: BodyProperties | None = None,
    ) -> SolutionCandidate:
        body = body or analyze_body(self.spec)
        return solve_differential_fill(
            self.spec,
            analyze_cavity(self.spec, first),
            analyze_cavity(self.spec, second),
            body,
            self.config,
        )
