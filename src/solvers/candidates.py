"""Общее построение SolutionCandidate из назначений заполнения."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

from src.core.domain.solution import REASON_ZERO_CAPACITY, CavityFill, SolutionCandidate, SolverStrategy
from src.mass.aggregator import aggregate

if TYPE_CHECKING:
    from src.core.domain.object_spec import ObjectSpec
    from src.mass.cavity_analyzer import BodyProperties


def build_candidate(
    spec: ObjectSpec,
    strategy: SolverStrategy,
    fills: Sequence[CavityFill],
    body: BodyProperties | None = None,
    infeasible_reason: str = "",
    region: str = "",
    details: str = "",
) -> SolutionCandidate:
    """
    Оценка назначения заполнения и упаковка в кандидата.

    Неопределённая доля хотя бы у одной полости (или пустое назначение)
    делает итог неопределённым: полная масса и CoG — None, обе ошибки +inf.

    Args:
        spec: Конфигурация тела
        strategy: Стратегия-источник
        fills: Полости с долями заполнения
        body: Предвычисленные свойства тела
        infeasible_reason: Пусто для допустимого кандидата
        region: Метка региона(ов)
        details: Произвольная сводка

    Returns:
        SolutionCandidate
    """
    fills = tuple(fills)

    if not fills or any(f.fraction is None for f in fills):
        return SolutionCandidate(
            strategy=strategy,
            fills=fills,
            total_mass=None,
            cog=None,
            mass_error=math.inf,
            cog_error=math.inf,
            feasible=False,
            infeasible_reason=infeasible_reason or REASON_ZERO_CAPACITY,
            region=region,
            details=details or (infeasible_reason or REASON_ZERO_CAPACITY),
        )

    props = aggregate(spec, fills, body)
    mass_error = abs(props.total_mass - spec.target_mass)
    cog_error = abs(props.cog - spec.target_cog)

    return SolutionCandidate(
        strategy=strategy,
        fills=fills,
        total_mass=props.total_mass,
        cog=props.cog,
        mass_error=mass_error,
        cog_error=cog_error,
        feasible=not infeasible_reason,
        infeasible_reason=infeasible_reason,
        region=region,
        details=details
        or (
            f"mass={props.total_mass:.4f} (err {mass_error:.4f}), "
            f"cog={props.cog:.4f} (err {cog_error:.4f}), "
            f"fill={', '.join(f'{f.fraction:.4f}' for f in fills)}"
        ),
    )
