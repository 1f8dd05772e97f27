"""
Precise Volume — обратный расчёт одной полностью заполненной полости

При одной полости, заполненной на 100 %, обе цели полностью задают
полость: объём из целевой массы, центроид из целевого CoG. Солвер
вычисляет оба, затем ищет в каждом допустимом регионе пролёт с этим
объёмом (конец находится бисекцией) и центроидом, ближайшим к нужному.

FORMULAS:
    Δρ              = fill_density − base_density
    needed_volume   = (target_mass − body_mass − aux_mass) / Δρ
    needed_centroid = (target_mass·target_cog − body_moment − aux_moment) / Δρ / needed_volume

CRITICAL INVARIANTS:
1. needed_volume <= 0 → решения нет (тело без вырезов уже слишком тяжёлое)
2. Регион подходит, когда лучшая ошибка центроида < centroid_tolerance
3. Каждое совпадение даёт кандидата с долей 1.0
4. Пустой candidates означает "решения нет"; исключение не бросается
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple, Sequence

from src.core.domain.object_spec import Region, permitted_regions
from src.core.domain.solution import CavityFill, SolutionCandidate, SolverStrategy
from src.core.math.numerical_safeguards import EPS_VOLUME, safe_divide
from src.mass.cavity_analyzer import BodyProperties, analyze_body, analyze_through_cut
from src.solvers.bisection import BisectionConfig, bisect_end
from src.solvers.candidates import build_candidate
from src.solvers.grid_search import grid_points

if TYPE_CHECKING:
    from src.core.domain.object_spec import ObjectSpec

logger = logging.getLogger(__name__)

# Имена регионов эталонной компоновки: нос, между осями, за задней осью
DEFAULT_REGION_NAMES: tuple[str, ...] = ("nose", "between axles", "behind rear axle")


# =============================================================================
# КОНФИГУРАЦИЯ / РЕЗУЛЬТАТ
# =============================================================================


@dataclass(frozen=True)
class PreciseVolumeConfig:
    """Конфигурация точного обратного расчёта."""

    # Шаг позиций начала полости внутри региона
    start_step: float = 0.005

    # Начала заканчиваются на этом расстоянии до конца региона
    end_clearance: float = 0.01

    # Ошибка центроида, ниже которой регион считается совпадением
    centroid_tolerance: float = 0.05

    bisection: BisectionConfig = field(default_factory=BisectionConfig)


class RegionMatch(NamedTuple):
    """Лучший пролёт, найденный в одном регионе."""

    region: Region
    start: float
    end: float
    volume: float
    centroid: float
    centroid_error: float
    matched: bool


@dataclass(frozen=True)
class PreciseVolumeResult:
    """
    Результат обратного расчёта.

    matches содержит диагностику каждого региона, где нужный объём
    достижим; candidates только совпавшие регионы.
    """

    needed_volume: float
    needed_centroid: float | None
    matches: tuple[RegionMatch, ...] = ()
    candidates: tuple[SolutionCandidate, ...] = ()

    @property
    def found(self) -> bool:
        return len(self.candidates) > 0


# =============================================================================
# СОЛВЕР
# =============================================================================


class PreciseVolumeSolver:
    """Обратный расчёт одного сквозного выреза с заполнением 100 %."""

    def __init__(self, spec: ObjectSpec, config: PreciseVolumeConfig | None = None):
        self.spec = spec
        self.config = config or PreciseVolumeConfig()

    def needed(self, body: BodyProperties | None = None) -> tuple[float, float | None]:
        """
        Объём и центроид, которые должна иметь полость.

        Returns:
            (needed_volume, needed_centroid); центроид None, если нужный
            объём не положителен
        """
        spec = self.spec
        body = body or analyze_body(spec)
        delta_rho = spec.fill_density - spec.base_density

        needed_volume = (spec.target_mass - body.mass - spec.auxiliary_mass) / delta_rho
        if needed_volume <= EPS_VOLUME:
            return needed_volume, None

        needed_moment = (spec.target_moment - body.moment - spec.auxiliary_moment) / delta_rho
        return needed_volume, safe_divide(needed_moment, needed_volume, eps=EPS_VOLUME)

    def solve(
        self,
        regions: Sequence[Region] | None = None,
        body: BodyProperties | None = None,
    ) -> PreciseVolumeResult:
        """
        Поиск в регионах пролёта с нужным объёмом и центроидом.

        Args:
            regions: Регионы поиска (default: допустимые регионы)
            body: Заранее вычисленные свойства тела

        Returns:
            PreciseVolumeResult; candidates пуст, если ни один регион не подошёл
        """
        body = body or analyze_body(self.spec)
        if regions is None:
            regions = _default_regions(self.spec)

        needed_volume, needed_centroid = self.needed(body)
        if needed_centroid is None:
            logger.info("precise volume: needed volume %.5f is not positive, no solution", needed_volume)
            return PreciseVolumeResult(needed_volume=needed_volume, needed_centroid=None)

        matches: list[RegionMatch] = []
        candidates: list[SolutionCandidate] = []

        for region in regions:
            match = self._search_region(region, needed_volume, needed_centroid)
            if match is None:
                logger.debug("precise volume: %s cannot hold %.5f", region.label, needed_volume)
                continue

            matches.append(match)
            logger.debug(
                "precise volume: %s best [%.4f, %.4f] centroid error %.4f",
                region.label,
                match.start,
                match.end,
                match.centroid_error,
            )

            if match.matched:
                cavity = analyze_through_cut(
                    self.spec, match.start, match.end, label=f"optimized in {region.name}"
                )
                candidates.append(
                    build_candidate(
                        self.spec,
                        SolverStrategy.PRECISE_VOLUME,
                        [CavityFill(cavity=cavity, fraction=1.0)],
                        body,
                        region=region.label,
                    )
                )

        return PreciseVolumeResult(
            needed_volume=needed_volume,
            needed_centroid=needed_centroid,
            matches=tuple(matches),
            candidates=tuple(candidates),
        )

    def _search_region(
        self,
        region: Region,
        needed_volume: float,
        needed_centroid: float,
    ) -> RegionMatch | None:
        cfg = self.config
        best: RegionMatch | None = None

        for x_start in grid_points(region.start, region.end - cfg.end_clearance, cfg.start_step):
            x_end = bisect_end(
                self.spec, x_start, needed_volume, region.end, config=cfg.bisection
            )
            if x_end is None:
                continue

            cavity = analyze_through_cut(self.spec, x_start, x_end)
            error = abs(cavity.centroid - needed_centroid)
            if best is None or error < best.centroid_error:
                best = RegionMatch(
                    region=region,
                    start=x_start,
                    end=x_end,
                    volume=cavity.volume,
                    centroid=cavity.centroid,
                    centroid_error=error,
                    matched=error < cfg.centroid_tolerance,
                )

        return best


def _default_regions(spec: ObjectSpec) -> list[Region]:
    regions = permitted_regions(spec)
    if len(regions) != len(DEFAULT_REGION_NAMES):
        return regions
    return permitted_regions(spec, DEFAULT_REGION_NAMES)
