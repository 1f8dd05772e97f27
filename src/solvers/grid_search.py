"""
Grid Search — перебор размещения полостей под обе цели

Перебирает пролёты (start, end) с фиксированным шагом, решает общую долю
заполнения под целевую массу и оставляет только кандидатов, у которых
ошибки массы и CoG обе меньше толерантности.

Два режима:
- single: один сквозной вырез в каждом допустимом регионе
- pair: два сквозных выреза в двух именованных окнах, одна общая доля

Масса решается точно, CoG нет, поэтому толерантность массы жёстче
толерантности CoG. У пары полостей две геометрические степени свободы,
поэтому поиск пары использует более жёсткую толерантность CoG.

Ранжирование: по возрастанию ошибки CoG; при равенстве сохраняется порядок
обнаружения (стабильная сортировка).

Точки сетки строятся из целых индексов (first + i·step), перебор не
дрейфует из-за накопленной ошибки float.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from src.core.domain.object_spec import permitted_regions
from src.core.domain.solution import CavityFill, SolutionCandidate, SolverStrategy
from src.core.math.numerical_safeguards import EPS_GRID, in_unit_interval, validate_positive
from src.mass.aggregator import aggregate
from src.mass.cavity_analyzer import BodyProperties, analyze_body, analyze_through_cut
from src.solvers.candidates import build_candidate
from src.solvers.single_fill import solve_fill_fraction

if TYPE_CHECKING:
    from src.core.domain.cavity import Cavity
    from src.core.domain.object_spec import ObjectSpec, Region

logger = logging.getLogger(__name__)


# =============================================================================
# ТОЧКИ СЕТКИ
# =============================================================================


def grid_points(first: float, last: float, step: float, inclusive: bool = True) -> list[float]:
    """
    Точки first, first + step, ... до last.

    Args:
        first: Первая точка
        last: Верхняя граница
        step: Шаг (> 0)
        inclusive: Включать точки, равные `last` (в пределах EPS_GRID)

    Returns:
        Точки сетки по возрастанию (пусто, если last < first)

    Raises:
        ValueError: Если step <= 0

    Examples:
        >>> grid_points(0.0, 0.3, 0.1)
        [0.0, 0.1, 0.2, 0.3]
        >>> grid_points(0.0, 0.3, 0.1, inclusive=False)
        [0.0, 0.1, 0.2]
    """
    validate_positive(step, "step")
    if last < first - EPS_GRID:
        return []

    count = math.floor((last - first) / step + EPS_GRID)
    points = [round(first + i * step, 10) for i in range(count + 1)]

    if not inclusive:
        points = [p for p in points if p < last - EPS_GRID]
    return points


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


@dataclass(frozen=True)
class GridSearchConfig:
    """Поиск одной полости по сетке."""

    step: float = 0.01
    min_span: float = 0.05
    mass_tolerance: float = 0.01
    cog_tolerance: float = 0.05
    min_fill: float = 0.0


@dataclass(frozen=True)
class PairSearchConfig:
    """Поиск пары полостей по сетке."""

    step: float = 0.05
    min_span: float = 0.1
    mass_tolerance: float = 0.01
    cog_tolerance: float = 0.03
    min_fill: float = 0.01


@dataclass(frozen=True)
class SearchWindow:
    """Окно одной полости в поиске пары.

    Начала идут от start_min до start_max (включительно), концы от
    start + min_span до end_max (включительно).
    """

    name: str
    start_min: float
    start_max: float
    end_max: float

    @property
    def label(self) -> str:
        return f"{self.name} [{self.start_min:g}..{self.start_max:g}, <={self.end_max:g}]"


# =============================================================================
# СОЛВЕР
# =============================================================================


class GridSearchSolver:
    """Перебор по сетке пролётов сквозных вырезов."""

    def __init__(
        self,
        spec: ObjectSpec,
        config: GridSearchConfig | None = None,
        pair_config: PairSearchConfig | None = None,
    ):
        """
        Args:
            spec: Конфигурация тела
            config: Конфигурация поиска одной полости
            pair_config: Конфигурация поиска пары полостей
        """
        self.spec = spec
        self.config = config or GridSearchConfig()
        self.pair_config = pair_config or PairSearchConfig()

    # -------------------------------------------------------------------------
    # Одна полость
    # -------------------------------------------------------------------------

    def search_single(
        self,
        regions: Sequence[Region] | None = None,
        body: BodyProperties | None = None,
    ) -> list[SolutionCandidate]:
        """
        Поиск одной полости по допустимым регионам.

        В каждом регионе начала идут по сетке, пока start < end - min_span,
        концы от start + min_span, пока end <= конца региона.

        Args:
            regions: Регионы поиска (default: permitted_regions(spec))
            body: Заранее вычисленные свойства тела

        Returns:
            Кандидаты в пределах толерантности, по ошибке CoG (стабильно)
        """
        cfg = self.config
        body = body or analyze_body(self.spec)
        regions = regions if regions is not None else permitted_regions(self.spec)

        results: list[SolutionCandidate] = []
        evaluated = 0

        for region in regions:
            for x_start in grid_points(region.start, region.end - cfg.min_span, cfg.step, inclusive=False):
                for x_end in grid_points(x_start + cfg.min_span, region.end, cfg.step):
                    evaluated += 1
                    cavity = analyze_through_cut(self.spec, x_start, x_end)
                    candidate = self._evaluate(
                        [cavity],
                        body,
                        SolverStrategy.GRID_SINGLE,
                        cfg.min_fill,
                        cfg.mass_tolerance,
                        cfg.cog_tolerance,
                        region.label,
                    )
                    if candidate is not None:
                        results.append(candidate)

        results.sort(key=lambda c: c.cog_error)
        logger.debug(
            "grid single: %d spans evaluated, %d within tolerance", evaluated, len(results)
        )
        return results

    # -------------------------------------------------------------------------
    # Пара полостей
    # -------------------------------------------------------------------------

    def search_pair(
        self,
        front: SearchWindow,
        rear: SearchWindow,
        body: BodyProperties | None = None,
    ) -> list[SolutionCandidate]:
        """
        Поиск пары полостей с одной общей долей заполнения.

        Пролёты вне допустимых регионов пропускаются. В кандидатах передняя
        полость идёт первой.

        Args:
            front: Окно первой полости
            rear: Окно второй полости
            body: Заранее вычисленные свойства тела

        Returns:
            Кандидаты в пределах толерантности, по ошибке CoG (стабильно)
        """
        cfg = self.pair_config
        body = body or analyze_body(self.spec)
        regions = permitted_regions(self.spec)
        region_label = f"{front.label} + {rear.label}"

        front_cavities = self._window_cavities(front, regions)
        rear_cavities = self._window_cavities(rear, regions)

        results: list[SolutionCandidate] = []
        for rear_cavity in rear_cavities:
            for front_cavity in front_cavities:
                candidate = self._evaluate(
                    [front_cavity, rear_cavity],
                    body,
                    SolverStrategy.GRID_PAIR,
                    cfg.min_fill,
                    cfg.mass_tolerance,
                    cfg.cog_tolerance,
                    region_label,
                )
                if candidate is not None:
                    results.append(candidate)

        results.sort(key=lambda c: c.cog_error)
        logger.debug(
            "grid pair: %d x %d spans evaluated, %d within tolerance",
            len(front_cavities),
            len(rear_cavities),
            len(results),
        )
        return results

    def _window_cavities(self, window: SearchWindow, regions: Sequence[Region]) -> list[Cavity]:
        cfg = self.pair_config
        cavities = []
        for x_start in grid_points(window.start_min, window.start_max, cfg.step):
            for x_end in grid_points(x_start + cfg.min_span, window.end_max, cfg.step):
                if not any(r.contains(x_start, x_end) for r in regions):
                    continue
                cavities.append(
                    analyze_through_cut(self.spec, x_start, x_end, label=window.name)
                )
        return cavities

    # -------------------------------------------------------------------------
    # Фильтр кандидатов
    # -------------------------------------------------------------------------

    def _evaluate(
        self,
        cavities: list[Cavity],
        body: BodyProperties,
        strategy: SolverStrategy,
        min_fill: float,
        mass_tolerance: float,
        cog_tolerance: float,
        region: str,
    ) -> SolutionCandidate | None:
        """Single fill + фильтр толерантности; None, если кандидат отброшен."""
        fraction = solve_fill_fraction(self.spec, cavities, body)
        if not in_unit_interval(fraction, min_fill):
            return None

        fills = [CavityFill(cavity=c, fraction=fraction) for c in cavities]
        props = aggregate(self.spec, fills, body)
        if abs(props.total_mass - self.spec.target_mass) >= mass_tolerance:
            return None
        if abs(props.cog - self.spec.target_cog) >= cog_tolerance:
            return None

        return build_candidate(self.spec, strategy, fills, body, region=region)
