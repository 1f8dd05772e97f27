"""
Design Catalog — эталонные дизайны полостей A–H и рекомендация

Тонкие обёртки над анализатором и солверами для эталонных компоновок
машинки pinewood derby (оси в 1.75 / 6.0, допустимые регионы [0, 1.5],
[2.0, 5.75], [6.25, 7.0]):

    A  сквозной вырез между осями            [2.0, 5.75]
    B  задний карман снизу, глубина 0.55     [6.25, 6.9]
    C  два сквозных выреза                   [4.0, 5.75] + [6.25, 6.9]
    D  узкий (1.25) сквозной вырез           [4.5, 5.75]
    E  сквозной вырез за задней осью         [6.25, 6.95]
    F  поиск по сетке, одна полость и пара
    G  differential fill по пяти фиксированным парам
    H  точная одна полость с заполнением 100 %

A–E используют одну общую долю заполнения (только целевая масса).
Рекомендация — допустимый кандидат дизайна G, ближайший к целевому CoG.

Модуль ничего не форматирует и не печатает; результаты логируются одной
строкой на дизайн.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, NamedTuple, Sequence

from src.core.domain.solution import SolutionCandidate
from src.mass.cavity_analyzer import (
    BodyProperties,
    analyze_body,
    analyze_bottom_pocket,
    analyze_through_cut,
)
from src.solvers.differential_fill import DifferentialFillConfig, solve_differential_fill
from src.solvers.grid_search import GridSearchSolver, SearchWindow
from src.solvers.precise_volume import PreciseVolumeResult, PreciseVolumeSolver
from src.solvers.single_fill import SingleFillSolver

if TYPE_CHECKING:
    from src.core.domain.object_spec import ObjectSpec
    from src.solvers.grid_search import GridSearchConfig, PairSearchConfig
    from src.solvers.precise_volume import PreciseVolumeConfig

logger = logging.getLogger(__name__)


# =============================================================================
# ЭТАЛОННАЯ ГЕОМЕТРИЯ
# =============================================================================


class PairConfiguration(NamedTuple):
    """Фиксированная геометрия пары полостей для differential fill."""

    name: str
    front_start: float
    front_end: float
    rear_start: float
    rear_end: float


DIFFERENTIAL_CONFIGURATIONS: tuple[PairConfiguration, ...] = (
    PairConfiguration("wide mid + full rear", 3.5, 5.75, 6.25, 6.95),
    PairConfiguration("narrow mid + full rear", 4.5, 5.75, 6.25, 6.95),
    PairConfiguration("short mid + full rear", 5.0, 5.75, 6.25, 6.95),
    PairConfiguration("full span + full rear", 2.0, 5.75, 6.25, 6.95),
    PairConfiguration("mid-rear + short rear", 4.0, 5.75, 6.25, 6.75),
)

FRONT_WINDOW = SearchWindow(name="front", start_min=3.0, start_max=5.5, end_max=5.75)
REAR_WINDOW = SearchWindow(name="rear", start_min=6.25, start_max=6.5, end_max=7.0)


# =============================================================================
# РЕЗУЛЬТАТЫ
# =============================================================================


class BudgetSummary(NamedTuple):
    """Баланс массы тела без вырезов относительно целей."""

    body: BodyProperties
    auxiliary_mass: float
    subtotal_mass: float  # тело + доп. массы
    net_mass_needed: float  # target − subtotal
    net_density: float  # fill_density − base_density
    full_fill_volume: float  # объём полости при заполнении 100 %


@dataclass(frozen=True)
class GridSearchOutcome:
    """Дизайн F: оба поиска по сетке, ранжированы по ошибке CoG."""

    single: tuple[SolutionCandidate, ...]
    pair: tuple[SolutionCandidate, ...]

    @property
    def best_single(self) -> SolutionCandidate | None:
        return self.single[0] if self.single else None

    @property
    def best_pair(self) -> SolutionCandidate | None:
        return self.pair[0] if self.pair else None


@dataclass(frozen=True)
class CatalogReport:
    """Все дизайны, вычисленные для одной конфигурации тела."""

    budget: BudgetSummary
    fixed: dict[str, SolutionCandidate] = field(default_factory=dict)
    grid: GridSearchOutcome | None = None
    differential: tuple[SolutionCandidate, ...] = ()
    precise: PreciseVolumeResult | None = None
    recommendation: SolutionCandidate | None = None


# =============================================================================
# БАЛАНС МАССЫ
# =============================================================================


def budget_summary(spec: ObjectSpec, body: BodyProperties | None = None) -> BudgetSummary:
    """Недостающая масса и объём полости, нужный для неё при полном заполнении."""
    body = body or analyze_body(spec)
    subtotal = body.mass + spec.auxiliary_mass
    net_needed = spec.target_mass - subtotal
    net_density = spec.fill_density - spec.base_density
    return BudgetSummary(
        body=body,
        auxiliary_mass=spec.auxiliary_mass,
        subtotal_mass=subtotal,
        net_mass_needed=net_needed,
        net_density=net_density,
        full_fill_volume=net_needed / net_density,
    )


# =============================================================================
# ФИКСИРОВАННАЯ ГЕОМЕТРИЯ (A–E)
# =============================================================================


def design_a(spec: ObjectSpec, body: BodyProperties | None = None) -> SolutionCandidate:
    """Один сквозной вырез между осями на всю ширину."""
    cavity = analyze_through_cut(spec, 2.0, 5.75, label="between-axles through-cut")
    return SingleFillSolver(spec).solve([cavity], body)


def design_b(spec: ObjectSpec, body: BodyProperties | None = None) -> SolutionCandidate:
    """Карман снизу за задней осью."""
    cavity = analyze_bottom_pocket(spec, 6.25, 6.9, depth=0.55, label="rear pocket")
    return SingleFillSolver(spec).solve([cavity], body)


def design_c(spec: ObjectSpec, body: BodyProperties | None = None) -> SolutionCandidate:
    """Две полости: перед задней осью и за ней, одна доля заполнения."""
    cavities = [
        analyze_through_cut(spec, 4.0, 5.75, label="mid-rear through-cut"),
        analyze_through_cut(spec, 6.25, 6.9, label="behind-rear-axle through-cut"),
    ]
    return SingleFillSolver(spec).solve(cavities, body)


def design_d(spec: ObjectSpec, body: BodyProperties | None = None) -> SolutionCandidate:
    """Узкий сквозной вырез, оставляющий деревянные боковые стенки."""
    cavity = analyze_through_cut(spec, 4.5, 5.75, width=1.25, label="narrow rear through-cut")
    return SingleFillSolver(spec).solve([cavity], body)


def design_e(spec: ObjectSpec, body: BodyProperties | None = None) -> SolutionCandidate:
    """Сквозной вырез только за задней осью."""
    cavity = analyze_through_cut(spec, 6.25, 6.95, label="behind-rear-axle through-cut")
    return SingleFillSolver(spec).solve([cavity], body)


# =============================================================================
# ПОИСКИ (F–H)
# =============================================================================


def design_f(
    spec: ObjectSpec,
    body: BodyProperties | None = None,
    config: GridSearchConfig | None = None,
    pair_config: PairSearchConfig | None = None,
) -> GridSearchOutcome:
    """Поиск по сетке для одной полости и для пары front/rear."""
    body = body or analyze_body(spec)
    solver = GridSearchSolver(spec, config, pair_config)
    return GridSearchOutcome(
        single=tuple(solver.search_single(body=body)),
        pair=tuple(solver.search_pair(FRONT_WINDOW, REAR_WINDOW, body=body)),
    )


def design_g(
    spec: ObjectSpec,
    body: BodyProperties | None = None,
    configurations: Sequence[PairConfiguration] = DIFFERENTIAL_CONFIGURATIONS,
    config: DifferentialFillConfig | None = None,
) -> list[SolutionCandidate]:
    """
    Differential fill для каждой фиксированной пары.

    Возвращает по одному кандидату на конфигурацию (допустимому или нет) в
    заданном порядке; имя конфигурации становится region кандидата.
    """
    body = body or analyze_body(spec)
    results = []
    for cfg in configurations:
        front = analyze_through_cut(spec, cfg.front_start, cfg.front_end, label="front")
        rear = analyze_through_cut(spec, cfg.rear_start, cfg.rear_end, label="rear")
        candidate = solve_differential_fill(spec, front, rear, body, config)
        results.append(replace(candidate, region=cfg.name))
    return results


def design_h(
    spec: ObjectSpec,
    body: BodyProperties | None = None,
    config: PreciseVolumeConfig | None = None,
) -> PreciseVolumeResult:
    """Точная одна полость с заполнением 100 %."""
    return PreciseVolumeSolver(spec, config).solve(body=body)


# =============================================================================
# РЕКОМЕНДАЦИЯ
# =============================================================================


def recommend(candidates: Sequence[SolutionCandidate]) -> SolutionCandidate | None:
    """
    Допустимый кандидат, ближайший к целевому CoG.

    При равенстве сохраняется входной порядок. None, если допустимых нет.
    """
    feasible = [c for c in candidates if c.feasible]
    if not feasible:
        return None
    return min(feasible, key=lambda c: c.cog_error)


def run_all(
    spec: ObjectSpec,
    grid_config: GridSearchConfig | None = None,
    pair_config: PairSearchConfig | None = None,
    precise_config: PreciseVolumeConfig | None = None,
) -> CatalogReport:
    """
    Вычисление дизайнов A–H против одного тела и выбор рекомендации.

    Тело без вырезов интегрируется один раз и разделяется всеми дизайнами.
    Конфигурации поиска по умолчанию используют сетки полного разрешения.
    """
    body = analyze_body(spec)
    budget = budget_summary(spec, body)
    logger.info(
        "body: mass=%.4f cog=%.4f, net mass needed %.4f (%.5f volume at full fill)",
        body.mass,
        body.cog,
        budget.net_mass_needed,
        budget.full_fill_volume,
    )

    fixed = {
        "A": design_a(spec, body),
        "B": design_b(spec, body),
        "C": design_c(spec, body),
        "D": design_d(spec, body),
        "E": design_e(spec, body),
    }
    for name, candidate in fixed.items():
        _log_candidate(f"design {name}", candidate)

    grid = design_f(spec, body, grid_config, pair_config)
    logger.info(
        "design F: %d single-cavity and %d two-cavity solutions",
        len(grid.single),
        len(grid.pair),
    )
    if grid.best_single is not None:
        _log_candidate("design F.1", grid.best_single)
    if grid.best_pair is not None:
        _log_candidate("design F.2", grid.best_pair)

    differential = design_g(spec, body)
    for candidate in differential:
        _log_candidate(f"design G ({candidate.region})", candidate)

    precise = design_h(spec, body, precise_config)
    if precise.found:
        for candidate in precise.candidates:
            _log_candidate("design H", candidate)
    else:
        logger.info("design H: no single cavity achieves both targets")

    recommendation = recommend(differential)
    if recommendation is None:
        logger.warning("no feasible differential-fill configuration to recommend")
    else:
        _log_candidate(f"recommended ({recommendation.region})", recommendation)

    return CatalogReport(
        budget=budget,
        fixed=fixed,
        grid=grid,
        differential=tuple(differential),
        precise=precise,
        recommendation=recommendation,
    )


def _log_candidate(name: str, candidate: SolutionCandidate) -> None:
    if candidate.feasible:
        logger.info("%s: %s", name, candidate.details)
    else:
        logger.info("%s: infeasible (%s) %s", name, candidate.infeasible_reason, candidate.details)
