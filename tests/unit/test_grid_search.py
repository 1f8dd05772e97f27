"""
Тесты для модуля grid_search

Поиск идёт на грубых сетках, чтобы набор оставался быстрым; правила
перебора те же, что и для шагов по умолчанию.

Проверяет:
1. Точки сетки из целых индексов (без дрейфа, включающие/исключающие границы)
2. Поиск одной полости: фильтр толерантности, ранжирование, границы региона
3. Поиск пары: общая доля, фильтр допустимых регионов, порядок
"""

import pytest

from src.core.domain import Region, SolverStrategy, permitted_regions, pinewood_derby_spec
from src.mass import analyze_body
from src.solvers import (
    GridSearchConfig,
    GridSearchSolver,
    PairSearchConfig,
    SearchWindow,
    grid_points,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture(scope="module")
def spec():
    return pinewood_derby_spec()


@pytest.fixture(scope="module")
def body(spec):
    return analyze_body(spec)


# =============================================================================
# ТОЧКИ СЕТКИ
# =============================================================================


class TestGridPoints:
    """Тесты для grid_points"""

    def test_inclusive(self) -> None:
        assert grid_points(0.0, 0.3, 0.1) == [0.0, 0.1, 0.2, 0.3]

    def test_exclusive(self) -> None:
        assert grid_points(0.0, 0.3, 0.1, inclusive=False) == [0.0, 0.1, 0.2]

    def test_no_drift_over_long_runs(self) -> None:
        """first + i·step, а не накопленное сложение"""
        points = grid_points(2.0, 5.75, 0.01)
        assert len(points) == 376
        assert points[-1] == 5.75
        assert points[100] == 3.0

    def test_last_below_first(self) -> None:
        assert grid_points(1.0, 0.5, 0.1) == []

    def test_single_point(self) -> None:
        assert grid_points(1.0, 1.0, 0.1) == [1.0]
        assert grid_points(1.0, 1.0, 0.1, inclusive=False) == []

    @pytest.mark.parametrize("step", [0.0, -0.1])
    def test_invalid_step(self, step: float) -> None:
        with pytest.raises(ValueError, match="step must be positive"):
            grid_points(0.0, 1.0, step)


# =============================================================================
# ОДНА ПОЛОСТЬ
# =============================================================================


class TestSearchSingle:
    """Тесты для GridSearchSolver.search_single"""

    @pytest.fixture(scope="class")
    def results(self, spec, body):
        config = GridSearchConfig(step=0.05, cog_tolerance=0.1)
        region = Region(name="between axles", start=2.0, end=5.75)
        return GridSearchSolver(spec, config).search_single([region], body)

    def test_finds_candidates(self, results) -> None:
        assert len(results) > 0

    def test_candidates_within_tolerance(self, results) -> None:
        for candidate in results:
            assert candidate.feasible
            assert candidate.strategy == SolverStrategy.GRID_SINGLE
            assert candidate.mass_error < 0.01
            assert candidate.cog_error < 0.1
            assert 0.0 <= candidate.fractions[0] <= 1.0

    def test_sorted_by_cog_error(self, results) -> None:
        errors = [c.cog_error for c in results]
        assert errors == sorted(errors)

    def test_spans_inside_region(self, results) -> None:
        for candidate in results:
            cavity = candidate.cavities[0]
            assert cavity.start >= 2.0
            assert cavity.end <= 5.75 + 1e-9
            assert cavity.end - cavity.start >= 0.05 - 1e-9
            assert candidate.region == "between axles [2, 5.75]"

    def test_rear_region_cannot_hit_cog(self, spec, body) -> None:
        """Один балласт за задней осью уводит CoG за цель"""
        config = GridSearchConfig(step=0.05)
        region = Region(name="behind rear axle", start=6.25, end=7.0)
        assert GridSearchSolver(spec, config).search_single([region], body) == []

    def test_default_regions(self, spec) -> None:
        """Без явных регионов ищется по допустимым регионам"""
        config = GridSearchConfig(step=0.25, cog_tolerance=10.0, mass_tolerance=1.0)
        results = GridSearchSolver(spec, config).search_single()
        labels = {c.region for c in results}
        assert labels <= {r.label for r in permitted_regions(spec)}
        assert len(results) > 0


# =============================================================================
# ПАРА ПОЛОСТЕЙ
# =============================================================================


class TestSearchPair:
    """Тесты для GridSearchSolver.search_pair"""

    FRONT = SearchWindow(name="front", start_min=3.0, start_max=5.5, end_max=5.75)
    REAR = SearchWindow(name="rear", start_min=6.25, start_max=6.5, end_max=7.0)

    def test_finds_candidates(self, spec, body) -> None:
        config = PairSearchConfig(step=0.1, cog_tolerance=0.1)
        results = GridSearchSolver(spec, pair_config=config).search_pair(self.FRONT, self.REAR, body)

        assert len(results) > 0
        errors = [c.cog_error for c in results]
        assert errors == sorted(errors)
        for candidate in results:
            assert candidate.strategy == SolverStrategy.GRID_PAIR
            assert candidate.mass_error < 0.01
            assert candidate.cog_error < 0.1
            front, rear = candidate.fills
            assert front.fraction == rear.fraction
            assert 0.01 <= front.fraction <= 1.0
            assert front.cavity.label == "front"
            assert rear.cavity.label == "rear"

    def test_skips_spans_outside_permitted_regions(self, spec, body) -> None:
        """Окно через зону задней оси даёт только пролёты в обход неё"""
        crossing = SearchWindow(name="crossing", start_min=5.5, start_max=5.6, end_max=6.5)
        config = PairSearchConfig(step=0.05, cog_tolerance=10.0, mass_tolerance=1.0, min_fill=0.0)
        results = GridSearchSolver(spec, pair_config=config).search_pair(crossing, self.REAR, body)

        regions = permitted_regions(spec)
        assert len(results) > 0
        for candidate in results:
            for cavity in candidate.cavities:
                assert any(r.contains(cavity.start, cavity.end) for r in regions)

    def test_window_label(self) -> None:
        assert self.FRONT.label == "front [3..5.5, <=5.75]"
