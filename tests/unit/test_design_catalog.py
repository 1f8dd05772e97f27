"""
Тесты для каталога дизайнов (A–H и рекомендация)

Поисковые дизайны (F, H) запускаются с грубыми конфигурациями,
чтобы набор оставался быстрым.
"""

import logging

import pytest

from src.core.domain import SolverStrategy, pinewood_derby_spec
from src.designs import (
    DIFFERENTIAL_CONFIGURATIONS,
    budget_summary,
    design_a,
    design_b,
    design_c,
    design_d,
    design_e,
    design_g,
    recommend,
    run_all,
)
from src.mass import analyze_body
from src.solvers import (
    BisectionConfig,
    GridSearchConfig,
    PairSearchConfig,
    PreciseVolumeConfig,
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
# БАЛАНС МАССЫ
# =============================================================================


class TestBudgetSummary:
    """Тесты для budget_summary: недостающая масса"""

    def test_reference_budget(self, spec, body) -> None:
        budget = budget_summary(spec, body)
        assert budget.subtotal_mass == pytest.approx(body.mass + 0.49)
        assert budget.net_mass_needed == pytest.approx(5.0 - body.mass - 0.49)
        assert budget.full_fill_volume == pytest.approx(0.33213, abs=1e-5)


# =============================================================================
# ФИКСИРОВАННАЯ ГЕОМЕТРИЯ
# =============================================================================


class TestFixedDesigns:
    """Дизайны A–E: одна общая доля заполнения"""

    @pytest.mark.parametrize("design", [design_a, design_b, design_c, design_d, design_e])
    def test_mass_target_hit(self, spec, body, design) -> None:
        candidate = design(spec, body)
        assert candidate.strategy == SolverStrategy.SINGLE_FILL
        assert candidate.total_mass == pytest.approx(5.0, abs=1e-9)

    def test_design_a_reference_fraction(self, spec, body) -> None:
        candidate = design_a(spec, body)
        assert candidate.feasible
        assert candidate.fractions[0] == pytest.approx(0.1525, abs=1e-4)
        assert candidate.cavities[0].volume == pytest.approx(2.4609375, abs=1e-9)

    def test_design_b_full_depth_pocket(self, spec, body) -> None:
        """Глубина 0.55 больше любой локальной высоты за задней осью"""
        candidate = design_b(spec, body)
        cavity = candidate.cavities[0]
        assert cavity.depth == 0.55
        assert cavity.volume == pytest.approx(0.65 * (0.5125 + 0.545) / 2 * 1.75, rel=1e-9)

    def test_design_d_narrow(self, spec, body) -> None:
        assert design_d(spec, body).cavities[0].width == 1.25

    def test_design_c_two_cavities(self, spec, body) -> None:
        candidate = design_c(spec, body)
        assert len(candidate.fills) == 2
        assert candidate.fractions[0] == candidate.fractions[1]


# =============================================================================
# DIFFERENTIAL FILL / РЕКОМЕНДАЦИЯ
# =============================================================================


class TestDesignG:
    """Differential fill по пяти эталонным парам"""

    def test_one_candidate_per_configuration(self, spec, body) -> None:
        results = design_g(spec, body)
        assert [c.region for c in results] == [c.name for c in DIFFERENTIAL_CONFIGURATIONS]

    def test_all_hit_both_targets(self, spec, body) -> None:
        for candidate in design_g(spec, body):
            assert candidate.total_mass == pytest.approx(5.0, abs=1e-9)
            assert candidate.cog == pytest.approx(5.0, abs=1e-9)

    def test_recommendation(self, spec, body) -> None:
        results = design_g(spec, body)
        best = recommend(results)
        assert best is not None
        assert best.feasible
        assert best in results
        assert best.cog_error == min(c.cog_error for c in results if c.feasible)

    def test_recommend_nothing_feasible(self, spec, body) -> None:
        infeasible = [c for c in design_g(spec, body) if not c.feasible]
        assert recommend(infeasible) is None
        assert recommend([]) is None


# =============================================================================
# ПОЛНЫЙ ПРОГОН
# =============================================================================


class TestRunAll:
    """Сквозной прогон каталога на грубых сетках поиска"""

    @pytest.fixture(scope="class")
    def report(self, spec):
        return run_all(
            spec,
            grid_config=GridSearchConfig(step=0.05),
            pair_config=PairSearchConfig(step=0.1),
            precise_config=PreciseVolumeConfig(
                start_step=0.05, bisection=BisectionConfig(iterations=60)
            ),
        )

    def test_all_designs_present(self, report) -> None:
        assert sorted(report.fixed) == ["A", "B", "C", "D", "E"]
        assert report.grid is not None
        assert len(report.differential) == len(DIFFERENTIAL_CONFIGURATIONS)
        assert report.precise is not None and report.precise.found

    def test_grid_results_ranked(self, report) -> None:
        assert report.grid.best_single is not None
        assert report.grid.best_single.cog_error == min(c.cog_error for c in report.grid.single)

    def test_recommendation_is_differential(self, report) -> None:
        assert report.recommendation is not None
        assert report.recommendation.strategy == SolverStrategy.DIFFERENTIAL_FILL

    def test_logs_summary(self, spec, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="src.designs.catalog"):
            run_all(
                spec,
                grid_config=GridSearchConfig(step=0.25),
                pair_config=PairSearchConfig(step=0.25),
                precise_config=PreciseVolumeConfig(
                    start_step=0.25, bisection=BisectionConfig(iterations=40)
                ),
            )
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("design A:") for m in messages)
        assert any(m.startswith("design F:") for m in messages)
