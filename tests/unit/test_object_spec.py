"""
Тесты для ObjectSpec, эталонной конфигурации и допустимых регионов

Проверяет:
1. Производные величины (объём заготовки, плотность, бюджет доп. масс)
2. Немедленное отклонение некорректных конфигураций
3. Зарезервированные зоны и допустимые регионы вокруг осей
"""

import pytest
from pydantic import ValidationError

from src.core.domain import (
    AuxiliaryMass,
    ObjectSpec,
    Region,
    permitted_regions,
    pinewood_derby_spec,
    reserved_zones,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def spec():
    return pinewood_derby_spec()


# =============================================================================
# ЭТАЛОННАЯ КОНФИГУРАЦИЯ
# =============================================================================


class TestReferenceSpec:
    """Тесты для pinewood_derby_spec: значения по умолчанию и производные"""

    def test_stock_volume(self, spec) -> None:
        assert spec.stock_volume == pytest.approx(1.75 * 7.0 * 1.25)

    def test_base_density(self, spec) -> None:
        assert spec.base_density == pytest.approx(3.42 / 15.3125)
        assert spec.base_density == pytest.approx(0.2233469, abs=1e-7)

    def test_auxiliary_masses_split_at_axles(self, spec) -> None:
        assert len(spec.auxiliary_masses) == 2
        assert spec.auxiliary_mass == pytest.approx(0.49)
        positions = sorted(a.position for a in spec.auxiliary_masses)
        assert positions == [1.75, 6.0]
        assert spec.auxiliary_moment == pytest.approx(0.245 * 1.75 + 0.245 * 6.0)

    def test_targets(self, spec) -> None:
        assert spec.target_mass == 5.0
        assert spec.target_cog == 5.0
        assert spec.target_moment == pytest.approx(25.0)

    def test_overrides(self) -> None:
        spec = pinewood_derby_spec(target_cog=4.5, rear_axle=5.5, wheel_axle_mass=0.6)
        assert spec.target_cog == 4.5
        assert spec.rear_axle == 5.5
        assert spec.auxiliary_mass == pytest.approx(0.6)
        assert max(a.position for a in spec.auxiliary_masses) == 5.5

    def test_frozen(self, spec) -> None:
        with pytest.raises(ValidationError):
            spec.target_mass = 4.0

    def test_model_copy_for_scenarios(self, spec) -> None:
        heavier = spec.model_copy(update={"target_mass": 5.5})
        assert heavier.target_mass == 5.5
        assert spec.target_mass == 5.0


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestSpecValidation:
    """Некорректные конфигурации отклоняются сразу"""

    @pytest.mark.parametrize("field", ["length", "width", "stock_height", "raw_mass"])
    def test_non_positive_dimension(self, field: str) -> None:
        with pytest.raises(ValidationError):
            pinewood_derby_spec(**{field: 0.0})

    def test_rear_axle_before_front(self) -> None:
        with pytest.raises(ValidationError, match="must be > front_axle"):
            pinewood_derby_spec(front_axle=3.0, rear_axle=2.0)

    def test_rear_axle_outside_body(self) -> None:
        with pytest.raises(ValidationError, match="must be < length"):
            pinewood_derby_spec(rear_axle=7.5)

    def test_fill_not_denser_than_base(self) -> None:
        with pytest.raises(ValidationError, match="must exceed base density"):
            pinewood_derby_spec(fill_density=0.2)

    def test_validation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            pinewood_derby_spec(width=-1.0)

    def test_model_validate_from_dict(self, spec) -> None:
        rebuilt = ObjectSpec.model_validate(spec.model_dump())
        assert rebuilt == spec


# =============================================================================
# РЕГИОНЫ
# =============================================================================


class TestRegion:
    """Тесты для модели Region"""

    def test_contains(self) -> None:
        region = Region(name="between axles", start=2.0, end=5.75)
        assert region.contains(2.0, 5.75)
        assert region.contains(3.0, 4.0)
        assert not region.contains(1.9, 3.0)
        assert not region.contains(5.0, 5.8)

    def test_label(self) -> None:
        assert Region(name="nose", start=0.0, end=1.5).label == "nose [0, 1.5]"

    def test_empty_region_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Region(name="empty", start=2.0, end=2.0)


class TestPermittedRegions:
    """Тесты для permitted_regions: дополнение зон осей"""

    def test_reserved_zones(self, spec) -> None:
        assert reserved_zones(spec) == [(1.5, 2.0), (5.75, 6.25)]

    def test_reference_regions(self, spec) -> None:
        regions = permitted_regions(spec)
        assert [(r.start, r.end) for r in regions] == [(0.0, 1.5), (2.0, 5.75), (6.25, 7.0)]
        assert [r.name for r in regions] == ["region 0", "region 1", "region 2"]

    def test_named_regions(self, spec) -> None:
        regions = permitted_regions(spec, ["nose", "between axles", "behind rear axle"])
        assert regions[1].name == "between axles"

    def test_wrong_name_count(self, spec) -> None:
        with pytest.raises(ValueError, match="expected 3 region names"):
            permitted_regions(spec, ["nose"])

    def test_overlapping_zones_merge(self) -> None:
        spec = pinewood_derby_spec(
            auxiliary_masses=(
                AuxiliaryMass(name="a", mass=0.1, position=3.0),
                AuxiliaryMass(name="b", mass=0.1, position=3.3),
            )
        )
        assert reserved_zones(spec) == [(2.75, 3.55)]
        regions = permitted_regions(spec)
        assert [(r.start, r.end) for r in regions] == [(0.0, 2.75), (3.55, 7.0)]

    def test_zone_past_body_end_is_clipped(self) -> None:
        spec = pinewood_derby_spec(
            auxiliary_masses=(AuxiliaryMass(name="tail", mass=0.1, position=6.9),)
        )
        regions = permitted_regions(spec)
        assert [(r.start, r.end) for r in regions] == [(0.0, pytest.approx(6.65))]

    def test_no_auxiliary_masses(self) -> None:
        spec = pinewood_derby_spec(auxiliary_masses=())
        regions = permitted_regions(spec)
        assert [(r.start, r.end) for r in regions] == [(0.0, 7.0)]
