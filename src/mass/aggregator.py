"""
Aggregator — полная масса и CoG балластированного тела

Сводит вместе профилированное тело, материал, удалённый каждой полостью,
заполнение в каждой полости и фиксированные вспомогательные массы.

ФОРМУЛЫ:
    residual_mass   = body.mass − Σ cavity.mass_removed
    residual_moment = body.moment − Σ base_density × cavity.moment
    fill_mass       = Σ cavity.volume × fill_density × fraction
    fill_moment     = Σ cavity.centroid × cavity.volume × fill_density × fraction
    total_mass      = residual_mass + fill_mass + Σ aux.mass
    total_moment    = residual_moment + fill_moment + Σ aux.mass × aux.position
    cog             = total_moment / total_mass

Удалённый момент берётся из собственной геометрии выреза каждой полости:
её фактической ширины (и, для карманов, ограниченной глубины), а не из
номинальной ширины тела.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Sequence

from src.core.domain.solution import CavityFill
from src.core.math.numerical_safeguards import EPS_MASS, safe_divide
from src.mass.cavity_analyzer import BodyProperties, analyze_body

if TYPE_CHECKING:
    from src.core.domain.cavity import Cavity
    from src.core.domain.object_spec import ObjectSpec


class MassProperties(NamedTuple):
    """Массовый баланс готового тела."""

    residual_mass: float  # базовый материал после вырезов
    fill_mass: float
    auxiliary_mass: float
    total_mass: float
    residual_moment: float
    fill_moment: float
    auxiliary_moment: float
    total_moment: float
    cog: float


class ResidualBudget(NamedTuple):
    """Масса и момент вырезанного (незаполненного) тела без вспомогательных масс."""

    mass: float
    moment: float


def residual_budget(
    spec: ObjectSpec,
    cavities: Sequence[Cavity],
    body: BodyProperties | None = None,
) -> ResidualBudget:
    """
    Базовый материал, оставшийся после вырезания всех полостей.

    Args:
        spec: Конфигурация тела
        cavities: Проанализированные полости (не перекрываются)
        body: Предвычисленные свойства тела (считаются, если не заданы)
    """
    body = body or analyze_body(spec)
    mass = body.mass - sum(c.mass_removed for c in cavities)
    moment = body.moment - sum(spec.base_density * c.moment for c in cavities)
    return ResidualBudget(mass=mass, moment=moment)


def aggregate(
    spec: ObjectSpec,
    fills: Sequence[CavityFill],
    body: BodyProperties | None = None,
) -> MassProperties:
    """
    Полная масса и CoG для полостей, заполненных каждая на свою долю.

    Записи с неопределённой (None) долей учитывают удалённый материал, но
    не заполнение.

    Args:
        spec: Конфигурация тела
        fills: Полости с долями заполнения
        body: Предвычисленные свойства тела (считаются, если не заданы)

    Returns:
        MassProperties; cog = 0.0 при нулевой полной массе
    """
    residual = residual_budget(spec, [f.cavity for f in fills], body)

    fill_mass = 0.0
    fill_moment = 0.0
    for f in fills:
        fill_mass += f.fill_mass
        fill_moment += f.cavity.centroid * f.fill_mass

    aux_mass = spec.auxiliary_mass
    aux_moment = spec.auxiliary_moment

    total_mass = residual.mass + fill_mass + aux_mass
    total_moment = residual.moment + fill_moment + aux_moment

    return MassProperties(
        residual_mass=residual.mass,
        fill_mass=fill_mass,
        auxiliary_mass=aux_mass,
        total_mass=total_mass,
        residual_moment=residual.moment,
        fill_moment=fill_moment,
        auxiliary_moment=aux_moment,
        total_moment=total_moment,
        cog=safe_divide(total_moment, total_mass, eps=EPS_MASS, fallback=0.0),
    )


def aggregate_uniform(
    spec: ObjectSpec,
    cavities: Sequence[Cavity],
    fraction: float = 1.0,
    body: BodyProperties | None = None,
) -> MassProperties:
    """aggregate() с одной долей заполнения на все полости."""
    return aggregate(spec, [CavityFill(cavity=c, fraction=fraction) for c in cavities], body)
