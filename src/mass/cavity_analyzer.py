"""
Cavity Analyzer — объём, момент и масса полостей и тела

Интегрирует боковой профиль и получает для полости-кандидата:
- volume    = ∫ cut_height(x) · w dx
- moment    = ∫ x · cut_height(x) · w dx      (геометрический первый момент)
- centroid  = moment / volume                 (0.0 для пустой полости)
- mass removed      = volume × base_density
- mass added (100%) = volume × fill_density

cut_height(x) — локальная высота профиля для сквозного выреза и
min(depth, height(x)) для кармана снизу. Карман глубже локального материала
молча вырезает только то, что есть.

Вырожденная геометрия не ошибка: полости нулевой длины или ширины дают
нулевые объём и момент и centroid 0.0.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, NamedTuple

import numpy as np

from src.core.domain.cavity import Cavity, CavityGeometry
from src.core.math.integration import DEFAULT_PANELS, integrate
from src.core.math.numerical_safeguards import EPS_VOLUME, safe_divide

if TYPE_CHECKING:
    import numpy.typing as npt

    from src.core.domain.object_spec import ObjectSpec

    CutHeight = Callable[[npt.NDArray[np.float64]], npt.NDArray[np.float64]]


# =============================================================================
# ТЕЛО
# =============================================================================


class BodyProperties(NamedTuple):
    """Профилированное тело без полостей."""

    volume: float  # ∫ height · width по [0, length]
    mass: float  # volume × base_density
    moment: float  # массовый момент ∫ x · height · width · base_density
    cog: float  # moment / mass


def analyze_body(spec: ObjectSpec, n: int = DEFAULT_PANELS) -> BodyProperties:
    """
    Объём, масса, массовый момент и CoG профилированного тела до вырезов.

    Args:
        spec: Конфигурация тела
        n: Число панелей Симпсона

    Returns:
        BodyProperties
    """
    volume = integrate(lambda x: spec.height(x) * spec.width, 0.0, spec.length, n, vectorized=True)
    moment = integrate(
        lambda x: x * spec.height(x) * spec.width * spec.base_density,
        0.0,
        spec.length,
        n,
        vectorized=True,
    )
    mass = volume * spec.base_density
    return BodyProperties(
        volume=volume,
        mass=mass,
        moment=moment,
        cog=safe_divide(moment, mass),
    )


# =============================================================================
# ПОЛОСТИ
# =============================================================================


def _resolve_width(spec: ObjectSpec, width: float | None) -> float:
    if width is None:
        return spec.width
    if width < 0:
        raise ValueError(f"cavity width must be non-negative, got {width}")
    if width > spec.width:
        raise ValueError(f"cavity width {width} exceeds body width {spec.width}")
    return width


def _cut_height(spec: ObjectSpec, depth: float | None) -> CutHeight:
    if depth is None:
        return spec.height
    return lambda x: np.minimum(depth, spec.height(x))


def cut_volume(
    spec: ObjectSpec,
    start: float,
    end: float,
    width: float | None = None,
    depth: float | None = None,
    n: int = DEFAULT_PANELS,
) -> float:
    """
    Объём выреза на [start, end] без построения Cavity.

    Нужен бисекции конечной границы: там много вычислений объёма и
    больше ничего.
    """
    w = _resolve_width(spec, width)
    cut = _cut_height(spec, depth)
    return integrate(lambda x: cut(x) * w, start, end, n, vectorized=True)


def analyze_cavity(spec: ObjectSpec, geometry: CavityGeometry, n: int = DEFAULT_PANELS) -> Cavity:
    """
    Интегрирование геометрии полости по профилю тела.

    Args:
        spec: Конфигурация тела (профиль и плотности)
        geometry: Заявленная геометрия полости
        n: Число панелей Симпсона

    Returns:
        Проанализированная Cavity

    Raises:
        ValueError: Если полость шире тела
    """
    w = _resolve_width(spec, geometry.width)
    cut = _cut_height(spec, geometry.depth)

    volume = integrate(lambda x: cut(x) * w, geometry.start, geometry.end, n, vectorized=True)
    moment = integrate(lambda x: x * cut(x) * w, geometry.start, geometry.end, n, vectorized=True)

    # Симпсон на неотрицательной функции не уходит в минус, но -0.0 возможен
    volume = max(volume, 0.0)

    return Cavity(
        geometry=geometry,
        width=w,
        volume=volume,
        moment=moment,
        centroid=safe_divide(moment, volume, eps=EPS_VOLUME, fallback=0.0),
        mass_removed=volume * spec.base_density,
        mass_added_full=volume * spec.fill_density,
    )


def analyze_through_cut(
    spec: ObjectSpec,
    start: float,
    end: float,
    width: float | None = None,
    label: str = "",
) -> Cavity:
    """
    Полость на всю высоту на [start, end].

    Examples:
        >>> spec = pinewood_derby_spec()  # doctest: +SKIP
        >>> cav = analyze_through_cut(spec, 2.0, 5.75)  # doctest: +SKIP
        >>> round(cav.volume, 4)  # doctest: +SKIP
        2.4609
    """
    return analyze_cavity(spec, CavityGeometry(start=start, end=end, width=width, label=label))


def analyze_bottom_pocket(
    spec: ObjectSpec,
    start: float,
    end: float,
    depth: float,
    width: float | None = None,
    label: str = "",
) -> Cavity:
    """Карман заданной глубины снизу, ограниченный локальной высотой."""
    return analyze_cavity(
        spec, CavityGeometry(start=start, end=end, width=width, depth=depth, label=label)
    )
