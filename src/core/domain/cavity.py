"""
Cavity — геометрия полости-кандидата и её массовые свойства

Две immutable Pydantic модели:
- CavityGeometry: что вырезается (пролёт, ширина, опциональная глубина кармана)
- Cavity: геометрия вместе с проинтегрированными свойствами, результат
  анализатора полостей (src.mass.cavity_analyzer)

Полость без depth — сквозной вырез (вся локальная высота профиля); с depth —
карман снизу, глубина которого ограничивается локальной высотой.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. volume >= 0
2. centroid == 0.0 при volume == 0 (никогда moment / 0)
3. net_mass_change = mass_added_full - mass_removed
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class CavityShape(str, Enum):
    """Форма полости"""

    THROUGH = "through"
    POCKET = "pocket"


# =============================================================================
# ГЕОМЕТРИЯ
# =============================================================================


class CavityGeometry(BaseModel):
    """
    Заявленная геометрия полости.

    Пролёты нулевой длины и нулевая ширина допустимы: анализ даёт пустую
    полость, а не ошибку.
    """

    start: float = Field(..., description="Начало пролёта (от переда)")
    end: float = Field(..., description="Конец пролёта (от переда)")
    width: float | None = Field(
        None, ge=0, description="Ширина полости; None = полная ширина тела"
    )
    depth: float | None = Field(
        None, ge=0, description="Глубина кармана от дна; None = сквозной вырез"
    )
    label: str = Field("", description="Произвольная метка")

    model_config = {"frozen": True}

    @field_validator("end")
    @classmethod
    def validate_end_not_before_start(cls, v: float, info) -> float:
        """end >= start (равенство даёт пустую полость)."""
        if "start" in info.data and v < info.data["start"]:
            raise ValueError(f"cavity end {v} must be >= start {info.data['start']}")
        return v

    @property
    def shape(self) -> CavityShape:
        return CavityShape.THROUGH if self.depth is None else CavityShape.POCKET

    @property
    def span(self) -> float:
        return self.end - self.start


# =============================================================================
# ПРОАНАЛИЗИРОВАННАЯ ПОЛОСТЬ
# =============================================================================


class Cavity(BaseModel):
    """
    Геометрия полости плюс проинтегрированные свойства.

    Все массы посчитаны по плотностям того ObjectSpec, против которого
    анализировалась полость; вне этого spec Cavity смысла не имеет.
    """

    geometry: CavityGeometry = Field(..., description="Заявленная геометрия")
    width: float = Field(..., ge=0, description="Фактическая ширина полости")

    volume: float = Field(..., ge=0, description="Вырезанный объём")
    moment: float = Field(..., description="Геометрический первый момент вырезанного объёма")
    centroid: float = Field(..., description="moment / volume, 0.0 для пустой полости")

    mass_removed: float = Field(..., ge=0, description="Вытесненный базовый материал")
    mass_added_full: float = Field(..., ge=0, description="Масса заполнения при 100%")

    model_config = {"frozen": True}

    @property
    def start(self) -> float:
        return self.geometry.start

    @property
    def end(self) -> float:
        return self.geometry.end

    @property
    def depth(self) -> float | None:
        return self.geometry.depth

    @property
    def label(self) -> str:
        return self.geometry.label

    @property
    def shape(self) -> CavityShape:
        return self.geometry.shape

    @property
    def net_mass_change(self) -> float:
        """Прирост массы при вырезе и заполнении на 100%."""
        return self.mass_added_full - self.mass_removed

    @property
    def fill_capacity_moment(self) -> float:
        """Первый момент заполнения при 100%: centroid × mass_added_full."""
        return self.centroid * self.mass_added_full

    def is_empty(self) -> bool:
        return self.volume == 0.0
