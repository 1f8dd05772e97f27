"""
HeightProfile — кусочно-линейный боковой профиль

Высота сечения тела как функция позиции вдоль длины.
Четыре контрольные высоты задают три линейных сегмента:

    nose (x=0) → front axle → rear axle → tail (x=length)

Вне тела высота ограничивается значением носа / хвоста. Соседние сегменты
делят концевые высоты, поэтому профиль непрерывен.

Работает с float и с numpy-массивами (поэлементно): интегратор вычисляет
все узлы за один вызов.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    import numpy.typing as npt


class HeightProfile(BaseModel):
    """
    Контрольные высоты бокового профиля.

    Позиции контрольных точек (0, передняя ось, задняя ось, длина) хранит
    ObjectSpec; профиль несёт только высоты.
    """

    nose_height: float = Field(..., ge=0, description="Высота при x <= 0")
    front_height: float = Field(..., ge=0, description="Высота на передней оси")
    rear_height: float = Field(..., ge=0, description="Высота на задней оси")
    tail_height: float = Field(..., ge=0, description="Высота при x >= length")

    model_config = {"frozen": True}

    def height_at(
        self,
        x: float | npt.NDArray[np.float64],
        length: float,
        front_axle: float,
        rear_axle: float,
    ) -> float | npt.NDArray[np.float64]:
        """
        Высота профиля в позиции x.

        Параметризация сегмента: t = (x - segment_start) / segment_length,
        h = h_start + t * (h_end - h_start).

        Args:
            x: Позиция (позиции) от переда тела
            length: Длина тела
            front_axle: Позиция передней оси (конец носового сегмента)
            rear_axle: Позиция задней оси (начало хвостового сегмента)

        Returns:
            Высота (float для скалярного x, массив для массива x)
        """
        if np.ndim(x) == 0:
            return self._scalar_height(float(x), length, front_axle, rear_axle)

        # np.interp вне [0, length] возвращает крайние значения
        return np.interp(
            x,
            [0.0, front_axle, rear_axle, length],
            [self.nose_height, self.front_height, self.rear_height, self.tail_height],
        )

    def _scalar_height(self, x: float, length: float, front_axle: float, rear_axle: float) -> float:
        if x <= 0:
            return self.nose_height
        if x >= length:
            return self.tail_height

        if x <= front_axle:
            t = x / front_axle
            return self.nose_height + t * (self.front_height - self.nose_height)
        if x <= rear_axle:
            t = (x - front_axle) / (rear_axle - front_axle)
            return self.front_height + t * (self.rear_height - self.front_height)

        t = (x - rear_axle) / (length - rear_axle)
        return self.rear_height + t * (self.tail_height - self.rear_height)

    def max_height(self) -> float:
        """Наибольшая контрольная высота (верхняя граница профиля)."""
        return max(self.nose_height, self.front_height, self.rear_height, self.tail_height)
