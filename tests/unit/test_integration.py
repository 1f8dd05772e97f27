"""
Тесты для составной формулы Симпсона

Проверяет:
1. Точность на константах и кубических многочленах
2. Вырожденные и обратные интервалы дают ноль
3. Округление числа панелей и валидацию
4. Совпадение скалярного и векторизованного вычисления
"""

import math

import numpy as np
import pytest

from src.core.math.integration import DEFAULT_PANELS, even_panels, integrate, simpson_weights


# =============================================================================
# ПАНЕЛИ / ВЕСА
# =============================================================================


class TestPanels:
    """Тесты для even_panels / simpson_weights"""

    def test_even_count_unchanged(self) -> None:
        assert even_panels(DEFAULT_PANELS) == 1000
        assert even_panels(2) == 2

    def test_odd_count_rounded_up(self) -> None:
        assert even_panels(1) == 2
        assert even_panels(999) == 1000

    @pytest.mark.parametrize("n", [0, -1, -1000])
    def test_invalid_count_rejected(self, n: int) -> None:
        with pytest.raises(ValueError, match="panel count"):
            even_panels(n)

    def test_weights_pattern(self) -> None:
        assert simpson_weights(4).tolist() == [1.0, 4.0, 2.0, 4.0, 1.0]

    def test_weights_sum(self) -> None:
        """Сумма весов 3n, поэтому h/3 · Σw = b - a"""
        assert simpson_weights(1000).sum() == pytest.approx(3000.0)


# =============================================================================
# ИНТЕГРИРОВАНИЕ
# =============================================================================


class TestIntegrate:
    """Тесты для integrate"""

    @pytest.mark.parametrize("c,a,b", [(3.0, 0.0, 2.0), (-1.5, 1.0, 4.5), (0.0, 0.0, 7.0)])
    def test_constant_integrand(self, c: float, a: float, b: float) -> None:
        """∫ c dx = c·(b - a)"""
        assert integrate(lambda x: c, a, b) == pytest.approx(c * (b - a), abs=1e-12)

    def test_constant_integrand_vectorized(self) -> None:
        """Векторизованная функция может вернуть скаляр"""
        assert integrate(lambda x: 2.0, 1.0, 3.0, vectorized=True) == pytest.approx(4.0, abs=1e-12)

    def test_cubic_is_exact(self) -> None:
        """Формула Симпсона точна для многочленов до 3-й степени"""
        result = integrate(lambda x: x**3 - 2 * x + 1, 0.0, 2.0, n=2)
        assert result == pytest.approx(4.0 - 4.0 + 2.0, abs=1e-12)

    def test_empty_interval_is_zero(self) -> None:
        assert integrate(lambda x: 1.0, 2.0, 2.0) == 0.0

    def test_reversed_interval_is_zero(self) -> None:
        """Обратные пределы не меняют знак, а дают ноль"""
        assert integrate(lambda x: 1.0, 3.0, 1.0) == 0.0
        assert integrate(lambda x: x, 3.0, 1.0, vectorized=True) == 0.0

    def test_smooth_function(self) -> None:
        assert integrate(math.sin, 0.0, math.pi) == pytest.approx(2.0, abs=1e-10)

    def test_scalar_and_vectorized_agree(self) -> None:
        scalar = integrate(lambda x: math.exp(-x) * x, 0.0, 3.0)
        vector = integrate(lambda x: np.exp(-x) * x, 0.0, 3.0, vectorized=True)
        assert vector == pytest.approx(scalar, rel=1e-12)

    def test_odd_panel_count_accepted(self) -> None:
        assert integrate(lambda x: x, 0.0, 1.0, n=3) == pytest.approx(0.5, abs=1e-12)

    def test_invalid_panel_count(self) -> None:
        with pytest.raises(ValueError):
            integrate(lambda x: x, 0.0, 1.0, n=0)
