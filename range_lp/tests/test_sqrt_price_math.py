"""
Sqrt Price Math 테스트

sqrtPriceX96 ↔ human-readable 가격 변환을 테스트합니다.
"""

import pytest

from ..constants import Q96
from ..math.sqrt_price_math import price_to_sqrt_price_x96, sqrt_price_x96_to_price
from ..math.tick_math import get_sqrt_ratio_at_tick


class TestSqrtPriceToPrice:
    """sqrt_price_x96_to_price 테스트"""

    def test_unit_price(self):
        assert sqrt_price_x96_to_price(Q96) == 1.0

    def test_decimal_adjustment(self):
        """token0 6자리 / token1 18자리면 10^-12 배"""
        assert sqrt_price_x96_to_price(Q96, decimal0=6, decimal1=18) == pytest.approx(1e-12)

    def test_matches_tick_price(self):
        price = sqrt_price_x96_to_price(get_sqrt_ratio_at_tick(1000))
        assert price == pytest.approx(1.0001 ** 1000, rel=1e-9)


class TestPriceToSqrtPrice:
    """price_to_sqrt_price_x96 테스트"""

    def test_exact_squares(self):
        assert price_to_sqrt_price_x96(1.0) == Q96
        assert price_to_sqrt_price_x96(4.0) == 2 * Q96

    @pytest.mark.parametrize("price,decimal0,decimal1", [
        (3300.5, 18, 18),
        (0.000301, 18, 6),
        (1850.25, 6, 18),
    ])
    def test_roundtrip(self, price, decimal0, decimal1):
        sqrt_price_x96 = price_to_sqrt_price_x96(price, decimal0, decimal1)
        assert sqrt_price_x96_to_price(sqrt_price_x96, decimal0, decimal1) == pytest.approx(price, rel=1e-12)

    @pytest.mark.parametrize("price", [0, -1.5])
    def test_non_positive_rejected(self, price):
        with pytest.raises(ValueError):
            price_to_sqrt_price_x96(price)
