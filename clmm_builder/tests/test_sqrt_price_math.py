"""
Sqrt Price Math 테스트

가격 ↔ sqrtPriceX96 변환의 반올림 방향을 검증합니다.
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from ..constants import Q96, MAX_SQRT_PRICE
from ..errors import PriceOutOfRange
from ..math.sqrt_price_math import (
    check_sqrt_price,
    encode_price_sqrt,
    price_to_sqrt_price_x96,
    sqrt_price_x96_to_price,
    sqrt_price_x96_to_price_int,
)


class TestEncodePriceSqrt:
    """encode_price_sqrt 테스트"""

    def test_price_1(self):
        assert encode_price_sqrt(1, 1) == Q96

    def test_price_4(self):
        """sqrt(4) = 2"""
        assert encode_price_sqrt(4, 1) == 2 * Q96

    def test_rounds_down(self):
        """sqrt(1/7) 은 내림"""
        result = encode_price_sqrt(1, 7)
        assert 7 * result * result <= Q96 * Q96 < 7 * (result + 1) * (result + 1)

    def test_invalid_reserve(self):
        with pytest.raises(ValueError):
            encode_price_sqrt(1, 0)


class TestPriceToSqrtPrice:
    """price_to_sqrt_price_x96 테스트"""

    @pytest.mark.parametrize("price", [1, Fraction(1), Decimal("1"), "1", 1.0])
    def test_input_types(self, price):
        """여러 입력 타입에서 같은 결과"""
        assert price_to_sqrt_price_x96(price) == Q96

    def test_rational_price(self):
        """Fraction 가격은 정확히 내림"""
        price = Fraction(2, 11)
        result = price_to_sqrt_price_x96(price)
        assert Fraction(result * result, Q96 * Q96) <= price
        assert Fraction((result + 1) ** 2, Q96 * Q96) > price

    def test_decimal_adjustment(self):
        """소수점 보정: price * 10^(decimal1 - decimal0)"""
        # 10^-12 * 10^12 = 1
        assert price_to_sqrt_price_x96(Fraction(1, 10 ** 12), 6, 18) == Q96

    def test_invalid_price(self):
        with pytest.raises(ValueError):
            price_to_sqrt_price_x96(0)
        with pytest.raises(ValueError):
            price_to_sqrt_price_x96(-1.5)

    def test_out_of_range(self):
        """표현 범위를 넘는 가격"""
        with pytest.raises(PriceOutOfRange):
            price_to_sqrt_price_x96(2 ** 130)


class TestSqrtPriceToPrice:
    """sqrt_price_x96_to_price 테스트"""

    def test_exact(self):
        assert sqrt_price_x96_to_price(2 * Q96) == 4

    def test_roundtrip(self):
        """가격 -> sqrtPrice -> 가격 은 내림 방향"""
        for price in [Fraction(2, 11), Fraction(1), Fraction(7), Fraction(3000)]:
            sqrt_price = price_to_sqrt_price_x96(price)
            result = sqrt_price_x96_to_price(sqrt_price)
            assert result <= price
            assert (price - result) / price < Fraction(1, 10 ** 20)

    def test_decimals(self):
        """decimal1 > decimal0 이면 가격이 작아짐"""
        assert sqrt_price_x96_to_price(Q96, 6, 18) == Fraction(1, 10 ** 12)

    def test_price_int(self):
        """고정소수점 정수 가격"""
        assert sqrt_price_x96_to_price_int(2 * Q96, precision=18) == 4 * 10 ** 18
        assert sqrt_price_x96_to_price_int(Q96, 18, 6, precision=6) == 10 ** 18


class TestCheckSqrtPrice:
    """check_sqrt_price 테스트"""

    def test_bounds(self):
        assert check_sqrt_price(0) == 0
        assert check_sqrt_price(MAX_SQRT_PRICE) == MAX_SQRT_PRICE

    def test_out_of_range(self):
        with pytest.raises(PriceOutOfRange):
            check_sqrt_price(MAX_SQRT_PRICE + 1)
        with pytest.raises(ValueError):
            check_sqrt_price(-1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
