"""
Full Math 테스트

mul_div 의 반올림/오버플로우 계약과 정수 제곱근을 검증합니다.
"""

import math

import pytest

from ..constants import Q96, UINT256_MAX
from ..errors import DivisionByZero, Overflow
from ..math.full_math import (
    mul_div,
    mul_div_rounding_up,
    div_rounding_up,
    sqrt_integer,
    sqrt_integer_rounding_up,
)


class TestMulDiv:
    """mul_div, mul_div_rounding_up 테스트"""

    def test_exact(self):
        """나누어 떨어지는 경우"""
        assert mul_div(6, 7, 3) == 14
        assert mul_div_rounding_up(6, 7, 3) == 14

    def test_floor_and_ceil(self):
        """나머지가 있으면 내림/올림 차이는 1"""
        assert mul_div(7, 3, 2) == 10
        assert mul_div_rounding_up(7, 3, 2) == 11

    def test_zero_operand(self):
        """피연산자 0"""
        assert mul_div(0, Q96, 7) == 0
        assert mul_div_rounding_up(0, Q96, 7) == 0

    def test_wide_intermediate(self):
        """중간 곱이 256비트를 넘어도 결과가 맞음"""
        a = UINT256_MAX
        b = UINT256_MAX
        assert mul_div(a, b, UINT256_MAX) == UINT256_MAX

    def test_phantom_overflow(self):
        """Q96 * Q96 * Q96 / Q96^2 같은 큰 중간값"""
        assert mul_div(Q96 * Q96, Q96, Q96 * Q96) == Q96

    def test_division_by_zero(self):
        """분모 0"""
        with pytest.raises(DivisionByZero):
            mul_div(1, 1, 0)
        with pytest.raises(ZeroDivisionError):
            mul_div_rounding_up(1, 1, 0)

    def test_result_overflow(self):
        """결과가 uint256 을 초과"""
        with pytest.raises(Overflow):
            mul_div(UINT256_MAX, 2, 1)

    def test_accumulator_overflow(self):
        """곱이 512비트 누산기를 초과"""
        with pytest.raises(Overflow):
            mul_div(2 ** 300, 2 ** 300, 2 ** 400)

    def test_rounding_up_overflow(self):
        """올림 결과가 uint256 을 초과"""
        with pytest.raises(Overflow):
            mul_div_rounding_up(UINT256_MAX, UINT256_MAX - 1, UINT256_MAX - 2)

    def test_negative_operand(self):
        """음수 피연산자는 거부"""
        with pytest.raises(ValueError):
            mul_div(-1, 2, 3)

    def test_div_rounding_up(self):
        assert div_rounding_up(10, 5) == 2
        assert div_rounding_up(11, 5) == 3
        with pytest.raises(DivisionByZero):
            div_rounding_up(1, 0)


class TestSqrtInteger:
    """sqrt_integer 테스트"""

    @pytest.mark.parametrize("x", [0, 1, 4, 9, 144, Q96 * Q96, (2 ** 160 - 1) ** 2])
    def test_perfect_squares(self, x):
        """완전제곱수는 정확한 값"""
        assert sqrt_integer(x) ** 2 == x
        assert sqrt_integer_rounding_up(x) == sqrt_integer(x)

    @pytest.mark.parametrize("x", [2, 3, 8, 99, 2 ** 255 + 12345, 2 ** 511 - 1, 7 * Q96 * Q96])
    def test_matches_isqrt(self, x):
        """math.isqrt 와 동일한 floor 값"""
        root = sqrt_integer(x)
        assert root == math.isqrt(x)
        assert root * root <= x < (root + 1) * (root + 1)

    def test_rounding_up(self):
        """올림 제곱근"""
        assert sqrt_integer_rounding_up(2) == 2
        assert sqrt_integer_rounding_up(10) == 4
        assert sqrt_integer_rounding_up(16) == 4

    def test_negative(self):
        with pytest.raises(ValueError):
            sqrt_integer(-1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
