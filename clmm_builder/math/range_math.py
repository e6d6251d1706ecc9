"""
Range Math - width 파라미터로 가격 범위 계산

width 는 가격 범위의 상대 스프레드입니다:
    width = N * (Pu - Pl) / (Pu + Pl),  0 <= width < N

한쪽 경계와 width 가 주어지면 다른 경계가 정해집니다:
    Pl = Pu * (N - width) / (N + width)
    sqrtPl = sqrtPu * C,  C = sqrt((N - width) / (N + width))

현재 가격을 포함하는 범위는 width 와 예치 비율 r = amount1 / amount0
두 조건을 동시에 만족해야 합니다. sqrtPu = α * sqrtPc 로 두면

    C * Pc * α² + (r - Pc) * α - r = 0

의 근 중 1 < α < 1/C 인 근이 답입니다 (Pl < Pc < Pu).

반올림 방향:
    sqrt_lower_price_x96: 내림
    sqrt_upper_price_x96: 올림
    (두 경우 모두 요청보다 좁은 범위는 만들지 않음)
"""

from fractions import Fraction
from typing import Tuple

from ..constants import Q96, N, MAX_SQRT_PRICE
from ..errors import InvalidWidth, InfeasibleRange, PriceOutOfRange
from .full_math import sqrt_integer, sqrt_integer_rounding_up, div_rounding_up
from .sqrt_price_math import check_sqrt_price


def check_width(width: int) -> int:
    """width 유효성 검사

    Raises:
        InvalidWidth: width < 0 또는 width >= N
    """
    if width < 0 or width >= N:
        raise InvalidWidth(f"width가 유효 범위를 벗어났습니다: {width} (범위: 0 ~ {N - 1})")
    return width


def sqrt_lower_price_x96(sqrt_price_upper_x96: int, width: int) -> int:
    """상한 sqrtPrice 와 width 에서 하한 sqrtPrice 계산 (내림)

    Args:
        sqrt_price_upper_x96: 상한 sqrtPriceX96
        width: 범위 width (0 ~ N-1)

    Returns:
        하한 sqrtPriceX96. width 0 이면 입력 그대로

    Raises:
        InvalidWidth: width >= N
        PriceOutOfRange: sqrt_price_upper_x96 > MAX_SQRT_PRICE
    """
    check_width(width)
    check_sqrt_price(sqrt_price_upper_x96)
    if width == 0:
        return sqrt_price_upper_x96

    squared = sqrt_price_upper_x96 * sqrt_price_upper_x96
    return sqrt_integer(squared * (N - width) // (N + width))


def sqrt_upper_price_x96(sqrt_price_lower_x96: int, width: int) -> int:
    """하한 sqrtPrice 와 width 에서 상한 sqrtPrice 계산 (올림)

    Args:
        sqrt_price_lower_x96: 하한 sqrtPriceX96
        width: 범위 width (0 ~ N-1)

    Returns:
        상한 sqrtPriceX96. width 0 이면 입력 그대로

    Raises:
        InvalidWidth: width >= N
        PriceOutOfRange: 입력 또는 결과가 MAX_SQRT_PRICE 를 초과
    """
    check_width(width)
    check_sqrt_price(sqrt_price_lower_x96)
    if width == 0:
        return sqrt_price_lower_x96

    squared = sqrt_price_lower_x96 * sqrt_price_lower_x96
    result = sqrt_integer_rounding_up(div_rounding_up(squared * (N + width), N - width))
    if result > MAX_SQRT_PRICE:
        raise PriceOutOfRange(
            f"상한 sqrtPriceX96이 표현 범위를 벗어났습니다: {result} "
            f"(sqrtPl={sqrt_price_lower_x96}, width={width})"
        )
    return result


def price_range_for_width(
    sqrt_price_x96: int,
    width: int,
    amount0: int,
    amount1: int
) -> Tuple[int, int]:
    """현재 가격을 포함하며 width 와 예치 비율을 만족하는 범위 계산

    X96 스케일 정수로 이차방정식을 풉니다. p = sqrtPc, s = sqrtPu,
    c = C * 2^96 일 때

        (c * a0 * p) * s² + Q96 * (a1 * Q96² - a0 * p²) * s - a1 * p * Q96³ = 0

    두 근을 모두 계산한 뒤 p < s 이고 s * c < p * Q96 인 근 하나만 선택합니다.

    Args:
        sqrt_price_x96: 현재 sqrtPriceX96
        width: 범위 width (1 ~ N-1)
        amount0: token0 수량
        amount1: token1 수량

    Returns:
        (sqrt_price_lower_x96, sqrt_price_upper_x96)

    Raises:
        InvalidWidth: width >= N
        PriceOutOfRange: sqrt_price_x96 > MAX_SQRT_PRICE
        InfeasibleRange: 조건을 만족하는 근이 없거나 둘 이상인 경우
    """
    check_width(width)
    check_sqrt_price(sqrt_price_x96)
    if amount0 < 0 or amount1 < 0:
        raise ValueError(f"수량은 음수일 수 없습니다: amount0={amount0}, amount1={amount1}")
    if width == 0 or amount0 == 0 or amount1 == 0 or sqrt_price_x96 == 0:
        raise InfeasibleRange(
            f"현재 가격을 포함하는 범위를 만들 수 없습니다: "
            f"width={width}, amount0={amount0}, amount1={amount1}"
        )

    p = sqrt_price_x96
    c = sqrt_integer(((N - width) << 192) // (N + width))

    a = c * amount0 * p
    b = Q96 * (amount1 * Q96 * Q96 - amount0 * p * p)
    k = amount1 * p * Q96 ** 3

    root = sqrt_integer(b * b + 4 * a * k)
    candidates = [(-b + root) // (2 * a), (-b - root) // (2 * a)]
    valid = [s for s in candidates if s > p and s * c < p * Q96]
    if len(valid) != 1:
        raise InfeasibleRange(
            f"width={width} 에 맞는 근이 {len(valid)}개입니다 "
            f"(sqrtPc={sqrt_price_x96}, amount0={amount0}, amount1={amount1})"
        )

    sqrt_price_upper_x96 = valid[0]
    sqrt_price_lower_x96 = sqrt_lower_price_x96(sqrt_price_upper_x96, width)
    if not sqrt_price_lower_x96 < p < sqrt_price_upper_x96:
        raise InfeasibleRange(
            f"범위가 현재 가격을 포함하지 않습니다: "
            f"{sqrt_price_lower_x96} < {p} < {sqrt_price_upper_x96}"
        )
    return sqrt_price_lower_x96, sqrt_price_upper_x96


def calc_width_from_prices(price_lower, price_upper) -> Fraction:
    """가격 경계에서 width 계산 (정확한 Fraction)"""
    price_lower = Fraction(price_lower)
    price_upper = Fraction(price_upper)
    if price_lower + price_upper <= 0:
        raise ValueError(f"가격 합이 양수여야 합니다: {price_lower}, {price_upper}")
    return N * (price_upper - price_lower) / (price_upper + price_lower)


def calc_width_from_sqrt_prices(sqrt_price_lower_x96: int, sqrt_price_upper_x96: int) -> Fraction:
    """sqrtPriceX96 경계에서 width 계산 (정확한 Fraction)

    2^192 스케일은 분자와 분모에서 상쇄됩니다.
    """
    return calc_width_from_prices(
        sqrt_price_lower_x96 * sqrt_price_lower_x96,
        sqrt_price_upper_x96 * sqrt_price_upper_x96,
    )
