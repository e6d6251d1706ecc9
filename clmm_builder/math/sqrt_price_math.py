"""
Sqrt Price Math - sqrtPriceX96 관련 계산

가격은 sqrtPriceX96 형식으로 저장됩니다.
sqrtPriceX96 = sqrt(price) * 2^96

반올림 방향:
- price → sqrtPriceX96: 내림 (sqrt_integer)
- sqrtPriceX96 → price: Fraction 으로 정확히 (반올림 없음)
- sqrtPriceX96 → 정수 가격: 내림

References:
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
- Uniswap V3 Periphery: test/shared/utilities.ts (encodePriceSqrt)
"""

from decimal import Decimal
from fractions import Fraction
from typing import Union

from ..constants import Q192, MAX_SQRT_PRICE
from ..errors import PriceOutOfRange
from .full_math import sqrt_integer

PriceLike = Union[int, Fraction, Decimal, str, float]


def check_sqrt_price(sqrt_price_x96: int) -> int:
    """sqrtPriceX96 표현 범위 검사

    Raises:
        PriceOutOfRange: 0 <= sqrt_price_x96 <= MAX_SQRT_PRICE 가 아닌 경우
    """
    if sqrt_price_x96 < 0 or sqrt_price_x96 > MAX_SQRT_PRICE:
        raise PriceOutOfRange(
            f"sqrtPriceX96이 표현 범위를 벗어났습니다: {sqrt_price_x96} (최대: {MAX_SQRT_PRICE})"
        )
    return sqrt_price_x96


def encode_price_sqrt(reserve1: int, reserve0: int) -> int:
    """reserve 비율에서 sqrtPriceX96 계산 (내림)

    sqrtPriceX96 = floor(sqrt(reserve1 / reserve0) * 2^96)

    Args:
        reserve1: token1 수량
        reserve0: token0 수량

    Returns:
        sqrtPriceX96
    """
    if reserve0 <= 0 or reserve1 <= 0:
        raise ValueError(f"reserve는 양수여야 합니다: reserve0={reserve0}, reserve1={reserve1}")
    return check_sqrt_price(sqrt_integer((reserve1 << 192) // reserve0))


def price_to_sqrt_price_x96(
    price: PriceLike,
    decimal0: int = 18,
    decimal1: int = 18
) -> int:
    """Human-readable 가격을 sqrtPriceX96으로 변환 (내림)

    sqrtPriceX96 = sqrt(price * 10^(decimal1 - decimal0)) * 2^96

    가격은 Fraction 으로 변환되어 정확히 계산됩니다. float 입력은
    float 가 표현하는 이진 값 그대로 사용됩니다.

    Args:
        price: 가격 (token1/token0 기준)
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        sqrtPriceX96 값
    """
    ratio = Fraction(price)
    if ratio <= 0:
        raise ValueError("가격은 양수여야 합니다")

    ratio *= Fraction(10) ** (decimal1 - decimal0)
    return check_sqrt_price(
        sqrt_integer(ratio.numerator * Q192 // ratio.denominator)
    )


def sqrt_price_x96_to_price(
    sqrt_price_x96: int,
    decimal0: int = 18,
    decimal1: int = 18
) -> Fraction:
    """sqrtPriceX96을 human-readable 가격으로 변환

    가격 = sqrtPriceX96^2 / 2^192 / 10^(decimal1 - decimal0)

    Args:
        sqrt_price_x96: sqrtPriceX96 값
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        가격 (token1/token0 기준, 정확한 Fraction)
    """
    check_sqrt_price(sqrt_price_x96)
    price_raw = Fraction(sqrt_price_x96 ** 2, Q192)
    return price_raw / Fraction(10) ** (decimal1 - decimal0)


def sqrt_price_x96_to_price_int(
    sqrt_price_x96: int,
    decimal0: int = 18,
    decimal1: int = 18,
    precision: int = 18
) -> int:
    """sqrtPriceX96을 정수 가격으로 변환 (온체인 정밀도, 내림)

    결과는 precision 자릿수의 고정소수점 정수입니다.

    Args:
        sqrt_price_x96: sqrtPriceX96 값
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수
        precision: 결과 정밀도 (소수점 자릿수)

    Returns:
        가격 (고정소수점 정수, precision 자릿수)
    """
    check_sqrt_price(sqrt_price_x96)
    # price = sqrtPriceX96^2 / 2^192 * 10^precision / 10^(decimal1 - decimal0)
    decimal_diff = decimal1 - decimal0

    numerator = sqrt_price_x96 ** 2 * (10 ** precision)
    denominator = Q192 * (10 ** decimal_diff) if decimal_diff >= 0 else Q192

    if decimal_diff < 0:
        numerator *= 10 ** (-decimal_diff)

    return numerator // denominator
