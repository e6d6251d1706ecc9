"""
Full Math - 고정소수점 곱셈/나눗셈과 정수 제곱근

Solidity FullMath.mulDiv 와 같은 계약을 따릅니다:
- a * b 는 512비트 누산기에 담겨야 함 (아니면 Overflow)
- 결과는 uint256 에 담겨야 함 (아니면 Overflow)
- 분모 0 이면 DivisionByZero

Python int 는 임의 정밀도이므로 512비트 누산기는 그 자체로 구현되며,
범위 검사만 명시적으로 수행합니다.

References:
- Uniswap V3 Core: contracts/libraries/FullMath.sol
- Uniswap V3 Core: contracts/libraries/UnsafeMath.sol
"""

from ..constants import UINT256_MAX, UINT512_MAX
from ..errors import DivisionByZero, Overflow


def mul_div(a: int, b: int, denominator: int) -> int:
    """floor(a * b / denominator)

    Args:
        a: 피승수 (음이 아닌 정수)
        b: 승수 (음이 아닌 정수)
        denominator: 분모

    Returns:
        내림된 몫 (uint256)

    Raises:
        DivisionByZero: denominator == 0
        Overflow: a * b 가 512비트를 넘거나 결과가 uint256 을 넘는 경우
    """
    _check_operands(a, b)
    if denominator == 0:
        raise DivisionByZero(f"mul_div: denominator = 0 (a={a}, b={b})")

    product = a * b
    if product > UINT512_MAX:
        raise Overflow(f"mul_div: 곱이 512비트 누산기를 초과 (a={a}, b={b})")

    result = product // denominator
    if result > UINT256_MAX:
        raise Overflow(f"mul_div: 결과가 uint256 을 초과 ({result})")
    return result


def mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """ceil(a * b / denominator)"""
    result = mul_div(a, b, denominator)
    if (a * b) % denominator > 0:
        if result == UINT256_MAX:
            raise Overflow("mul_div_rounding_up: 올림 결과가 uint256 을 초과")
        result += 1
    return result


def div_rounding_up(numerator: int, denominator: int) -> int:
    """numerator / denominator 올림"""
    if denominator == 0:
        raise DivisionByZero(f"div_rounding_up: denominator = 0 (numerator={numerator})")
    result = numerator // denominator
    if numerator % denominator > 0:
        result += 1
    return result


def sqrt_integer(x: int) -> int:
    """floor(sqrt(x)) - Newton 방법

    초기값 2^ceil(bits/2) 는 항상 sqrt(x) 이상이므로 반복은 단조 감소하며
    floor(sqrt(x)) 에서 멈춥니다. 완전제곱수에서는 정확한 값을 반환합니다.

    Args:
        x: 음이 아닌 정수

    Returns:
        floor(sqrt(x))
    """
    if x < 0:
        raise ValueError(f"음수의 제곱근: {x}")
    if x < 2:
        return x

    z = 1 << ((x.bit_length() + 1) // 2)
    while True:
        y = (z + x // z) >> 1
        if y >= z:
            return z
        z = y


def sqrt_integer_rounding_up(x: int) -> int:
    """ceil(sqrt(x))"""
    root = sqrt_integer(x)
    if root * root < x:
        root += 1
    return root


def _check_operands(a: int, b: int) -> None:
    if a < 0 or b < 0:
        raise ValueError(f"mul_div: 음수 피연산자 (a={a}, b={b})")
