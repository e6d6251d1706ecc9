"""
Liquidity Math - 유동성 계산

집중화된 유동성(Concentrated Liquidity) 계산.
특정 가격 범위에서의 토큰 수량과 유동성 간의 변환.

References:
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
- Uniswap V3 Periphery: contracts/libraries/LiquidityAmounts.sol
- 백서 Section 6.2.1: Concentrated Liquidity

핵심 공식:
    L = Δx * √P_l * √P_u / (√P_u - √P_l)  # token0 기준 (범위가 현재가 위)
    L = Δy / (√P_u - √P_l)                 # token1 기준 (범위가 현재가 아래)

유동성은 항상 내림으로 계산되므로 L 에서 되돌린 수량은 예치 수량을
넘지 않습니다 (amountOut <= amountIn).
"""

from typing import Tuple

from ..constants import Q96, UINT128_MAX
from ..errors import DivisionByZero, Overflow
from .full_math import mul_div, mul_div_rounding_up, div_rounding_up
from .range_math import price_range_for_width


def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """유동성에서 amount0 변화량 계산

    두 가격 사이에서 주어진 유동성으로 얻을 수 있는 token0 양.

    공식: Δx = L * (√P_b - √P_a) / (√P_a * √P_b)
              = L * (1/√P_a - 1/√P_b)

    Args:
        sqrt_ratio_a_x96: 하한 sqrtPriceX96
        sqrt_ratio_b_x96: 상한 sqrtPriceX96
        liquidity: 유동성
        round_up: True면 올림 (예치받는 양), False면 내림 (돌려주는 양)

    Returns:
        amount0 (token0 수량, 최소 단위)

    Raises:
        DivisionByZero: 하한 sqrtPrice 가 0 인 경우
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 == 0:
        raise DivisionByZero("get_amount0_delta: 하한 sqrtPrice 가 0 입니다")

    numerator1 = liquidity << 96
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return div_rounding_up(
            mul_div_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96),
            sqrt_ratio_a_x96
        )
    else:
        return mul_div(numerator1, numerator2, sqrt_ratio_b_x96) // sqrt_ratio_a_x96


def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """유동성에서 amount1 변화량 계산

    공식: Δy = L * (√P_b - √P_a)

    Args:
        sqrt_ratio_a_x96: 하한 sqrtPriceX96
        sqrt_ratio_b_x96: 상한 sqrtPriceX96
        liquidity: 유동성
        round_up: True면 올림, False면 내림

    Returns:
        amount1 (token1 수량, 최소 단위)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if round_up:
        return mul_div_rounding_up(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)
    else:
        return mul_div(liquidity, sqrt_ratio_b_x96 - sqrt_ratio_a_x96, Q96)


def liquidity_for_region_above_current_price(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int
) -> int:
    """현재가 위 범위에서 amount0 로 얻는 유동성 (내림)

    공식: L = Δx * √P_a * √P_b / (√P_b - √P_a)

    중간값 √P_a * √P_b 를 먼저 Q96 으로 나누지 않고 한 번의 mul_div 로
    계산하므로 내림은 마지막에 한 번만 일어납니다.

    Raises:
        DivisionByZero: √P_a == √P_b
        Overflow: 결과가 uint128 을 초과
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 == sqrt_ratio_b_x96:
        raise DivisionByZero(f"가격 경계가 같습니다: {sqrt_ratio_a_x96}")

    liquidity = mul_div(
        amount0,
        sqrt_ratio_a_x96 * sqrt_ratio_b_x96,
        Q96 * (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)
    )
    return _check_liquidity(liquidity)


def liquidity_for_region_below_current_price(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount1: int
) -> int:
    """현재가 아래 범위에서 amount1 로 얻는 유동성 (내림)

    공식: L = Δy / (√P_b - √P_a)

    Raises:
        DivisionByZero: √P_a == √P_b
        Overflow: 결과가 uint128 을 초과
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96
    if sqrt_ratio_a_x96 == sqrt_ratio_b_x96:
        raise DivisionByZero(f"가격 경계가 같습니다: {sqrt_ratio_a_x96}")

    liquidity = mul_div(amount1, Q96, sqrt_ratio_b_x96 - sqrt_ratio_a_x96)
    return _check_liquidity(liquidity)


def liquidity_for_region_at_current_price(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int
) -> int:
    """현재가를 포함하는 범위의 유동성

    [√P_c, √P_b] 구간은 amount0, [√P_a, √P_c] 구간은 amount1 로 제한되며
    먼저 소진되는 토큰이 유동성을 결정합니다.
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    liquidity0 = liquidity_for_region_above_current_price(sqrt_ratio_x96, sqrt_ratio_b_x96, amount0)
    liquidity1 = liquidity_for_region_below_current_price(sqrt_ratio_a_x96, sqrt_ratio_x96, amount1)
    return min(liquidity0, liquidity1)


def liquidity_for_width(
    sqrt_ratio_x96: int,
    width: int,
    amount0: int,
    amount1: int
) -> Tuple[int, int, int]:
    """width 와 예치 비율에 맞는 범위와 그 유동성 계산

    Returns:
        (liquidity, sqrt_price_lower_x96, sqrt_price_upper_x96)
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = price_range_for_width(
        sqrt_ratio_x96, width, amount0, amount1
    )
    liquidity = liquidity_for_region_at_current_price(
        sqrt_ratio_x96, sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0, amount1
    )
    return liquidity, sqrt_ratio_a_x96, sqrt_ratio_b_x96


def get_liquidity_for_amounts(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int
) -> int:
    """토큰 수량에서 유동성 계산

    현재 가격과 범위, 두 토큰 수량이 주어졌을 때
    민트 가능한 최대 유동성을 계산합니다.

    Args:
        sqrt_ratio_x96: 현재 sqrtPriceX96
        sqrt_ratio_a_x96: 하한 sqrtPriceX96
        sqrt_ratio_b_x96: 상한 sqrtPriceX96
        amount0: token0 수량
        amount1: token1 수량

    Returns:
        유동성 (두 제약 조건 중 작은 값)
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        # 가격이 범위 아래: token0만 사용
        return liquidity_for_region_above_current_price(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0)

    elif sqrt_ratio_x96 < sqrt_ratio_b_x96:
        # 가격이 범위 내: 양쪽 토큰 사용, 작은 값 반환
        return liquidity_for_region_at_current_price(
            sqrt_ratio_x96, sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0, amount1
        )

    else:
        # 가격이 범위 위: token1만 사용
        return liquidity_for_region_below_current_price(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1)


def get_amounts_for_liquidity(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = False
) -> Tuple[int, int]:
    """유동성에서 토큰 수량 계산

    현재 가격과 범위, 유동성이 주어졌을 때
    포지션이 보유한 토큰 수량을 계산합니다.
    민트 시 예치받을 수량은 round_up=True 로 계산합니다.

    Args:
        sqrt_ratio_x96: 현재 sqrtPriceX96
        sqrt_ratio_a_x96: 하한 sqrtPriceX96
        sqrt_ratio_b_x96: 상한 sqrtPriceX96
        liquidity: 유동성
        round_up: True면 올림, False면 내림

    Returns:
        (amount0, amount1) 튜플
    """
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        sqrt_ratio_a_x96, sqrt_ratio_b_x96 = sqrt_ratio_b_x96, sqrt_ratio_a_x96

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        # 가격이 범위 아래: token0만 보유
        amount0 = get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up)
        amount1 = 0

    elif sqrt_ratio_x96 < sqrt_ratio_b_x96:
        # 가격이 범위 내: 양쪽 토큰 보유
        amount0 = get_amount0_delta(sqrt_ratio_x96, sqrt_ratio_b_x96, liquidity, round_up)
        amount1 = get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_x96, liquidity, round_up)

    else:
        # 가격이 범위 위: token1만 보유
        amount0 = 0
        amount1 = get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up)

    return amount0, amount1


def _check_liquidity(liquidity: int) -> int:
    if liquidity > UINT128_MAX:
        raise Overflow(f"유동성이 uint128 을 초과합니다: {liquidity}")
    return liquidity
