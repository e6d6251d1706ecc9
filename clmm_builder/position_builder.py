"""
Position Builder - 예산으로 가능한 최선의 범위 포지션 생성

(풀 상태, width, amount0, amount1) 에서 (반올림된 범위, 유동성, 예치 수량) 을
계산하고 풀에 민트합니다.

처리 순서:
    1. 요청 검사 (InvalidWidth, EmptyDeposit)
    2. 풀에서 현재 sqrtPrice, 틱, tick spacing 조회
    3. 예치 토큰에 따라 범위 계산
       - amount1 만: 현재가 아래 범위
       - amount0 만: 현재가 위 범위
       - 둘 다: 현재가를 포함하며 예치 비율에 맞는 범위
    4. 하한은 아래로, 상한은 위로 틱 반올림 (요청보다 좁아지지 않음)
    5. 반올림된 경계에서 유동성과 예치 수량 재계산
    6. 풀에 민트

한쪽 토큰만 예치하는 경우 현재가 쪽 경계는 현재 틱에 가장 가까운
유효 틱에 고정되고, 반대쪽 경계만 width 로 계산됩니다.
"""

import logging
from dataclasses import replace
from typing import Optional, Tuple

from .config import settings
from .data.pool import PoolLike
from .data.types import PositionRequest, PositionResult, Slot0
from .errors import InsufficientAmount, SlippageCheckFailed
from .math.liquidity_math import (
    get_amounts_for_liquidity,
    get_liquidity_for_amounts,
    liquidity_for_width,
)
from .math.range_math import sqrt_lower_price_x96, sqrt_upper_price_x96
from .math.tick_math import (
    Round,
    get_ceil_tick_at_sqrt_ratio,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    round_tick,
)

logger = logging.getLogger(__name__)


def round_lower_tick(sqrt_price_x96: int, tick_spacing: int) -> int:
    """하한 경계를 유효 틱으로 내림

    결과 틱의 sqrtPrice 는 항상 sqrt_price_x96 보다 작습니다.
    """
    return round_tick(get_ceil_tick_at_sqrt_ratio(sqrt_price_x96), tick_spacing, Round.DOWN)


def round_upper_tick(sqrt_price_x96: int, tick_spacing: int) -> int:
    """상한 경계를 유효 틱으로 올림

    결과 틱의 sqrtPrice 는 항상 sqrt_price_x96 보다 큽니다.
    """
    return round_tick(get_tick_at_sqrt_ratio(sqrt_price_x96) + 1, tick_spacing, Round.UP)


def _ticks_below_current_price(slot0: Slot0, tick_spacing: int, width: int) -> Tuple[int, int]:
    # 상한: 현재 틱 이하의 마지막 유효 틱
    tick_upper = round_tick(slot0.tick + 1, tick_spacing, Round.DOWN)
    sqrt_ratio_upper_x96 = get_sqrt_ratio_at_tick(tick_upper)
    sqrt_lower_raw = sqrt_lower_price_x96(sqrt_ratio_upper_x96, width)
    logger.debug("Raw lower bound %d below tick %d", sqrt_lower_raw, tick_upper)
    tick_lower = round_lower_tick(sqrt_lower_raw, tick_spacing)
    return tick_lower, tick_upper


def _ticks_above_current_price(slot0: Slot0, tick_spacing: int, width: int) -> Tuple[int, int]:
    # 하한: 현재 틱보다 큰 첫 유효 틱
    tick_lower = round_tick(slot0.tick + 1, tick_spacing, Round.UP)
    sqrt_ratio_lower_x96 = get_sqrt_ratio_at_tick(tick_lower)
    sqrt_upper_raw = sqrt_upper_price_x96(sqrt_ratio_lower_x96, width)
    logger.debug("Raw upper bound %d above tick %d", sqrt_upper_raw, tick_lower)
    tick_upper = round_upper_tick(sqrt_upper_raw, tick_spacing)
    return tick_lower, tick_upper


def _ticks_at_current_price(
    slot0: Slot0,
    tick_spacing: int,
    request: PositionRequest
) -> Tuple[int, int]:
    sqrt_price_x96 = slot0.sqrt_price_x96
    if request.width == 0:
        sqrt_lower_raw = sqrt_upper_raw = sqrt_price_x96
    else:
        liquidity_raw, sqrt_lower_raw, sqrt_upper_raw = liquidity_for_width(
            sqrt_price_x96, request.width, request.amount0, request.amount1
        )
        logger.debug(
            "Raw range [%d, %d] with liquidity estimate %d",
            sqrt_lower_raw, sqrt_upper_raw, liquidity_raw
        )
    return (
        round_lower_tick(sqrt_lower_raw, tick_spacing),
        round_upper_tick(sqrt_upper_raw, tick_spacing),
    )


def build_position(slot0: Slot0, tick_spacing: int, request: PositionRequest) -> PositionResult:
    """풀 상태와 요청에서 포지션 계산 (민트하지 않음)

    Args:
        slot0: 풀의 현재 가격 상태
        tick_spacing: 풀의 틱 간격
        request: 포지션 요청

    Returns:
        PositionResult (반올림된 경계, 유동성, 올림된 예치 수량)

    Raises:
        InvalidWidth: width >= N
        EmptyDeposit: 두 수량이 모두 0
        InfeasibleRange: 예치 비율과 width 를 만족하는 범위가 없음
        PriceOutOfRange: 경계가 틱 범위를 벗어남
        InsufficientAmount: 반올림된 범위에서 유동성이 0
    """
    request.validate()
    sqrt_price_x96 = slot0.sqrt_price_x96

    if request.amount0 == 0:
        tick_lower, tick_upper = _ticks_below_current_price(slot0, tick_spacing, request.width)
    elif request.amount1 == 0:
        tick_lower, tick_upper = _ticks_above_current_price(slot0, tick_spacing, request.width)
    else:
        tick_lower, tick_upper = _ticks_at_current_price(slot0, tick_spacing, request)

    sqrt_ratio_lower_x96 = get_sqrt_ratio_at_tick(tick_lower)
    sqrt_ratio_upper_x96 = get_sqrt_ratio_at_tick(tick_upper)

    liquidity = get_liquidity_for_amounts(
        sqrt_price_x96, sqrt_ratio_lower_x96, sqrt_ratio_upper_x96,
        request.amount0, request.amount1
    )
    if liquidity == 0:
        raise InsufficientAmount(
            f"범위 [{tick_lower}, {tick_upper}] 에서 민트 가능한 유동성이 없습니다: "
            f"amount0={request.amount0}, amount1={request.amount1}"
        )

    amount0_owed, amount1_owed = get_amounts_for_liquidity(
        sqrt_price_x96, sqrt_ratio_lower_x96, sqrt_ratio_upper_x96, liquidity, round_up=True
    )
    logger.debug(
        "Rounded range [%d, %d]: liquidity=%d amount0=%d amount1=%d",
        tick_lower, tick_upper, liquidity, amount0_owed, amount1_owed
    )

    return PositionResult(
        tick_lower=tick_lower,
        tick_upper=tick_upper,
        sqrt_price_lower_x96=sqrt_ratio_lower_x96,
        sqrt_price_upper_x96=sqrt_ratio_upper_x96,
        liquidity=liquidity,
        amount0_owed=amount0_owed,
        amount1_owed=amount1_owed,
    )


def create_position(
    pool: PoolLike,
    width: int,
    amount0: int,
    amount1: int,
    recipient: Optional[str] = None
) -> PositionResult:
    """포지션을 계산하고 풀에 민트

    Args:
        pool: 풀 collaborator
        width: 범위 width (0 ~ N-1)
        amount0: 예치할 token0 최대 수량
        amount1: 예치할 token1 최대 수량
        recipient: 포지션 소유자. None 이면 settings.RECIPIENT

    Returns:
        PositionResult (풀이 실제로 받은 수량)

    Raises:
        SlippageCheckFailed: 풀이 예산보다 많은 수량을 요구한 경우.
            예산은 mint 에 상한으로 전달되므로 풀 상태는 변경되지 않음
    """
    # 풀을 읽기 전에 검사
    request = PositionRequest(width=width, amount0=amount0, amount1=amount1).validate()
    if recipient is None:
        recipient = settings.RECIPIENT

    result = build_position(pool.slot0(), pool.tick_spacing, request)
    # 풀이 상한을 넘는 지불을 상태 변경 전에 거부
    paid0, paid1 = pool.mint(
        recipient, result.tick_lower, result.tick_upper, result.liquidity,
        amount0_max=amount0, amount1_max=amount1
    )
    if paid0 > amount0 or paid1 > amount1:
        raise SlippageCheckFailed(
            f"풀이 예산보다 많은 수량을 요구했습니다: ({paid0}, {paid1}) > ({amount0}, {amount1})"
        )

    logger.info(
        "Created position [%d, %d] liquidity=%d for %s",
        result.tick_lower, result.tick_upper, result.liquidity, recipient
    )
    return replace(result, amount0_owed=paid0, amount1_owed=paid1)
