"""
Position grid analysis

가격 × width 격자에서 포지션을 계산하고 반올림 오차를 DataFrame 으로 정리합니다.
계산이 불가능한 조합은 error 컬럼에 예외 이름을 남깁니다.
"""

import logging
from fractions import Fraction
from typing import Iterable, Optional

import pandas as pd

from .config import settings
from .constants import N
from .data.types import PositionRequest, Slot0
from .errors import PositionBuilderError
from .math.sqrt_price_math import price_to_sqrt_price_x96
from .math.tick_math import get_tick_at_sqrt_ratio, get_tick_spacing_for_fee
from .position_builder import build_position

logger = logging.getLogger(__name__)

# 소수(prime) 비율은 반올림 오차가 가장 크게 드러나는 값들
_PRIMES = (2, 3, 5, 7)
DEFAULT_PRICES = sorted(
    [Fraction(p, 11) for p in _PRIMES] + [Fraction(1)] + [Fraction(p) for p in _PRIMES]
)
DEFAULT_WIDTHS = sorted([1] + [p * 31 for p in _PRIMES] + [N - p * 37 for p in _PRIMES])

COLUMNS = [
    "price", "width", "tick_lower", "tick_upper", "liquidity",
    "amount0_owed", "amount1_owed", "shortfall0", "shortfall1",
    "effective_width", "width_error", "error",
]


def position_grid(
    prices: Iterable = DEFAULT_PRICES,
    widths: Iterable[int] = DEFAULT_WIDTHS,
    amount0: int = 10_000,
    amount1: int = 15_000,
    fee_tier: Optional[int] = None,
) -> pd.DataFrame:
    """가격 × width 격자의 포지션 계산 결과

    Args:
        prices: 현재 가격 목록 (token1/token0, 소수점 보정 없음)
        widths: width 목록
        amount0: token0 예산
        amount1: token1 예산
        fee_tier: 수수료 티어. None 이면 settings.FEE_TIER

    Returns:
        (price, width) 조합마다 한 행인 DataFrame
    """
    if fee_tier is None:
        tick_spacing = settings.tick_spacing
    else:
        tick_spacing = get_tick_spacing_for_fee(fee_tier)
    widths = list(widths)

    rows = []
    for price in prices:
        sqrt_price_x96 = price_to_sqrt_price_x96(price)
        slot0 = Slot0(sqrt_price_x96=sqrt_price_x96, tick=get_tick_at_sqrt_ratio(sqrt_price_x96))

        for width in widths:
            row = dict.fromkeys(COLUMNS)
            row["price"] = float(Fraction(price))
            row["width"] = width
            try:
                result = build_position(slot0, tick_spacing, PositionRequest(width, amount0, amount1))
            except PositionBuilderError as e:
                logger.debug("price=%s width=%d failed: %s", price, width, e)
                row["error"] = type(e).__name__
                rows.append(row)
                continue

            row.update(
                tick_lower=result.tick_lower,
                tick_upper=result.tick_upper,
                liquidity=result.liquidity,
                amount0_owed=result.amount0_owed,
                amount1_owed=result.amount1_owed,
                shortfall0=amount0 - result.amount0_owed,
                shortfall1=amount1 - result.amount1_owed,
                effective_width=float(result.width),
                width_error=float(result.width - width),
            )
            rows.append(row)

    return pd.DataFrame(rows, columns=COLUMNS)
