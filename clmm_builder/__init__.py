"""
CLMM Position Builder

집중 유동성(Concentrated Liquidity) AMM 의 범위/유동성 계산 라이브러리.
현재 가격, width, 예치 수량에서 틱 범위와 유동성, 예치 수량을
고정소수점 정수 연산으로 결정적으로 계산합니다.
"""

__version__ = "0.1.0"

from .constants import Q96, N, MAX_SQRT_PRICE, FEE_TIERS, TICK_SPACINGS
from .errors import (
    PositionBuilderError,
    InvalidWidth,
    EmptyDeposit,
    InfeasibleRange,
    PriceOutOfRange,
    Overflow,
    DivisionByZero,
    InsufficientAmount,
    SlippageCheckFailed,
)
from .data.types import Slot0, PositionRequest, PositionResult
from .data.pool import PoolLike, SimulatedPool
from .position_builder import build_position, create_position
