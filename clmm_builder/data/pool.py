"""
Pool - 포지션을 기록하는 풀 collaborator

PositionBuilder 는 풀을 블랙박스로 다룹니다. 필요한 인터페이스는
PoolLike 프로토콜로 정의되며, SimulatedPool 은 오프체인 시뮬레이션과
테스트를 위한 인메모리 구현입니다.

SimulatedPool 의 모든 상태 변경은 풀 단위 lock 으로 직렬화됩니다.
서로 다른 포지션 생성 호출은 병렬로 실행해도 풀의 가격/유동성 상태를
통해서만 상호작용합니다.
"""

import logging
import threading
from collections import defaultdict
from typing import Dict, Optional, Protocol, Tuple

from ..constants import MIN_TICK, MAX_TICK, UINT128_MAX
from ..errors import (
    InsufficientBalance,
    InvalidTickRange,
    PoolAlreadyInitialized,
    PoolError,
    PoolNotInitialized,
    SlippageCheckFailed,
)
from ..math.liquidity_math import get_amounts_for_liquidity
from ..math.tick_math import (
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    get_tick_spacing_for_fee,
)
from .types import Position, Slot0

logger = logging.getLogger(__name__)


class PoolLike(Protocol):
    """PositionBuilder 가 사용하는 풀 인터페이스"""

    @property
    def token0(self) -> str: ...

    @property
    def token1(self) -> str: ...

    @property
    def tick_spacing(self) -> int: ...

    def slot0(self) -> Slot0: ...

    def initialize(self, sqrt_price_x96: int) -> None: ...

    def mint(
        self,
        recipient: str,
        tick_lower: int,
        tick_upper: int,
        liquidity: int,
        amount0_max: Optional[int] = None,
        amount1_max: Optional[int] = None
    ) -> Tuple[int, int]: ...


class SimulatedPool:
    """인메모리 집중 유동성 풀

    사용법:
        pool = SimulatedPool("0xaaa...", "0xbbb...", fee=3000)
        pool.initialize(encode_price_sqrt(1, 1))
        pool.fund("0xowner", 10**18, 10**18)
        amount0, amount1 = pool.mint("0xowner", -600, 600, 10**15)
    """

    def __init__(
        self,
        token_a: str,
        token_b: str,
        fee: int = 3000,
        tick_spacing: Optional[int] = None
    ):
        """
        Args:
            token_a: 토큰 주소 (정렬 전)
            token_b: 토큰 주소 (정렬 전)
            fee: 수수료 티어 (100, 500, 3000, 10000)
            tick_spacing: 틱 간격. None 이면 fee 에서 결정
        """
        if token_a.lower() == token_b.lower():
            raise PoolError(f"같은 토큰으로 풀을 만들 수 없습니다: {token_a}")
        if tick_spacing is None:
            tick_spacing = get_tick_spacing_for_fee(fee)
        if tick_spacing <= 0:
            raise PoolError(f"틱 간격은 양수여야 합니다: {tick_spacing}")

        self._token0, self._token1 = sorted((token_a, token_b), key=str.lower)
        self.fee = fee
        self._tick_spacing = tick_spacing

        self._lock = threading.RLock()
        self._slot0: Optional[Slot0] = None
        self._liquidity = 0
        self._reserves = [0, 0]
        self._balances: Dict[Tuple[str, str], int] = defaultdict(int)
        self._positions: Dict[Tuple[str, int, int], Position] = {}

    @property
    def token0(self) -> str:
        return self._token0

    @property
    def token1(self) -> str:
        return self._token1

    @property
    def tick_spacing(self) -> int:
        return self._tick_spacing

    @property
    def liquidity(self) -> int:
        """현재 틱에서 활성화된 유동성"""
        with self._lock:
            return self._liquidity

    @property
    def reserves(self) -> Tuple[int, int]:
        with self._lock:
            return self._reserves[0], self._reserves[1]

    def initialize(self, sqrt_price_x96: int) -> None:
        """초기 가격 설정 (한 번만 가능)

        Raises:
            PoolAlreadyInitialized: 이미 초기화된 경우
            PriceOutOfRange: sqrtPriceX96 이 틱 범위를 벗어난 경우
        """
        with self._lock:
            if self._slot0 is not None:
                raise PoolAlreadyInitialized(
                    f"풀이 이미 초기화되었습니다: sqrtPriceX96={self._slot0.sqrt_price_x96}"
                )
            tick = get_tick_at_sqrt_ratio(sqrt_price_x96)
            self._slot0 = Slot0(sqrt_price_x96=sqrt_price_x96, tick=tick)
            logger.info("Pool %s/%s initialized at tick %d", self._token0, self._token1, tick)

    def slot0(self) -> Slot0:
        with self._lock:
            if self._slot0 is None:
                raise PoolNotInitialized("풀이 초기화되지 않았습니다")
            return self._slot0

    def fund(self, owner: str, amount0: int = 0, amount1: int = 0) -> None:
        """owner 에게 토큰 잔고 지급"""
        if amount0 < 0 or amount1 < 0:
            raise ValueError(f"수량은 음수일 수 없습니다: amount0={amount0}, amount1={amount1}")
        with self._lock:
            self._balances[(self._token0, owner)] += amount0
            self._balances[(self._token1, owner)] += amount1

    def balance_of(self, token: str, owner: str) -> int:
        with self._lock:
            return self._balances.get((token, owner), 0)

    def get_position(self, owner: str, tick_lower: int, tick_upper: int) -> Optional[Position]:
        with self._lock:
            return self._positions.get((owner, tick_lower, tick_upper))

    def mint(
        self,
        recipient: str,
        tick_lower: int,
        tick_upper: int,
        liquidity: int,
        amount0_max: Optional[int] = None,
        amount1_max: Optional[int] = None
    ) -> Tuple[int, int]:
        """포지션에 유동성 추가

        예치 수량은 올림으로 계산되어 recipient 잔고에서 차감됩니다.
        실패하면 잔고, reserves, 포지션 모두 변경되지 않습니다.

        Args:
            recipient: 포지션 소유자 (토큰을 지불하는 주소)
            tick_lower: 하한 틱 (tick_spacing 배수)
            tick_upper: 상한 틱 (tick_spacing 배수)
            liquidity: 추가할 유동성
            amount0_max: 지불할 token0 상한. None 이면 제한 없음
            amount1_max: 지불할 token1 상한. None 이면 제한 없음

        Returns:
            (amount0, amount1) 예치된 수량

        Raises:
            InvalidTickRange: 틱 범위가 잘못된 경우
            PoolError: liquidity <= 0
            PoolNotInitialized: 초기화 전
            SlippageCheckFailed: 예치 수량이 상한을 초과
            InsufficientBalance: 잔고 부족
        """
        self._check_ticks(tick_lower, tick_upper)
        if liquidity <= 0 or liquidity > UINT128_MAX:
            raise PoolError(f"유동성이 유효하지 않습니다: {liquidity}")

        sqrt_ratio_a_x96 = get_sqrt_ratio_at_tick(tick_lower)
        sqrt_ratio_b_x96 = get_sqrt_ratio_at_tick(tick_upper)

        with self._lock:
            slot0 = self.slot0()
            amount0, amount1 = get_amounts_for_liquidity(
                slot0.sqrt_price_x96, sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, round_up=True
            )
            if (amount0_max is not None and amount0 > amount0_max) or \
                    (amount1_max is not None and amount1 > amount1_max):
                raise SlippageCheckFailed(
                    f"예치 수량이 상한을 초과합니다: ({amount0}, {amount1}) > ({amount0_max}, {amount1_max})"
                )

            balance0 = self._balances.get((self._token0, recipient), 0)
            balance1 = self._balances.get((self._token1, recipient), 0)
            if balance0 < amount0 or balance1 < amount1:
                raise InsufficientBalance(
                    f"잔고가 부족합니다: 필요 ({amount0}, {amount1}), 보유 ({balance0}, {balance1})"
                )

            self._balances[(self._token0, recipient)] = balance0 - amount0
            self._balances[(self._token1, recipient)] = balance1 - amount1
            self._reserves[0] += amount0
            self._reserves[1] += amount1

            key = (recipient, tick_lower, tick_upper)
            position = self._positions.get(key)
            if position is None:
                position = Position(owner=recipient, tick_lower=tick_lower, tick_upper=tick_upper)
                self._positions[key] = position
            position.liquidity += liquidity

            if tick_lower <= slot0.tick < tick_upper:
                self._liquidity += liquidity

        logger.info(
            "Minted liquidity %d in [%d, %d] for %s: amount0=%d amount1=%d",
            liquidity, tick_lower, tick_upper, recipient, amount0, amount1
        )
        return amount0, amount1

    def _check_ticks(self, tick_lower: int, tick_upper: int) -> None:
        if tick_lower >= tick_upper:
            raise InvalidTickRange(f"tick_lower >= tick_upper: {tick_lower} >= {tick_upper}")
        if tick_lower < MIN_TICK or tick_upper > MAX_TICK:
            raise InvalidTickRange(
                f"틱이 유효 범위를 벗어났습니다: [{tick_lower}, {tick_upper}] (범위: {MIN_TICK} ~ {MAX_TICK})"
            )
        if tick_lower % self._tick_spacing or tick_upper % self._tick_spacing:
            raise InvalidTickRange(
                f"틱이 tick spacing {self._tick_spacing} 의 배수가 아닙니다: [{tick_lower}, {tick_upper}]"
            )
