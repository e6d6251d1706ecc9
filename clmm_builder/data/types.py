"""
포지션 빌더 데이터 타입 정의

요청/결과는 호출 한 번 동안만 존재하는 값 타입입니다.
모든 숫자 필드는 온체인 정밀도를 위해 int 타입 사용.
"""

from dataclasses import dataclass, asdict
from fractions import Fraction

from ..constants import N
from ..errors import EmptyDeposit, InvalidWidth


@dataclass(frozen=True)
class Slot0:
    """풀의 현재 가격 상태"""
    sqrt_price_x96: int  # 현재 sqrtPriceX96
    tick: int  # 현재 틱 (sqrt(tick) <= sqrtPrice 인 최대 틱)


@dataclass(frozen=True)
class PositionRequest:
    """포지션 생성 요청

    - width: 범위 width (0 ~ N-1)
    - amount0: 예치할 token0 최대 수량
    - amount1: 예치할 token1 최대 수량
    """
    width: int
    amount0: int
    amount1: int

    def validate(self) -> "PositionRequest":
        """요청 검사 (산술 연산 전에 수행)

        Raises:
            InvalidWidth: width < 0 또는 width >= N
            ValueError: 음수 수량
            EmptyDeposit: amount0 == amount1 == 0
        """
        if self.width < 0 or self.width >= N:
            raise InvalidWidth(f"width가 유효 범위를 벗어났습니다: {self.width} (범위: 0 ~ {N - 1})")
        if self.amount0 < 0 or self.amount1 < 0:
            raise ValueError(f"수량은 음수일 수 없습니다: amount0={self.amount0}, amount1={self.amount1}")
        if self.amount0 == 0 and self.amount1 == 0:
            raise EmptyDeposit("amount0 와 amount1 이 모두 0 입니다")
        return self


@dataclass(frozen=True)
class PositionResult:
    """포지션 생성 결과

    경계는 tick spacing 배수로 반올림된 값이며, liquidity 와 owed 수량은
    반올림된 경계에서 다시 계산된 값입니다.
    """
    tick_lower: int
    tick_upper: int
    sqrt_price_lower_x96: int
    sqrt_price_upper_x96: int
    liquidity: int
    amount0_owed: int
    amount1_owed: int

    @property
    def width(self) -> Fraction:
        """반올림된 경계의 실제 width"""
        lower_sq = self.sqrt_price_lower_x96 ** 2
        upper_sq = self.sqrt_price_upper_x96 ** 2
        return N * Fraction(upper_sq - lower_sq, upper_sq + lower_sq)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Position:
    """풀에 기록된 포지션"""
    owner: str
    tick_lower: int
    tick_upper: int
    liquidity: int = 0
