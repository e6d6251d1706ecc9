"""
SimulatedPool 테스트
"""

from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction

import pytest

from ..constants import MAX_TICK, UINT128_MAX
from ..errors import (
    InsufficientBalance,
    InvalidTickRange,
    PoolAlreadyInitialized,
    PoolError,
    PoolNotInitialized,
    PriceOutOfRange,
    SlippageCheckFailed,
)
from ..data.pool import SimulatedPool
from ..math.liquidity_math import get_amounts_for_liquidity
from ..math.tick_math import get_sqrt_ratio_at_tick
from .conftest import TOKEN_A, TOKEN_B, INITIAL_BALANCE
from .parameters import sqrt_x96


class TestPoolSetup:
    """생성과 초기화"""

    def test_tokens_sorted(self):
        """토큰은 주소 순으로 정렬"""
        pool = SimulatedPool(TOKEN_B, TOKEN_A)
        assert pool.token0 == TOKEN_A
        assert pool.token1 == TOKEN_B

    def test_same_token(self):
        with pytest.raises(PoolError):
            SimulatedPool(TOKEN_A, TOKEN_A.upper())

    @pytest.mark.parametrize("fee,spacing", [(100, 1), (500, 10), (3000, 60), (10000, 200)])
    def test_tick_spacing_from_fee(self, fee, spacing):
        assert SimulatedPool(TOKEN_A, TOKEN_B, fee=fee).tick_spacing == spacing

    def test_explicit_tick_spacing(self):
        assert SimulatedPool(TOKEN_A, TOKEN_B, tick_spacing=15).tick_spacing == 15

    def test_initialize(self):
        pool = SimulatedPool(TOKEN_A, TOKEN_B)
        pool.initialize(get_sqrt_ratio_at_tick(-1234))
        slot0 = pool.slot0()
        assert slot0.tick == -1234
        assert slot0.sqrt_price_x96 == get_sqrt_ratio_at_tick(-1234)

    def test_initialize_twice(self, make_pool):
        pool = make_pool(price=1)
        with pytest.raises(PoolAlreadyInitialized):
            pool.initialize(sqrt_x96(2))

    def test_slot0_before_initialize(self, make_pool):
        pool = make_pool()
        with pytest.raises(PoolNotInitialized):
            pool.slot0()

    def test_initialize_out_of_range(self):
        pool = SimulatedPool(TOKEN_A, TOKEN_B)
        with pytest.raises(PriceOutOfRange):
            pool.initialize(1)


class TestMint:
    """mint 테스트"""

    def test_mint_in_range(self, make_pool, wallet):
        """범위 내 민트: 두 토큰 모두 차감, 활성 유동성 증가"""
        pool = make_pool(price=1)
        liquidity = 10 ** 18
        amount0, amount1 = pool.mint(wallet, -600, 600, liquidity)

        expected = get_amounts_for_liquidity(
            pool.slot0().sqrt_price_x96,
            get_sqrt_ratio_at_tick(-600),
            get_sqrt_ratio_at_tick(600),
            liquidity,
            round_up=True
        )
        assert (amount0, amount1) == expected
        assert amount0 > 0 and amount1 > 0
        assert pool.balance_of(pool.token0, wallet) == INITIAL_BALANCE - amount0
        assert pool.balance_of(pool.token1, wallet) == INITIAL_BALANCE - amount1
        assert pool.reserves == (amount0, amount1)
        assert pool.liquidity == liquidity
        assert pool.get_position(wallet, -600, 600).liquidity == liquidity

    def test_mint_out_of_range(self, make_pool, wallet):
        """현재가 위 범위: token0 만, 활성 유동성 변화 없음"""
        pool = make_pool(price=1)
        amount0, amount1 = pool.mint(wallet, 600, 1200, 10 ** 18)
        assert amount0 > 0
        assert amount1 == 0
        assert pool.liquidity == 0

    def test_mint_accumulates(self, make_pool, wallet):
        """같은 범위에 두 번 민트하면 유동성 합산"""
        pool = make_pool(price=1)
        pool.mint(wallet, -60, 60, 1000)
        pool.mint(wallet, -60, 60, 2000)
        assert pool.get_position(wallet, -60, 60).liquidity == 3000

    @pytest.mark.parametrize("tick_lower,tick_upper", [
        (60, 60),
        (120, 60),
        (-30, 60),
        (-60, 90),
        (-MAX_TICK - 60, 0),
    ])
    def test_invalid_ticks(self, make_pool, wallet, tick_lower, tick_upper):
        pool = make_pool(price=1)
        with pytest.raises(InvalidTickRange):
            pool.mint(wallet, tick_lower, tick_upper, 1000)

    @pytest.mark.parametrize("liquidity", [0, -1, UINT128_MAX + 1])
    def test_invalid_liquidity(self, make_pool, wallet, liquidity):
        pool = make_pool(price=1)
        with pytest.raises(PoolError):
            pool.mint(wallet, -60, 60, liquidity)

    def test_amount_max(self, make_pool, wallet):
        """상한을 넘는 예치 수량이면 상태 변화 없이 실패"""
        pool = make_pool(price=1)
        amount0, amount1 = get_amounts_for_liquidity(
            pool.slot0().sqrt_price_x96,
            get_sqrt_ratio_at_tick(-600),
            get_sqrt_ratio_at_tick(600),
            10 ** 18,
            round_up=True
        )

        with pytest.raises(SlippageCheckFailed):
            pool.mint(wallet, -600, 600, 10 ** 18, amount0_max=amount0 - 1, amount1_max=amount1)
        assert pool.reserves == (0, 0)
        assert pool.liquidity == 0
        assert pool.get_position(wallet, -600, 600) is None
        assert pool.balance_of(pool.token0, wallet) == INITIAL_BALANCE

        # 상한과 정확히 같으면 성공
        assert pool.mint(wallet, -600, 600, 10 ** 18, amount0, amount1) == (amount0, amount1)

    def test_insufficient_balance(self, make_pool):
        """잔고 부족이면 상태 변화 없음"""
        pool = make_pool(price=1)
        with pytest.raises(InsufficientBalance):
            pool.mint("0x" + "2" * 40, -60, 60, 10 ** 18)
        assert pool.reserves == (0, 0)
        assert pool.liquidity == 0

    def test_mint_before_initialize(self, make_pool, wallet):
        pool = make_pool()
        with pytest.raises(PoolNotInitialized):
            pool.mint(wallet, -60, 60, 1000)

    def test_fund_negative(self, make_pool, wallet):
        pool = make_pool(price=1)
        with pytest.raises(ValueError):
            pool.fund(wallet, -1, 0)


class TestConcurrentMint:
    """동시 민트는 직렬화되어 합계가 보존됨"""

    def test_parallel_mints(self, make_pool, wallet):
        pool = make_pool(price=Fraction(7))
        tick = pool.slot0().tick
        base = tick - tick % 60
        ranges = [(base - 60 * k, base + 60 * k) for k in range(1, 17)]

        with ThreadPoolExecutor(max_workers=8) as executor:
            paid = list(executor.map(lambda r: pool.mint(wallet, r[0], r[1], 10 ** 15), ranges))

        total0 = sum(p[0] for p in paid)
        total1 = sum(p[1] for p in paid)
        assert pool.reserves == (total0, total1)
        assert pool.balance_of(pool.token0, wallet) == INITIAL_BALANCE - total0
        assert pool.balance_of(pool.token1, wallet) == INITIAL_BALANCE - total1
        assert pool.liquidity == 16 * 10 ** 15


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
