"""
공용 fixture

풀은 테스트마다 새로 만듭니다 (테스트 간 공유 상태 없음).
"""

import pytest

from ..data.pool import SimulatedPool
from .parameters import sqrt_x96

TOKEN_A = "0x" + "a" * 40
TOKEN_B = "0x" + "b" * 40
WALLET = "0x" + "1" * 40
INITIAL_BALANCE = 10 ** 30


@pytest.fixture
def wallet():
    return WALLET


@pytest.fixture
def make_pool(wallet):
    """make_pool(price=None, fee=3000) -> SimulatedPool

    price 가 주어지면 초기화하고, wallet 에 두 토큰을 충분히 지급합니다.
    """
    def _make_pool(price=None, fee=3000):
        pool = SimulatedPool(TOKEN_B, TOKEN_A, fee=fee)
        if price is not None:
            pool.initialize(sqrt_x96(price))
        pool.fund(wallet, INITIAL_BALANCE, INITIAL_BALANCE)
        return pool

    return _make_pool
