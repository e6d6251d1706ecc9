"""
Concentrated Liquidity 상수 정의

온체인 수준 정밀도를 위한 상수들:
- Q96: sqrt price 인코딩에 사용 (2^96)
- N: width 정규화 스케일 (basis points 와 유사)
- MAX_SQRT_PRICE: sqrtPriceX96 표현 가능 최대값 (uint160)
- FEE_TIERS / TICK_SPACINGS: 수수료 티어별 틱 간격
"""

from typing import Dict

# Fixed-point 인코딩 상수
Q96: int = 2 ** 96
Q192: int = 2 ** 192

# width 스케일: width = N * (Pu - Pl) / (Pu + Pl), 유효 범위 [0, N)
N: int = 10000

# sqrtPriceX96 상한 (uint160)
MAX_SQRT_PRICE: int = 2 ** 160 - 1

# 정수 폭
UINT128_MAX: int = 2 ** 128 - 1
UINT256_MAX: int = 2 ** 256 - 1
# mul_div 중간 누산기 (512비트)
UINT512_MAX: int = 2 ** 512 - 1

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# 수수료 티어 (hundredths of a bip)
# 500 = 0.05%, 3000 = 0.30%, 10000 = 1.00%
FEE_TIERS: Dict[int, str] = {
    100: "0.01%",
    500: "0.05%",
    3000: "0.30%",
    10000: "1.00%",
}

# 각 수수료 티어별 틱 간격
TICK_SPACINGS: Dict[int, int] = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}
