"""
Math layer for the CLMM position builder

온체인 수준 정밀도의 수학 함수들:
- full_math: mul_div, 정수 제곱근
- sqrt_price_math: sqrtPriceX96 ↔ 가격 변환
- tick_math: Tick ↔ sqrtPrice 변환, 틱 간격 반올림
- range_math: width 기반 가격 범위
- liquidity_math: 유동성 ↔ 토큰 수량
"""

from .full_math import (
    mul_div,
    mul_div_rounding_up,
    div_rounding_up,
    sqrt_integer,
    sqrt_integer_rounding_up,
)
from .sqrt_price_math import (
    check_sqrt_price,
    encode_price_sqrt,
    sqrt_price_x96_to_price,
    sqrt_price_x96_to_price_int,
    price_to_sqrt_price_x96,
)
from .tick_math import (
    Round,
    get_tick_at_sqrt_ratio,
    get_sqrt_ratio_at_tick,
    get_ceil_tick_at_sqrt_ratio,
    round_tick,
    get_tick_spacing_for_fee,
)
from .range_math import (
    sqrt_lower_price_x96,
    sqrt_upper_price_x96,
    price_range_for_width,
    calc_width_from_prices,
    calc_width_from_sqrt_prices,
)
from .liquidity_math import (
    get_amount0_delta,
    get_amount1_delta,
    liquidity_for_region_above_current_price,
    liquidity_for_region_below_current_price,
    liquidity_for_region_at_current_price,
    liquidity_for_width,
    get_liquidity_for_amounts,
    get_amounts_for_liquidity,
)
