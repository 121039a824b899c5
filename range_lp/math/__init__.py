"""
Math layer for range_lp

온체인 수준 정밀도의 수학 함수들:
- tick_math: Tick ↔ sqrtPriceX96 변환, 틱 간격 정렬
- range_math: width(bps) → 틱 범위
- sqrt_price_math: sqrtPriceX96 ↔ 가격
- liquidity_math: 유동성 계산
"""

from .tick_math import (
    TickAlignment,
    get_tick_at_sqrt_ratio,
    get_sqrt_ratio_at_tick,
    tick_to_price,
    align_tick,
    align_tick_up,
    usable_tick_bounds,
    get_tick_spacing_for_fee,
)
from .range_math import (
    validate_width,
    sqrt_ratio_bounds,
    compute_ticks,
    describe_range,
)
from .sqrt_price_math import (
    sqrt_price_x96_to_price,
    price_to_sqrt_price_x96,
)
from .liquidity_math import (
    get_amount0_delta,
    get_amount1_delta,
    get_liquidity_for_amounts,
    get_amounts_for_liquidity,
)
