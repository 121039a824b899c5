"""
Range Math - width(bps) → 틱 범위 변환

현재 sqrtPriceX96 에 대칭 width 를 적용해 하한/상한 sqrt ratio 를 만들고,
TickMath 로 틱을 구한 뒤 풀의 틱 간격에 맞춰 정렬합니다.

    lower_ratio = sqrtP * (10000 - width) / 10000
    upper_ratio = sqrtP * (10000 + width) / 10000

width 는 sqrt price 에 적용되므로 가격 기준으로는 대략 2배의 폭이 됩니다
(width=1000 → 가격 -19% ~ +21%).
"""

import logging
from typing import Tuple, Dict, Any

from ..constants import BPS_DENOMINATOR, UINT160_MAX, UINT256_MAX
from ..errors import ArithmeticOverflowError, InvalidWidthError, PriceOutOfBoundsError
from .tick_math import (
    TickAlignment,
    align_tick,
    align_tick_up,
    get_sqrt_ratio_at_tick,
    get_tick_at_sqrt_ratio,
    tick_to_price,
    usable_tick_bounds,
)

logger = logging.getLogger(__name__)


def validate_width(width: int) -> int:
    """width 검증 (1 ~ 9999 bps)

    width=0 은 하한과 상한이 같은 퇴화 범위이므로 거부합니다.
    """
    if not isinstance(width, int) or isinstance(width, bool):
        raise InvalidWidthError(f"width 는 정수(bps)여야 합니다: {width!r}")
    if width <= 0 or width >= BPS_DENOMINATOR:
        raise InvalidWidthError(
            f"width 는 0 < width < {BPS_DENOMINATOR} 이어야 합니다: {width}"
        )
    return width


def _scale_ratio(sqrt_price_x96: int, factor: int) -> int:
    product = sqrt_price_x96 * factor
    if product > UINT256_MAX:
        raise ArithmeticOverflowError(
            f"sqrtPriceX96 * {factor} 가 uint256 범위를 넘습니다"
        )
    ratio = product // BPS_DENOMINATOR
    if ratio > UINT160_MAX:
        raise ArithmeticOverflowError(
            f"스케일된 sqrt ratio 가 uint160 범위를 넘습니다: {ratio}"
        )
    return ratio


def sqrt_ratio_bounds(sqrt_price_x96: int, width: int) -> Tuple[int, int]:
    """width 에 해당하는 (lower_ratio, upper_ratio) 계산 (floor 나눗셈)

    Raises:
        InvalidWidthError: width 가 범위를 벗어난 경우
        ArithmeticOverflowError: 곱셈 또는 결과가 고정 폭 범위를 넘는 경우
    """
    validate_width(width)
    if sqrt_price_x96 <= 0 or sqrt_price_x96 > UINT160_MAX:
        raise PriceOutOfBoundsError(f"유효하지 않은 sqrtPriceX96: {sqrt_price_x96}")

    lower_ratio = _scale_ratio(sqrt_price_x96, BPS_DENOMINATOR - width)
    upper_ratio = _scale_ratio(sqrt_price_x96, BPS_DENOMINATOR + width)
    return lower_ratio, upper_ratio


def compute_ticks(
    sqrt_price_x96: int,
    tick_spacing: int,
    width: int,
    alignment: TickAlignment = TickAlignment.FLOOR,
) -> Tuple[int, int]:
    """현재 가격과 width 로 (tick_lower, tick_upper) 계산

    Args:
        sqrt_price_x96: 풀의 현재 sqrtPriceX96
        tick_spacing: 풀의 틱 간격
        width: 대칭 폭 (bps, 1 ~ 9999)
        alignment: 틱 정렬 방식. 기본값 FLOOR

    Returns:
        (tick_lower, tick_upper). 둘 다 tick_spacing 의 배수이고
        tick_lower < tick_upper 를 만족합니다.

    Raises:
        InvalidWidthError, InvalidTickSpacingError, ArithmeticOverflowError,
        PriceOutOfBoundsError

    Example:
        >>> compute_ticks(get_sqrt_ratio_at_tick(1000), 60, 1000)
        (-1140, 2880)
    """
    lower_ratio, upper_ratio = sqrt_ratio_bounds(sqrt_price_x96, width)

    raw_lower = get_tick_at_sqrt_ratio(lower_ratio)
    raw_upper = get_tick_at_sqrt_ratio(upper_ratio)

    alignment = TickAlignment(alignment)
    tick_lower = align_tick(raw_lower, tick_spacing, alignment)
    if alignment is TickAlignment.OUTWARD:
        tick_upper = align_tick_up(raw_upper, tick_spacing)
    else:
        tick_upper = align_tick(raw_upper, tick_spacing, alignment)

    # 정렬로 범위가 사라지면 가장 좁은 유효 범위로 넓힘
    if tick_upper <= tick_lower:
        tick_upper = tick_lower + tick_spacing

    min_usable, max_usable = usable_tick_bounds(tick_spacing)
    if tick_lower < min_usable or tick_upper > max_usable:
        raise PriceOutOfBoundsError(
            f"정렬된 틱 범위가 유효 범위를 벗어났습니다: [{tick_lower}, {tick_upper}] "
            f"(범위: {min_usable} ~ {max_usable})"
        )

    logger.debug(
        "width=%s spacing=%s raw=[%s, %s] aligned=[%s, %s] mode=%s",
        width, tick_spacing, raw_lower, raw_upper, tick_lower, tick_upper, alignment.value,
    )
    return tick_lower, tick_upper


def describe_range(
    sqrt_price_x96: int,
    tick_spacing: int,
    width: int,
    alignment: TickAlignment = TickAlignment.FLOOR,
    token0_decimals: int = 18,
    token1_decimals: int = 18,
) -> Dict[str, Any]:
    """compute_ticks 결과와 각 경계의 sqrt price / 가격을 함께 반환"""
    lower_ratio, upper_ratio = sqrt_ratio_bounds(sqrt_price_x96, width)
    tick_lower, tick_upper = compute_ticks(sqrt_price_x96, tick_spacing, width, alignment)
    current_tick = get_tick_at_sqrt_ratio(sqrt_price_x96)

    return {
        "current_tick": current_tick,
        "tick_lower": tick_lower,
        "tick_upper": tick_upper,
        "sqrt_ratio_lower_x96": lower_ratio,
        "sqrt_ratio_upper_x96": upper_ratio,
        "sqrt_price_lower_x96": get_sqrt_ratio_at_tick(tick_lower),
        "sqrt_price_upper_x96": get_sqrt_ratio_at_tick(tick_upper),
        "price_lower": tick_to_price(tick_lower, token0_decimals, token1_decimals),
        "price_upper": tick_to_price(tick_upper, token0_decimals, token1_decimals),
        "in_range": tick_lower <= current_tick < tick_upper,
    }
