"""
Tick Math - Tick ↔ sqrtPriceX96 변환

Uniswap V3 TickMath 라이브러리의 정수 연산 포팅. 외부 포지션 매니저는
자신의 틱 그리드와 비트 단위로 일치하지 않는 범위를 거부하므로 모든 변환은
온체인 구현과 동일한 결과를 내야 합니다.

References:
- Uniswap V3 Core: contracts/libraries/TickMath.sol
- 백서 Section 6.1: Ticks and Tick Spacing

핵심 공식:
    price = 1.0001^tick
    sqrtPriceX96 = sqrt(price) * 2^96
"""

from enum import Enum
from typing import Tuple

from ..constants import (
    MIN_TICK,
    MAX_TICK,
    MIN_SQRT_RATIO,
    MAX_SQRT_RATIO,
    TICK_SPACINGS,
    UINT256_MAX,
)
from ..errors import InvalidTickSpacingError, PriceOutOfBoundsError


# |tick| 의 비트 i 가 켜져 있을 때 곱하는 Q128.128 상수 (1/sqrt(1.0001)^(2^i))
_TICK_BIT_FACTORS: Tuple[int, ...] = (
    0xfffcb933bd6fad37aa2d162d1a594001,
    0xfff97272373d413259a46990580e213a,
    0xfff2e50f5f656932ef12357cf3c7fdcc,
    0xffe5caca7e10e4e61c3624eaa0941cd0,
    0xffcb9843d60f6159c9db58835c926644,
    0xff973b41fa98c081472e6896dfb254c0,
    0xff2ea16466c96a3843ec78b326b52861,
    0xfe5dee046a99a2a811c461f1969c3053,
    0xfcbe86c7900a88aedcffc83b479aa3a4,
    0xf987a7253ac413176f2b074cf7815e54,
    0xf3392b0822b70005940c7a398e4b70f3,
    0xe7159475a2c29b7443b29c7fa6e889d9,
    0xd097f3bdfd2022b8845ad8f792aa5825,
    0xa9f746462d870fdf8a65dc1f90e061e5,
    0x70d869a156d2a1b890bb3df62baf32f7,
    0x31be135f97d08fd981231505542fcfa6,
    0x9aa508b5b7a84e1c677de54f3e99bc9,
    0x5d6af8dedb81196699c329225ee604,
    0x2216e584f5fa1ea926041bedfe98,
    0x48a170391f7dc42444e8fa2,
)

# log_sqrt(1.0001)(2) * 2^64
_LOG_SQRT10001_MULTIPLIER = 255738958999603826347141
_TICK_LOW_OFFSET = 3402992956809132418596140100660247210
_TICK_HIGH_OFFSET = 291339464771989622907027621153398088495


class TickAlignment(str, Enum):
    """틱 간격 정렬 방식

    - FLOOR: 음의 무한대 방향 (tick // spacing * spacing)
    - TRUNCATE: 0 방향 절사 나머지 (tick - tick rem spacing), 음수 틱은 올라감
    - OUTWARD: 하한은 FLOOR, 상한은 올림 (범위를 바깥으로 넓힘)
    """
    FLOOR = "floor"
    TRUNCATE = "truncate"
    OUTWARD = "outward"


def get_sqrt_ratio_at_tick(tick: int) -> int:
    """틱에서 sqrtPriceX96 계산

    Solidity TickMath.getSqrtRatioAtTick()과 동일한 구현.

    Args:
        tick: 틱 인덱스 (-887272 ~ 887272)

    Returns:
        sqrtPriceX96 (Q64.96 형식)

    Raises:
        PriceOutOfBoundsError: 틱이 유효 범위를 벗어난 경우
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise PriceOutOfBoundsError(
            f"틱이 유효 범위를 벗어났습니다: {tick} (범위: {MIN_TICK} ~ {MAX_TICK})"
        )

    abs_tick = abs(tick)

    ratio = _TICK_BIT_FACTORS[0] if abs_tick & 0x1 else 1 << 128
    for bit, factor in enumerate(_TICK_BIT_FACTORS[1:], start=1):
        if abs_tick & (1 << bit):
            ratio = (ratio * factor) >> 128

    if tick > 0:
        ratio = UINT256_MAX // ratio

    # Q128.128 -> Q64.96, 올림
    return (ratio >> 32) + (1 if ratio % (1 << 32) else 0)


def get_tick_at_sqrt_ratio(sqrt_price_x96: int) -> int:
    """sqrtPriceX96 이하의 sqrt price 를 갖는 가장 큰 틱

    Solidity TickMath.getTickAtSqrtRatio()과 동일한 구현.
    최상위 비트는 int.bit_length() 로 구합니다.

    Raises:
        PriceOutOfBoundsError: sqrtPriceX96이 [MIN_SQRT_RATIO, MAX_SQRT_RATIO) 밖인 경우
    """
    if sqrt_price_x96 < MIN_SQRT_RATIO or sqrt_price_x96 >= MAX_SQRT_RATIO:
        raise PriceOutOfBoundsError(
            f"sqrtPriceX96이 유효 범위를 벗어났습니다: {sqrt_price_x96}"
        )

    ratio = sqrt_price_x96 << 32
    msb = ratio.bit_length() - 1

    if msb >= 128:
        r = ratio >> (msb - 127)
    else:
        r = ratio << (127 - msb)

    log_2 = (msb - 128) << 64

    # log2 소수부 14비트
    for i in range(14):
        r = (r * r) >> 127
        f = r >> 128
        log_2 |= f << (63 - i)
        r >>= f

    log_sqrt10001 = log_2 * _LOG_SQRT10001_MULTIPLIER

    tick_low = (log_sqrt10001 - _TICK_LOW_OFFSET) >> 128
    tick_high = (log_sqrt10001 + _TICK_HIGH_OFFSET) >> 128

    if tick_low == tick_high:
        return tick_low

    return tick_high if get_sqrt_ratio_at_tick(tick_high) <= sqrt_price_x96 else tick_low


def tick_to_price(tick: int, token0_decimals: int = 18, token1_decimals: int = 18) -> float:
    """틱을 human-readable 가격(token1/token0)으로 변환

    price = 1.0001^tick × 10^(token0_decimals - token1_decimals)
    """
    return 1.0001 ** tick * (10 ** (token0_decimals - token1_decimals))


def align_tick(tick: int, tick_spacing: int, mode: TickAlignment = TickAlignment.FLOOR) -> int:
    """틱을 tick_spacing 의 배수로 정렬

    Args:
        tick: 정렬할 틱
        tick_spacing: 틱 간격 (예: 60 for 0.3% fee)
        mode: FLOOR 또는 TRUNCATE. OUTWARD 는 범위 단위 정렬이므로
            여기서는 FLOOR 로 취급합니다.

    Returns:
        정렬된 틱

    Example:
        >>> align_tick(-1108, 60)
        -1140
        >>> align_tick(-1108, 60, TickAlignment.TRUNCATE)
        -1080
    """
    _check_spacing(tick_spacing)

    if TickAlignment(mode) is TickAlignment.TRUNCATE:
        remainder = abs(tick) % tick_spacing
        return tick + remainder if tick < 0 else tick - remainder

    return (tick // tick_spacing) * tick_spacing


def align_tick_up(tick: int, tick_spacing: int) -> int:
    """틱을 tick_spacing 의 배수로 올림"""
    _check_spacing(tick_spacing)
    return -((-tick) // tick_spacing) * tick_spacing


def usable_tick_bounds(tick_spacing: int) -> Tuple[int, int]:
    """주어진 간격에서 사용 가능한 (최소, 최대) 틱"""
    _check_spacing(tick_spacing)
    max_usable = (MAX_TICK // tick_spacing) * tick_spacing
    return -max_usable, max_usable


def get_tick_spacing_for_fee(fee_tier: int) -> int:
    """수수료 티어에 해당하는 틱 간격 반환"""
    if fee_tier not in TICK_SPACINGS:
        raise InvalidTickSpacingError(f"지원하지 않는 수수료 티어: {fee_tier}")
    return TICK_SPACINGS[fee_tier]


def _check_spacing(tick_spacing: int) -> None:
    if not isinstance(tick_spacing, int) or isinstance(tick_spacing, bool) or tick_spacing <= 0:
        raise InvalidTickSpacingError(f"틱 간격은 양의 정수여야 합니다: {tick_spacing}")
