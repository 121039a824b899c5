"""
Liquidity Math - 유동성 계산

토큰 수량과 유동성 간의 변환. 오케스트레이터는 유동성을 직접 계산하지
않고 포지션 매니저에 위임하며, 이 모듈은 시뮬레이션 포지션 매니저와
견적(quote)에서 온체인과 같은 반올림으로 사용됩니다.

References:
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
- Uniswap V3 Periphery: contracts/libraries/LiquidityAmounts.sol

핵심 공식:
    L = Δy / (√P_upper - √P_lower)  # token1 기준
    L = Δx / (1/√P_lower - 1/√P_upper)  # token0 기준
"""

from typing import Tuple

from ..constants import Q96, UINT128_MAX
from ..errors import ArithmeticOverflowError


def _ordered(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int) -> Tuple[int, int]:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        return sqrt_ratio_b_x96, sqrt_ratio_a_x96
    return sqrt_ratio_a_x96, sqrt_ratio_b_x96


def mul_div(a: int, b: int, denominator: int, round_up: bool = False) -> int:
    """(a * b) / denominator, 내림 또는 올림"""
    quotient, remainder = divmod(a * b, denominator)
    if round_up and remainder:
        quotient += 1
    return quotient


def div_rounding_up(numerator: int, denominator: int) -> int:
    """numerator / denominator 올림"""
    return -(-numerator // denominator)


def _to_uint128(liquidity: int) -> int:
    if liquidity > UINT128_MAX:
        raise ArithmeticOverflowError(f"유동성이 uint128 범위를 넘습니다: {liquidity}")
    return liquidity


def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """두 가격 사이에서 유동성에 해당하는 token0 양

    공식: Δx = L * (√P_b - √P_a) / (√P_a * √P_b)
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    numerator1 = liquidity << 96
    numerator2 = sqrt_b - sqrt_a

    if round_up:
        return div_rounding_up(mul_div(numerator1, numerator2, sqrt_b, round_up=True), sqrt_a)
    return mul_div(numerator1, numerator2, sqrt_b) // sqrt_a


def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """두 가격 사이에서 유동성에 해당하는 token1 양

    공식: Δy = L * (√P_b - √P_a)
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    return mul_div(liquidity, sqrt_b - sqrt_a, Q96, round_up=round_up)


def get_liquidity_for_amount0(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount0: int) -> int:
    """amount0 으로 얻을 수 있는 최대 유동성 (내림)

    공식: L = Δx * √P_a * √P_b / (√P_b - √P_a)
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_b == sqrt_a:
        return 0

    intermediate = mul_div(sqrt_a, sqrt_b, Q96)
    return _to_uint128(mul_div(amount0, intermediate, sqrt_b - sqrt_a))


def get_liquidity_for_amount1(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int, amount1: int) -> int:
    """amount1 으로 얻을 수 있는 최대 유동성 (내림)

    공식: L = Δy / (√P_b - √P_a)
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_b == sqrt_a:
        return 0

    return _to_uint128(mul_div(amount1, Q96, sqrt_b - sqrt_a))


def get_liquidity_for_amounts(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int
) -> int:
    """현재 가격과 범위, 두 토큰 수량으로 민트 가능한 최대 유동성

    Returns:
        유동성 (범위 안이면 두 제약 조건 중 작은 값)
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_x96 <= sqrt_a:
        return get_liquidity_for_amount0(sqrt_a, sqrt_b, amount0)
    if sqrt_ratio_x96 < sqrt_b:
        liquidity0 = get_liquidity_for_amount0(sqrt_ratio_x96, sqrt_b, amount0)
        liquidity1 = get_liquidity_for_amount1(sqrt_a, sqrt_ratio_x96, amount1)
        return min(liquidity0, liquidity1)
    return get_liquidity_for_amount1(sqrt_a, sqrt_b, amount1)


def get_amounts_for_liquidity(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = False
) -> Tuple[int, int]:
    """유동성에 해당하는 (amount0, amount1)

    round_up=True 는 풀이 민트 시 실제로 받아가는 양 (Pool.mint 와 동일한 반올림).
    """
    sqrt_a, sqrt_b = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_x96 <= sqrt_a:
        return get_amount0_delta(sqrt_a, sqrt_b, liquidity, round_up), 0
    if sqrt_ratio_x96 < sqrt_b:
        amount0 = get_amount0_delta(sqrt_ratio_x96, sqrt_b, liquidity, round_up)
        amount1 = get_amount1_delta(sqrt_a, sqrt_ratio_x96, liquidity, round_up)
        return amount0, amount1
    return 0, get_amount1_delta(sqrt_a, sqrt_b, liquidity, round_up)
