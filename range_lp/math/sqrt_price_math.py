"""
Sqrt Price Math - sqrtPriceX96 ↔ 가격 변환

sqrtPriceX96 = sqrt(price) * 2^96
"""

import math

from ..constants import Q96


def sqrt_price_x96_to_price(
    sqrt_price_x96: int,
    decimal0: int = 18,
    decimal1: int = 18
) -> float:
    """sqrtPriceX96을 human-readable 가격(token1/token0)으로 변환

    가격 = (sqrtPriceX96 / 2^96)^2 / 10^(decimal1 - decimal0)
    """
    sqrt_price = sqrt_price_x96 / Q96
    return sqrt_price ** 2 / 10 ** (decimal1 - decimal0)


def price_to_sqrt_price_x96(
    price: float,
    decimal0: int = 18,
    decimal1: int = 18
) -> int:
    """Human-readable 가격(token1/token0)을 sqrtPriceX96으로 변환

    float 정밀도(약 15자리)를 가지므로 비트 단위 정확성이 필요하면
    sqrtPriceX96 을 직접 사용하세요.
    """
    if price <= 0:
        raise ValueError("가격은 양수여야 합니다")

    adjusted_price = price * 10 ** (decimal1 - decimal0)
    return int(math.sqrt(adjusted_price) * Q96)
