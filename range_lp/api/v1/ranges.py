"""
Range Endpoints

width(bps) → 틱 범위 계산. 직접 입력한 sqrtPriceX96 또는 The Graph 에서
읽은 풀의 현재 가격을 사용합니다.
"""
import logging

from fastapi import APIRouter, Depends, Query

from range_lp.api.errors import to_http_exception
from range_lp.api.schemas import PoolRangeResponse, RangeRequest, RangeResponse
from range_lp.config import settings
from range_lp.data.pool import PoolManager
from range_lp.errors import RangeLiquidityError
from range_lp.math.range_math import describe_range
from range_lp.math.tick_math import TickAlignment

logger = logging.getLogger(__name__)

router = APIRouter()

_pool_manager = None


def get_pool_manager() -> PoolManager:
    """PoolManager 싱글턴 (테스트에서는 dependency_overrides 로 교체)"""
    global _pool_manager
    if _pool_manager is None:
        try:
            _pool_manager = PoolManager(api_key=settings.GRAPH_API_KEY or None, chain=settings.CHAIN)
        except RangeLiquidityError as e:
            raise to_http_exception(e)
    return _pool_manager


def _range_fields(result: dict) -> dict:
    return {
        "current_tick": result["current_tick"],
        "tick_lower": result["tick_lower"],
        "tick_upper": result["tick_upper"],
        "sqrt_price_lower_x96": str(result["sqrt_price_lower_x96"]),
        "sqrt_price_upper_x96": str(result["sqrt_price_upper_x96"]),
        "price_lower": result["price_lower"],
        "price_upper": result["price_upper"],
        "in_range": result["in_range"],
    }


@router.post("/ranges/compute", response_model=RangeResponse)
async def compute_range(request: RangeRequest):
    """
    Compute an aligned tick range around a given sqrtPriceX96

    Returns:
        RangeResponse with ticks, boundary sqrt prices and prices
    """
    try:
        result = describe_range(
            request.sqrt_price_x96,
            request.tick_spacing,
            request.width,
            request.alignment,
        )
    except RangeLiquidityError as e:
        logger.info("Range computation rejected: %s", e)
        raise to_http_exception(e)

    return RangeResponse(**_range_fields(result))


@router.get("/pools/{pool_id}/range", response_model=PoolRangeResponse)
async def pool_range(
    pool_id: str,
    width: int = Query(default=settings.DEFAULT_WIDTH_BPS, description="Width in basis points"),
    alignment: TickAlignment = Query(default=TickAlignment(settings.TICK_ALIGNMENT)),
    manager: PoolManager = Depends(get_pool_manager),
):
    """
    Compute the tick range for a pool's current price

    Flow:
    1. Read pool state (sqrtPrice, feeTier, tokens) from The Graph
    2. Apply width to the current sqrt price
    3. Align to the pool's tick spacing
    """
    try:
        result = manager.get_range(pool_id, width, alignment)
    except RangeLiquidityError as e:
        logger.info("Pool range failed for %s: %s", pool_id, e)
        raise to_http_exception(e)

    return PoolRangeResponse(
        **_range_fields(result),
        pool_id=result["pool_id"],
        fee_tier=result["fee_tier"],
        tick_spacing=result["tick_spacing"],
        token0=result["token0"],
        token1=result["token1"],
        current_price=result["current_price"],
    )
