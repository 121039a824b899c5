"""
API Request/Response Schemas using Pydantic

Q96 값과 토큰 수량은 JavaScript 클라이언트의 정밀도 손실을 막기 위해
응답에서 문자열로 반환합니다.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from range_lp.config import settings
from range_lp.math.tick_math import TickAlignment


class RangeRequest(BaseModel):
    """Request payload for POST /api/v1/ranges/compute"""
    sqrt_price_x96: int = Field(..., description="Current pool sqrtPriceX96", gt=0)
    tick_spacing: int = Field(..., description="Pool tick spacing", gt=0)
    width: int = Field(default=settings.DEFAULT_WIDTH_BPS, description="Symmetric width in basis points (1-9999)")
    alignment: TickAlignment = Field(
        default=TickAlignment(settings.TICK_ALIGNMENT),
        description="Tick alignment mode (floor, truncate, outward)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "sqrt_price_x96": "79228162514264337593543950336",
                "tick_spacing": 60,
                "width": 1000,
                "alignment": "floor"
            }
        }


class RangeResponse(BaseModel):
    """Computed tick range"""
    status: str = Field(default="success", description="Response status")
    current_tick: int = Field(..., description="Tick of the current sqrt price")
    tick_lower: int = Field(..., description="Aligned lower tick")
    tick_upper: int = Field(..., description="Aligned upper tick")
    sqrt_price_lower_x96: str = Field(..., description="sqrtPriceX96 at tick_lower")
    sqrt_price_upper_x96: str = Field(..., description="sqrtPriceX96 at tick_upper")
    price_lower: float = Field(..., description="Price (token1/token0) at tick_lower")
    price_upper: float = Field(..., description="Price (token1/token0) at tick_upper")
    in_range: bool = Field(..., description="Whether the current tick lies inside the range")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class PoolRangeResponse(RangeResponse):
    """Computed tick range for a pool read from The Graph"""
    pool_id: str = Field(..., description="Pool address")
    fee_tier: int = Field(..., description="Pool fee tier")
    tick_spacing: int = Field(..., description="Pool tick spacing")
    token0: str = Field(..., description="token0 symbol")
    token1: str = Field(..., description="token1 symbol")
    current_price: float = Field(..., description="Current price (token1/token0)")


class SimulateRequest(BaseModel):
    """Request payload for POST /api/v1/liquidity/simulate"""
    sqrt_price_x96: int = Field(..., description="Pool sqrtPriceX96", gt=0)
    fee_tier: int = Field(default=3000, description="Pool fee tier (100, 500, 3000, 10000)")
    tick_spacing: Optional[int] = Field(default=None, description="Tick spacing override", gt=0)
    width: int = Field(default=settings.DEFAULT_WIDTH_BPS, description="Symmetric width in basis points (1-9999)")
    amount0_desired: int = Field(..., description="token0 amount (smallest unit)", ge=0)
    amount1_desired: int = Field(..., description="token1 amount (smallest unit)", ge=0)
    slippage_bps: int = Field(
        default=settings.DEFAULT_SLIPPAGE_BPS,
        description="Minimum fill as (10000 - slippage_bps) / 10000 of the expected fill at the current price",
        ge=0,
        le=10000
    )
    alignment: TickAlignment = Field(
        default=TickAlignment(settings.TICK_ALIGNMENT),
        description="Tick alignment mode (floor, truncate, outward)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "sqrt_price_x96": "79228162514264337593543950336",
                "fee_tier": 3000,
                "width": 1000,
                "amount0_desired": "1000000000000000000",
                "amount1_desired": "1000000000000000000",
                "slippage_bps": 50
            }
        }


class SimulateResponse(BaseModel):
    """Dry-run result of add_liquidity"""
    status: str = Field(default="success", description="Response status")
    token_id: int = Field(..., description="Minted position id")
    tick_lower: int = Field(..., description="Lower tick")
    tick_upper: int = Field(..., description="Upper tick")
    liquidity: str = Field(..., description="Minted liquidity")
    amount0_used: str = Field(..., description="token0 consumed by the mint")
    amount1_used: str = Field(..., description="token1 consumed by the mint")
    refund0: str = Field(..., description="token0 refunded to the caller")
    refund1: str = Field(..., description="token1 refunded to the caller")
    amount0_min: str = Field(..., description="Minimum token0 fill applied")
    amount1_min: str = Field(..., description="Minimum token1 fill applied")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class HealthCheckResponse(BaseModel):
    """Response payload for GET /api/v1/health endpoint"""
    status: str = Field(..., description="Health status (healthy or unhealthy)")
    version: str = Field(..., description="API version")
    graph_configured: bool = Field(..., description="Whether a Graph API key is set")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")
