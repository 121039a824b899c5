"""
Liquidity Simulation Endpoint

요청으로 받은 가격의 풀을 SimulatedChain 에 만들고 add_liquidity 를 실제로
실행해 민트 결과와 환불 수량을 돌려줍니다 (온체인 상태 변경 없음).
"""
import logging

from fastapi import APIRouter

from range_lp.api.errors import to_http_exception
from range_lp.api.schemas import SimulateRequest, SimulateResponse
from range_lp.chain import SimulatedChain
from range_lp.errors import RangeLiquidityError
from range_lp.orchestrator import LiquidityOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()

SIMULATION_CALLER = "0x" + "c" * 40


@router.post("/liquidity/simulate", response_model=SimulateResponse)
async def simulate_add_liquidity(request: SimulateRequest):
    """
    Dry-run add_liquidity against an in-memory pool

    Args:
        request: SimulateRequest with price, width, desired amounts and slippage

    Returns:
        SimulateResponse with ticks, used amounts and refunds
    """
    chain = SimulatedChain()
    orchestrator = LiquidityOrchestrator(
        ledger=chain.ledger,
        position_manager=chain.position_manager,
        environment=chain,
        alignment=request.alignment,
        default_slippage_bps=request.slippage_bps,
    )

    try:
        pool = chain.create_pool(
            request.sqrt_price_x96,
            fee_tier=request.fee_tier,
            tick_spacing=request.tick_spacing,
        )
        for token, amount in ((pool.token0.id, request.amount0_desired), (pool.token1.id, request.amount1_desired)):
            chain.ledger.mint(token, SIMULATION_CALLER, amount)
            chain.ledger.approve(token, SIMULATION_CALLER, orchestrator.address, amount)

        result = orchestrator.add_liquidity(
            SIMULATION_CALLER,
            pool,
            request.amount0_desired,
            request.amount1_desired,
            request.width,
        )
    except RangeLiquidityError as e:
        logger.info("Simulation rejected: %s", e)
        raise to_http_exception(e)

    return SimulateResponse(
        token_id=result.token_id,
        tick_lower=result.tick_lower,
        tick_upper=result.tick_upper,
        liquidity=str(result.liquidity),
        amount0_used=str(result.amount0_used),
        amount1_used=str(result.amount1_used),
        refund0=str(result.refund0),
        refund1=str(result.refund1),
        amount0_min=str(result.amount0_min),
        amount1_min=str(result.amount1_min),
    )
