"""
Liquidity Orchestrator

width 기반 유동성 공급 워크플로:
1. 풀의 현재 sqrtPriceX96 과 틱 간격 조회
2. compute_ticks 로 (tick_lower, tick_upper) 계산
3. 호출자 → 오케스트레이터 로 두 자산 이동
4. 포지션 매니저에 인출 승인
5. 호출자 소유로 포지션 민트
6. 사용되지 않은 수량 환불

유동성 계산은 포지션 매니저에 위임합니다. 전체 흐름은 실행 환경의
atomic() 안에서 하나의 단위로 실행되며, 실패 시 롤백은 환경이 담당합니다.
"""

import logging
from typing import Optional, Tuple

from .config import settings
from .constants import BPS_DENOMINATOR
from .data.types import AddLiquidityResult, MintParams
from .errors import PositionManagerError, TokenMismatchError
from .interfaces import ExecutionEnvironment, PoolReader, PositionManager, TokenLedger
from .math.liquidity_math import get_amounts_for_liquidity, get_liquidity_for_amounts
from .math.range_math import compute_ticks
from .math.tick_math import TickAlignment, get_sqrt_ratio_at_tick

logger = logging.getLogger(__name__)

DEFAULT_ORCHESTRATOR_ADDRESS = "0x000000000000000000000000000000000000a11c"


def min_amounts_for_slippage(amount0: int, amount1: int, slippage_bps: int) -> Tuple[int, int]:
    """허용 슬리피지(bps)에 해당하는 최소 수량

    >>> min_amounts_for_slippage(10_000, 5_000, 50)
    (9950, 4975)
    """
    if slippage_bps < 0 or slippage_bps > BPS_DENOMINATOR:
        raise ValueError(f"slippage_bps 는 0 ~ {BPS_DENOMINATOR} 이어야 합니다: {slippage_bps}")
    keep = BPS_DENOMINATOR - slippage_bps
    return amount0 * keep // BPS_DENOMINATOR, amount1 * keep // BPS_DENOMINATOR


def quote_mint_amounts(
    sqrt_price_x96: int,
    tick_lower: int,
    tick_upper: int,
    amount0_desired: int,
    amount1_desired: int,
) -> Tuple[int, int]:
    """현재 가격에서 민트가 가져갈 것으로 예상되는 (amount0, amount1)

    범위 안에서는 한쪽 자산이 비율 제한을 받으므로 desired 보다 작습니다.
    내림 반올림이라 같은 가격에서의 실제 소비량보다 크지 않습니다.
    """
    sqrt_lower = get_sqrt_ratio_at_tick(tick_lower)
    sqrt_upper = get_sqrt_ratio_at_tick(tick_upper)
    liquidity = get_liquidity_for_amounts(
        sqrt_price_x96, sqrt_lower, sqrt_upper, amount0_desired, amount1_desired
    )
    return get_amounts_for_liquidity(sqrt_price_x96, sqrt_lower, sqrt_upper, liquidity)


def quote_min_amounts(
    sqrt_price_x96: int,
    tick_lower: int,
    tick_upper: int,
    amount0_desired: int,
    amount1_desired: int,
    slippage_bps: int,
) -> Tuple[int, int]:
    """예상 소비량에 슬리피지를 적용한 최소 수량. slippage_bps=0 이면 (0, 0)"""
    if slippage_bps == 0:
        return 0, 0
    quote0, quote1 = quote_mint_amounts(
        sqrt_price_x96, tick_lower, tick_upper, amount0_desired, amount1_desired
    )
    return min_amounts_for_slippage(quote0, quote1, slippage_bps)


class LiquidityOrchestrator:
    """상태 없는 유동성 공급 오케스트레이터

    호출 사이에 자산을 보관하지 않습니다. 호출 중 들어온 자산은 민트에
    소비되거나 호출자에게 환불되어 보관 잔고는 항상 0 으로 돌아옵니다.

    Args:
        ledger: 토큰 원장
        position_manager: 포지션 민트 협력자
        environment: 원자적 실행 단위와 블록 시각
        address: 오케스트레이터 보관 주소
        alignment: 틱 정렬 방식
        default_slippage_bps: 최소 수량 미지정 시 현재 가격의 예상 소비량에
            적용할 슬리피지. 0 이면 최소 수량 없이 민트합니다.
    """

    def __init__(
        self,
        ledger: TokenLedger,
        position_manager: PositionManager,
        environment: ExecutionEnvironment,
        address: str = DEFAULT_ORCHESTRATOR_ADDRESS,
        alignment: TickAlignment = TickAlignment.FLOOR,
        default_slippage_bps: int = 0,
    ):
        self.ledger = ledger
        self.position_manager = position_manager
        self.environment = environment
        self.address = address
        self.alignment = TickAlignment(alignment)
        self.default_slippage_bps = default_slippage_bps

    @classmethod
    def from_settings(cls, ledger, position_manager, environment, address: str = DEFAULT_ORCHESTRATOR_ADDRESS):
        """range_lp.config.settings 의 정렬 방식 / 기본 슬리피지 사용"""
        return cls(
            ledger=ledger,
            position_manager=position_manager,
            environment=environment,
            address=address,
            alignment=TickAlignment(settings.TICK_ALIGNMENT),
            default_slippage_bps=settings.DEFAULT_SLIPPAGE_BPS,
        )

    def add_liquidity(
        self,
        caller: str,
        pool: PoolReader,
        amount0_desired: int,
        amount1_desired: int,
        width: int,
        amount0_min: Optional[int] = None,
        amount1_min: Optional[int] = None,
        deadline: Optional[int] = None,
        token0: Optional[str] = None,
        token1: Optional[str] = None,
    ) -> AddLiquidityResult:
        """width(bps) 범위로 caller 소유의 포지션을 민트하고 잔여 수량 환불

        Args:
            caller: 자산을 공급하고 포지션을 받을 주소
            pool: 대상 풀
            amount0_desired: 공급할 token0 최대 수량
            amount1_desired: 공급할 token1 최대 수량
            width: 대칭 폭 (bps, 1 ~ 9999)
            amount0_min: token0 최소 소비량. None 이면 예상 소비량과 default_slippage_bps 로 계산
            amount1_min: token1 최소 소비량. None 이면 예상 소비량과 default_slippage_bps 로 계산
            deadline: 민트 deadline. None 이면 현재 블록 시각
            token0: 호출자가 기대하는 token0 주소 (지정 시 풀과 대조)
            token1: 호출자가 기대하는 token1 주소 (지정 시 풀과 대조)

        Returns:
            AddLiquidityResult

        Raises:
            InvalidWidthError, ArithmeticOverflowError, PriceOutOfBoundsError,
            TokenMismatchError, InsufficientBalanceError, InsufficientAllowanceError,
            SlippageCheckError, DeadlineExpiredError, PositionManagerError
        """
        with self.environment.atomic():
            token0_id = pool.token0.id
            token1_id = pool.token1.id
            _check_token(token0, token0_id, "token0")
            _check_token(token1, token1_id, "token1")

            sqrt_price_x96 = pool.slot0().sqrt_price_x96
            tick_lower, tick_upper = compute_ticks(
                sqrt_price_x96, pool.spacing, width, self.alignment
            )

            self.ledger.transfer_from(token0_id, self.address, caller, self.address, amount0_desired)
            self.ledger.transfer_from(token1_id, self.address, caller, self.address, amount1_desired)

            manager = self.position_manager.address
            self.ledger.approve(token0_id, self.address, manager, amount0_desired)
            self.ledger.approve(token1_id, self.address, manager, amount1_desired)

            floor0, floor1 = quote_min_amounts(
                sqrt_price_x96, tick_lower, tick_upper,
                amount0_desired, amount1_desired, self.default_slippage_bps,
            )
            if amount0_min is not None:
                floor0 = amount0_min
            if amount1_min is not None:
                floor1 = amount1_min
            params = MintParams(
                token0=token0_id,
                token1=token1_id,
                fee=pool.fee_tier,
                tick_lower=tick_lower,
                tick_upper=tick_upper,
                amount0_desired=amount0_desired,
                amount1_desired=amount1_desired,
                amount0_min=floor0,
                amount1_min=floor1,
                recipient=caller,
                deadline=self.environment.block_timestamp if deadline is None else deadline,
            )
            result = self.position_manager.mint(params, sender=self.address)

            if result.amount0 > amount0_desired or result.amount1 > amount1_desired:
                raise PositionManagerError(
                    f"포지션 매니저가 desired 보다 많이 사용했습니다: "
                    f"({result.amount0}, {result.amount1}) > ({amount0_desired}, {amount1_desired})"
                )

            refund0 = amount0_desired - result.amount0
            refund1 = amount1_desired - result.amount1
            if refund0:
                self.ledger.approve(token0_id, self.address, manager, 0)
                self.ledger.transfer(token0_id, self.address, caller, refund0)
            if refund1:
                self.ledger.approve(token1_id, self.address, manager, 0)
                self.ledger.transfer(token1_id, self.address, caller, refund1)

        logger.info(
            "add_liquidity caller=%s pool=%s width=%s ticks=[%s, %s] used=(%s, %s) refund=(%s, %s)",
            caller, pool.id, width, tick_lower, tick_upper,
            result.amount0, result.amount1, refund0, refund1,
        )
        return AddLiquidityResult(
            token_id=result.token_id,
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            liquidity=result.liquidity,
            amount0_used=result.amount0,
            amount1_used=result.amount1,
            refund0=refund0,
            refund1=refund1,
            amount0_min=floor0,
            amount1_min=floor1,
        )


def _check_token(expected: Optional[str], actual: str, label: str) -> None:
    if expected is not None and expected.lower() != actual.lower():
        raise TokenMismatchError(f"{label} 불일치: 요청 {expected}, 풀 {actual}")
