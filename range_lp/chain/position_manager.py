"""
Simulated Position Manager

NonfungiblePositionManager.mint 의 동작을 in-memory 로 재현합니다.
유동성 계산은 LiquidityAmounts / Pool.mint 와 같은 반올림을 사용하므로
소비 수량은 항상 desired 이하입니다.
"""

import copy
import logging
from typing import Callable, Dict, Tuple, Any

from ..data.types import MintParams, MintResult, Pool, Position
from ..errors import (
    DeadlineExpiredError,
    InvalidTickSpacingError,
    PoolNotFoundError,
    PositionManagerError,
    PriceOutOfBoundsError,
    SlippageCheckError,
)
from ..math.liquidity_math import get_amounts_for_liquidity, get_liquidity_for_amounts
from ..math.tick_math import get_sqrt_ratio_at_tick, usable_tick_bounds
from .ledger import TokenLedger

logger = logging.getLogger(__name__)


class SimulatedPositionManager:
    """포지션 민트 및 보관

    Args:
        address: 포지션 매니저 주소 (토큰 인출 시 spender)
        ledger: 토큰 원장
        pools: {(token0, token1, fee): Pool} 조회 테이블
        clock: 현재 블록 시각을 돌려주는 함수
    """

    def __init__(
        self,
        address: str,
        ledger: TokenLedger,
        pools: Dict[Tuple[str, str, int], Pool],
        clock: Callable[[], int],
    ):
        self.address = address
        self.ledger = ledger
        self._pools = pools
        self._clock = clock
        self._positions: Dict[int, Position] = {}
        self._next_id = 1

    def positions(self, token_id: int) -> Position:
        if token_id not in self._positions:
            raise PositionManagerError(f"존재하지 않는 포지션: {token_id}")
        return self._positions[token_id]

    def positions_of(self, owner: str) -> Dict[int, Position]:
        owner = owner.lower()
        return {tid: p for tid, p in self._positions.items() if p.owner.lower() == owner}

    def _find_pool(self, token0: str, token1: str, fee: int) -> Pool:
        key = (token0.lower(), token1.lower(), fee)
        if key not in self._pools:
            raise PoolNotFoundError(f"풀을 찾을 수 없습니다: {token0}/{token1} fee={fee}")
        return self._pools[key]

    def mint(self, params: MintParams, sender: str) -> MintResult:
        """포지션 민트

        sender 의 승인 한도 안에서 실제 소비 수량만큼 풀로 이동시키고
        recipient 소유의 포지션을 기록합니다.
        """
        now = self._clock()
        if now > params.deadline:
            raise DeadlineExpiredError(f"Transaction too old: {now} > {params.deadline}")

        pool = self._find_pool(params.token0, params.token1, params.fee)
        _check_ticks(params.tick_lower, params.tick_upper, pool.spacing)

        sqrt_price_x96 = pool.slot0().sqrt_price_x96
        sqrt_lower = get_sqrt_ratio_at_tick(params.tick_lower)
        sqrt_upper = get_sqrt_ratio_at_tick(params.tick_upper)

        liquidity = get_liquidity_for_amounts(
            sqrt_price_x96, sqrt_lower, sqrt_upper,
            params.amount0_desired, params.amount1_desired,
        )
        if liquidity == 0:
            raise PositionManagerError("민트할 유동성이 0 입니다")

        amount0, amount1 = get_amounts_for_liquidity(
            sqrt_price_x96, sqrt_lower, sqrt_upper, liquidity, round_up=True
        )
        if amount0 < params.amount0_min or amount1 < params.amount1_min:
            raise SlippageCheckError(
                f"Price slippage check: ({amount0}, {amount1}) < "
                f"({params.amount0_min}, {params.amount1_min})"
            )

        if amount0:
            self.ledger.transfer_from(params.token0, self.address, sender, pool.id, amount0)
        if amount1:
            self.ledger.transfer_from(params.token1, self.address, sender, pool.id, amount1)

        if params.tick_lower <= pool.tick < params.tick_upper:
            pool.liquidity += liquidity

        token_id = self._next_id
        self._next_id += 1
        self._positions[token_id] = Position(
            token_id=token_id,
            owner=params.recipient,
            pool_id=pool.id,
            token0=params.token0,
            token1=params.token1,
            fee_tier=params.fee,
            tick_lower=params.tick_lower,
            tick_upper=params.tick_upper,
            liquidity=liquidity,
        )

        logger.info(
            "Minted position #%s for %s: ticks=[%s, %s] liquidity=%s amounts=(%s, %s)",
            token_id, params.recipient, params.tick_lower, params.tick_upper,
            liquidity, amount0, amount1,
        )
        return MintResult(token_id=token_id, liquidity=liquidity, amount0=amount0, amount1=amount1)

    def snapshot(self) -> Dict[str, Any]:
        return {"positions": copy.deepcopy(self._positions), "next_id": self._next_id}

    def restore(self, state: Dict[str, Any]) -> None:
        self._positions = state["positions"]
        self._next_id = state["next_id"]


def _check_ticks(tick_lower: int, tick_upper: int, tick_spacing: int) -> None:
    if tick_lower >= tick_upper:
        raise PriceOutOfBoundsError(f"tick_lower >= tick_upper: {tick_lower} >= {tick_upper}")

    min_usable, max_usable = usable_tick_bounds(tick_spacing)
    if tick_lower < min_usable or tick_upper > max_usable:
        raise PriceOutOfBoundsError(f"틱 범위 초과: [{tick_lower}, {tick_upper}]")

    if tick_lower % tick_spacing or tick_upper % tick_spacing:
        raise InvalidTickSpacingError(
            f"틱이 간격 {tick_spacing} 의 배수가 아닙니다: [{tick_lower}, {tick_upper}]"
        )
