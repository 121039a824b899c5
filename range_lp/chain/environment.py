"""
Simulated Chain - 원자적 실행 환경

원장, 풀, 포지션 매니저를 묶고 atomic() 블록 안에서 예외가 나면
모든 상태를 블록 진입 시점으로 되돌립니다 (트랜잭션 revert 와 동일).
"""

import copy
import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Tuple

from ..data.types import Pool, Token
from ..errors import PoolNotFoundError
from ..math.tick_math import get_tick_at_sqrt_ratio
from .ledger import TokenLedger
from .position_manager import SimulatedPositionManager

logger = logging.getLogger(__name__)

DEFAULT_POSITION_MANAGER = "0xC36442b4a4522E871399CD717aBDD847Ab11FE88"
DEFAULT_TOKEN0 = "0x" + "1" * 40
DEFAULT_TOKEN1 = "0x" + "2" * 40


class SimulatedChain:
    """In-memory 실행 환경

    사용법:
        chain = SimulatedChain()
        chain.add_pool(pool)
        chain.ledger.mint(pool.token0.id, alice, 10**18)
        with chain.atomic():
            ...
    """

    def __init__(
        self,
        block_timestamp: Optional[int] = None,
        position_manager_address: str = DEFAULT_POSITION_MANAGER,
    ):
        self._timestamp = int(time.time()) if block_timestamp is None else block_timestamp
        self.ledger = TokenLedger()
        self._pools: Dict[str, Pool] = {}
        self._pools_by_key: Dict[Tuple[str, str, int], Pool] = {}
        self.position_manager = SimulatedPositionManager(
            address=position_manager_address,
            ledger=self.ledger,
            pools=self._pools_by_key,
            clock=lambda: self.block_timestamp,
        )

    @property
    def block_timestamp(self) -> int:
        return self._timestamp

    def advance_time(self, seconds: int) -> int:
        self._timestamp += seconds
        return self._timestamp

    def add_pool(self, pool: Pool) -> Pool:
        self._pools[pool.id.lower()] = pool
        self._pools_by_key[(pool.token0.id.lower(), pool.token1.id.lower(), pool.fee_tier)] = pool
        return pool

    def create_pool(
        self,
        sqrt_price_x96: int,
        fee_tier: int = 3000,
        tick_spacing: Optional[int] = None,
        token0: Optional[Token] = None,
        token1: Optional[Token] = None,
        liquidity: int = 0,
    ) -> Pool:
        """주어진 가격으로 초기화된 풀 생성 및 등록"""
        token0 = token0 or Token(id=DEFAULT_TOKEN0, symbol="TKN0", name="Token 0", decimals=18)
        token1 = token1 or Token(id=DEFAULT_TOKEN1, symbol="TKN1", name="Token 1", decimals=18)
        pool_id = "0x" + format(len(self._pools) + 1, "040x")
        return self.add_pool(Pool(
            id=pool_id,
            fee_tier=fee_tier,
            tick=get_tick_at_sqrt_ratio(sqrt_price_x96),
            sqrt_price=sqrt_price_x96,
            liquidity=liquidity,
            token0=token0,
            token1=token1,
            tick_spacing=tick_spacing,
        ))

    def get_pool(self, pool_id: str) -> Pool:
        pool = self._pools.get(pool_id.lower())
        if pool is None:
            raise PoolNotFoundError(f"Pool을 찾을 수 없습니다: {pool_id}")
        return pool

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """블록 안의 모든 상태 변경을 하나의 단위로 처리"""
        ledger_state = self.ledger.snapshot()
        manager_state = self.position_manager.snapshot()
        pool_state = {pid: copy.copy(pool) for pid, pool in self._pools.items()}
        try:
            yield
        except Exception as e:
            logger.debug("Reverting atomic block: %s", e)
            self.ledger.restore(ledger_state)
            self.position_manager.restore(manager_state)
            for pid, saved in pool_state.items():
                # 풀 객체를 참조하는 쪽이 있으므로 제자리 복원
                self._pools[pid].__dict__.update(saved.__dict__)
            raise
