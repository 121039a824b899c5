"""
Pool Manager - Pool 데이터 관리

The Graph API에서 Pool 데이터를 조회/캐싱하고 width 기반 틱 범위를 계산합니다.
"""

from typing import Optional, Dict, Any

from ..errors import PoolNotFoundError
from ..math.range_math import describe_range
from ..math.sqrt_price_math import sqrt_price_x96_to_price
from ..math.tick_math import TickAlignment
from .graph_client import GraphClient
from .types import Pool


class PoolManager:
    """Uniswap V3 Pool 관리자

    사용법:
        manager = PoolManager(api_key="your_key", chain="ethereum")
        pool = manager.get_pool("0x...")
        rng = manager.get_range("0x...", width=1000)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        chain: str = "ethereum",
        client: Optional[GraphClient] = None
    ):
        """
        Args:
            api_key: The Graph API 키
            chain: 체인 이름
            client: 주입할 GraphClient (없으면 생성)
        """
        self.client = client or GraphClient(api_key=api_key, chain=chain)
        self._pool_cache: Dict[str, Pool] = {}

    def get_pool(self, pool_id: str, use_cache: bool = True) -> Pool:
        """Pool 정보 조회

        Raises:
            PoolNotFoundError: 풀이 없는 경우
        """
        pool_id = pool_id.lower()

        if use_cache and pool_id in self._pool_cache:
            return self._pool_cache[pool_id]

        pool = self.client.get_pool(pool_id)
        if pool is None:
            raise PoolNotFoundError(f"Pool을 찾을 수 없습니다: {pool_id}")

        self._pool_cache[pool_id] = pool
        return pool

    def get_range(
        self,
        pool_id: str,
        width: int,
        alignment: TickAlignment = TickAlignment.FLOOR,
        use_cache: bool = False
    ) -> Dict[str, Any]:
        """풀의 현재 가격 기준 width 범위

        가격은 호출 시점 스냅샷이므로 기본적으로 캐시를 사용하지 않습니다.
        """
        pool = self.get_pool(pool_id, use_cache=use_cache)
        result = describe_range(
            pool.sqrt_price,
            pool.spacing,
            width,
            alignment,
            token0_decimals=pool.token0.decimals,
            token1_decimals=pool.token1.decimals,
        )
        result.update({
            "pool_id": pool.id,
            "fee_tier": pool.fee_tier,
            "tick_spacing": pool.spacing,
            "token0": pool.token0.symbol,
            "token1": pool.token1.symbol,
            "current_price": sqrt_price_x96_to_price(
                pool.sqrt_price, pool.token0.decimals, pool.token1.decimals
            ),
        })
        return result

    def clear_cache(self):
        """캐시 초기화"""
        self._pool_cache.clear()
