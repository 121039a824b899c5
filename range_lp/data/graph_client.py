"""
The Graph API 클라이언트

Uniswap V3 Subgraph 에서 틱 범위 계산에 필요한 풀 스냅샷(sqrtPrice, tick,
feeTier, 토큰 쌍)을 읽어옵니다. 체인별 Subgraph ID 는 constants 참조.
"""

import logging
import os
import time
from typing import Optional, Dict, Any

import requests

from ..constants import SUBGRAPH_IDS, CHAIN_IDS
from ..errors import RangeLiquidityError
from .types import Pool
from . import queries

logger = logging.getLogger(__name__)

GATEWAY_URL = "https://gateway.thegraph.com/api/{api_key}/subgraphs/id/{subgraph_id}"


class GraphClientError(RangeLiquidityError):
    """Subgraph 조회 실패 (설정, 네트워크, GraphQL 오류)"""
    pass


class GraphClient:
    """풀 상태 조회용 The Graph 클라이언트

    사용법:
        client = GraphClient(chain="arbitrum")  # GRAPH_API_KEY 사용
        pool = client.get_pool("0x...")
        pool = client.find_pool(usdc, weth, 500)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        chain: str = "ethereum",
        timeout: int = 30,
        max_retries: int = 3,
        retry_delay: float = 1.0
    ):
        """
        Args:
            api_key: Graph Studio API 키. 생략 시 GRAPH_API_KEY 환경변수
            chain: ethereum / optimism / arbitrum / polygon / celo
            timeout: 요청당 타임아웃 (초)
            max_retries: 네트워크 오류 시 총 시도 횟수
            retry_delay: n 번째 재시도 전 retry_delay * n 초 대기
        """
        api_key = api_key or os.getenv("GRAPH_API_KEY")
        if not api_key:
            raise GraphClientError(
                "Graph API 키가 없습니다: api_key 를 넘기거나 GRAPH_API_KEY 를 설정하세요 "
                "(https://thegraph.com/studio/)"
            )

        chain_id = CHAIN_IDS.get(chain.lower())
        if chain_id is None:
            raise GraphClientError(
                f"체인 '{chain}' 은 지원하지 않습니다 ({', '.join(CHAIN_IDS)})"
            )

        self.api_key = api_key
        self.chain = chain.lower()
        self.chain_id = chain_id
        self.subgraph_id = SUBGRAPH_IDS[chain_id]
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._session = requests.Session()
        self._session.headers["Content-Type"] = "application/json"

    @property
    def endpoint(self) -> str:
        return GATEWAY_URL.format(api_key=self.api_key, subgraph_id=self.subgraph_id)

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _unwrap(body: Dict[str, Any]) -> Dict[str, Any]:
        if body.get("errors"):
            messages = "; ".join(err.get("message", str(err)) for err in body["errors"])
            raise GraphClientError(f"GraphQL 오류: {messages}")
        if "data" not in body:
            raise GraphClientError("GraphQL 응답에 data 가 없습니다")
        return body["data"]

    def _execute_query(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """쿼리 실행 후 data 반환

        타임아웃과 연결 오류만 재시도합니다. GraphQL 오류는 같은 쿼리를
        다시 보내도 결과가 같으므로 바로 실패합니다.

        Raises:
            GraphClientError
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        failure: Optional[GraphClientError] = None
        for attempt in range(1, self.max_retries + 1):
            try:
                body = self._post(payload)
            except requests.exceptions.Timeout:
                failure = GraphClientError(f"{self.timeout}초 안에 응답이 없습니다")
            except requests.exceptions.RequestException as e:
                failure = GraphClientError(f"Subgraph 요청 실패: {e}")
            else:
                return self._unwrap(body)

            logger.warning("Graph query attempt %s/%s failed: %s", attempt, self.max_retries, failure)
            if attempt < self.max_retries:
                time.sleep(self.retry_delay * attempt)

        raise failure

    def get_pool(self, pool_id: str) -> Optional[Pool]:
        """주소로 풀 조회. 없으면 None"""
        data = self._execute_query(queries.POOL_QUERY, {"id": pool_id.lower()})
        found = data.get("pool")
        return Pool.from_dict(found) if found else None

    def find_pool(self, token0: str, token1: str, fee_tier: int) -> Optional[Pool]:
        """토큰 쌍 + 수수료 티어로 풀 조회

        Subgraph 는 token0 < token1 (주소 오름차순) 으로 저장하므로 정렬 후 조회합니다.
        """
        lo, hi = sorted((token0.lower(), token1.lower()))
        data = self._execute_query(
            queries.POOL_BY_TOKENS_QUERY,
            {"token0": lo, "token1": hi, "feeTier": str(fee_tier)}
        )
        matches = data.get("pools") or []
        return Pool.from_dict(matches[0]) if matches else None
