"""
API 엔드포인트 테스트

FastAPI TestClient 로 라우터를 호출합니다. 풀 조회는 dependency_overrides 로
Mock GraphClient 를 쓰는 PoolManager 를 주입합니다.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from ..api.main import app
from ..api.v1.ranges import get_pool_manager
from ..constants import Q96
from ..data.pool import PoolManager
from ..data.types import Pool, Token
from ..math.tick_math import get_sqrt_ratio_at_tick


POOL_ID = "0x" + "e" * 40


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def graph():
    graph = MagicMock()
    app.dependency_overrides[get_pool_manager] = lambda: PoolManager(client=graph)
    yield graph
    app.dependency_overrides.clear()


def make_pool():
    return Pool(
        id=POOL_ID,
        fee_tier=3000,
        tick=1000,
        sqrt_price=get_sqrt_ratio_at_tick(1000),
        liquidity=0,
        token0=Token(id="0x" + "1" * 40, symbol="AAA", name="Token A", decimals=18),
        token1=Token(id="0x" + "2" * 40, symbol="BBB", name="Token B", decimals=18),
    )


class TestRoot:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == "/api/v1/health"

    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestComputeRange:
    """POST /api/v1/ranges/compute"""

    def test_compute(self, client):
        response = client.post("/api/v1/ranges/compute", json={
            "sqrt_price_x96": get_sqrt_ratio_at_tick(1000),
            "tick_spacing": 60,
            "width": 1000,
            "alignment": "floor",
        })
        assert response.status_code == 200
        body = response.json()
        assert (body["tick_lower"], body["tick_upper"]) == (-1140, 2880)
        assert body["sqrt_price_lower_x96"] == str(get_sqrt_ratio_at_tick(-1140))
        assert body["in_range"] is True

    def test_truncate(self, client):
        response = client.post("/api/v1/ranges/compute", json={
            "sqrt_price_x96": get_sqrt_ratio_at_tick(1000),
            "tick_spacing": 60,
            "width": 1000,
            "alignment": "truncate",
        })
        assert response.json()["tick_lower"] == -1080

    @pytest.mark.parametrize("width", [0, 10000])
    def test_invalid_width(self, client, width):
        response = client.post("/api/v1/ranges/compute", json={
            "sqrt_price_x96": Q96,
            "tick_spacing": 60,
            "width": width,
        })
        assert response.status_code == 400

    def test_invalid_payload(self, client):
        response = client.post("/api/v1/ranges/compute", json={"sqrt_price_x96": 0, "tick_spacing": 60})
        assert response.status_code == 422


class TestPoolRange:
    """GET /api/v1/pools/{pool_id}/range"""

    def test_pool_range(self, client, graph):
        graph.get_pool.return_value = make_pool()

        response = client.get(f"/api/v1/pools/{POOL_ID}/range", params={"width": 1000})

        assert response.status_code == 200
        body = response.json()
        assert body["pool_id"] == POOL_ID
        assert body["tick_spacing"] == 60
        assert (body["tick_lower"], body["tick_upper"]) == (-1140, 2880)
        assert body["token1"] == "BBB"

    def test_pool_not_found(self, client, graph):
        graph.get_pool.return_value = None
        response = client.get(f"/api/v1/pools/{POOL_ID}/range")
        assert response.status_code == 404


class TestSimulate:
    """POST /api/v1/liquidity/simulate"""

    def test_simulate(self, client):
        desired = 10**18
        response = client.post("/api/v1/liquidity/simulate", json={
            "sqrt_price_x96": Q96,
            "fee_tier": 3000,
            "width": 1000,
            "amount0_desired": desired,
            "amount1_desired": desired,
        })
        assert response.status_code == 200
        body = response.json()
        assert body["token_id"] == 1
        assert body["tick_lower"] < 0 < body["tick_upper"]
        assert int(body["amount0_used"]) + int(body["refund0"]) == desired
        assert int(body["amount1_used"]) + int(body["refund1"]) == desired
        assert int(body["liquidity"]) > 0
        assert (body["amount0_min"], body["amount1_min"]) == ("0", "0")

    def test_simulate_with_slippage(self, client):
        """스키마 예시 요청 (50 bps) 은 한쪽이 비율 제한을 받아도 성공"""
        response = client.post("/api/v1/liquidity/simulate", json={
            "sqrt_price_x96": Q96,
            "fee_tier": 3000,
            "width": 1000,
            "amount0_desired": 10**18,
            "amount1_desired": 10**18,
            "slippage_bps": 50,
        })
        assert response.status_code == 200
        body = response.json()
        assert 0 < int(body["amount0_min"]) <= int(body["amount0_used"])
        assert 0 < int(body["amount1_min"]) <= int(body["amount1_used"])
        assert int(body["amount0_min"]) < 995 * 10**15

    def test_simulate_invalid_width(self, client):
        response = client.post("/api/v1/liquidity/simulate", json={
            "sqrt_price_x96": Q96,
            "width": 0,
            "amount0_desired": 10**18,
            "amount1_desired": 10**18,
        })
        assert response.status_code == 400
