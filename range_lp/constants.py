"""
range_lp 상수 정의

온체인 수준 정밀도를 위한 상수들:
- Q96: sqrt price 인코딩에 사용 (2^96)
- FEE_TIERS: 지원되는 수수료 티어
- TICK_SPACINGS: 각 수수료 티어별 틱 간격
- BPS_DENOMINATOR: width(basis points) 분모
"""

from typing import Dict

# Fixed-point 인코딩 상수
Q96: int = 2 ** 96
Q192: int = 2 ** 192

# 수수료 티어 (hundredths of a bip)
# 500 = 0.05%, 3000 = 0.30%, 10000 = 1.00%
FEE_TIERS: Dict[int, str] = {
    100: "0.01%",
    500: "0.05%",
    3000: "0.30%",
    10000: "1.00%",
}

# 각 수수료 티어별 틱 간격
TICK_SPACINGS: Dict[int, int] = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}

# 지원되는 체인 ID 및 Subgraph ID
CHAIN_IDS: Dict[str, int] = {
    "ethereum": 0,
    "optimism": 1,
    "arbitrum": 2,
    "polygon": 3,
    "celo": 5,
}

SUBGRAPH_IDS: Dict[int, str] = {
    0: "5zvR82QoaXYFyDEKLZ9t6v9adgnptxYpKpSbxtgVENFV",  # Ethereum Mainnet
    1: "Cghf4LfVqPiFw6fp6Y5X5Ubc8UpmUhSfJL82zwiBFLaj",  # Optimism
    2: "FbCGRftH4a3yZugY7TnbYgPJVEv2LvMT6oF1fxPe9aJM",  # Arbitrum
    3: "3hCPRGf4z88VC5rsBKU5AA9FBBq5nF3jbKJG7VZCbhjm",  # Polygon
    5: "ESdrTJ3twMwWVoQ1hUE2u7PugEHX3QkenudD6aXCkDQ4",  # Celo
}

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# TickMath sqrt ratio 경계 (MIN_TICK, MAX_TICK 에서의 값)
MIN_SQRT_RATIO: int = 4295128739
MAX_SQRT_RATIO: int = 1461446703485210103287273052203988822378723970342

# width 는 10000 분의 1 단위 (basis points)
BPS_DENOMINATOR: int = 10_000

# 고정 폭 정수 최대값
UINT256_MAX: int = 2 ** 256 - 1
UINT160_MAX: int = 2 ** 160 - 1
UINT128_MAX: int = 2 ** 128 - 1
