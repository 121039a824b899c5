"""
range_lp - Width 기반 집중화 유동성 공급

현재 풀 가격에 대칭 width(bps)를 적용해 틱 범위를 계산하고,
포지션 매니저를 통해 포지션을 민트한 뒤 남은 자산을 환불합니다.
"""

__version__ = "0.1.0"

from .constants import Q96, FEE_TIERS, TICK_SPACINGS, MIN_TICK, MAX_TICK
from .math.range_math import compute_ticks
from .math.tick_math import TickAlignment
from .orchestrator import LiquidityOrchestrator, min_amounts_for_slippage
