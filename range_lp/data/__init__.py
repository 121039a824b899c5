"""
Data layer for range_lp

풀/토큰/민트 데이터 타입과 The Graph API 클라이언트
"""

from .types import (
    Token,
    Pool,
    Slot0,
    MintParams,
    MintResult,
    Position,
    AddLiquidityResult,
)
from .graph_client import GraphClient, GraphClientError
from .pool import PoolManager
