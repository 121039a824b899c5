"""
Simulated execution environment

In-memory 토큰 원장, 포지션 매니저, 원자적 실행 단위.
"""

from .ledger import TokenLedger
from .position_manager import SimulatedPositionManager
from .environment import SimulatedChain, DEFAULT_POSITION_MANAGER
