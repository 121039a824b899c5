"""
외부 협력자 인터페이스

오케스트레이터가 의존하는 풀 / 포지션 매니저 / 토큰 원장 / 실행 환경.
테스트와 API 는 range_lp.chain 의 시뮬레이션 구현을 주입합니다.
"""

from typing import ContextManager, Protocol

from .data.types import MintParams, MintResult, Position, Slot0, Token


class PoolReader(Protocol):
    """읽기 전용 풀 상태"""
    id: str
    token0: Token
    token1: Token
    fee_tier: int

    @property
    def spacing(self) -> int: ...

    def slot0(self) -> Slot0: ...


class PositionManager(Protocol):
    """포지션 민트 담당 협력자"""
    address: str

    def mint(self, params: MintParams, sender: str) -> MintResult: ...

    def positions(self, token_id: int) -> Position: ...


class TokenLedger(Protocol):
    """ERC20 형식 자산 보관/이동

    잔고 또는 승인 부족 시 transfer / transfer_from 은 실패합니다.
    """

    def balance_of(self, token: str, holder: str) -> int: ...

    def allowance(self, token: str, owner: str, spender: str) -> int: ...

    def approve(self, token: str, owner: str, spender: str, amount: int) -> None: ...

    def transfer(self, token: str, src: str, dst: str, amount: int) -> None: ...

    def transfer_from(self, token: str, spender: str, src: str, dst: str, amount: int) -> None: ...


class ExecutionEnvironment(Protocol):
    """원자적 실행 단위와 블록 시각 제공"""

    @property
    def block_timestamp(self) -> int: ...

    def atomic(self) -> ContextManager[None]: ...
