"""
In-memory ERC20 원장

주소는 소문자로 정규화해 저장합니다.
"""

from collections import defaultdict
from typing import Dict, Tuple, Any

from ..errors import InsufficientAllowanceError, InsufficientBalanceError


class TokenLedger:
    """토큰별 잔고와 승인(allowance) 관리

    사용법:
        ledger = TokenLedger()
        ledger.mint(WETH, alice, 10**18)
        ledger.approve(WETH, alice, router, 10**18)
        ledger.transfer_from(WETH, router, alice, router, 10**18)
    """

    def __init__(self):
        self._balances: Dict[Tuple[str, str], int] = defaultdict(int)
        self._allowances: Dict[Tuple[str, str, str], int] = defaultdict(int)

    def balance_of(self, token: str, holder: str) -> int:
        return self._balances.get((token.lower(), holder.lower()), 0)

    def allowance(self, token: str, owner: str, spender: str) -> int:
        return self._allowances.get((token.lower(), owner.lower(), spender.lower()), 0)

    def mint(self, token: str, holder: str, amount: int) -> None:
        """잔고 생성 (시뮬레이션 초기화용)"""
        _check_amount(amount)
        self._balances[(token.lower(), holder.lower())] += amount

    def approve(self, token: str, owner: str, spender: str, amount: int) -> None:
        _check_amount(amount)
        self._allowances[(token.lower(), owner.lower(), spender.lower())] = amount

    def transfer(self, token: str, src: str, dst: str, amount: int) -> None:
        _check_amount(amount)
        src_key = (token.lower(), src.lower())
        balance = self._balances.get(src_key, 0)
        if balance < amount:
            raise InsufficientBalanceError(
                f"{src} 의 {token} 잔고 부족: {balance} < {amount}"
            )
        self._balances[src_key] = balance - amount
        self._balances[(token.lower(), dst.lower())] += amount

    def transfer_from(self, token: str, spender: str, src: str, dst: str, amount: int) -> None:
        """spender 가 src 의 승인 한도 내에서 dst 로 이동"""
        _check_amount(amount)
        key = (token.lower(), src.lower(), spender.lower())
        allowed = self._allowances.get(key, 0)
        if allowed < amount:
            raise InsufficientAllowanceError(
                f"{src} 가 {spender} 에게 승인한 {token} 한도 부족: {allowed} < {amount}"
            )
        self.transfer(token, src, dst, amount)
        self._allowances[key] = allowed - amount

    def snapshot(self) -> Dict[str, Any]:
        return {"balances": dict(self._balances), "allowances": dict(self._allowances)}

    def restore(self, state: Dict[str, Any]) -> None:
        self._balances = defaultdict(int, state["balances"])
        self._allowances = defaultdict(int, state["allowances"])


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise ValueError(f"수량은 음수일 수 없습니다: {amount}")
