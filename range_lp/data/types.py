"""
range_lp 데이터 타입 정의

풀/토큰 정보는 The Graph API 응답 구조를 따르고, 민트 관련 타입은
NonfungiblePositionManager 인터페이스를 따릅니다.
모든 수량 필드는 온체인 정밀도를 위해 int 타입 사용.
"""

from dataclasses import dataclass, asdict
from typing import Optional, NamedTuple, Dict, Any

from ..math.tick_math import get_tick_spacing_for_fee


@dataclass
class Token:
    """ERC20 토큰 정보"""
    id: str  # 컨트랙트 주소
    symbol: str
    name: str
    decimals: int

    @classmethod
    def from_dict(cls, data: dict) -> "Token":
        return cls(
            id=data["id"],
            symbol=data["symbol"],
            name=data["name"],
            decimals=int(data["decimals"])
        )


class Slot0(NamedTuple):
    """풀의 현재 가격 상태"""
    sqrt_price_x96: int
    tick: int


@dataclass
class Pool:
    """Uniswap V3 Pool 정보

    - sqrt_price: 현재 √가격 (Q96 인코딩)
    - tick: 현재 틱 인덱스
    - liquidity: 현재 가격에서 활성화된 총 유동성
    - tick_spacing: None 이면 fee_tier 기본값 사용
    """
    id: str  # Pool 컨트랙트 주소
    fee_tier: int
    tick: int
    sqrt_price: int  # sqrtPriceX96
    liquidity: int
    token0: Token
    token1: Token
    tick_spacing: Optional[int] = None

    @property
    def spacing(self) -> int:
        if self.tick_spacing is not None:
            return self.tick_spacing
        return get_tick_spacing_for_fee(self.fee_tier)

    def slot0(self) -> Slot0:
        return Slot0(sqrt_price_x96=self.sqrt_price, tick=self.tick)

    @classmethod
    def from_dict(cls, data: dict) -> "Pool":
        return cls(
            id=data["id"],
            fee_tier=int(data["feeTier"]),
            tick=int(data["tick"]),
            sqrt_price=int(data["sqrtPrice"]),
            liquidity=int(data["liquidity"]),
            token0=Token.from_dict(data["token0"]),
            token1=Token.from_dict(data["token1"]),
            tick_spacing=int(data["tickSpacing"]) if data.get("tickSpacing") else None,
        )


@dataclass(frozen=True)
class MintParams:
    """NonfungiblePositionManager.mint 파라미터"""
    token0: str
    token1: str
    fee: int
    tick_lower: int
    tick_upper: int
    amount0_desired: int
    amount1_desired: int
    amount0_min: int
    amount1_min: int
    recipient: str
    deadline: int


class MintResult(NamedTuple):
    """mint 반환값 (tokenId, liquidity, amount0, amount1)"""
    token_id: int
    liquidity: int
    amount0: int
    amount1: int


@dataclass
class Position:
    """포지션 매니저가 소유/저장하는 포지션 기록"""
    token_id: int
    owner: str
    pool_id: str
    token0: str
    token1: str
    fee_tier: int
    tick_lower: int  # i_l
    tick_upper: int  # i_u
    liquidity: int  # l


@dataclass
class AddLiquidityResult:
    """add_liquidity 결과

    amount0_used + refund0 == amount0_desired (token1 도 동일)
    """
    token_id: int
    tick_lower: int
    tick_upper: int
    liquidity: int
    amount0_used: int
    amount1_used: int
    refund0: int
    refund1: int
    amount0_min: int = 0  # 민트에 적용된 최소 수량
    amount1_min: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
