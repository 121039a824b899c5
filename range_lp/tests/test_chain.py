"""
Simulated Chain 테스트

원장, 포지션 매니저, atomic() 롤백을 테스트합니다.
"""

import pytest

from ..constants import Q96
from ..chain import SimulatedChain, TokenLedger
from ..data.types import MintParams
from ..errors import (
    DeadlineExpiredError,
    InsufficientAllowanceError,
    InsufficientBalanceError,
    InvalidTickSpacingError,
    PoolNotFoundError,
    PositionManagerError,
    PriceOutOfBoundsError,
    SlippageCheckError,
)


WETH = "0x" + "a" * 40
ALICE = "0x" + "b" * 40
BOB = "0x" + "d" * 40


@pytest.fixture
def chain():
    return SimulatedChain(block_timestamp=1_700_000_000)


@pytest.fixture
def funded(chain):
    """tick 0 풀 + ALICE 잔고와 매니저 승인"""
    pool = chain.create_pool(Q96, fee_tier=3000)
    manager = chain.position_manager.address
    for token in (pool.token0.id, pool.token1.id):
        chain.ledger.mint(token, ALICE, 10**20)
        chain.ledger.approve(token, ALICE, manager, 10**20)
    return pool


def make_params(pool, tick_lower=-600, tick_upper=600, amount0=10**18, amount1=10**18, **overrides):
    values = dict(
        token0=pool.token0.id,
        token1=pool.token1.id,
        fee=pool.fee_tier,
        tick_lower=tick_lower,
        tick_upper=tick_upper,
        amount0_desired=amount0,
        amount1_desired=amount1,
        amount0_min=0,
        amount1_min=0,
        recipient=ALICE,
        deadline=1_700_000_000,
    )
    values.update(overrides)
    return MintParams(**values)


class TestTokenLedger:
    """TokenLedger 테스트"""

    def test_transfer(self):
        ledger = TokenLedger()
        ledger.mint(WETH, ALICE, 100)
        ledger.transfer(WETH, ALICE, BOB, 40)
        assert ledger.balance_of(WETH, ALICE) == 60
        assert ledger.balance_of(WETH, BOB) == 40

    def test_addresses_case_insensitive(self):
        ledger = TokenLedger()
        ledger.mint(WETH.upper(), ALICE, 100)
        assert ledger.balance_of(WETH, ALICE.upper()) == 100

    def test_insufficient_balance(self):
        ledger = TokenLedger()
        ledger.mint(WETH, ALICE, 10)
        with pytest.raises(InsufficientBalanceError):
            ledger.transfer(WETH, ALICE, BOB, 11)
        assert ledger.balance_of(WETH, ALICE) == 10

    def test_transfer_from_consumes_allowance(self):
        ledger = TokenLedger()
        ledger.mint(WETH, ALICE, 100)
        ledger.approve(WETH, ALICE, BOB, 70)
        ledger.transfer_from(WETH, BOB, ALICE, BOB, 50)
        assert ledger.allowance(WETH, ALICE, BOB) == 20
        assert ledger.balance_of(WETH, BOB) == 50

    def test_insufficient_allowance(self):
        ledger = TokenLedger()
        ledger.mint(WETH, ALICE, 100)
        ledger.approve(WETH, ALICE, BOB, 10)
        with pytest.raises(InsufficientAllowanceError):
            ledger.transfer_from(WETH, BOB, ALICE, BOB, 11)

    def test_allowance_kept_when_balance_short(self):
        """잔고 부족으로 실패하면 승인 한도는 줄지 않음"""
        ledger = TokenLedger()
        ledger.mint(WETH, ALICE, 5)
        ledger.approve(WETH, ALICE, BOB, 10)
        with pytest.raises(InsufficientBalanceError):
            ledger.transfer_from(WETH, BOB, ALICE, BOB, 10)
        assert ledger.allowance(WETH, ALICE, BOB) == 10

    def test_negative_amount(self):
        with pytest.raises(ValueError):
            TokenLedger().mint(WETH, ALICE, -1)

    def test_snapshot_restore(self):
        ledger = TokenLedger()
        ledger.mint(WETH, ALICE, 100)
        state = ledger.snapshot()
        ledger.transfer(WETH, ALICE, BOB, 100)
        ledger.restore(state)
        assert ledger.balance_of(WETH, ALICE) == 100
        assert ledger.balance_of(WETH, BOB) == 0


class TestPositionManager:
    """SimulatedPositionManager.mint 테스트"""

    def test_mint_in_range(self, chain, funded):
        manager = chain.position_manager
        result = manager.mint(make_params(funded), sender=ALICE)

        assert result.token_id == 1
        assert result.liquidity > 0
        assert 0 < result.amount0 <= 10**18
        assert 0 < result.amount1 <= 10**18
        assert chain.ledger.balance_of(funded.token0.id, funded.id) == result.amount0
        assert chain.ledger.balance_of(funded.token1.id, funded.id) == result.amount1
        assert funded.liquidity == result.liquidity

        position = manager.positions(result.token_id)
        assert position.owner == ALICE
        assert (position.tick_lower, position.tick_upper) == (-600, 600)
        assert manager.positions_of(ALICE.upper()) == {1: position}

    def test_mint_below_range_uses_token0_only(self, chain, funded):
        """현재 틱이 범위 아래면 token0 만 사용하고 활성 유동성은 그대로"""
        result = chain.position_manager.mint(make_params(funded, 60, 120), sender=ALICE)

        assert result.amount0 > 0
        assert result.amount1 == 0
        assert funded.liquidity == 0

    def test_token_ids_increment(self, chain, funded):
        first = chain.position_manager.mint(make_params(funded), sender=ALICE)
        second = chain.position_manager.mint(make_params(funded), sender=ALICE)
        assert second.token_id == first.token_id + 1

    def test_deadline_expired(self, chain, funded):
        with pytest.raises(DeadlineExpiredError):
            chain.position_manager.mint(
                make_params(funded, deadline=chain.block_timestamp - 1), sender=ALICE
            )

    def test_deadline_equal_to_block_time(self, chain, funded):
        params = make_params(funded, deadline=chain.block_timestamp)
        assert chain.position_manager.mint(params, sender=ALICE).liquidity > 0

    def test_misaligned_ticks(self, chain, funded):
        with pytest.raises(InvalidTickSpacingError):
            chain.position_manager.mint(make_params(funded, -59, 600), sender=ALICE)

    def test_inverted_ticks(self, chain, funded):
        with pytest.raises(PriceOutOfBoundsError):
            chain.position_manager.mint(make_params(funded, 600, -600), sender=ALICE)

    def test_unknown_pool(self, chain, funded):
        with pytest.raises(PoolNotFoundError):
            chain.position_manager.mint(make_params(funded, fee=500), sender=ALICE)

    def test_zero_liquidity(self, chain, funded):
        with pytest.raises(PositionManagerError):
            chain.position_manager.mint(make_params(funded, amount0=0, amount1=0), sender=ALICE)

    def test_slippage(self, chain, funded):
        params = make_params(funded, amount1_min=15 * 10**17, amount1=2 * 10**18)
        with pytest.raises(SlippageCheckError):
            chain.position_manager.mint(params, sender=ALICE)

    def test_sender_without_approval(self, chain, funded):
        chain.ledger.mint(funded.token0.id, BOB, 10**18)
        chain.ledger.mint(funded.token1.id, BOB, 10**18)
        with pytest.raises(InsufficientAllowanceError):
            chain.position_manager.mint(make_params(funded), sender=BOB)


class TestSimulatedChain:
    """SimulatedChain 테스트"""

    def test_create_pool_tick(self, chain):
        pool = chain.create_pool(Q96, fee_tier=500)
        assert pool.tick == 0
        assert pool.spacing == 10
        assert chain.get_pool(pool.id.upper()) is pool

    def test_unknown_pool(self, chain):
        with pytest.raises(PoolNotFoundError):
            chain.get_pool("0x" + "0" * 40)

    def test_advance_time(self, chain):
        assert chain.advance_time(60) == 1_700_000_060
        assert chain.block_timestamp == 1_700_000_060

    def test_atomic_reverts_everything(self, chain, funded):
        """블록 안에서 예외가 나면 원장, 포지션, 풀 상태 모두 복원"""
        with pytest.raises(RuntimeError):
            with chain.atomic():
                chain.position_manager.mint(make_params(funded), sender=ALICE)
                assert funded.liquidity > 0
                raise RuntimeError("revert")

        assert funded.liquidity == 0
        assert chain.ledger.balance_of(funded.token0.id, ALICE) == 10**20
        assert chain.ledger.allowance(funded.token0.id, ALICE, chain.position_manager.address) == 10**20
        assert chain.position_manager.positions_of(ALICE) == {}
        assert chain.position_manager.mint(make_params(funded), sender=ALICE).token_id == 1

    def test_atomic_commits_on_success(self, chain, funded):
        with chain.atomic():
            chain.position_manager.mint(make_params(funded), sender=ALICE)
        assert funded.liquidity > 0
        assert len(chain.position_manager.positions_of(ALICE)) == 1
