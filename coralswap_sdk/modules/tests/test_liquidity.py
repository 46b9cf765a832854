"""
Tests for liquidity quoting and LP positions.
"""

from fractions import Fraction

import pytest

from ...core.constants import MIN_LIQUIDITY, PRICE_SCALE
from ...core.errors import CoralSwapError, ErrorKind
from ..liquidity import LiquidityQuoter


@pytest.fixture
def quoter(lp_provider):
    return LiquidityQuoter(lp_provider)


class TestAddLiquidityQuote:
    """Test deposit quotes."""

    @pytest.mark.asyncio
    async def test_first_deposit_without_pool(self, quoter):
        quote = await quoter.get_add_liquidity_quote("A", "Z", 1_000_000)

        assert quote.amount_a == 1_000_000
        assert quote.amount_b == 1_000_000
        assert quote.estimated_lp_tokens == 1_000_000 - MIN_LIQUIDITY
        assert quote.share_of_pool == Fraction(1)
        assert quote.price_a_per_b == PRICE_SCALE
        assert quote.price_b_per_a == PRICE_SCALE

    @pytest.mark.asyncio
    async def test_proportional_deposit(self, quoter):
        quote = await quoter.get_add_liquidity_quote("A", "B", 100)

        assert quote.amount_b == 200
        assert quote.estimated_lp_tokens == 100
        assert quote.share_of_pool == Fraction(1, 11)
        assert quote.price_a_per_b == 2 * PRICE_SCALE
        assert quote.price_b_per_a == PRICE_SCALE // 2

    @pytest.mark.asyncio
    async def test_orients_by_token_order(self, quoter):
        """Test a deposit quoted in the pool's token1."""
        quote = await quoter.get_add_liquidity_quote("B", "A", 200)

        assert quote.amount_b == 100
        assert quote.estimated_lp_tokens == 100

    @pytest.mark.asyncio
    async def test_pool_without_supply_uses_sqrt(self, lp_provider, quoter):
        lp_provider.set_total_supply("pool-ab", 0)

        quote = await quoter.get_add_liquidity_quote("A", "B", 100)

        # sqrt(100 * 200) == 141
        assert quote.amount_b == 200
        assert quote.estimated_lp_tokens == 141 - MIN_LIQUIDITY
        assert quote.share_of_pool == Fraction(1)

    @pytest.mark.asyncio
    async def test_empty_reserve_a(self, lp_provider, quoter):
        lp_provider.set_reserves("pool-ab", 0, 2000)

        with pytest.raises(CoralSwapError) as exc_info:
            await quoter.get_add_liquidity_quote("A", "B", 100)
        assert exc_info.value.kind is ErrorKind.INSUFFICIENT_LIQUIDITY
        assert exc_info.value.details["pool_id"] == "pool-ab"

    @pytest.mark.asyncio
    async def test_rejects_bad_input(self, quoter):
        with pytest.raises(CoralSwapError):
            await quoter.get_add_liquidity_quote("A", "A", 100)
        with pytest.raises(CoralSwapError):
            await quoter.get_add_liquidity_quote("A", "B", 0)

    def test_sqrt(self):
        assert LiquidityQuoter.sqrt(10**18) == 10**9


class TestRemoveLiquidityQuote:
    """Test withdrawal quotes."""

    @pytest.mark.asyncio
    async def test_proportional_withdrawal(self, quoter):
        quote = await quoter.get_remove_liquidity_quote("A", "B", 500)

        assert quote.pool_id == "pool-ab"
        assert (quote.amount_a, quote.amount_b) == (500, 1000)
        assert (quote.amount_a_min, quote.amount_b_min) == (497, 995)
        assert quote.share_of_pool == Fraction(1, 2)

    @pytest.mark.asyncio
    async def test_orients_by_token_order(self, quoter):
        quote = await quoter.get_remove_liquidity_quote("B", "A", 500, slippage_bps=0)

        assert (quote.amount_a, quote.amount_b) == (1000, 500)
        assert (quote.amount_a_min, quote.amount_b_min) == (1000, 500)

    @pytest.mark.asyncio
    async def test_exceeds_supply(self, quoter):
        with pytest.raises(CoralSwapError) as exc_info:
            await quoter.get_remove_liquidity_quote("A", "B", 1001)
        assert exc_info.value.kind is ErrorKind.INSUFFICIENT_LIQUIDITY

    @pytest.mark.asyncio
    async def test_missing_pool(self, quoter):
        with pytest.raises(CoralSwapError) as exc_info:
            await quoter.get_remove_liquidity_quote("A", "Z", 10)
        assert exc_info.value.kind is ErrorKind.PAIR_NOT_FOUND


class TestPositions:
    """Test LP position reads."""

    @pytest.mark.asyncio
    async def test_position(self, lp_provider, quoter):
        lp_provider.set_lp_balance("pool-ab", "alice", 250)

        position = await quoter.get_position("pool-ab", "alice")

        assert position.balance == 250
        assert position.total_supply == 1000
        assert position.share == Fraction(1, 4)
        assert (position.token0_amount, position.token1_amount) == (250, 500)

    @pytest.mark.asyncio
    async def test_position_without_supply(self, lp_provider, quoter):
        lp_provider.set_total_supply("pool-ab", 0)

        position = await quoter.get_position("pool-ab", "alice")

        assert position.share == 0
        assert (position.token0_amount, position.token1_amount) == (0, 0)

    @pytest.mark.asyncio
    async def test_all_positions_skips_empty(self, lp_provider, quoter):
        lp_provider.add_pool("pool-cd", "C", "D", 10, 10, total_supply=10)
        lp_provider.set_lp_balance("pool-ab", "alice", 250)

        positions = await quoter.get_all_positions("alice", ["pool-ab", "pool-cd"])

        assert [p.pool_id for p in positions] == ["pool-ab"]
