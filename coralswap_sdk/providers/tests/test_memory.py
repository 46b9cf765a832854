"""
Tests for the in-memory pool provider.
"""

import pytest

from ...core.constants import PRICE_SCALE
from ...core.errors import CoralSwapError, ErrorKind
from ...core.types import FeeState, FlashLoanConfig, TokenOrder
from ..memory import InMemoryPoolProvider


@pytest.fixture
def provider():
    provider = InMemoryPoolProvider()
    provider.add_pool("pool-ab", "A", "B", reserve0=1000, reserve1=2000, fee_bps=25)
    return provider


class TestRegistration:
    """Test pool registration and lookup."""

    @pytest.mark.asyncio
    async def test_resolve_is_order_insensitive(self, provider):
        assert await provider.resolve("A", "B") == "pool-ab"
        assert await provider.resolve("B", "A") == "pool-ab"

    @pytest.mark.asyncio
    async def test_resolve_missing(self, provider):
        assert await provider.resolve("A", "C") is None

    @pytest.mark.asyncio
    async def test_require_pool_missing(self, provider):
        with pytest.raises(CoralSwapError) as exc_info:
            await provider.require_pool("A", "C")
        assert exc_info.value.kind is ErrorKind.PAIR_NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_pool_id(self, provider):
        with pytest.raises(CoralSwapError) as exc_info:
            await provider.get_reserves("nope")
        assert exc_info.value.kind is ErrorKind.PAIR_NOT_FOUND

    def test_rejects_identical_tokens(self, provider):
        with pytest.raises(CoralSwapError):
            provider.add_pool("bad", "A", "A")

    def test_rejects_bad_fee(self, provider):
        with pytest.raises(CoralSwapError):
            provider.add_pool("bad", "A", "C", fee_bps=10_000)

    def test_rejects_negative_reserves(self, provider):
        with pytest.raises(CoralSwapError) as exc_info:
            provider.add_pool("bad", "A", "C", reserve0=-1)
        assert exc_info.value.kind is ErrorKind.VALIDATION

    @pytest.mark.parametrize(
        "setter,args",
        [
            ("set_reserves", (-1, 10)),
            ("set_total_supply", (-5,)),
            ("set_lp_balance", ("alice", -1)),
        ],
    )
    def test_setters_reject_negative(self, provider, setter, args):
        with pytest.raises(CoralSwapError) as exc_info:
            getattr(provider, setter)("pool-ab", *args)
        assert exc_info.value.kind is ErrorKind.VALIDATION


class TestState:
    """Test state reads and updates."""

    @pytest.mark.asyncio
    async def test_reads(self, provider):
        reserves = await provider.get_reserves("pool-ab")
        assert (reserves.reserve0, reserves.reserve1) == (1000, 2000)
        assert await provider.get_dynamic_fee("pool-ab") == 25
        assert await provider.get_token_order("pool-ab") == TokenOrder("A", "B")

    @pytest.mark.asyncio
    async def test_updates(self, provider):
        provider.set_reserves("pool-ab", 5, 6)
        provider.set_fee("pool-ab", 100)
        provider.set_total_supply("pool-ab", 77)
        provider.set_lp_balance("pool-ab", "alice", 7)

        reserves = await provider.get_reserves("pool-ab")
        assert (reserves.reserve0, reserves.reserve1) == (5, 6)
        assert await provider.get_dynamic_fee("pool-ab") == 100
        assert await provider.get_lp_supply("pool-ab") == 77
        assert await provider.get_lp_balance("pool-ab", "alice") == 7
        assert await provider.get_lp_balance("pool-ab", "bob") == 0

    @pytest.mark.asyncio
    async def test_advance_time_accumulates(self, provider):
        provider.advance_time("pool-ab", 10)

        prices = await provider.get_cumulative_prices("pool-ab")
        assert prices.price0_cumulative_last == 2 * PRICE_SCALE * 10
        assert prices.price1_cumulative_last == PRICE_SCALE // 2 * 10
        assert prices.block_timestamp_last == 10

    @pytest.mark.asyncio
    async def test_advance_time_empty_pool(self, provider):
        provider.set_reserves("pool-ab", 0, 0)
        provider.advance_time("pool-ab", 10)

        prices = await provider.get_cumulative_prices("pool-ab")
        assert prices.price0_cumulative_last == 0
        assert prices.block_timestamp_last == 10

    @pytest.mark.asyncio
    async def test_set_cumulative_prices(self, provider):
        provider.set_cumulative_prices("pool-ab", 1, 2, 3)
        prices = await provider.get_cumulative_prices("pool-ab")
        assert (prices.price0_cumulative_last, prices.price1_cumulative_last) == (1, 2)
        assert (await provider.get_reserves("pool-ab")).block_timestamp_last == 3


class TestFeeAndFlashState:
    """Test fee engine state and flash loan terms."""

    @pytest.mark.asyncio
    async def test_static_fee_state(self, provider):
        state = await provider.get_fee_state("pool-ab")
        assert state.fee_current == state.baseline_fee == 25
        assert (state.fee_min, state.fee_max) == (25, 25)

    @pytest.mark.asyncio
    async def test_set_fee_state_drives_dynamic_fee(self, provider):
        provider.set_fee_state(
            "pool-ab", FeeState(fee_current=60, baseline_fee=30, fee_min=10, fee_max=100)
        )
        assert await provider.get_dynamic_fee("pool-ab") == 60

        provider.set_fee("pool-ab", 40)
        state = await provider.get_fee_state("pool-ab")
        assert state.fee_current == 40
        assert state.baseline_fee == 30

    @pytest.mark.asyncio
    async def test_default_flash_config(self, provider):
        config = await provider.get_flash_loan_config("pool-ab")
        assert config == FlashLoanConfig(flash_fee_bps=9, flash_fee_floor=5, locked=False)

    @pytest.mark.asyncio
    async def test_set_flash_config(self, provider):
        provider.set_flash_loan_config("pool-ab", FlashLoanConfig(20, 0, locked=True))
        assert (await provider.get_flash_loan_config("pool-ab")).locked is True
