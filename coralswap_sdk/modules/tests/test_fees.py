"""
Tests for fee estimation.
"""

import pytest

from ...core.errors import CoralSwapError, ErrorKind
from ...core.types import FeeState
from ..fees import NOMINAL_AMOUNT, FeeEstimator


@pytest.fixture
def estimator(provider):
    provider.set_fee("pool-bc", 100)
    return FeeEstimator(provider)


class TestFeeEstimator:
    """Test dynamic fee reads."""

    @pytest.mark.asyncio
    async def test_estimate_swap_fee(self, estimator):
        estimate = await estimator.estimate_swap_fee("pool-ab", 10_000)

        assert estimate.pool_id == "pool-ab"
        assert estimate.fee_bps == 30
        assert estimate.fee_amount == 30

    @pytest.mark.asyncio
    async def test_estimate_rejects_zero_amount(self, estimator):
        with pytest.raises(CoralSwapError) as exc_info:
            await estimator.estimate_swap_fee("pool-ab", 0)
        assert exc_info.value.kind is ErrorKind.VALIDATION

    @pytest.mark.asyncio
    async def test_fee_for_pair(self, estimator):
        assert await estimator.get_fee_for_pair("C", "B") == 100

    @pytest.mark.asyncio
    async def test_fee_for_missing_pair(self, estimator):
        with pytest.raises(CoralSwapError) as exc_info:
            await estimator.get_fee_for_pair("A", "Z")
        assert exc_info.value.kind is ErrorKind.PAIR_NOT_FOUND

    @pytest.mark.asyncio
    async def test_compare_fees_keeps_order(self, estimator):
        estimates = await estimator.compare_fees(["pool-bc", "pool-ab"])

        assert [e.pool_id for e in estimates] == ["pool-bc", "pool-ab"]
        assert [e.fee_bps for e in estimates] == [100, 30]
        assert estimates[0].fee_amount == NOMINAL_AMOUNT * 100 // 10_000


class TestFeeState:
    """Test fee engine state and staleness."""

    @pytest.fixture
    def dynamic_state(self):
        return FeeState(
            fee_current=45,
            baseline_fee=30,
            fee_min=10,
            fee_max=100,
            vol_accumulator=7_500,
            ema_decay_rate=60,
            last_updated=1_000,
        )

    @pytest.mark.asyncio
    async def test_current_fee_reports_engine_state(self, provider, dynamic_state):
        provider.set_fee_state("pool-ab", dynamic_state)
        estimator = FeeEstimator(provider, clock=lambda: 1_500.0)

        current = await estimator.get_current_fee("pool-ab")

        assert current.pool_id == "pool-ab"
        assert current.current_fee_bps == 45
        assert current.baseline_fee_bps == 30
        assert (current.fee_min, current.fee_max) == (10, 100)
        assert current.volatility == 7_500
        assert current.ema_decay_rate == 60
        assert current.last_updated == 1_000
        assert current.is_stale is False

    @pytest.mark.asyncio
    async def test_dynamic_fee_follows_engine_state(self, provider, dynamic_state):
        provider.set_fee_state("pool-ab", dynamic_state)
        estimator = FeeEstimator(provider)

        estimate = await estimator.estimate_swap_fee("pool-ab", 10_000)
        assert estimate.fee_bps == 45

    @pytest.mark.asyncio
    async def test_stale_after_max_age(self, provider, dynamic_state):
        provider.set_fee_state("pool-ab", dynamic_state)

        at_limit = FeeEstimator(provider, clock=lambda: 1_000.0 + 3_600)
        past_limit = FeeEstimator(provider, clock=lambda: 1_000.0 + 3_601)

        assert await at_limit.is_stale("pool-ab") is False
        assert await past_limit.is_stale("pool-ab") is True

    @pytest.mark.asyncio
    async def test_custom_max_age(self, provider, dynamic_state):
        provider.set_fee_state("pool-ab", dynamic_state)
        estimator = FeeEstimator(provider, clock=lambda: 1_100.0)

        assert await estimator.is_stale("pool-ab", max_age_sec=60) is True
        current = await estimator.get_current_fee("pool-ab", max_age_sec=600)
        assert current.is_stale is False

    @pytest.mark.asyncio
    async def test_static_pool_state(self, provider):
        estimator = FeeEstimator(provider, clock=lambda: 0.0)

        state = await estimator.get_fee_state("pool-bc")

        assert state.fee_current == state.baseline_fee == 30
        assert state.fee_min == state.fee_max == 30
        assert state.vol_accumulator == 0

    @pytest.mark.asyncio
    async def test_fee_state_unknown_pool(self, provider):
        estimator = FeeEstimator(provider)
        with pytest.raises(CoralSwapError) as exc_info:
            await estimator.get_fee_state("pool-zz")
        assert exc_info.value.kind is ErrorKind.PAIR_NOT_FOUND
