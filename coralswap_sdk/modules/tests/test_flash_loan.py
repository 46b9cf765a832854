"""
Tests for flash loan quoting.
"""

import pytest

from ...core.errors import CoralSwapError, ErrorKind
from ...core.types import FlashLoanConfig
from ..flash_loan import FlashLoanQuoter


@pytest.fixture
def quoter(provider):
    return FlashLoanQuoter(provider)


class TestEstimateFee:
    """Test flash loan fee estimates against the pool's terms."""

    @pytest.mark.asyncio
    async def test_bps_fee_above_floor(self, quoter):
        estimate = await quoter.estimate_fee("pool-ab", "A", 1_000_000)

        assert estimate.pool_id == "pool-ab"
        assert estimate.token == "A"
        assert estimate.fee_bps == 9
        assert estimate.fee_amount == 900
        assert estimate.repayment == 1_000_900

    @pytest.mark.asyncio
    async def test_floor_applies_to_small_loans(self, quoter):
        estimate = await quoter.estimate_fee("pool-ab", "A", 1_000)

        # 1000 * 9 / 10000 rounds down to 0
        assert estimate.fee_amount == 5
        assert estimate.fee_floor == 5
        assert estimate.repayment == 1_005

    @pytest.mark.asyncio
    async def test_locked_pool_rejects(self, provider, quoter):
        provider.set_flash_loan_config(
            "pool-ab", FlashLoanConfig(flash_fee_bps=9, flash_fee_floor=5, locked=True)
        )

        with pytest.raises(CoralSwapError) as exc_info:
            await quoter.estimate_fee("pool-ab", "A", 1_000_000)
        assert exc_info.value.kind is ErrorKind.FLASH_LOAN
        assert exc_info.value.details["pool_id"] == "pool-ab"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [0, -1])
    async def test_rejects_non_positive_amount(self, quoter, amount):
        with pytest.raises(CoralSwapError) as exc_info:
            await quoter.estimate_fee("pool-ab", "A", amount)
        assert exc_info.value.kind is ErrorKind.VALIDATION


class TestAvailability:
    """Test whether a pool currently lends."""

    @pytest.mark.asyncio
    async def test_open_pool(self, quoter):
        assert await quoter.is_available("pool-ab") is True

    @pytest.mark.asyncio
    async def test_locked_pool(self, provider, quoter):
        provider.set_flash_loan_config(
            "pool-ab", FlashLoanConfig(flash_fee_bps=9, flash_fee_floor=5, locked=True)
        )
        assert await quoter.is_available("pool-ab") is False

    @pytest.mark.asyncio
    async def test_unknown_pool(self, quoter):
        assert await quoter.is_available("pool-zz") is False


class TestRepaymentAndCapacity:
    """Test repayment math and borrowing capacity."""

    def test_calculate_repayment(self):
        assert FlashLoanQuoter.calculate_repayment(1_000_000, 9) == 1_000_900
        assert FlashLoanQuoter.calculate_repayment(1_000, 9) == 1_000

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token,expected", [("A", 99_000), ("B", 198_000)])
    async def test_max_borrowable(self, quoter, token, expected):
        assert await quoter.get_max_borrowable("pool-ab", token) == expected

    @pytest.mark.asyncio
    async def test_max_borrowable_empty_pool(self, quoter):
        assert await quoter.get_max_borrowable("pool-ce", "C") == 0

    @pytest.mark.asyncio
    async def test_max_borrowable_foreign_token(self, quoter):
        with pytest.raises(CoralSwapError) as exc_info:
            await quoter.get_max_borrowable("pool-ab", "C")
        assert exc_info.value.kind is ErrorKind.VALIDATION
