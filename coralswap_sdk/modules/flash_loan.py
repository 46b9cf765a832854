"""
Flash loan quoting.

Quotes the fee, repayment and borrowing capacity of a pool's flash loans.
Executing a loan needs a receiver contract and a signed transaction, which
this package does not build.
"""

import asyncio
import logging

from ..core import flash_math
from ..core.errors import CoralSwapError
from ..core.types import FlashLoanConfig, FlashLoanFeeEstimate
from ..core.validation import validate_positive_amount, validate_token
from ..providers.base import PoolDataProvider

logger = logging.getLogger(__name__)


class FlashLoanQuoter:
    """Reads flash loan terms and prices loans against them."""

    def __init__(self, provider: PoolDataProvider):
        self.provider = provider
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def get_config(self, pool_id: str) -> FlashLoanConfig:
        return await self.provider.get_flash_loan_config(pool_id)

    async def is_available(self, pool_id: str) -> bool:
        """Whether the pool lends right now; unreadable terms count as unavailable."""
        try:
            config = await self.get_config(pool_id)
        except CoralSwapError as e:
            self.logger.debug(f"Flash loan terms unavailable for pool {pool_id}: {e}")
            return False
        return not config.locked

    async def estimate_fee(
        self, pool_id: str, token: str, amount: int
    ) -> FlashLoanFeeEstimate:
        """
        Fee for borrowing amount of token from a pool.

        Args:
            pool_id: Pool lending the token
            token: Token borrowed
            amount: Principal

        Returns:
            Estimate with the fee (bps fee or floor, whichever is larger)

        Raises:
            CoralSwapError: FLASH_LOAN when the pool has flash loans locked
        """
        validate_token(pool_id, "pool_id")
        validate_token(token, "token")
        validate_positive_amount(amount, "amount")

        config = await self.get_config(pool_id)
        if config.locked:
            raise CoralSwapError.flash_loan_locked(pool_id)

        return FlashLoanFeeEstimate(
            pool_id=pool_id,
            token=token,
            amount=amount,
            fee_bps=config.flash_fee_bps,
            fee_amount=flash_math.flash_loan_fee(
                amount, config.flash_fee_bps, config.flash_fee_floor
            ),
            fee_floor=config.flash_fee_floor,
        )

    @staticmethod
    def calculate_repayment(amount: int, fee_bps: int) -> int:
        return flash_math.flash_loan_repayment(amount, fee_bps)

    async def get_max_borrowable(self, pool_id: str, token: str) -> int:
        """
        Largest amount of token the pool can lend, keeping a 1% reserve margin.

        Raises:
            CoralSwapError: VALIDATION when token is not one of the pool's tokens
        """
        validate_token(token, "token")
        reserves, order = await asyncio.gather(
            self.provider.get_reserves(pool_id),
            self.provider.get_token_order(pool_id),
        )
        if not order.contains(token):
            raise CoralSwapError.validation(
                f"Token {token} is not part of pool {pool_id}", token=token
            )
        reserve = reserves.reserve0 if order.is_token0(token) else reserves.reserve1
        return flash_math.max_borrowable(reserve)


__all__ = ["FlashLoanQuoter"]
