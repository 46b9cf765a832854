"""
Dynamic fee reads.
"""

import asyncio
import logging
import time
from typing import Callable, Iterable, List

from ..core.amounts import apply_bps
from ..core.constants import DEFAULT_DECIMALS, FEE_STALE_AFTER_SEC
from ..core.types import CurrentFee, FeeEstimate, FeeState
from ..core.validation import (
    validate_distinct_tokens,
    validate_positive_amount,
    validate_token,
)
from ..providers.base import PoolDataProvider

logger = logging.getLogger(__name__)

# One whole token at the default precision
NOMINAL_AMOUNT = 10 ** DEFAULT_DECIMALS


class FeeEstimator:
    """Reads pool fees and prices them against an input amount."""

    def __init__(
        self,
        provider: PoolDataProvider,
        clock: Callable[[], float] = time.time,
    ):
        self.provider = provider
        self._clock = clock
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def estimate_swap_fee(self, pool_id: str, amount_in: int) -> FeeEstimate:
        """Fee a pool would charge on amount_in at its current dynamic fee."""
        validate_token(pool_id, "pool_id")
        validate_positive_amount(amount_in, "amount_in")
        fee_bps = await self.provider.get_dynamic_fee(pool_id)
        return FeeEstimate(
            pool_id=pool_id,
            fee_bps=fee_bps,
            fee_amount=apply_bps(amount_in, fee_bps),
        )

    async def get_fee_for_pair(self, token_a: str, token_b: str) -> int:
        """
        Current fee of the pool trading token_a/token_b.

        Raises:
            CoralSwapError: PAIR_NOT_FOUND when no pool exists
        """
        validate_token(token_a, "token_a")
        validate_token(token_b, "token_b")
        validate_distinct_tokens(token_a, token_b)
        pool_id = await self.provider.require_pool(token_a, token_b)
        return await self.provider.get_dynamic_fee(pool_id)

    async def get_fee_state(self, pool_id: str) -> FeeState:
        validate_token(pool_id, "pool_id")
        return await self.provider.get_fee_state(pool_id)

    async def get_current_fee(
        self, pool_id: str, max_age_sec: int = FEE_STALE_AFTER_SEC
    ) -> CurrentFee:
        """
        Current dynamic fee with its bounds and staleness.

        The fee is stale when no swap has updated the engine for more than
        max_age_sec; the volatility EMA has not decayed since.
        """
        state = await self.get_fee_state(pool_id)
        return CurrentFee(
            pool_id=pool_id,
            current_fee_bps=state.fee_current,
            baseline_fee_bps=state.baseline_fee,
            fee_min=state.fee_min,
            fee_max=state.fee_max,
            volatility=state.vol_accumulator,
            ema_decay_rate=state.ema_decay_rate,
            last_updated=state.last_updated,
            is_stale=self._is_stale(state, max_age_sec),
        )

    async def is_stale(self, pool_id: str, max_age_sec: int = FEE_STALE_AFTER_SEC) -> bool:
        state = await self.get_fee_state(pool_id)
        return self._is_stale(state, max_age_sec)

    def _is_stale(self, state: FeeState, max_age_sec: int) -> bool:
        return int(self._clock()) - state.last_updated > max_age_sec

    async def compare_fees(
        self, pool_ids: Iterable[str], amount_in: int = NOMINAL_AMOUNT
    ) -> List[FeeEstimate]:
        """Estimates for several pools, in the order given."""
        estimates = await asyncio.gather(
            *(self.estimate_swap_fee(pool_id, amount_in) for pool_id in pool_ids)
        )
        return list(estimates)


__all__ = ["FeeEstimator", "NOMINAL_AMOUNT"]
