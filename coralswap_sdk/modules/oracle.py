"""
TWAP oracle over pool cumulative price accumulators.

Every observe() samples a pool's accumulators into a bounded per-pool cache.
get_twap() averages between the oldest and newest cached samples.
"""

import logging
from typing import Optional, Tuple

from ..core.constants import MAX_OBSERVATIONS
from ..core.errors import CoralSwapError
from ..core.liquidity_math import price_ratio
from ..core.twap import ObservationCache, compute_twap
from ..core.types import SpotPrice, TWAPObservation, TWAPResult
from ..providers.base import PoolDataProvider

logger = logging.getLogger(__name__)


class TWAPOracle:
    """Time-weighted and spot prices for pools read through a provider."""

    def __init__(
        self,
        provider: PoolDataProvider,
        capacity: int = MAX_OBSERVATIONS,
        cache: Optional[ObservationCache] = None,
    ):
        """
        Initialize the oracle.

        Args:
            provider: Reads cumulative prices, reserves and token order
            capacity: Observations kept per pool (ignored when cache is given)
            cache: Pre-built observation cache, e.g. one shared between oracles
        """
        self.provider = provider
        self.cache = cache if cache is not None else ObservationCache(capacity)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def observe(self, pool_id: str) -> TWAPObservation:
        """Sample a pool's accumulators and append the sample to its cache."""
        prices = await self.provider.get_cumulative_prices(pool_id)
        observation = TWAPObservation(
            price0_cumulative_last=prices.price0_cumulative_last,
            price1_cumulative_last=prices.price1_cumulative_last,
            block_timestamp_last=prices.block_timestamp_last,
        )
        count = self.cache.append(pool_id, observation)
        self.logger.debug(
            f"Observed pool {pool_id} at t={observation.block_timestamp_last} "
            f"({count} cached)"
        )
        return observation

    def compute_twap(
        self, start: TWAPObservation, end: TWAPObservation
    ) -> Tuple[int, int, int]:
        return compute_twap(start, end)

    async def get_twap(self, pool_id: str) -> Optional[TWAPResult]:
        """
        Observe the pool, then average over the cached window.

        Returns:
            TWAPResult, or None while fewer than two observations are cached
            or no time has elapsed between the oldest and newest of them
        """
        await self.observe(pool_id)
        window = self.cache.window(pool_id)
        if window is None:
            return None
        start, end = window
        if end.block_timestamp_last <= start.block_timestamp_last:
            return None

        order = await self.provider.get_token_order(pool_id)
        price0_twap, price1_twap, time_window = compute_twap(start, end)
        return TWAPResult(
            pool_id=pool_id,
            token0=order.token0,
            token1=order.token1,
            price0_twap=price0_twap,
            price1_twap=price1_twap,
            time_window=time_window,
            start_observation=start,
            end_observation=end,
        )

    async def get_spot_price(self, pool_id: str) -> SpotPrice:
        """
        Instantaneous prices from current reserves, scaled by PRICE_SCALE.

        Raises:
            CoralSwapError: INSUFFICIENT_LIQUIDITY when either reserve is zero
        """
        reserves = await self.provider.get_reserves(pool_id)
        if reserves.is_empty:
            raise CoralSwapError.insufficient_liquidity(pool_id)
        return SpotPrice(
            price0_per1=price_ratio(reserves.reserve0, reserves.reserve1),
            price1_per0=price_ratio(reserves.reserve1, reserves.reserve0),
        )

    def clear_cache(self, pool_id: Optional[str] = None) -> None:
        """Drop cached observations for one pool, or for all pools."""
        self.cache.clear(pool_id)
        self.logger.info(
            f"Cleared observations for {pool_id if pool_id else 'all pools'}"
        )

    def observation_count(self, pool_id: str) -> int:
        return self.cache.count(pool_id)


__all__ = ["TWAPOracle"]
