"""
Collaborator contracts consumed by the quoting modules.

The pricing core never talks to a chain. Modules pull pool state through
these abstract interfaces; concrete providers (in-memory, Web3) implement
them. Every lookup is a coroutine because real providers perform RPC I/O.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..core.errors import CoralSwapError
from ..core.types import (
    CumulativePrices,
    FeeState,
    FlashLoanConfig,
    Reserves,
    TokenOrder,
)

logger = logging.getLogger(__name__)


class PairResolver(ABC):
    """Resolves the pool trading a token pair."""

    @abstractmethod
    async def resolve(self, token_in: str, token_out: str) -> Optional[str]:
        """
        Find the pool for a token pair.

        Args:
            token_in: First token identifier
            token_out: Second token identifier

        Returns:
            Pool id, or None when no pool exists
        """
        pass


class PoolReserveProvider(ABC):
    """Reads pool state: reserves, fees, token order, accumulators, LP supply and flash terms."""

    @abstractmethod
    async def get_reserves(self, pool_id: str) -> Reserves:
        """Current reserves in pool token order."""
        pass

    @abstractmethod
    async def get_dynamic_fee(self, pool_id: str) -> int:
        """Current fee in basis points."""
        pass

    @abstractmethod
    async def get_fee_state(self, pool_id: str) -> FeeState:
        """Full dynamic fee engine state."""
        pass

    @abstractmethod
    async def get_flash_loan_config(self, pool_id: str) -> FlashLoanConfig:
        """Flash loan fee terms and lock flag."""
        pass

    @abstractmethod
    async def get_token_order(self, pool_id: str) -> TokenOrder:
        """Canonical (token0, token1) order of the pool."""
        pass

    @abstractmethod
    async def get_cumulative_prices(self, pool_id: str) -> CumulativePrices:
        """Cumulative price accumulators and their timestamp."""
        pass

    @abstractmethod
    async def get_lp_supply(self, pool_id: str) -> int:
        """Total supply of the pool's LP token."""
        pass

    @abstractmethod
    async def get_lp_balance(self, pool_id: str, owner: str) -> int:
        """LP token balance held by owner."""
        pass


class PoolDataProvider(PairResolver, PoolReserveProvider):
    """
    A provider that both resolves pairs and reads pool state.

    Subclasses get a per-instance logger and a helper for the common
    resolve-or-fail lookup.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def require_pool(self, token_a: str, token_b: str) -> str:
        """Resolve a pool or raise PAIR_NOT_FOUND."""
        pool_id = await self.resolve(token_a, token_b)
        if not pool_id:
            raise CoralSwapError.pair_not_found(token_a, token_b)
        return pool_id
