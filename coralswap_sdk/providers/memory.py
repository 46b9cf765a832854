"""
In-memory pool provider.

Holds pool state in dictionaries. Used for simulations, examples and tests,
and as the reference implementation of the provider contracts.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Optional

from ..core.constants import PRICE_SCALE
from ..core.errors import CoralSwapError, ErrorKind
from ..core.types import (
    CumulativePrices,
    FeeState,
    FlashLoanConfig,
    Reserves,
    TokenOrder,
)
from ..core.validation import validate_fee_bps, validate_non_negative_amount
from .base import PoolDataProvider


@dataclass
class PoolState:
    """Mutable state of one simulated pool."""

    pool_id: str
    token0: str
    token1: str
    reserve0: int = 0
    reserve1: int = 0
    fee_bps: int = 30
    total_supply: int = 0
    price0_cumulative_last: int = 0
    price1_cumulative_last: int = 0
    block_timestamp_last: int = 0
    balances: Dict[str, int] = field(default_factory=dict)
    fee_state: Optional[FeeState] = None
    flash_config: FlashLoanConfig = field(
        default_factory=lambda: FlashLoanConfig(flash_fee_bps=9, flash_fee_floor=5)
    )


class InMemoryPoolProvider(PoolDataProvider):
    """
    Dictionary-backed provider.

    Pair lookup is order-insensitive: resolve(a, b) == resolve(b, a).
    Unknown pool ids raise PAIR_NOT_FOUND.
    """

    def __init__(self):
        super().__init__()
        self._pools: Dict[str, PoolState] = {}
        self._pairs: Dict[FrozenSet[str], str] = {}

    def add_pool(
        self,
        pool_id: str,
        token0: str,
        token1: str,
        reserve0: int = 0,
        reserve1: int = 0,
        fee_bps: int = 30,
        total_supply: int = 0,
    ) -> PoolState:
        """Register a pool; token0/token1 fix its canonical order."""
        if token0 == token1:
            raise CoralSwapError.validation(
                "Pool tokens must be different", token0=token0, token1=token1
            )
        validate_fee_bps(fee_bps)
        validate_non_negative_amount(reserve0, "reserve0")
        validate_non_negative_amount(reserve1, "reserve1")
        validate_non_negative_amount(total_supply, "total_supply")
        state = PoolState(
            pool_id=pool_id,
            token0=token0,
            token1=token1,
            reserve0=reserve0,
            reserve1=reserve1,
            fee_bps=fee_bps,
            total_supply=total_supply,
        )
        self._pools[pool_id] = state
        self._pairs[frozenset((token0, token1))] = pool_id
        self.logger.debug(f"Registered pool {pool_id} ({token0}/{token1})")
        return state

    def pool(self, pool_id: str) -> PoolState:
        state = self._pools.get(pool_id)
        if state is None:
            raise CoralSwapError(
                ErrorKind.PAIR_NOT_FOUND,
                f"Unknown pool {pool_id}",
                {"pool_id": pool_id},
            )
        return state

    def set_reserves(self, pool_id: str, reserve0: int, reserve1: int) -> None:
        validate_non_negative_amount(reserve0, "reserve0")
        validate_non_negative_amount(reserve1, "reserve1")
        state = self.pool(pool_id)
        state.reserve0 = reserve0
        state.reserve1 = reserve1

    def set_fee(self, pool_id: str, fee_bps: int) -> None:
        validate_fee_bps(fee_bps)
        state = self.pool(pool_id)
        state.fee_bps = fee_bps
        if state.fee_state is not None:
            state.fee_state = replace(state.fee_state, fee_current=fee_bps)

    def set_fee_state(self, pool_id: str, fee_state: FeeState) -> None:
        """Replace the fee engine state; the dynamic fee follows fee_current."""
        validate_fee_bps(fee_state.fee_current)
        state = self.pool(pool_id)
        state.fee_state = fee_state
        state.fee_bps = fee_state.fee_current

    def set_flash_loan_config(self, pool_id: str, config: FlashLoanConfig) -> None:
        self.pool(pool_id).flash_config = config

    def set_total_supply(self, pool_id: str, total_supply: int) -> None:
        validate_non_negative_amount(total_supply, "total_supply")
        self.pool(pool_id).total_supply = total_supply

    def set_lp_balance(self, pool_id: str, owner: str, balance: int) -> None:
        validate_non_negative_amount(balance, "balance")
        self.pool(pool_id).balances[owner] = balance

    def set_cumulative_prices(
        self,
        pool_id: str,
        price0_cumulative_last: int,
        price1_cumulative_last: int,
        block_timestamp_last: int,
    ) -> None:
        state = self.pool(pool_id)
        state.price0_cumulative_last = price0_cumulative_last
        state.price1_cumulative_last = price1_cumulative_last
        state.block_timestamp_last = block_timestamp_last

    def advance_time(self, pool_id: str, seconds: int, price_scale: int = PRICE_SCALE) -> None:
        """
        Accumulate prices for `seconds` at the current reserves.

        Follows the pair contract: each accumulator grows by the scaled spot
        price times elapsed time (skipped while either reserve is zero).
        """
        state = self.pool(pool_id)
        if seconds <= 0:
            return
        if state.reserve0 > 0 and state.reserve1 > 0:
            state.price0_cumulative_last += (state.reserve1 * price_scale // state.reserve0) * seconds
            state.price1_cumulative_last += (state.reserve0 * price_scale // state.reserve1) * seconds
        state.block_timestamp_last += seconds

    # Provider contract

    async def resolve(self, token_in: str, token_out: str) -> Optional[str]:
        return self._pairs.get(frozenset((token_in, token_out)))

    async def get_reserves(self, pool_id: str) -> Reserves:
        state = self.pool(pool_id)
        return Reserves(state.reserve0, state.reserve1, state.block_timestamp_last)

    async def get_dynamic_fee(self, pool_id: str) -> int:
        return self.pool(pool_id).fee_bps

    async def get_fee_state(self, pool_id: str) -> FeeState:
        state = self.pool(pool_id)
        if state.fee_state is not None:
            return state.fee_state
        # Static pool: the engine never moved off its baseline
        return FeeState(
            fee_current=state.fee_bps,
            baseline_fee=state.fee_bps,
            fee_min=state.fee_bps,
            fee_max=state.fee_bps,
            last_updated=state.block_timestamp_last,
        )

    async def get_flash_loan_config(self, pool_id: str) -> FlashLoanConfig:
        return self.pool(pool_id).flash_config

    async def get_token_order(self, pool_id: str) -> TokenOrder:
        state = self.pool(pool_id)
        return TokenOrder(state.token0, state.token1)

    async def get_cumulative_prices(self, pool_id: str) -> CumulativePrices:
        state = self.pool(pool_id)
        return CumulativePrices(
            state.price0_cumulative_last,
            state.price1_cumulative_last,
            state.block_timestamp_last,
        )

    async def get_lp_supply(self, pool_id: str) -> int:
        return self.pool(pool_id).total_supply

    async def get_lp_balance(self, pool_id: str, owner: str) -> int:
        return self.pool(pool_id).balances.get(owner, 0)
