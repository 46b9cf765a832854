"""
Liquidity quoting and LP position reads.
"""

import asyncio
import logging
from fractions import Fraction
from typing import Iterable, List, Optional

from ..core import liquidity_math
from ..core.amounts import slippage_tolerance
from ..core.constants import DEFAULT_SLIPPAGE_BPS, PRICE_SCALE
from ..core.errors import CoralSwapError
from ..core.types import LiquidityQuote, LPPosition, RemoveLiquidityQuote
from ..core.validation import (
    validate_distinct_tokens,
    validate_positive_amount,
    validate_slippage,
    validate_token,
)
from ..providers.base import PoolDataProvider

logger = logging.getLogger(__name__)


class LiquidityQuoter:
    """
    Quotes deposits and withdrawals and reads LP positions.

    A pair with no pool yet is quoted as a bootstrap deposit at a 1:1 ratio.
    """

    def __init__(
        self,
        provider: PoolDataProvider,
        default_slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
    ):
        validate_slippage(default_slippage_bps)
        self.provider = provider
        self.default_slippage_bps = default_slippage_bps
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @staticmethod
    def sqrt(value: int) -> int:
        return liquidity_math.isqrt(value)

    async def get_add_liquidity_quote(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
    ) -> LiquidityQuote:
        """
        Quote a proportional deposit of amount_a_desired of token A.

        Args:
            token_a: Token the amount is given in
            token_b: Paired token
            amount_a_desired: Token A amount to deposit

        Returns:
            Matching token B amount, estimated LP tokens and share of pool

        Raises:
            CoralSwapError: INSUFFICIENT_LIQUIDITY when the pool exists but
                holds no token A
        """
        validate_token(token_a, "token_a")
        validate_token(token_b, "token_b")
        validate_distinct_tokens(token_a, token_b)
        validate_positive_amount(amount_a_desired, "amount_a_desired")

        pool_id = await self.provider.resolve(token_a, token_b)
        if not pool_id:
            self.logger.debug(f"No pool for {token_a}/{token_b}, quoting first deposit")
            return LiquidityQuote(
                amount_a=amount_a_desired,
                amount_b=amount_a_desired,
                estimated_lp_tokens=liquidity_math.first_deposit_lp(
                    amount_a_desired, amount_a_desired
                ),
                share_of_pool=Fraction(1),
                price_a_per_b=PRICE_SCALE,
                price_b_per_a=PRICE_SCALE,
            )

        reserves, total_supply = await asyncio.gather(
            self.provider.get_reserves(pool_id),
            self.provider.get_lp_supply(pool_id),
        )
        order = await self.provider.get_token_order(pool_id)
        reserve_a, reserve_b = reserves.oriented(token_a, order)
        if reserve_a <= 0:
            raise CoralSwapError.insufficient_liquidity(
                pool_id, reserve_a=str(reserve_a), reserve_b=str(reserve_b)
            )

        amount_b = liquidity_math.quote_amount_b(amount_a_desired, reserve_a, reserve_b)
        if total_supply > 0:
            estimated_lp = liquidity_math.proportional_lp(
                amount_a_desired, reserve_a, total_supply
            )
            share = liquidity_math.pool_share(estimated_lp, total_supply)
        else:
            estimated_lp = liquidity_math.first_deposit_lp(amount_a_desired, amount_b)
            share = Fraction(1)

        return LiquidityQuote(
            amount_a=amount_a_desired,
            amount_b=amount_b,
            estimated_lp_tokens=estimated_lp,
            share_of_pool=share,
            price_a_per_b=liquidity_math.price_ratio(reserve_b, reserve_a),
            price_b_per_a=liquidity_math.price_ratio(reserve_a, reserve_b),
        )

    async def get_remove_liquidity_quote(
        self,
        token_a: str,
        token_b: str,
        liquidity: int,
        slippage_bps: Optional[int] = None,
    ) -> RemoveLiquidityQuote:
        """Quote the token amounts returned for burning liquidity LP tokens."""
        validate_token(token_a, "token_a")
        validate_token(token_b, "token_b")
        validate_distinct_tokens(token_a, token_b)
        validate_positive_amount(liquidity, "liquidity")
        if slippage_bps is None:
            slippage_bps = self.default_slippage_bps
        else:
            validate_slippage(slippage_bps)

        pool_id = await self.provider.require_pool(token_a, token_b)
        reserves, total_supply = await asyncio.gather(
            self.provider.get_reserves(pool_id),
            self.provider.get_lp_supply(pool_id),
        )
        order = await self.provider.get_token_order(pool_id)
        if total_supply <= 0 or liquidity > total_supply:
            raise CoralSwapError.insufficient_liquidity(
                pool_id, liquidity=str(liquidity), total_supply=str(total_supply)
            )

        amount0, amount1 = liquidity_math.burn_amounts(
            liquidity, reserves.reserve0, reserves.reserve1, total_supply
        )
        if not order.contains(token_a):
            raise CoralSwapError.validation(
                f"Token {token_a} is not part of pool {pool_id}", token=token_a
            )
        if order.is_token0(token_a):
            amount_a, amount_b = amount0, amount1
        else:
            amount_a, amount_b = amount1, amount0

        return RemoveLiquidityQuote(
            pool_id=pool_id,
            liquidity=liquidity,
            amount_a=amount_a,
            amount_b=amount_b,
            amount_a_min=slippage_tolerance(amount_a, slippage_bps, is_input=False),
            amount_b_min=slippage_tolerance(amount_b, slippage_bps, is_input=False),
            share_of_pool=Fraction(liquidity, total_supply),
        )

    async def get_position(self, pool_id: str, owner: str) -> LPPosition:
        """An owner's LP balance in a pool and the tokens it is worth."""
        reserves, balance, total_supply = await asyncio.gather(
            self.provider.get_reserves(pool_id),
            self.provider.get_lp_balance(pool_id, owner),
            self.provider.get_lp_supply(pool_id),
        )
        if total_supply > 0:
            share = Fraction(balance, total_supply)
            token0_amount = (reserves.reserve0 * balance) // total_supply
            token1_amount = (reserves.reserve1 * balance) // total_supply
        else:
            share = Fraction(0)
            token0_amount = token1_amount = 0

        return LPPosition(
            pool_id=pool_id,
            owner=owner,
            balance=balance,
            total_supply=total_supply,
            share=share,
            token0_amount=token0_amount,
            token1_amount=token1_amount,
        )

    async def get_all_positions(
        self, owner: str, pool_ids: Iterable[str]
    ) -> List[LPPosition]:
        """Positions across pools, keeping only those with a non-zero balance."""
        positions = await asyncio.gather(
            *(self.get_position(pool_id, owner) for pool_id in pool_ids)
        )
        held = [p for p in positions if p.balance > 0]
        self.logger.debug(f"Owner {owner} holds {len(held)} of {len(positions)} positions")
        return held


__all__ = ["LiquidityQuoter"]
