"""
Swap quoting.

RoutePlanner chains constant-product pricing across an ordered token path,
one hop per consecutive pair. Each hop's output feeds the next hop's input,
so hops are resolved strictly in sequence; within a hop the reserves and the
dynamic fee are fetched concurrently.
"""

import asyncio
import logging
import time
from typing import Callable, Iterable, List, Optional, Sequence

from ..core import pricing
from ..core.amounts import slippage_tolerance
from ..core.constants import (
    BPS_DENOMINATOR,
    DEFAULT_DEADLINE_SEC,
    DEFAULT_SLIPPAGE_BPS,
)
from ..core.errors import CoralSwapError
from ..core.types import Hop, MultiHopQuote, Quote, TradeType
from ..core.validation import (
    validate_distinct_tokens,
    validate_path,
    validate_positive_amount,
    validate_slippage,
    validate_token,
)
from ..providers.base import PoolDataProvider

logger = logging.getLogger(__name__)


def _min_out(amount_out: int, slippage_bps: int) -> int:
    return amount_out - (amount_out * slippage_bps) // BPS_DENOMINATOR


class RoutePlanner:
    """
    Quotes direct and multi-hop swaps against a pool data provider.

    Direct (two-token) quotes support EXACT_IN and EXACT_OUT. Multi-hop
    quotes are EXACT_IN only.
    """

    def __init__(
        self,
        provider: PoolDataProvider,
        default_slippage_bps: int = DEFAULT_SLIPPAGE_BPS,
        deadline_sec: int = DEFAULT_DEADLINE_SEC,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the route planner.

        Args:
            provider: Resolves pairs and reads pool state
            default_slippage_bps: Slippage used when a request gives none
            deadline_sec: Seconds from now until a quote's deadline
            clock: Source of the current unix time
        """
        validate_slippage(default_slippage_bps)
        self.provider = provider
        self.default_slippage_bps = default_slippage_bps
        self.deadline_sec = deadline_sec
        self._clock = clock
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def get_deadline(self, offset_sec: Optional[int] = None) -> int:
        """Unix timestamp offset_sec (default deadline_sec) from now."""
        offset = self.deadline_sec if offset_sec is None else offset_sec
        return int(self._clock()) + offset

    # Pricing delegates

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int) -> int:
        return pricing.get_amount_out(amount_in, reserve_in, reserve_out, fee_bps)

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int, fee_bps: int) -> int:
        return pricing.get_amount_in(amount_out, reserve_in, reserve_out, fee_bps)

    def price_impact_bps(
        self, amount_in: int, amount_out: int, reserve_in: int, reserve_out: int
    ) -> int:
        return pricing.price_impact_bps(amount_in, amount_out, reserve_in, reserve_out)

    def compound_price_impact(self, impacts_bps: Iterable[int]) -> int:
        return pricing.compound_price_impact(impacts_bps)

    async def _load_hop_state(self, token_in: str, token_out: str):
        """Resolve the pool for a pair and read its oriented reserves and fee."""
        pool_id = await self.provider.require_pool(token_in, token_out)
        reserves, fee_bps = await asyncio.gather(
            self.provider.get_reserves(pool_id),
            self.provider.get_dynamic_fee(pool_id),
        )
        order = await self.provider.get_token_order(pool_id)
        reserve_in, reserve_out = reserves.oriented(token_in, order)
        if reserve_in <= 0 or reserve_out <= 0:
            raise CoralSwapError.insufficient_liquidity(
                pool_id,
                reserve_in=str(reserve_in),
                reserve_out=str(reserve_out),
            )
        return pool_id, reserve_in, reserve_out, fee_bps

    async def compute_hops(self, amount_in: int, path: Sequence[str]) -> List[Hop]:
        """
        Price every hop of a path, feeding each output into the next hop.

        Args:
            amount_in: Input amount for the first hop
            path: Ordered token path (2+ tokens)

        Returns:
            Hops in path order

        Raises:
            CoralSwapError: PAIR_NOT_FOUND for a missing pool,
                INSUFFICIENT_LIQUIDITY for an empty one. The first failing
                hop aborts the whole computation.
        """
        validate_positive_amount(amount_in, "amount_in")
        validate_path(path)

        hops: List[Hop] = []
        current_amount = amount_in
        for token_in, token_out in zip(path, path[1:]):
            pool_id, reserve_in, reserve_out, fee_bps = await self._load_hop_state(
                token_in, token_out
            )
            amount_out = pricing.get_amount_out(
                current_amount, reserve_in, reserve_out, fee_bps
            )
            hop = Hop(
                token_in=token_in,
                token_out=token_out,
                amount_in=current_amount,
                amount_out=amount_out,
                fee_bps=fee_bps,
                fee_amount=pricing.fee_amount(current_amount, fee_bps),
                price_impact_bps=pricing.price_impact_bps(
                    current_amount, amount_out, reserve_in, reserve_out
                ),
            )
            self.logger.debug(
                f"Hop {token_in}->{token_out} via {pool_id}: "
                f"in={hop.amount_in} out={hop.amount_out} "
                f"fee={hop.fee_bps}bps impact={hop.price_impact_bps}bps"
            )
            hops.append(hop)
            current_amount = amount_out

        return hops

    async def get_multi_hop_quote(
        self,
        path: Sequence[str],
        amount_in: int,
        slippage_bps: Optional[int] = None,
        trade_type: TradeType = TradeType.EXACT_IN,
        deadline: Optional[int] = None,
    ) -> MultiHopQuote:
        """
        Quote an EXACT_IN swap across three or more tokens.

        Fees are summed across hops since each is denominated in its own
        hop's input token; price impact is compounded multiplicatively.
        """
        if len(path) < 3:
            raise CoralSwapError.validation(
                "Multi-hop path must contain at least 3 tokens", path=list(path)
            )
        if trade_type != TradeType.EXACT_IN:
            raise CoralSwapError.validation(
                "Multi-hop routing only supports EXACT_IN trade type",
                trade_type=trade_type.value,
            )
        slippage = self._resolve_slippage(slippage_bps)

        hops = await self.compute_hops(amount_in, path)
        amount_out = hops[-1].amount_out

        return MultiHopQuote(
            token_in=path[0],
            token_out=path[-1],
            amount_in=hops[0].amount_in,
            amount_out=amount_out,
            amount_out_min=_min_out(amount_out, slippage),
            fee_bps=sum(h.fee_bps for h in hops),
            fee_amount=sum(h.fee_amount for h in hops),
            price_impact_bps=pricing.compound_price_impact(
                h.price_impact_bps for h in hops
            ),
            path=tuple(path),
            deadline=self.get_deadline() if deadline is None else deadline,
            trade_type=TradeType.EXACT_IN,
            hops=tuple(hops),
        )

    async def get_quote(
        self,
        token_in: str,
        token_out: str,
        amount: int,
        trade_type: TradeType = TradeType.EXACT_IN,
        path: Optional[Sequence[str]] = None,
        slippage_bps: Optional[int] = None,
        deadline: Optional[int] = None,
    ) -> Quote:
        """
        Quote a swap, routing through path when one is given.

        Args:
            token_in: Token sold
            token_out: Token bought
            amount: Input amount (EXACT_IN) or desired output (EXACT_OUT)
            trade_type: Swap direction
            path: Explicit token path; ignored unless it has 2+ entries
            slippage_bps: Slippage tolerance, defaults to the planner's
            deadline: Explicit deadline, defaults to now + deadline_sec

        Returns:
            Quote for two-token paths, MultiHopQuote otherwise
        """
        validate_positive_amount(amount, "amount")
        validate_token(token_in, "token_in")
        validate_token(token_out, "token_out")
        validate_distinct_tokens(token_in, token_out)
        if slippage_bps is not None:
            validate_slippage(slippage_bps)

        route = list(path) if path and len(path) >= 2 else [token_in, token_out]
        validate_path(route)

        if len(route) == 2:
            return await self._get_direct_quote(
                route, amount, trade_type, slippage_bps, deadline
            )
        return await self.get_multi_hop_quote(
            route, amount, slippage_bps, trade_type, deadline
        )

    async def _get_direct_quote(
        self,
        path: List[str],
        amount: int,
        trade_type: TradeType,
        slippage_bps: Optional[int],
        deadline: Optional[int],
    ) -> Quote:
        token_in, token_out = path
        pool_id, reserve_in, reserve_out, fee_bps = await self._load_hop_state(
            token_in, token_out
        )
        slippage = self._resolve_slippage(slippage_bps)

        amount_in_max = None
        if trade_type == TradeType.EXACT_IN:
            amount_in = amount
            amount_out = pricing.get_amount_out(amount_in, reserve_in, reserve_out, fee_bps)
        else:
            amount_out = amount
            amount_in = pricing.get_amount_in(amount_out, reserve_in, reserve_out, fee_bps)
            amount_in_max = slippage_tolerance(amount_in, slippage, is_input=True)

        quote = Quote(
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=amount_out,
            amount_out_min=_min_out(amount_out, slippage),
            fee_bps=fee_bps,
            fee_amount=pricing.fee_amount(amount_in, fee_bps),
            price_impact_bps=pricing.price_impact_bps(
                amount_in, amount_out, reserve_in, reserve_out
            ),
            path=tuple(path),
            deadline=self.get_deadline() if deadline is None else deadline,
            trade_type=trade_type,
            amount_in_max=amount_in_max,
        )
        self.logger.debug(
            f"Direct {trade_type.value} quote via {pool_id}: "
            f"in={quote.amount_in} out={quote.amount_out}"
        )
        return quote

    def _resolve_slippage(self, slippage_bps: Optional[int]) -> int:
        if slippage_bps is None:
            return self.default_slippage_bps
        validate_slippage(slippage_bps)
        return slippage_bps


__all__ = ["RoutePlanner"]
