"""
Value types for quotes, pools and oracle observations.

All amounts are ints in the token's smallest unit. Every type is a frozen
dataclass owned by the caller once returned; nothing here is cached.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, Optional, Tuple

from .errors import CoralSwapError


class TradeType(Enum):
    """Swap direction."""

    EXACT_IN = "EXACT_IN"
    EXACT_OUT = "EXACT_OUT"


def _jsonable(value: Any) -> Any:
    """Stringify ints and fractions so 128-bit values survive JSON."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Fraction):
        return f"{value.numerator}/{value.denominator}"
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def same_token(a: str, b: str) -> bool:
    """Token identity; hex addresses compare case-insensitively (checksum vs lowercase)."""
    if a == b:
        return True
    return a[:2].lower() == "0x" and a.lower() == b.lower()


class _Serializable:
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return _jsonable(asdict(self))


@dataclass(frozen=True)
class TokenOrder(_Serializable):
    """Canonical token ordering of a pool."""

    token0: str
    token1: str

    def is_token0(self, token: str) -> bool:
        return same_token(self.token0, token)

    def contains(self, token: str) -> bool:
        return same_token(self.token0, token) or same_token(self.token1, token)


@dataclass(frozen=True)
class Reserves(_Serializable):
    """
    Pool reserves in pool token order.

    Attributes:
        reserve0: Balance of token0 held by the pool
        reserve1: Balance of token1 held by the pool
        block_timestamp_last: Timestamp of the last reserve update (optional)
    """

    reserve0: int
    reserve1: int
    block_timestamp_last: int = 0

    def oriented(self, token_in: str, order: TokenOrder) -> Tuple[int, int]:
        """Return (reserve_in, reserve_out) for a trade entering with token_in."""
        if not order.contains(token_in):
            raise CoralSwapError.validation(
                f"Token {token_in} is not part of pool {order.token0}/{order.token1}",
                token=token_in,
            )
        if order.is_token0(token_in):
            return self.reserve0, self.reserve1
        return self.reserve1, self.reserve0

    @property
    def is_empty(self) -> bool:
        return self.reserve0 <= 0 or self.reserve1 <= 0


@dataclass(frozen=True)
class CumulativePrices(_Serializable):
    """Cumulative price accumulators as read from a pool."""

    price0_cumulative_last: int
    price1_cumulative_last: int
    block_timestamp_last: int


@dataclass(frozen=True)
class Hop(_Serializable):
    """Result of one hop between consecutive tokens of a path."""

    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    fee_bps: int
    fee_amount: int
    price_impact_bps: int


@dataclass(frozen=True)
class Quote(_Serializable):
    """
    Swap quote, sufficient to build an on-chain swap call.

    Attributes:
        amount_out_min: Output floor after slippage tolerance
        amount_in_max: Input ceiling after slippage tolerance (EXACT_OUT only)
        fee_amount: Fee charged, denominated in each hop's input token
        deadline: Unix timestamp after which the swap must revert
    """

    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    amount_out_min: int
    fee_bps: int
    fee_amount: int
    price_impact_bps: int
    path: Tuple[str, ...]
    deadline: int
    trade_type: TradeType = TradeType.EXACT_IN
    amount_in_max: Optional[int] = None


@dataclass(frozen=True)
class MultiHopQuote(Quote):
    """Quote with the ordered per-hop breakdown."""

    hops: Tuple[Hop, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LiquidityQuote(_Serializable):
    """Quote for a proportional deposit."""

    amount_a: int
    amount_b: int
    estimated_lp_tokens: int
    share_of_pool: Fraction
    price_a_per_b: int
    price_b_per_a: int


@dataclass(frozen=True)
class RemoveLiquidityQuote(_Serializable):
    """Quote for burning LP shares back into the underlying tokens."""

    pool_id: str
    liquidity: int
    amount_a: int
    amount_b: int
    amount_a_min: int
    amount_b_min: int
    share_of_pool: Fraction


@dataclass(frozen=True)
class LPPosition(_Serializable):
    """An owner's LP position in one pool."""

    pool_id: str
    owner: str
    balance: int
    total_supply: int
    share: Fraction
    token0_amount: int
    token1_amount: int


@dataclass(frozen=True)
class TWAPObservation(_Serializable):
    """One sample of a pool's cumulative price accumulators."""

    price0_cumulative_last: int
    price1_cumulative_last: int
    block_timestamp_last: int


@dataclass(frozen=True)
class TWAPResult(_Serializable):
    """Time-weighted average price between two observations."""

    pool_id: str
    token0: str
    token1: str
    price0_twap: int
    price1_twap: int
    time_window: int
    start_observation: TWAPObservation
    end_observation: TWAPObservation


@dataclass(frozen=True)
class SpotPrice(_Serializable):
    """Instantaneous price from reserves, scaled by PRICE_SCALE."""

    price0_per1: int
    price1_per0: int


@dataclass(frozen=True)
class FeeEstimate(_Serializable):
    """Dynamic fee charged by a pool for a given input."""

    pool_id: str
    fee_bps: int
    fee_amount: int


@dataclass(frozen=True)
class FeeState(_Serializable):
    """
    Dynamic fee engine state of a pool.

    Attributes:
        fee_current: Fee charged right now, in bps
        baseline_fee: Fee the EMA decays back to when volatility subsides
        vol_accumulator: Volatility EMA driving the fee between fee_min and fee_max
        last_updated: Timestamp of the last swap that updated the EMA
    """

    fee_current: int
    baseline_fee: int
    fee_min: int
    fee_max: int
    vol_accumulator: int = 0
    price_last: int = 0
    ema_alpha: int = 0
    ema_decay_rate: int = 0
    fee_last_changed: int = 0
    last_updated: int = 0


@dataclass(frozen=True)
class CurrentFee(_Serializable):
    """A pool's fee state as seen at a point in time."""

    pool_id: str
    current_fee_bps: int
    baseline_fee_bps: int
    fee_min: int
    fee_max: int
    volatility: int
    ema_decay_rate: int
    last_updated: int
    is_stale: bool


@dataclass(frozen=True)
class FlashLoanConfig(_Serializable):
    """Flash loan terms of a pool; locked pools refuse to lend."""

    flash_fee_bps: int
    flash_fee_floor: int
    locked: bool = False


@dataclass(frozen=True)
class FlashLoanFeeEstimate(_Serializable):
    """Fee owed on top of the principal for a flash loan."""

    pool_id: str
    token: str
    amount: int
    fee_bps: int
    fee_amount: int
    fee_floor: int

    @property
    def repayment(self) -> int:
        return self.amount + self.fee_amount


__all__ = [
    "same_token",
    "TradeType",
    "TokenOrder",
    "Reserves",
    "CumulativePrices",
    "Hop",
    "Quote",
    "MultiHopQuote",
    "LiquidityQuote",
    "RemoveLiquidityQuote",
    "LPPosition",
    "TWAPObservation",
    "TWAPResult",
    "SpotPrice",
    "FeeEstimate",
    "FeeState",
    "CurrentFee",
    "FlashLoanConfig",
    "FlashLoanFeeEstimate",
]
