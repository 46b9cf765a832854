"""
Pricing core.

Pure integer math with no dependency on providers or network I/O: amount
codec, constant-product pricing, liquidity math and TWAP computation, plus
the value types and error taxonomy they share.

Example:
    from coralswap_sdk.core import get_amount_out, parse_amount

    amount_in = parse_amount("1.5", 7)
    amount_out = get_amount_out(amount_in, reserve_in, reserve_out, fee_bps=30)
"""

from .amounts import (
    apply_bps,
    format_amount,
    from_fixed,
    parse_amount,
    percent_diff,
    safe_div,
    safe_mul,
    slippage_tolerance,
    to_bps,
    to_fixed,
)
from .constants import (
    BPS_DENOMINATOR,
    DEFAULT_DEADLINE_SEC,
    DEFAULT_SLIPPAGE_BPS,
    MAX_OBSERVATIONS,
    MAX_SLIPPAGE_BPS,
    MIN_LIQUIDITY,
    PRICE_SCALE,
)
from .errors import CoralSwapError, ErrorKind, map_error
from .flash_math import flash_loan_fee, flash_loan_repayment, max_borrowable
from .liquidity_math import (
    burn_amounts,
    first_deposit_lp,
    isqrt,
    pool_share,
    price_ratio,
    proportional_lp,
    quote_amount_b,
)
from .pricing import (
    compound_price_impact,
    constant_product_holds,
    fee_amount,
    get_amount_in,
    get_amount_out,
    price_impact_bps,
)
from .twap import ObservationBuffer, ObservationCache, compute_twap
from .types import (
    CumulativePrices,
    CurrentFee,
    FeeEstimate,
    FeeState,
    FlashLoanConfig,
    FlashLoanFeeEstimate,
    Hop,
    LiquidityQuote,
    LPPosition,
    MultiHopQuote,
    Quote,
    RemoveLiquidityQuote,
    Reserves,
    SpotPrice,
    TokenOrder,
    TradeType,
    TWAPObservation,
    TWAPResult,
)

__all__ = [
    # amounts
    "parse_amount",
    "to_fixed",
    "from_fixed",
    "format_amount",
    "to_bps",
    "apply_bps",
    "slippage_tolerance",
    "percent_diff",
    "safe_mul",
    "safe_div",
    # constants
    "BPS_DENOMINATOR",
    "PRICE_SCALE",
    "MIN_LIQUIDITY",
    "MAX_OBSERVATIONS",
    "DEFAULT_SLIPPAGE_BPS",
    "MAX_SLIPPAGE_BPS",
    "DEFAULT_DEADLINE_SEC",
    # errors
    "CoralSwapError",
    "ErrorKind",
    "map_error",
    # flash loans
    "flash_loan_fee",
    "flash_loan_repayment",
    "max_borrowable",
    # liquidity
    "isqrt",
    "first_deposit_lp",
    "proportional_lp",
    "quote_amount_b",
    "pool_share",
    "price_ratio",
    "burn_amounts",
    # pricing
    "get_amount_out",
    "get_amount_in",
    "fee_amount",
    "price_impact_bps",
    "compound_price_impact",
    "constant_product_holds",
    # twap
    "compute_twap",
    "ObservationBuffer",
    "ObservationCache",
    # types
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
