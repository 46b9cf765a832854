"""
Protocol constants for the pricing core.

Integer-domain only. Every amount, reserve and price handled by the core is a
Python int scaled by a power of ten; none of these constants is a float.
"""

# Basis points: 10000 bps = 100%
BPS_DENOMINATOR: int = 10_000

# Fixed-point unity used for price ratios (price * PRICE_SCALE)
PRICE_SCALE: int = 10**14

# LP shares permanently locked by the pool on the very first deposit
MIN_LIQUIDITY: int = 1_000

# Default TWAP observation buffer capacity per pool
MAX_OBSERVATIONS: int = 100

# Quote defaults
DEFAULT_SLIPPAGE_BPS: int = 50
MAX_SLIPPAGE_BPS: int = 5_000
DEFAULT_DEADLINE_SEC: int = 1_200

# Share of a reserve never offered for flash borrowing (1%)
FLASH_RESERVE_MARGIN_BPS: int = 100

# Fee state with no swap for this long is stale (EMA decay pending)
FEE_STALE_AFTER_SEC: int = 3_600

# Display defaults (7 decimals is the native token precision on the protocol)
DEFAULT_DECIMALS: int = 7
DEFAULT_DISPLAY_DECIMALS: int = 4

__all__ = [
    "BPS_DENOMINATOR",
    "PRICE_SCALE",
    "MIN_LIQUIDITY",
    "MAX_OBSERVATIONS",
    "DEFAULT_SLIPPAGE_BPS",
    "MAX_SLIPPAGE_BPS",
    "DEFAULT_DEADLINE_SEC",
    "FLASH_RESERVE_MARGIN_BPS",
    "FEE_STALE_AFTER_SEC",
    "DEFAULT_DECIMALS",
    "DEFAULT_DISPLAY_DECIMALS",
]
