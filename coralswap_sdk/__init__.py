"""
coralswap-sdk: quoting for a constant-product AMM with dynamic fees.

Example:
    from coralswap_sdk import CoralSwapClient, InMemoryPoolProvider

    provider = InMemoryPoolProvider()
    provider.add_pool("pool-1", "USDC", "XLM", 1_000_000, 2_000_000, fee_bps=30)
    client = CoralSwapClient(provider)
    quote = await client.swap.get_quote("USDC", "XLM", 10_000)
"""

from .client import CoralSwapClient
from .config import ConfigError, SDKConfig, get_config, reload_config
from .core import (
    CoralSwapError,
    CurrentFee,
    ErrorKind,
    FeeState,
    FlashLoanConfig,
    FlashLoanFeeEstimate,
    Hop,
    LiquidityQuote,
    LPPosition,
    MultiHopQuote,
    Quote,
    RemoveLiquidityQuote,
    SpotPrice,
    TradeType,
    TWAPResult,
    FeeEstimate,
    format_amount,
    map_error,
    parse_amount,
)
from .modules import (
    FeeEstimator,
    FlashLoanQuoter,
    LiquidityQuoter,
    RoutePlanner,
    TWAPOracle,
)
from .providers import (
    InMemoryPoolProvider,
    PairResolver,
    PoolDataProvider,
    PoolReserveProvider,
    Web3PoolProvider,
)

__version__ = "0.1.0"

__all__ = [
    "CoralSwapClient",
    # config
    "SDKConfig",
    "ConfigError",
    "get_config",
    "reload_config",
    # errors
    "CoralSwapError",
    "ErrorKind",
    "map_error",
    # amounts
    "parse_amount",
    "format_amount",
    # types
    "TradeType",
    "Hop",
    "Quote",
    "MultiHopQuote",
    "LiquidityQuote",
    "RemoveLiquidityQuote",
    "LPPosition",
    "TWAPResult",
    "SpotPrice",
    "FeeEstimate",
    "FeeState",
    "CurrentFee",
    "FlashLoanConfig",
    "FlashLoanFeeEstimate",
    # modules
    "RoutePlanner",
    "LiquidityQuoter",
    "TWAPOracle",
    "FeeEstimator",
    "FlashLoanQuoter",
    # providers
    "PairResolver",
    "PoolReserveProvider",
    "PoolDataProvider",
    "InMemoryPoolProvider",
    "Web3PoolProvider",
]
