"""
Quoting modules built on the pricing core and a pool data provider.
"""

from .fees import FeeEstimator
from .flash_loan import FlashLoanQuoter
from .liquidity import LiquidityQuoter
from .oracle import TWAPOracle
from .swap import RoutePlanner

__all__ = [
    "RoutePlanner",
    "LiquidityQuoter",
    "TWAPOracle",
    "FeeEstimator",
    "FlashLoanQuoter",
]
