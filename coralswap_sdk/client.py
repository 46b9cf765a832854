"""
CoralSwap client.

Wires the quoting modules to one pool data provider and one configuration.
"""

import logging
import time
from typing import Callable, Optional

from web3 import Web3

from .config.base import ConfigError
from .config.sdk import SDKConfig
from .core.amounts import format_amount, parse_amount
from .core.constants import DEFAULT_DISPLAY_DECIMALS
from .modules.fees import FeeEstimator
from .modules.flash_loan import FlashLoanQuoter
from .modules.liquidity import LiquidityQuoter
from .modules.oracle import TWAPOracle
from .modules.swap import RoutePlanner
from .providers.base import PoolDataProvider
from .providers.web3_provider import Web3PoolProvider

logger = logging.getLogger(__name__)


class CoralSwapClient:
    """
    Entry point bundling swap, liquidity, oracle, fee and flash loan modules.

    Example:
        provider = InMemoryPoolProvider()
        provider.add_pool("pool-1", "USDC", "XLM", 1_000_000, 2_000_000)
        client = CoralSwapClient(provider)
        quote = await client.swap.get_quote("USDC", "XLM", 10_000)
    """

    def __init__(
        self,
        provider: PoolDataProvider,
        config: Optional[SDKConfig] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize the client.

        Args:
            provider: Pool data provider shared by every module
            config: SDK settings; loaded from the environment when omitted
            clock: Source of the current unix time, used for deadlines
        """
        self.provider = provider
        self.config = config if config is not None else SDKConfig()
        self.swap = RoutePlanner(
            provider,
            default_slippage_bps=self.config.DEFAULT_SLIPPAGE_BPS,
            deadline_sec=self.config.DEFAULT_DEADLINE_SEC,
            clock=clock,
        )
        self.liquidity = LiquidityQuoter(
            provider, default_slippage_bps=self.config.DEFAULT_SLIPPAGE_BPS
        )
        self.oracle = TWAPOracle(provider, capacity=self.config.TWAP_MAX_OBSERVATIONS)
        self.fees = FeeEstimator(provider, clock=clock)
        self.flash_loans = FlashLoanQuoter(provider)
        logger.info(
            f"CoralSwap client ready on {self.config.NETWORK} "
            f"with {provider.__class__.__name__}"
        )

    @classmethod
    def from_web3(
        cls,
        web3: Web3,
        factory_address: str,
        config: Optional[SDKConfig] = None,
    ) -> "CoralSwapClient":
        """Client reading pools through an existing Web3 instance."""
        config = config if config is not None else SDKConfig()
        provider = Web3PoolProvider(
            web3, factory_address, default_fee_bps=config.DEFAULT_FEE_BPS
        )
        return cls(provider, config)

    @classmethod
    def from_config(cls, config: Optional[SDKConfig] = None) -> "CoralSwapClient":
        """
        Client connected to the configured RPC endpoint and factory.

        Raises:
            ConfigError: If CORALSWAP_RPC_URL or CORALSWAP_FACTORY_ADDRESS is unset
        """
        config = config if config is not None else SDKConfig()
        if not config.RPC_URL:
            raise ConfigError("CORALSWAP_RPC_URL not configured")
        if not config.FACTORY_ADDRESS:
            raise ConfigError("CORALSWAP_FACTORY_ADDRESS not configured")
        web3 = Web3(Web3.HTTPProvider(config.RPC_URL))
        return cls.from_web3(web3, config.FACTORY_ADDRESS, config)

    def parse_amount(self, value: str) -> int:
        """Decimal string to a fixed-point amount at the configured TOKEN_DECIMALS."""
        return parse_amount(value, self.config.TOKEN_DECIMALS)

    def format_amount(
        self, amount: int, display_decimals: int = DEFAULT_DISPLAY_DECIMALS
    ) -> str:
        return format_amount(amount, self.config.TOKEN_DECIMALS, display_decimals)

    def get_deadline(self, offset_sec: Optional[int] = None) -> int:
        """Unix timestamp offset_sec (default DEFAULT_DEADLINE_SEC) from now."""
        return self.swap.get_deadline(offset_sec)
