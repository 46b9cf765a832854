"""
Tests for the client facade.
"""

from unittest.mock import Mock

import pytest

from ..client import CoralSwapClient
from ..config.base import ConfigError
from ..config.sdk import SDKConfig
from ..providers.memory import InMemoryPoolProvider
from ..providers.web3_provider import Web3PoolProvider

FACTORY = "0x" + "11" * 20


@pytest.fixture
def provider():
    provider = InMemoryPoolProvider()
    provider.add_pool("pool-ab", "A", "B", reserve0=100_000, reserve1=200_000, fee_bps=30)
    return provider


@pytest.fixture
def config():
    return SDKConfig(
        ENVIRONMENT="local",
        NETWORK="testnet",
        RPC_URL="",
        FACTORY_ADDRESS="",
        DEFAULT_SLIPPAGE_BPS=100,
        DEFAULT_DEADLINE_SEC=600,
        TWAP_MAX_OBSERVATIONS=5,
    )


class TestCoralSwapClient:
    """Test module wiring."""

    def test_modules_share_provider(self, provider, config):
        client = CoralSwapClient(provider, config)

        assert client.swap.provider is provider
        assert client.liquidity.provider is provider
        assert client.oracle.provider is provider
        assert client.fees.provider is provider
        assert client.flash_loans.provider is provider
        assert client.oracle.cache.capacity == 5

    @pytest.mark.asyncio
    async def test_quote_uses_config_defaults(self, provider, config):
        client = CoralSwapClient(provider, config, clock=lambda: 1_000)

        quote = await client.swap.get_quote("A", "B", 1000)

        assert quote.amount_out == 1974
        assert quote.amount_out_min == 1974 - 19
        assert quote.deadline == 1_600

    def test_get_deadline(self, provider, config):
        client = CoralSwapClient(provider, config, clock=lambda: 1_000)

        assert client.get_deadline() == 1_600
        assert client.get_deadline(30) == 1_030

    def test_from_web3(self, config):
        client = CoralSwapClient.from_web3(Mock(), FACTORY, config)

        assert isinstance(client.provider, Web3PoolProvider)
        assert client.provider.default_fee_bps == config.DEFAULT_FEE_BPS

    def test_from_config_requires_rpc(self, config):
        with pytest.raises(ConfigError, match="CORALSWAP_RPC_URL"):
            CoralSwapClient.from_config(config)

    def test_from_config_requires_factory(self, config):
        config.RPC_URL = "http://localhost:8545"
        with pytest.raises(ConfigError, match="CORALSWAP_FACTORY_ADDRESS"):
            CoralSwapClient.from_config(config)

    def test_from_config(self, config):
        config.RPC_URL = "http://localhost:8545"
        config.FACTORY_ADDRESS = FACTORY

        client = CoralSwapClient.from_config(config)

        assert isinstance(client.provider, Web3PoolProvider)
        assert client.provider.factory_address.lower() == FACTORY

    def test_amounts_use_configured_decimals(self, provider, config):
        config.TOKEN_DECIMALS = 2
        client = CoralSwapClient(provider, config)

        assert client.parse_amount("12.34") == 1_234
        assert client.format_amount(1_234) == "12.34"
        assert client.format_amount(1_234, display_decimals=1) == "12.3"

    @pytest.mark.asyncio
    async def test_flash_loan_quote(self, provider, config):
        client = CoralSwapClient(provider, config)

        estimate = await client.flash_loans.estimate_fee("pool-ab", "B", 100_000)

        assert estimate.fee_amount == 90
        assert await client.flash_loans.get_max_borrowable("pool-ab", "B") == 198_000
