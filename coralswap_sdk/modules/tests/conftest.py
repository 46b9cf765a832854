"""
Pytest configuration for quoting module tests.
"""

import pytest

from ...providers.memory import InMemoryPoolProvider


@pytest.fixture
def provider():
    """Provider with an A/B/C route plus an empty C/E pool."""
    provider = InMemoryPoolProvider()
    provider.add_pool("pool-ab", "A", "B", reserve0=100_000, reserve1=200_000, fee_bps=30)
    provider.add_pool("pool-bc", "B", "C", reserve0=500_000, reserve1=250_000, fee_bps=30)
    provider.add_pool("pool-ce", "C", "E", reserve0=0, reserve1=0, fee_bps=30)
    return provider


@pytest.fixture
def lp_provider():
    """Provider with one A/B pool holding 1000/2000 and 1000 LP tokens."""
    provider = InMemoryPoolProvider()
    provider.add_pool(
        "pool-ab", "A", "B", reserve0=1000, reserve1=2000, fee_bps=30, total_supply=1000
    )
    return provider
