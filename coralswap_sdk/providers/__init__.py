"""
Pool data providers.

Abstract collaborator contracts plus two implementations: a dictionary-backed
provider for simulations and tests, and a Web3 provider reading pair
contracts over RPC.
"""

from .base import PairResolver, PoolDataProvider, PoolReserveProvider
from .memory import InMemoryPoolProvider, PoolState
from .web3_provider import Web3PoolProvider

__all__ = [
    "PairResolver",
    "PoolReserveProvider",
    "PoolDataProvider",
    "InMemoryPoolProvider",
    "PoolState",
    "Web3PoolProvider",
]
