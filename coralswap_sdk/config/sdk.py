"""
SDK settings for coralswap-sdk.

All variables share the CORALSWAP_ prefix, e.g. CORALSWAP_RPC_URL.
"""

from dataclasses import dataclass, field

from ..core.constants import (
    BPS_DENOMINATOR,
    DEFAULT_DEADLINE_SEC,
    DEFAULT_DECIMALS,
    DEFAULT_SLIPPAGE_BPS,
    MAX_OBSERVATIONS,
    MAX_SLIPPAGE_BPS,
)
from .base import BaseConfig, ConfigError

ENV_PREFIX = "CORALSWAP_"
NETWORKS = ["testnet", "mainnet"]


def _env(name: str, default: str = "") -> str:
    return BaseConfig.get_env(ENV_PREFIX + name, default)


def _env_int(name: str, default: int) -> int:
    return BaseConfig.get_env_int(ENV_PREFIX + name, default)


@dataclass
class SDKConfig(BaseConfig):
    """Network endpoints and quoting defaults."""

    # Network
    NETWORK: str = field(default_factory=lambda: _env("NETWORK", "testnet"))
    RPC_URL: str = field(default_factory=lambda: _env("RPC_URL"))
    FACTORY_ADDRESS: str = field(default_factory=lambda: _env("FACTORY_ADDRESS"))

    # Quoting defaults
    DEFAULT_SLIPPAGE_BPS: int = field(
        default_factory=lambda: _env_int("DEFAULT_SLIPPAGE_BPS", DEFAULT_SLIPPAGE_BPS)
    )
    DEFAULT_DEADLINE_SEC: int = field(
        default_factory=lambda: _env_int("DEFAULT_DEADLINE_SEC", DEFAULT_DEADLINE_SEC)
    )
    DEFAULT_FEE_BPS: int = field(default_factory=lambda: _env_int("DEFAULT_FEE_BPS", 30))
    TOKEN_DECIMALS: int = field(
        default_factory=lambda: _env_int("TOKEN_DECIMALS", DEFAULT_DECIMALS)
    )

    # Oracle
    TWAP_MAX_OBSERVATIONS: int = field(
        default_factory=lambda: _env_int("TWAP_MAX_OBSERVATIONS", MAX_OBSERVATIONS)
    )

    def _validate_config(self):
        """Validate SDK settings on top of the base checks."""
        super()._validate_config()
        if self.NETWORK not in NETWORKS:
            raise ConfigError(f"Invalid network: {self.NETWORK}")
        if not 0 <= self.DEFAULT_SLIPPAGE_BPS <= MAX_SLIPPAGE_BPS:
            raise ConfigError(
                f"DEFAULT_SLIPPAGE_BPS must be between 0 and {MAX_SLIPPAGE_BPS}, "
                f"got: {self.DEFAULT_SLIPPAGE_BPS}"
            )
        if self.DEFAULT_DEADLINE_SEC <= 0:
            raise ConfigError(
                f"DEFAULT_DEADLINE_SEC must be positive, got: {self.DEFAULT_DEADLINE_SEC}"
            )
        if not 0 <= self.DEFAULT_FEE_BPS < BPS_DENOMINATOR:
            raise ConfigError(
                f"DEFAULT_FEE_BPS must be between 0 and {BPS_DENOMINATOR - 1}, "
                f"got: {self.DEFAULT_FEE_BPS}"
            )
        if self.TOKEN_DECIMALS < 0:
            raise ConfigError(f"TOKEN_DECIMALS must not be negative, got: {self.TOKEN_DECIMALS}")
        if self.TWAP_MAX_OBSERVATIONS < 2:
            raise ConfigError(
                f"TWAP_MAX_OBSERVATIONS must be at least 2, got: {self.TWAP_MAX_OBSERVATIONS}"
            )

    @property
    def has_rpc(self) -> bool:
        """Whether an RPC endpoint and factory are configured."""
        return bool(self.RPC_URL) and bool(self.FACTORY_ADDRESS)
