"""
Configuration management for coralswap-sdk.

Settings come from the environment (and a .env file when present), using
the CORALSWAP_ prefix for SDK values.

Example:
    from coralswap_sdk.config import get_config

    config = get_config()
    slippage = config.sdk.DEFAULT_SLIPPAGE_BPS
"""

from .base import BaseConfig, ConfigError
from .manager import ConfigManager, get_config, reload_config
from .sdk import SDKConfig

__all__ = [
    "BaseConfig",
    "ConfigError",
    "SDKConfig",
    "ConfigManager",
    "get_config",
    "reload_config",
]
