"""
Configuration manager for coralswap-sdk.

Holds the SDK configuration behind a process-wide accessor so applications
load and validate the environment once.
"""

import logging
from typing import Dict, Any, Optional

from .base import ConfigError
from .sdk import SDKConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Centralized access to SDK configuration.

    Configuration is loaded and validated on construction.
    """

    def __init__(self, environment: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            environment: Override the environment (local, dev, staging, production)
        """
        self._environment = environment
        self._sdk_config = None
        self._initialize_configs()

    def _initialize_configs(self):
        """Initialize configuration objects."""
        try:
            if self._environment:
                self._sdk_config = SDKConfig(ENVIRONMENT=self._environment)
            else:
                self._sdk_config = SDKConfig()
            logger.info(f"Configuration initialized for environment: {self.environment}")
        except ConfigError:
            raise
        except Exception as e:
            logger.error(f"Failed to initialize configuration: {e}")
            raise ConfigError(f"Configuration initialization failed: {e}")

    @property
    def environment(self) -> str:
        """Get current environment."""
        return self._sdk_config.ENVIRONMENT

    @property
    def sdk(self) -> SDKConfig:
        """Get SDK configuration."""
        return self._sdk_config

    def validate_configuration(self, require_rpc: bool = False) -> bool:
        """
        Validate configuration settings.

        Args:
            require_rpc: Also require an RPC endpoint and factory address

        Returns:
            True if the configuration is valid

        Raises:
            ConfigError: If any setting is invalid
        """
        if require_rpc and not self.sdk.RPC_URL:
            raise ConfigError("CORALSWAP_RPC_URL not configured")
        if require_rpc and not self.sdk.FACTORY_ADDRESS:
            raise ConfigError("CORALSWAP_FACTORY_ADDRESS not configured")
        if not self.sdk.has_rpc:
            logger.warning("No RPC endpoint configured; only in-memory providers are usable")
        logger.info("Configuration validation successful")
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert all configurations to dictionary format."""
        return {
            "environment": self.environment,
            "sdk": self.sdk.to_dict(),
        }

    def __repr__(self) -> str:
        return f"ConfigManager(environment={self.environment})"


# Global configuration manager instance
_config_manager = None


def get_config(environment: Optional[str] = None, force_reload: bool = False) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        environment: Override environment
        force_reload: Force reload of configuration

    Returns:
        ConfigManager instance
    """
    global _config_manager

    if _config_manager is None or force_reload:
        _config_manager = ConfigManager(environment=environment)
        _config_manager.validate_configuration()

    return _config_manager


def reload_config(environment: Optional[str] = None) -> ConfigManager:
    """Reload the global configuration manager."""
    return get_config(environment=environment, force_reload=True)
