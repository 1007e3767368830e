"""Configuration for dotboot."""

from dotboot.config.loader import ConfigError, load_config
from dotboot.config.models import BoosterConfig, BootstrapConfig, DotfilesConfig

__all__ = [
    "BoosterConfig",
    "BootstrapConfig",
    "ConfigError",
    "DotfilesConfig",
    "load_config",
]
