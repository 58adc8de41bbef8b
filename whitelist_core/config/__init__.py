"""
Runtime Configuration Module

Provides configuration loading and management for tree construction.
"""

from .runtime import (
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
    WhitelistConfig,
    get_default_config,
    get_default_config_template,
    load_config,
    set_default_config,
)

__all__ = [
    "LoggingConfig",
    "RuntimeConfig",
    "TreeConfig",
    "WhitelistConfig",
    "get_default_config",
    "get_default_config_template",
    "load_config",
    "set_default_config",
]
