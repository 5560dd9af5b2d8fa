"""Configuration package - schemas, defaults and the configuration manager."""

from .manager import ConfigurationManager
from .schemas import (
    AppConfig,
    AWSProviderConfig,
    JsonStrategyConfig,
    LoggingConfig,
    PollerConfig,
    StorageConfig,
    validate_config,
)

__all__ = [
    "ConfigurationManager",
    "AppConfig",
    "AWSProviderConfig",
    "JsonStrategyConfig",
    "LoggingConfig",
    "PollerConfig",
    "StorageConfig",
    "validate_config",
]
