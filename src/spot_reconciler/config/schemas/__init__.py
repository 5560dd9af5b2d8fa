"""Configuration schemas package."""

from .app_schema import AppConfig, validate_config
from .aws_schema import AWSProviderConfig
from .logging_schema import LogDestination, LogFileConfig, LoggingConfig, LogLevel
from .poller_schema import MAX_BATCH_SIZE, PollerConfig
from .storage_schema import JsonStrategyConfig, StorageConfig

__all__ = [
    # Main configuration
    "AppConfig",
    "validate_config",
    # Provider configuration
    "AWSProviderConfig",
    # Poller configuration
    "PollerConfig",
    "MAX_BATCH_SIZE",
    # Storage configurations
    "StorageConfig",
    "JsonStrategyConfig",
    # Logging configuration
    "LoggingConfig",
    "LogFileConfig",
    "LogLevel",
    "LogDestination",
]
