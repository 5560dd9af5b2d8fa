"""Main application configuration schema."""

from typing import Any, Dict

from pydantic import BaseModel, Field

from .aws_schema import AWSProviderConfig
from .logging_schema import LoggingConfig
from .poller_schema import PollerConfig
from .storage_schema import StorageConfig


class AppConfig(BaseModel):
    """Application configuration."""

    version: str = Field("1.0.0", description="Configuration version")
    provider: AWSProviderConfig = Field(default_factory=AWSProviderConfig)
    poller: PollerConfig = Field(default_factory=PollerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_config(config: Dict[str, Any]) -> AppConfig:
    """
    Validate configuration.

    Args:
        config: Configuration to validate

    Returns:
        Validated configuration

    Raises:
        pydantic.ValidationError: If configuration is invalid
    """
    return AppConfig.model_validate(config)
