"""AWS provider configuration schema."""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class AWSProviderConfig(BaseModel):
    """AWS provider configuration."""

    regions: List[str] = Field(default_factory=lambda: ["us-east-1"], description="Regions to reconcile")
    endpoint_url: Optional[str] = Field(None, description="Custom EC2 endpoint URL")
    profile: Optional[str] = Field(None, description="AWS credentials profile name")
    max_retry_attempts: int = Field(3, description="botocore standard-mode retry attempts")
    connect_timeout_ms: int = Field(10000, description="Connection timeout in milliseconds")
    read_timeout_ms: int = Field(60000, description="Read timeout in milliseconds")
    validate_credentials: bool = Field(False, description="Call STS on client creation to check credentials")

    @field_validator("regions", mode="before")
    @classmethod
    def split_regions(cls, v):
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            return [region.strip() for region in v.split(",") if region.strip()]
        return v

    @field_validator("regions")
    @classmethod
    def validate_regions(cls, v: List[str]) -> List[str]:
        """Validate regions."""
        if not v:
            raise ValueError("At least one region must be configured")
        if any(not region for region in v):
            raise ValueError("Region names must not be empty")
        if len(set(v)) != len(v):
            raise ValueError("Regions must be unique")
        return v

    @field_validator("endpoint_url", "profile", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return v or None

    @field_validator("max_retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        """Validate retry attempts."""
        if v < 0:
            raise ValueError("Retry attempts must be non-negative")
        return v

    @field_validator("connect_timeout_ms", "read_timeout_ms")
    @classmethod
    def validate_timeouts(cls, v: int) -> int:
        """Validate timeouts."""
        if v < 1:
            raise ValueError("Timeout must be at least 1 millisecond")
        return v
