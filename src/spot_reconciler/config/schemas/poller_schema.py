"""Spot request poller configuration schema."""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

# EC2 accepts at most 1000 IDs per describe call
MAX_BATCH_SIZE = 1000


class PollerConfig(BaseModel):
    """Reconciliation loop configuration."""

    batch_size: int = Field(100, description="Spot request IDs per describe/cancel call")
    poll_interval_seconds: float = Field(25.0, description="Wait between reconciliation passes")
    max_workers: Optional[int] = Field(None, description="Concurrent regions; defaults to one per region")

    @field_validator("batch_size")
    @classmethod
    def validate_batch_size(cls, v: int) -> int:
        """Validate batch size."""
        if v < 1:
            raise ValueError("Batch size must be at least 1")
        if v > MAX_BATCH_SIZE:
            raise ValueError(f"Batch size cannot exceed {MAX_BATCH_SIZE}")
        return v

    @field_validator("poll_interval_seconds")
    @classmethod
    def validate_poll_interval(cls, v: float) -> float:
        """Validate poll interval."""
        if v < 0:
            raise ValueError("Poll interval must be non-negative")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: Optional[int]) -> Optional[int]:
        """Validate max workers."""
        if v is not None and v < 1:
            raise ValueError("Maximum workers must be at least 1")
        return v
