"""State store configuration schema."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class JsonStrategyConfig(BaseModel):
    """JSON file store configuration."""

    path: str = Field("spot_requests.json", description="Path of the JSON storage file")


class StorageConfig(BaseModel):
    """State store configuration."""

    model_config = ConfigDict(populate_by_name=True)

    strategy: Literal["json", "memory"] = Field("json", description="State store implementation")
    json_strategy: JsonStrategyConfig = Field(default_factory=JsonStrategyConfig, alias="json")
