"""Base domain entities - foundation for all domain objects."""
from typing import Any, Optional
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pydantic import BaseModel, ConfigDict


class Entity(BaseModel, ABC):
    """Base class for all domain entities."""
    model_config = ConfigDict(
        frozen=False,  # Entities are mutable
        validate_assignment=True,
    )

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @abstractmethod
    def get_id(self) -> Any:
        """Get the entity identifier."""

    def touch(self) -> None:
        """Record a modification."""
        self.updated_at = datetime.now(timezone.utc)

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same ID and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.get_id() == other.get_id()

    def __hash__(self) -> int:
        """Hash based on entity ID."""
        return hash((self.__class__, self.get_id()))
