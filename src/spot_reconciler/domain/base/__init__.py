"""Base domain layer - shared kernel for the spot request context."""

from .entity import Entity
from .exceptions import ConfigurationError, DomainException

__all__ = [
    "Entity",
    "DomainException",
    "ConfigurationError",
]
