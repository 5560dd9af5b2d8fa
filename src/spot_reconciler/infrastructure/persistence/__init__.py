"""Spot request state store implementations."""

from .json_store import JSONSpotRequestStore
from .memory_store import InMemorySpotRequestStore
from .store_factory import StateStoreFactory

__all__ = ["JSONSpotRequestStore", "InMemorySpotRequestStore", "StateStoreFactory"]
