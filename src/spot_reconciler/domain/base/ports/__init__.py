"""Domain ports - interfaces the domain expects infrastructure to implement."""

from .spot_provider_port import SpotRequestProviderPort
from .state_store_port import SpotRequestStateStorePort

__all__ = ["SpotRequestProviderPort", "SpotRequestStateStorePort"]
