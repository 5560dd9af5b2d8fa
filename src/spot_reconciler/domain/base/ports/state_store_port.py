"""Domain port for the spot request state store."""

from abc import ABC, abstractmethod
from typing import List


class SpotRequestStateStorePort(ABC):
    """
    Local record of the spot requests that still need polling.

    Implementations must tolerate concurrent calls for different regions and
    raise StateStoreFailure when the underlying storage fails.
    """

    @abstractmethod
    def list_pollable(self, region: str) -> List[str]:
        """Return the IDs of spot requests in the region that need polling."""

    @abstractmethod
    def update_status(self, region: str, request_id: str, state: str, status_code: str) -> bool:
        """Store the latest observed state and status. Returns False if the request is not tracked."""

    @abstractmethod
    def remove(self, region: str, request_id: str) -> bool:
        """Stop tracking a spot request. Returns False if it was not tracked."""
