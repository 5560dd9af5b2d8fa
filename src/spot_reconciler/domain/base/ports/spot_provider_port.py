"""Domain port for spot request provider operations."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from spot_reconciler.domain.spot_request.value_objects import SpotRequestObservation


class SpotRequestProviderPort(ABC):
    """
    Provider-side view of spot requests.

    Implementations must be safe to call concurrently for different regions.
    Both operations raise ProviderCallFailure when the call fails.
    """

    @abstractmethod
    def describe_requests(self, region: str, request_ids: Sequence[str]) -> List[SpotRequestObservation]:
        """Describe the given spot requests in a single provider call."""

    @abstractmethod
    def cancel_requests(self, region: str, request_ids: Sequence[str]) -> List[str]:
        """Cancel the given spot requests and return the IDs confirmed as cancelled."""
