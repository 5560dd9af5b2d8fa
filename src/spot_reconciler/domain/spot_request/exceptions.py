"""Spot request domain exceptions."""
from typing import Dict, Optional

from spot_reconciler.domain.base.exceptions import DomainException


class SpotRequestException(DomainException):
    """Base exception for spot request reconciliation errors."""


class ProviderCallFailure(SpotRequestException):
    """Raised when a describe or cancel call to the provider fails."""

    def __init__(self, operation: str, region: str, message: str,
                 error_code: Optional[str] = None):
        super().__init__(
            f"{operation} failed in {region}: {message}",
            error_code or "PROVIDER_CALL_FAILURE",
            {"operation": operation, "region": region},
        )
        self.operation = operation
        self.region = region


class StateStoreFailure(SpotRequestException):
    """Raised when the state store cannot read or persist a spot request."""

    def __init__(self, operation: str, message: str, region: Optional[str] = None,
                 request_id: Optional[str] = None):
        super().__init__(
            f"State store {operation} failed: {message}",
            "STATE_STORE_FAILURE",
            {"operation": operation, "region": region, "request_id": request_id},
        )
        self.operation = operation
        self.region = region
        self.request_id = request_id


class PartialRegionFailure(SpotRequestException):
    """Raised when one or more regions failed during a reconciliation pass."""

    def __init__(self, failures: Dict[str, Exception]):
        regions = sorted(failures)
        summary = "; ".join(f"{region}: {failures[region]}" for region in regions)
        super().__init__(
            f"Reconciliation failed in {len(regions)} region(s): {summary}",
            "PARTIAL_REGION_FAILURE",
            {"regions": regions},
        )
        self.failures = dict(failures)

    @property
    def regions(self):
        return sorted(self.failures)
