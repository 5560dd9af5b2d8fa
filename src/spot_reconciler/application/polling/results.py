"""Outcomes of region reconciliations and whole passes."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from spot_reconciler.domain.spot_request.exceptions import PartialRegionFailure


@dataclass
class RegionReconciliationSummary:
    """What one region's reconciliation did."""
    region: str
    polled: int = 0
    batches: int = 0
    updated: int = 0
    removed: int = 0
    cancelled: List[str] = field(default_factory=list)
    cancel_unconfirmed: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "region": self.region,
            "polled": self.polled,
            "batches": self.batches,
            "updated": self.updated,
            "removed": self.removed,
            "cancelled": list(self.cancelled),
            "cancel_unconfirmed": list(self.cancel_unconfirmed),
        }


@dataclass
class RegionOutcome:
    """Result of reconciling one region: a summary on success, the error otherwise."""
    region: str
    summary: Optional[RegionReconciliationSummary] = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"region": self.region, "succeeded": self.succeeded}
        if self.summary is not None:
            data["summary"] = self.summary.to_dict()
        if self.error is not None:
            data["error"] = str(self.error)
            data["error_type"] = type(self.error).__name__
        return data


@dataclass
class ReconciliationPassResult:
    """Outcome of a reconciliation pass across every configured region."""
    outcomes: List[RegionOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return all(outcome.succeeded for outcome in self.outcomes)

    @property
    def failures(self) -> Dict[str, Exception]:
        return {o.region: o.error for o in self.outcomes if o.error is not None}

    @property
    def failed_regions(self) -> List[str]:
        return sorted(self.failures)

    def outcome_for(self, region: str) -> Optional[RegionOutcome]:
        for outcome in self.outcomes:
            if outcome.region == region:
                return outcome
        return None

    def raise_for_failures(self) -> None:
        """Raise PartialRegionFailure if any region failed."""
        failures = self.failures
        if failures:
            raise PartialRegionFailure(failures)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "succeeded": self.succeeded,
            "failed_regions": self.failed_regions,
            "regions": [outcome.to_dict() for outcome in self.outcomes],
        }
