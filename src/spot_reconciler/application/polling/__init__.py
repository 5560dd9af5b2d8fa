"""Spot request polling - the reconciliation pass and its periodic driver."""
from typing import Optional, Sequence

from spot_reconciler.domain.base.ports import SpotRequestProviderPort, SpotRequestStateStorePort
from .batching import BATCH_SIZE, batched
from .fanout import FanoutCoordinator
from .poller import SpotRequestPoller
from .region_reconciler import RegionReconciler
from .results import ReconciliationPassResult, RegionOutcome, RegionReconciliationSummary
from .termination import ConfirmedTermination, TerminationOutcome


def run_reconciliation_pass(provider: SpotRequestProviderPort,
                            state_store: SpotRequestStateStorePort,
                            regions: Sequence[str],
                            batch_size: int = BATCH_SIZE,
                            max_workers: Optional[int] = None) -> ReconciliationPassResult:
    """Run one reconciliation pass over the given regions."""
    reconciler = RegionReconciler(provider, state_store, batch_size)
    return FanoutCoordinator(reconciler, regions, max_workers=max_workers).run_pass()


__all__ = [
    "BATCH_SIZE",
    "batched",
    "ConfirmedTermination",
    "TerminationOutcome",
    "RegionReconciler",
    "FanoutCoordinator",
    "SpotRequestPoller",
    "ReconciliationPassResult",
    "RegionOutcome",
    "RegionReconciliationSummary",
    "run_reconciliation_pass",
]
