"""Concurrent reconciliation across regions."""
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Dict, List, Optional, Sequence

import structlog

from .region_reconciler import RegionReconciler
from .results import ReconciliationPassResult, RegionOutcome

logger = structlog.get_logger(__name__)


class FanoutCoordinator:
    """
    Runs a RegionReconciler for every region at once and waits for all of them.

    A failing region never stops the others: every region runs to completion
    or to its own failure, and every failure is reported in the pass result.
    """

    def __init__(self,
                 reconciler: RegionReconciler,
                 regions: Sequence[str],
                 max_workers: Optional[int] = None):
        self.reconciler = reconciler
        # One reconcile per region; a repeated name would race its own cancels.
        self.regions: List[str] = list(dict.fromkeys(regions))
        if len(self.regions) != len(regions):
            logger.warning("Ignoring duplicate regions", regions=list(regions))
        self.max_workers = max_workers

    def run_pass(self) -> ReconciliationPassResult:
        """Reconcile every region and collect each region's outcome."""
        if not self.regions:
            logger.debug("No regions configured, nothing to reconcile")
            return ReconciliationPassResult()

        workers = self.max_workers or len(self.regions)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="spot-poll") as executor:
            futures: Dict[str, Future] = {
                region: executor.submit(self.reconciler.reconcile, region)
                for region in self.regions
            }
            wait(futures.values())

        result = ReconciliationPassResult()
        for region, future in futures.items():
            error = future.exception()
            if error is not None:
                logger.error(
                    "Spot request reconciliation failed",
                    region=region,
                    error=str(error),
                    error_type=type(error).__name__,
                )
                result.outcomes.append(RegionOutcome(region=region, error=error))
            else:
                result.outcomes.append(RegionOutcome(region=region, summary=future.result()))

        if result.succeeded:
            logger.info("Reconciliation pass complete", regions=self.regions)
        else:
            logger.warning(
                "Reconciliation pass finished with failures",
                failed_regions=result.failed_regions,
                regions=self.regions,
            )
        return result
