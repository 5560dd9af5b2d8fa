"""Periodic spot request polling."""
import threading
from typing import Optional, Sequence

import structlog

from spot_reconciler.domain.base.ports import SpotRequestProviderPort, SpotRequestStateStorePort
from .batching import BATCH_SIZE
from .fanout import FanoutCoordinator
from .region_reconciler import RegionReconciler
from .results import ReconciliationPassResult

logger = structlog.get_logger(__name__)

DEFAULT_POLL_INTERVAL = 25.0


class SpotRequestPoller:
    """
    Reconciles tracked spot requests with EC2 on a fixed interval.

    The background loop runs a pass, logs the outcome, then waits
    poll_interval seconds before the next one. A failed pass is logged and
    the loop carries on; there is no backoff or failure limit.
    """

    def __init__(self,
                 provider: SpotRequestProviderPort,
                 state_store: SpotRequestStateStorePort,
                 regions: Sequence[str],
                 batch_size: int = BATCH_SIZE,
                 poll_interval: float = DEFAULT_POLL_INTERVAL,
                 max_workers: Optional[int] = None):
        if isinstance(regions, str):
            raise ValueError("regions must be a sequence of region names, not a string")
        for region in regions:
            if not isinstance(region, str) or not region:
                raise ValueError(f"Invalid region: {region!r}")
        if poll_interval < 0:
            raise ValueError("Poll interval must be non-negative")

        self.poll_interval = poll_interval
        self.coordinator = FanoutCoordinator(
            RegionReconciler(provider, state_store, batch_size),
            regions,
            max_workers=max_workers,
        )
        self.regions = self.coordinator.regions

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def run_pass(self) -> ReconciliationPassResult:
        """Run one reconciliation pass and return every region's outcome."""
        return self.coordinator.run_pass()

    def poll(self) -> ReconciliationPassResult:
        """
        Run one reconciliation pass.

        Raises:
            PartialRegionFailure: If any region failed
        """
        result = self.run_pass()
        result.raise_for_failures()
        return result

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start polling in a background thread."""
        if self.running:
            logger.warning("Spot request poller already running")
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="spot-request-poller", daemon=True)
        self._thread.start()
        logger.info("Started spot request poller", regions=self.regions, poll_interval=self.poll_interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the background loop and wait for the current pass to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Stopped spot request poller")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.poll()
            except Exception as e:
                logger.exception("Error polling spot requests", error=str(e))
            self._stop_event.wait(self.poll_interval)
