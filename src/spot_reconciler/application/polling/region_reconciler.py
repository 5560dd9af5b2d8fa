"""Reconciliation of one region's tracked spot requests against EC2."""
from typing import List

import structlog

from spot_reconciler.domain.base.ports import SpotRequestProviderPort, SpotRequestStateStorePort
from spot_reconciler.domain.spot_request.classifier import classify
from spot_reconciler.domain.spot_request.value_objects import PollDecision
from .batching import BATCH_SIZE, batched
from .results import RegionReconciliationSummary
from .termination import ConfirmedTermination

logger = structlog.get_logger(__name__)


class RegionReconciler:
    """
    Runs one reconciliation pass for a single region.

    Pollable IDs are described in batches, one batch at a time. Each observed
    request is either updated in place, removed, or staged for cancellation.
    Staged requests are cancelled at the end of their batch and only removed
    from the store once EC2 confirms the cancellation.

    Provider and store failures are not caught here; they abort the rest of
    the region's pass and propagate to the caller.
    """

    def __init__(self,
                 provider: SpotRequestProviderPort,
                 state_store: SpotRequestStateStorePort,
                 batch_size: int = BATCH_SIZE):
        if batch_size < 1:
            raise ValueError("Batch size must be at least 1")
        self.provider = provider
        self.state_store = state_store
        self.batch_size = batch_size

    def reconcile(self, region: str) -> RegionReconciliationSummary:
        summary = RegionReconciliationSummary(region=region)

        ids_to_poll = self.state_store.list_pollable(region)
        if not ids_to_poll:
            logger.debug("No spot requests to poll in this region", region=region)
            return summary

        summary.polled = len(ids_to_poll)
        logger.info("Polling spot requests", region=region, ids=ids_to_poll)

        for batch in batched(ids_to_poll, self.batch_size):
            self._reconcile_batch(region, batch, summary)
            summary.batches += 1

        logger.info(
            "Finished polling spot requests",
            region=region,
            batches=summary.batches,
            updated=summary.updated,
            removed=summary.removed,
            cancelled=len(summary.cancelled),
        )
        return summary

    def _reconcile_batch(self, region: str, ids: List[str],
                         summary: RegionReconciliationSummary) -> None:
        observations = self.provider.describe_requests(region, ids)

        ids_to_kill: List[str] = []
        for observation in observations:
            request_id = observation.request_id
            log = logger.bind(
                region=region,
                id=request_id,
                state=observation.state,
                status=observation.status_code,
            )
            decision = classify(observation.state, observation.status_code)

            if decision is PollDecision.CONTINUE:
                self.state_store.update_status(region, request_id, observation.state, observation.status_code)
                summary.updated += 1
                log.info("Updated state of spot request")
            elif decision is PollDecision.KILL:
                # Removed from the store only after EC2 confirms the cancellation
                ids_to_kill.append(request_id)
                log.info("Killing spot request because it is in a bad state")
            else:
                self.state_store.remove(region, request_id)
                summary.removed += 1
                log.info("No longer tracking spot request")

        if ids_to_kill:
            self._kill(region, ids_to_kill, summary)

    def _kill(self, region: str, ids: List[str], summary: RegionReconciliationSummary) -> None:
        termination = ConfirmedTermination(
            terminate=lambda chunk: self.provider.cancel_requests(region, chunk),
            forget=lambda request_id: self.state_store.remove(region, request_id),
            batch_size=self.batch_size,
        )
        outcome = termination.run(ids)

        summary.cancelled.extend(outcome.confirmed)
        summary.cancel_unconfirmed.extend(outcome.unconfirmed)

        logger.info("Killed spot requests", region=region, ids_killed=outcome.confirmed)
        if outcome.unconfirmed:
            logger.warning(
                "Cancellation not confirmed, spot requests remain tracked",
                region=region,
                ids=outcome.unconfirmed,
            )
