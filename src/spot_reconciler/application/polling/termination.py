"""Terminate-then-forget protocol for externally owned resources."""
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Sequence

from .batching import BATCH_SIZE, batched

logger = logging.getLogger(__name__)


@dataclass
class TerminationOutcome:
    """IDs the provider confirmed as terminated, and those it did not."""
    confirmed: List[str] = field(default_factory=list)
    unconfirmed: List[str] = field(default_factory=list)


class ConfirmedTermination:
    """
    Terminate resources and forget only the ones whose termination was confirmed.

    The local record is the only pointer we keep to a remote resource, so it
    must outlive the resource. Anything submitted but not confirmed keeps its
    record and will be seen again on the next pass.
    """

    def __init__(self,
                 terminate: Callable[[List[str]], Iterable[str]],
                 forget: Callable[[str], object],
                 batch_size: int = BATCH_SIZE):
        """
        Args:
            terminate: Issues the termination call, returns the confirmed IDs
            forget: Drops the local record for one ID
            batch_size: Maximum IDs per termination call
        """
        if batch_size < 1:
            raise ValueError("Batch size must be at least 1")
        self._terminate = terminate
        self._forget = forget
        self._batch_size = batch_size

    def run(self, ids: Sequence[str]) -> TerminationOutcome:
        outcome = TerminationOutcome()
        for chunk in batched(ids, self._batch_size):
            submitted = set(chunk)
            confirmed = set(self._terminate(chunk))

            unexpected = confirmed - submitted
            if unexpected:
                logger.warning("Ignoring confirmations for IDs that were not submitted: %s", sorted(unexpected))

            for resource_id in chunk:
                if resource_id in confirmed:
                    self._forget(resource_id)
                    outcome.confirmed.append(resource_id)
                else:
                    outcome.unconfirmed.append(resource_id)
        return outcome
