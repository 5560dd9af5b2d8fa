"""In-memory spot request state store."""
import logging
import threading
from typing import Dict, List, Optional, Tuple

from spot_reconciler.domain.base.ports import SpotRequestStateStorePort
from spot_reconciler.domain.spot_request.aggregate import SpotRequestRecord
from spot_reconciler.domain.spot_request.value_objects import SpotRequestState, SpotRequestStatusCode


class InMemorySpotRequestStore(SpotRequestStateStorePort):
    """
    Dictionary-backed state store.

    Records are kept in insertion order per region, so list_pollable returns
    IDs in the order they were tracked.
    """

    def __init__(self):
        self._records: Dict[Tuple[str, str], SpotRequestRecord] = {}
        self._lock = threading.RLock()
        self._logger = logging.getLogger(__name__)

    def track(self, region: str, request_id: str,
              state: str = SpotRequestState.OPEN.value,
              status_code: str = SpotRequestStatusCode.PENDING_EVALUATION.value) -> SpotRequestRecord:
        """Start tracking a spot request. An existing record is replaced."""
        record = SpotRequestRecord.track(region, request_id, state, status_code)
        with self._lock:
            self._records[(region, request_id)] = record
        return record.model_copy()

    def get(self, region: str, request_id: str) -> Optional[SpotRequestRecord]:
        with self._lock:
            record = self._records.get((region, request_id))
            return record.model_copy() if record else None

    def list_regions(self) -> List[str]:
        with self._lock:
            return sorted({region for region, _ in self._records})

    def list_pollable(self, region: str) -> List[str]:
        with self._lock:
            return [request_id for (r, request_id) in self._records if r == region]

    def update_status(self, region: str, request_id: str, state: str, status_code: str) -> bool:
        with self._lock:
            record = self._records.get((region, request_id))
            if record is None:
                self._logger.debug("Spot request %s/%s is not tracked, skipping update", region, request_id)
                return False
            record.update_status(state, status_code)
            return True

    def remove(self, region: str, request_id: str) -> bool:
        with self._lock:
            return self._records.pop((region, request_id), None) is not None
