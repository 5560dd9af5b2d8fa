# src/spot_reconciler/infrastructure/persistence/json_store.py
import json
import os
import fcntl
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Any, Iterator, List, Optional

from pydantic import ValidationError as PydanticValidationError

from spot_reconciler.domain.base.ports import SpotRequestStateStorePort
from spot_reconciler.domain.spot_request.aggregate import SpotRequestRecord
from spot_reconciler.domain.spot_request.exceptions import StateStoreFailure
from spot_reconciler.domain.spot_request.value_objects import SpotRequestState, SpotRequestStatusCode

COLLECTION = "spot_requests"


class JSONSpotRequestStore(SpotRequestStateStorePort):
    """
    JSON file implementation of the spot request state store.

    Every operation takes an exclusive file lock and, for mutations, does a
    full read-modify-write, so each update or removal is atomic on its own.

    Storage structure:
    {
        "spot_requests": {
            "us-east-1": {
                "sir-123": { record_data },
                "sir-456": { record_data }
            },
            "eu-west-1": { ... }
        }
    }
    """

    def __init__(self, storage_path: str):
        """
        Initialize JSON store.

        Args:
            storage_path: Path to JSON storage file
        """
        self._storage_path = storage_path
        self._lock = threading.RLock()
        self._logger = logging.getLogger(__name__)

    @property
    def storage_path(self) -> str:
        return self._storage_path

    def _ensure_storage(self) -> None:
        if os.path.exists(self._storage_path):
            return
        directory = os.path.dirname(self._storage_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self._storage_path, 'w') as f:
            json.dump({COLLECTION: {}}, f, indent=2)

    @contextmanager
    def _locked_data(self, operation: str, write: bool = False) -> Iterator[Dict[str, Any]]:
        """
        Load the store under an exclusive lock.

        Args:
            operation: Operation name for error reporting
            write: Whether to write the (possibly modified) data back

        Yields:
            The spot_requests collection, keyed by region then request ID
        """
        with self._lock:
            try:
                self._ensure_storage()
                with open(self._storage_path, 'r+') as f:
                    fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                    try:
                        content = f.read()
                        data = json.loads(content) if content.strip() else {COLLECTION: {}}
                        collection = data.setdefault(COLLECTION, {})

                        yield collection

                        if write:
                            f.seek(0)
                            f.truncate()
                            json.dump(data, f, indent=2)
                            f.flush()
                            os.fsync(f.fileno())
                    finally:
                        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
            except json.JSONDecodeError as e:
                raise StateStoreFailure(operation, f"corrupt storage file {self._storage_path}: {str(e)}")
            except OSError as e:
                raise StateStoreFailure(operation, f"cannot access {self._storage_path}: {str(e)}")

    def track(self, region: str, request_id: str,
              state: str = SpotRequestState.OPEN.value,
              status_code: str = SpotRequestStatusCode.PENDING_EVALUATION.value) -> SpotRequestRecord:
        """Start tracking a spot request. An existing record is replaced."""
        record = SpotRequestRecord.track(region, request_id, state, status_code)
        with self._locked_data("track", write=True) as collection:
            collection.setdefault(region, {})[request_id] = record.to_dict()
        return record

    def get(self, region: str, request_id: str) -> Optional[SpotRequestRecord]:
        with self._locked_data("get") as collection:
            data = collection.get(region, {}).get(request_id)
        if data is None:
            return None
        try:
            return SpotRequestRecord.from_dict(data)
        except PydanticValidationError as e:
            raise StateStoreFailure("get", str(e), region=region, request_id=request_id)

    def list_regions(self) -> List[str]:
        with self._locked_data("list_regions") as collection:
            return sorted(region for region, records in collection.items() if records)

    def list_pollable(self, region: str) -> List[str]:
        with self._locked_data("list_pollable") as collection:
            return list(collection.get(region, {}))

    def update_status(self, region: str, request_id: str, state: str, status_code: str) -> bool:
        with self._locked_data("update_status", write=True) as collection:
            data = collection.get(region, {}).get(request_id)
            if data is None:
                self._logger.debug(f"Spot request {region}/{request_id} is not tracked, skipping update")
                return False
            try:
                record = SpotRequestRecord.from_dict(data)
            except PydanticValidationError as e:
                raise StateStoreFailure("update_status", str(e), region=region, request_id=request_id)
            record.update_status(state, status_code)
            collection[region][request_id] = record.to_dict()
            return True

    def remove(self, region: str, request_id: str) -> bool:
        with self._locked_data("remove", write=True) as collection:
            records = collection.get(region)
            if not records or request_id not in records:
                return False
            del records[request_id]
            if not records:
                del collection[region]
            return True
