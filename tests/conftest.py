import threading
from typing import Dict, List, Optional, Sequence, Set, Tuple

import pytest

from spot_reconciler.domain.base.ports import SpotRequestProviderPort
from spot_reconciler.domain.spot_request.exceptions import ProviderCallFailure
from spot_reconciler.domain.spot_request.value_objects import SpotRequestObservation
from spot_reconciler.infrastructure.persistence.memory_store import InMemorySpotRequestStore


class FakeSpotRequestProvider(SpotRequestProviderPort):
    """Scriptable provider double that records every call it receives."""

    def __init__(self):
        self._lock = threading.Lock()
        self.requests: Dict[Tuple[str, str], Tuple[str, str]] = {}
        self.unconfirmed: Set[str] = set()
        self.describe_failures: Dict[str, Exception] = {}
        self.cancel_failures: Dict[str, Exception] = {}
        self.fail_describe_on_call: Dict[str, int] = {}
        self.describe_calls: List[Tuple[str, List[str]]] = []
        self.cancel_calls: List[Tuple[str, List[str]]] = []

    def set_request(self, region: str, request_id: str, state: str, status_code: str) -> None:
        self.requests[(region, request_id)] = (state, status_code)

    def describe_requests(self, region: str, request_ids: Sequence[str]) -> List[SpotRequestObservation]:
        with self._lock:
            self.describe_calls.append((region, list(request_ids)))
            calls_in_region = sum(1 for r, _ in self.describe_calls if r == region)
        if region in self.describe_failures:
            raise self.describe_failures[region]
        if self.fail_describe_on_call.get(region) == calls_in_region:
            raise ProviderCallFailure("describe_spot_instance_requests", region, "boom")
        observations = []
        for request_id in request_ids:
            if (region, request_id) in self.requests:
                state, status_code = self.requests[(region, request_id)]
                observations.append(
                    SpotRequestObservation(request_id=request_id, state=state, status_code=status_code)
                )
        return observations

    def cancel_requests(self, region: str, request_ids: Sequence[str]) -> List[str]:
        with self._lock:
            self.cancel_calls.append((region, list(request_ids)))
        if region in self.cancel_failures:
            raise self.cancel_failures[region]
        confirmed = []
        for request_id in request_ids:
            if request_id in self.unconfirmed:
                continue
            self.requests[(region, request_id)] = ("cancelled", "request-canceled-and-instance-running")
            confirmed.append(request_id)
        return confirmed

    def describe_calls_for(self, region: str) -> List[List[str]]:
        return [ids for r, ids in self.describe_calls if r == region]

    def cancel_calls_for(self, region: Optional[str] = None) -> List[List[str]]:
        return [ids for r, ids in self.cancel_calls if region is None or r == region]


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_SECURITY_TOKEN', 'testing')
    monkeypatch.setenv('AWS_SESSION_TOKEN', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')


@pytest.fixture
def provider():
    return FakeSpotRequestProvider()


@pytest.fixture
def state_store():
    return InMemorySpotRequestStore()
