from unittest.mock import Mock

import pytest

from spot_reconciler.application.polling.region_reconciler import RegionReconciler
from spot_reconciler.domain.base.ports import SpotRequestStateStorePort
from spot_reconciler.domain.spot_request.exceptions import ProviderCallFailure, StateStoreFailure
from spot_reconciler.infrastructure.persistence.memory_store import InMemorySpotRequestStore

REGION = "us-east-1"

@pytest.fixture
def reconciler(provider, state_store):
    return RegionReconciler(provider, state_store, batch_size=100)

def track(provider, state_store, request_id, state="open", status_code="pending-evaluation"):
    state_store.track(REGION, request_id)
    provider.set_request(REGION, request_id, state, status_code)

def test_polls_in_batches_of_one_hundred(provider, state_store, reconciler):
    for i in range(250):
        track(provider, state_store, f"sir-{i:03d}")

    summary = reconciler.reconcile(REGION)

    calls = provider.describe_calls_for(REGION)
    assert [len(ids) for ids in calls] == [100, 100, 50]
    assert [i for ids in calls for i in ids] == [f"sir-{i:03d}" for i in range(250)]
    assert summary.batches == 3
    assert summary.polled == 250

def test_pending_request_is_updated_and_not_cancelled(provider):
    store = Mock(spec=SpotRequestStateStorePort)
    store.list_pollable.return_value = ["sir-1"]
    provider.set_request(REGION, "sir-1", "open", "pending-fulfillment")

    summary = RegionReconciler(provider, store).reconcile(REGION)

    store.update_status.assert_called_once_with(REGION, "sir-1", "open", "pending-fulfillment")
    store.remove.assert_not_called()
    assert provider.cancel_calls == []
    assert summary.updated == 1

def test_bad_open_request_is_cancelled_then_removed(provider, state_store, reconciler):
    track(provider, state_store, "sir-1", "open", "capacity-not-available")

    summary = reconciler.reconcile(REGION)

    assert provider.cancel_calls_for(REGION) == [["sir-1"]]
    assert state_store.get(REGION, "sir-1") is None
    assert summary.cancelled == ["sir-1"]

def test_unconfirmed_cancellation_keeps_record(provider, state_store, reconciler):
    track(provider, state_store, "sir-1", "open", "capacity-not-available")
    provider.unconfirmed.add("sir-1")

    summary = reconciler.reconcile(REGION)

    assert provider.cancel_calls_for(REGION) == [["sir-1"]]
    assert state_store.list_pollable(REGION) == ["sir-1"]
    assert summary.cancel_unconfirmed == ["sir-1"]
    assert summary.cancelled == []

def test_resolved_request_is_removed_without_cancel(provider, state_store, reconciler):
    track(provider, state_store, "sir-1", "cancelled", "canceled-before-fulfillment")

    summary = reconciler.reconcile(REGION)

    assert state_store.get(REGION, "sir-1") is None
    assert provider.cancel_calls == []
    assert summary.removed == 1

def test_no_pollable_ids_makes_no_provider_calls(provider, state_store, reconciler):
    summary = reconciler.reconcile(REGION)

    assert provider.describe_calls == []
    assert provider.cancel_calls == []
    assert summary.polled == 0
    assert summary.batches == 0

def test_cancel_is_issued_once_per_batch(provider, state_store):
    for i in range(5):
        track(provider, state_store, f"sir-{i}", "open", "price-too-low")

    RegionReconciler(provider, state_store, batch_size=2).reconcile(REGION)

    assert provider.cancel_calls_for(REGION) == [["sir-0", "sir-1"], ["sir-2", "sir-3"], ["sir-4"]]
    assert state_store.list_pollable(REGION) == []

def test_mixed_batch(provider, state_store, reconciler):
    track(provider, state_store, "sir-pending", "open", "pending-evaluation")
    track(provider, state_store, "sir-stuck", "open", "capacity-oversubscribed")
    track(provider, state_store, "sir-active", "active", "fulfilled")

    reconciler.reconcile(REGION)

    assert state_store.list_pollable(REGION) == ["sir-pending"]
    assert provider.cancel_calls_for(REGION) == [["sir-stuck"]]

def test_ids_missing_from_describe_stay_tracked(provider, state_store, reconciler):
    state_store.track(REGION, "sir-ghost")

    reconciler.reconcile(REGION)

    assert state_store.list_pollable(REGION) == ["sir-ghost"]

class RecordingStore(InMemorySpotRequestStore):
    def __init__(self, events):
        super().__init__()
        self.events = events

    def remove(self, region, request_id):
        self.events.append(("remove", request_id))
        return super().remove(region, request_id)

def test_remove_never_precedes_confirmed_cancel(provider):
    events = []
    store = RecordingStore(events)
    original_cancel = provider.cancel_requests

    def cancel(region, ids):
        confirmed = original_cancel(region, ids)
        events.append(("cancelled", tuple(confirmed)))
        return confirmed

    provider.cancel_requests = cancel
    for request_id in ("sir-a", "sir-b"):
        store.track(REGION, request_id)
        provider.set_request(REGION, request_id, "open", "capacity-not-available")
    provider.unconfirmed.add("sir-b")

    RegionReconciler(provider, store).reconcile(REGION)

    assert events == [("cancelled", ("sir-a",)), ("remove", "sir-a")]
    assert store.list_pollable(REGION) == ["sir-b"]

def test_second_pass_without_changes_is_idempotent(provider, state_store, reconciler):
    track(provider, state_store, "sir-pending", "open", "pending-fulfillment")
    track(provider, state_store, "sir-stuck", "open", "capacity-not-available")
    track(provider, state_store, "sir-done", "closed", "marked-for-termination")

    reconciler.reconcile(REGION)
    after_first = [(r.request_id, r.state, r.status_code)
                   for r in (state_store.get(REGION, i) for i in state_store.list_pollable(REGION))]

    second = reconciler.reconcile(REGION)
    after_second = [(r.request_id, r.state, r.status_code)
                    for r in (state_store.get(REGION, i) for i in state_store.list_pollable(REGION))]

    assert after_first == after_second == [("sir-pending", "open", "pending-fulfillment")]
    assert second.cancelled == []
    assert len(provider.cancel_calls) == 1

def test_describe_failure_aborts_remaining_batches(provider, state_store):
    for i in range(5):
        track(provider, state_store, f"sir-{i}", "closed", "system-error")
    provider.fail_describe_on_call[REGION] = 2

    with pytest.raises(ProviderCallFailure):
        RegionReconciler(provider, state_store, batch_size=2).reconcile(REGION)

    assert len(provider.describe_calls_for(REGION)) == 2
    # First batch was applied before the failure
    assert state_store.list_pollable(REGION) == ["sir-2", "sir-3", "sir-4"]

def test_cancel_failure_keeps_kill_list_tracked(provider, state_store, reconciler):
    track(provider, state_store, "sir-stuck", "open", "capacity-not-available")
    track(provider, state_store, "sir-done", "failed", "bad-parameters")
    provider.cancel_failures[REGION] = ProviderCallFailure("cancel_spot_instance_requests", REGION, "denied")

    with pytest.raises(ProviderCallFailure):
        reconciler.reconcile(REGION)

    assert state_store.list_pollable(REGION) == ["sir-stuck"]

def test_store_failure_propagates(provider):
    store = Mock(spec=SpotRequestStateStorePort)
    store.list_pollable.side_effect = StateStoreFailure("list_pollable", "disk gone", region=REGION)

    with pytest.raises(StateStoreFailure):
        RegionReconciler(provider, store).reconcile(REGION)

    assert provider.describe_calls == []

def test_rejects_non_positive_batch_size(provider, state_store):
    with pytest.raises(ValueError):
        RegionReconciler(provider, state_store, batch_size=0)
