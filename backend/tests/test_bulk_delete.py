"""Tests for batched, failure-tolerant subscription deletion."""

import threading
from unittest.mock import MagicMock

import pytest

from app.services.bulk_delete import BulkDeleteResult, bulk_delete_subscriptions
from app.services.hubspot_service import HubSpotWebhooksService
from app.services.normalizer import Failure, Success

IDS = ["1", "2", "3", "4", "5", "6", "7"]


def _service(delete) -> MagicMock:
    service = MagicMock(spec=HubSpotWebhooksService)
    service.delete_subscription.side_effect = delete
    return service


def test_one_failure_does_not_stop_the_rest():
    def delete(sid):
        if sid == "4":
            return Failure(status_code=404, message="HubSpot API Error: not found", detail="not found")
        return Success()

    service = _service(delete)
    results = bulk_delete_subscriptions(service, IDS)

    assert service.delete_subscription.call_count == 7
    assert [r.id for r in results] == IDS
    assert sum(r.success for r in results) == 6
    assert results[3] == BulkDeleteResult(id="4", success=False, error="HubSpot API Error: not found")


def test_unexpected_exception_is_recorded():
    def delete(sid):
        if sid == "2":
            raise RuntimeError("boom")
        return Success()

    results = bulk_delete_subscriptions(_service(delete), IDS[:3])
    assert [r.success for r in results] == [True, False, True]
    assert results[1].error == "boom"


def test_batches_run_one_after_another():
    lock = threading.Lock()
    active = 0
    peak = 0
    started: list[str] = []

    def delete(sid):
        nonlocal active, peak
        with lock:
            active += 1
            peak = max(peak, active)
            started.append(sid)
        with lock:
            active -= 1
        return Success()

    bulk_delete_subscriptions(_service(delete), [str(i) for i in range(12)], batch_size=5)
    assert peak <= 5
    # Every id of a batch starts before any id of the next batch
    batches = [set(started[0:5]), set(started[5:10]), set(started[10:12])]
    assert batches == [{"0", "1", "2", "3", "4"}, {"5", "6", "7", "8", "9"}, {"10", "11"}]


def test_batch_is_dispatched_concurrently():
    barrier = threading.Barrier(5, timeout=5)

    def delete(sid):
        barrier.wait()
        return Success()

    results = bulk_delete_subscriptions(_service(delete), IDS[:5], batch_size=5)
    assert all(r.success for r in results)


def test_empty_selection():
    service = _service(lambda sid: Success())
    assert bulk_delete_subscriptions(service, []) == []
    service.delete_subscription.assert_not_called()


def test_invalid_batch_size():
    with pytest.raises(ValueError):
        bulk_delete_subscriptions(_service(lambda sid: Success()), IDS, batch_size=0)
