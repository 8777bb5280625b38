"""
Bulk deletion of webhook subscriptions.

Ids are processed in consecutive batches; deletions inside a batch run in
parallel and the whole batch finishes before the next one starts. A failed
deletion is recorded and the run continues.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from app.services.hubspot_service import HubSpotWebhooksService
from app.services.normalizer import Failure

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5


@dataclass(frozen=True)
class BulkDeleteResult:
    id: str
    success: bool
    error: str | None = None


def _delete_one(service: HubSpotWebhooksService, subscription_id: str) -> BulkDeleteResult:
    try:
        outcome = service.delete_subscription(subscription_id)
    except Exception as e:
        logger.exception("Unexpected error deleting subscription %s", subscription_id)
        return BulkDeleteResult(id=subscription_id, success=False, error=str(e) or "Failed to delete subscription")
    if isinstance(outcome, Failure):
        return BulkDeleteResult(id=subscription_id, success=False, error=outcome.message)
    return BulkDeleteResult(id=subscription_id, success=True)


def bulk_delete_subscriptions(
    service: HubSpotWebhooksService,
    subscription_ids: Sequence[str],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> list[BulkDeleteResult]:
    """Delete every id, batch_size at a time. Results come back in input order."""
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    results: list[BulkDeleteResult] = []
    with ThreadPoolExecutor(max_workers=batch_size) as executor:
        for start in range(0, len(subscription_ids), batch_size):
            batch = subscription_ids[start:start + batch_size]
            results.extend(executor.map(lambda sid: _delete_one(service, sid), batch))

    failed = sum(1 for r in results if not r.success)
    logger.info("Bulk delete finished: %d deleted, %d failed", len(results) - failed, failed)
    return results
