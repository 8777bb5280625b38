# Services: HubSpot webhooks proxy, response normalization, bulk delete

from app.services.bulk_delete import BulkDeleteResult, bulk_delete_subscriptions
from app.services.hubspot_service import HubSpotWebhooksService, get_hubspot_service
from app.services.normalizer import (
    Failure,
    FailureKind,
    Outcome,
    Success,
    normalize_response,
    transport_failure,
)

__all__ = [
    "HubSpotWebhooksService",
    "get_hubspot_service",
    "BulkDeleteResult",
    "bulk_delete_subscriptions",
    "Success",
    "Failure",
    "FailureKind",
    "Outcome",
    "normalize_response",
    "transport_failure",
]
