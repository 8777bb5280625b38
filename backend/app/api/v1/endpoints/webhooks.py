"""
Webhook endpoints: settings and subscriptions, proxied to HubSpot Webhooks v3.

Write endpoints take appId/apiKey in the body; read endpoints use the credential cookies.
HubSpot responses arrive here already normalized (see app.services.normalizer).
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import ValidationError as PydanticValidationError

from app.core.config import get_settings
from app.core.errors import InternalError, ParseError, ProxyError, ValidationError, raise_for_outcome
from app.core.security import Credentials, credentials_from_fields, require_credentials
from app.schemas.common import CredentialFields, SuccessResponse
from app.schemas.webhook import (
    BulkDeleteItem,
    BulkDeleteRequest,
    BulkDeleteResponse,
    SettingsUpdateRequest,
    SubscriptionCreateRequest,
    SubscriptionUpdateRequest,
    WebhookSubscription,
)
from app.services.bulk_delete import bulk_delete_subscriptions
from app.services.hubspot_service import HubSpotWebhooksService, get_hubspot_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])

INVALID_RESPONSE = "Received invalid response from HubSpot API"


def _service(body: CredentialFields, *required: Any) -> HubSpotWebhooksService:
    """HubSpot client for the body's credentials; 400 if they or any required field is missing."""
    credentials = credentials_from_fields(body.app_id, body.api_key)
    if any(value is None for value in required):
        raise ValidationError("Missing required parameters")
    return get_hubspot_service(credentials.app_id, credentials.api_key)


def _ok(subscription_id: str | None = None) -> dict[str, Any]:
    return SuccessResponse(id=subscription_id).model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@router.get("/settings", summary="Get webhook settings")
def get_webhook_settings(credentials: Credentials = Depends(require_credentials)) -> dict[str, Any]:
    """GET /api/v1/webhooks/settings: {"settings": null} when none are configured yet."""
    try:
        hubspot = get_hubspot_service(credentials.app_id, credentials.api_key)
        outcome = raise_for_outcome(hubspot.get_settings())
        if outcome.degraded:
            raise ParseError(INVALID_RESPONSE)
        return {"settings": outcome.payload}
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Fetch webhook settings error: %s", e)
        raise InternalError("Failed to fetch webhook settings")


@router.put("/settings", summary="Update webhook settings")
def update_webhook_settings(body: SettingsUpdateRequest) -> Any:
    """PUT /api/v1/webhooks/settings: returns HubSpot's settings, or {"success": true} if it sent none."""
    hubspot = _service(body, body.settings)
    try:
        outcome = raise_for_outcome(hubspot.update_settings(body.settings.to_hubspot()))
        return outcome.payload if outcome.payload is not None else _ok()
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Update webhook settings error: %s", e)
        raise InternalError("Failed to update webhook settings")


@router.delete("/settings", summary="Delete webhook settings")
def delete_webhook_settings(body: CredentialFields) -> dict[str, Any]:
    """DELETE /api/v1/webhooks/settings: the response body from HubSpot is ignored."""
    hubspot = _service(body)
    try:
        raise_for_outcome(hubspot.delete_settings())
        return _ok()
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Delete webhook settings error: %s", e)
        raise InternalError("Failed to delete webhook settings")


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------


@router.get("/subscriptions", summary="List webhook subscriptions")
def list_webhook_subscriptions(credentials: Credentials = Depends(require_credentials)) -> dict[str, Any]:
    """GET /api/v1/webhooks/subscriptions: HubSpot's results array, narrowed to subscriptions."""
    try:
        hubspot = get_hubspot_service(credentials.app_id, credentials.api_key)
        outcome = raise_for_outcome(hubspot.list_subscriptions())
        if outcome.degraded:
            raise ParseError(INVALID_RESPONSE)
        payload = outcome.payload if isinstance(outcome.payload, dict) else {}
        results = [
            WebhookSubscription.model_validate(item).model_dump(by_alias=True, exclude_none=True)
            for item in payload.get("results") or []
        ]
        return {"results": results}
    except PydanticValidationError as e:
        logger.warning("Unexpected subscription shape from HubSpot: %s", e)
        raise ParseError(INVALID_RESPONSE)
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Fetch webhook subscriptions error: %s", e)
        raise InternalError("Failed to fetch webhook subscriptions")


@router.post("/subscriptions", summary="Create webhook subscription")
def create_webhook_subscription(body: SubscriptionCreateRequest) -> Any:
    """POST /api/v1/webhooks/subscriptions: returns the new subscription, or {"success": true}."""
    hubspot = _service(body, body.subscription)
    try:
        outcome = raise_for_outcome(hubspot.create_subscription(body.subscription.to_hubspot()))
        return outcome.payload if outcome.payload is not None else _ok()
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Create webhook subscription error: %s", e)
        raise InternalError("Failed to create webhook subscription")


@router.post(
    "/subscriptions/bulk-delete",
    response_model=BulkDeleteResponse,
    summary="Delete several webhook subscriptions",
)
def bulk_delete_webhook_subscriptions(body: BulkDeleteRequest) -> BulkDeleteResponse:
    """
    POST /api/v1/webhooks/subscriptions/bulk-delete: best effort.
    Every id is attempted; per-id results are returned in request order.
    """
    hubspot = _service(body, body.ids)
    if not body.ids:
        raise ValidationError("No subscriptions selected")
    try:
        results = bulk_delete_subscriptions(hubspot, body.ids, batch_size=get_settings().bulk_delete_batch_size)
    except Exception as e:
        logger.exception("Bulk delete webhook subscriptions error: %s", e)
        raise InternalError("Failed to delete webhook subscriptions")
    deleted = sum(1 for r in results if r.success)
    return BulkDeleteResponse(
        results=[BulkDeleteItem(id=r.id, success=r.success, error=r.error) for r in results],
        deleted=deleted,
        failed=len(results) - deleted,
    )


# PUT kept for older clients that used it for edits
@router.api_route("/subscriptions/{subscription_id}", methods=["PATCH", "PUT"], summary="Update webhook subscription")
def update_webhook_subscription(subscription_id: str, body: SubscriptionUpdateRequest) -> Any:
    """PATCH /api/v1/webhooks/subscriptions/{id}: returns the subscription, or {"success": true, "id": id}."""
    hubspot = _service(body, body.subscription)
    try:
        outcome = raise_for_outcome(hubspot.update_subscription(subscription_id, body.subscription.to_hubspot()))
        return outcome.payload if outcome.payload is not None else _ok(subscription_id)
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Update webhook subscription error: %s", e)
        raise InternalError("Failed to update webhook subscription")


@router.delete("/subscriptions/{subscription_id}", summary="Delete webhook subscription")
def delete_webhook_subscription(subscription_id: str, body: CredentialFields) -> dict[str, Any]:
    """DELETE /api/v1/webhooks/subscriptions/{id}"""
    hubspot = _service(body)
    try:
        raise_for_outcome(hubspot.delete_subscription(subscription_id))
        return _ok()
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Delete webhook subscription error: %s", e)
        raise InternalError("Failed to delete webhook subscription")
