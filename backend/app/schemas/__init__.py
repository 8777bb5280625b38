# Pydantic request/response schemas (API contract). Kept in sync with frontend types.

from app.schemas.common import CredentialFields, MessageResponse, SuccessResponse
from app.schemas.credentials import CredentialsRequest, CredentialsStatus
from app.schemas.webhook import (
    BulkDeleteItem,
    BulkDeleteRequest,
    BulkDeleteResponse,
    EventType,
    SettingsUpdateRequest,
    SubscriptionCreate,
    SubscriptionCreateRequest,
    SubscriptionInput,
    SubscriptionUpdateRequest,
    ThrottlingSettings,
    WebhookSettings,
    WebhookSubscription,
)

__all__ = [
    "MessageResponse",
    "SuccessResponse",
    "CredentialFields",
    "CredentialsRequest",
    "CredentialsStatus",
    "EventType",
    "ThrottlingSettings",
    "WebhookSettings",
    "SettingsUpdateRequest",
    "SubscriptionInput",
    "SubscriptionCreate",
    "SubscriptionCreateRequest",
    "SubscriptionUpdateRequest",
    "WebhookSubscription",
    "BulkDeleteRequest",
    "BulkDeleteItem",
    "BulkDeleteResponse",
]
