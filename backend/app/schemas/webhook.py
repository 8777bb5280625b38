"""
Webhook settings and subscription schemas.
camelCase on the wire (HubSpot and frontend), snake_case in Python.
Unknown HubSpot fields are kept so the proxy never drops data.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.schemas.common import CredentialFields

PROPERTY_CHANGE_SUFFIX = ".propertyChange"


class EventType(str, Enum):
    CONTACT_PROPERTY_CHANGE = "contact.propertyChange"
    COMPANY_PROPERTY_CHANGE = "company.propertyChange"
    DEAL_PROPERTY_CHANGE = "deal.propertyChange"
    CONTACT_CREATION = "contact.creation"
    COMPANY_CREATION = "company.creation"
    DEAL_CREATION = "deal.creation"
    CONTACT_DELETION = "contact.deletion"
    COMPANY_DELETION = "company.deletion"
    DEAL_DELETION = "deal.deletion"

    @property
    def is_property_change(self) -> bool:
        return self.value.endswith(PROPERTY_CHANGE_SUFFIX)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class ThrottlingSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    max_concurrent_requests: int = Field(..., ge=1, alias="maxConcurrentRequests")


class WebhookSettings(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        json_schema_extra={
            "examples": [
                {
                    "targetUrl": "https://example.com/hubspot/webhooks",
                    "throttling": {"maxConcurrentRequests": 10},
                }
            ]
        },
    )

    target_url: str = Field(..., min_length=1, alias="targetUrl")
    throttling: ThrottlingSettings

    @field_validator("target_url")
    @classmethod
    def strip_target_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("targetUrl must not be blank")
        return v

    def to_hubspot(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SettingsUpdateRequest(CredentialFields):
    settings: WebhookSettings | None = None


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------


class SubscriptionInput(BaseModel):
    """
    Subscription fields sent on update. propertyName is required for
    propertyChange events and dropped for every other event type.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    event_type: EventType | None = Field(None, alias="eventType")
    property_name: str | None = Field(None, alias="propertyName")
    active: bool | None = None

    @model_validator(mode="after")
    def check_property_name(self) -> "SubscriptionInput":
        if self.property_name is not None:
            self.property_name = self.property_name.strip() or None
        if self.event_type is None:
            return self
        if self.event_type.is_property_change:
            if not self.property_name:
                raise ValueError(f"propertyName is required for {self.event_type.value} subscriptions")
        else:
            self.property_name = None
        return self

    def to_hubspot(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class SubscriptionCreate(SubscriptionInput):
    """Subscription fields sent on create; eventType is mandatory."""

    event_type: EventType = Field(..., alias="eventType")
    active: bool = True


class WebhookSubscription(BaseModel):
    """A subscription as HubSpot reports it. id is assigned by HubSpot."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    event_type: str = Field(..., alias="eventType")
    property_name: str | None = Field(None, alias="propertyName")
    active: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def id_to_str(cls, v: object) -> object:
        # HubSpot returns numeric ids
        if isinstance(v, int):
            return str(v)
        return v


class SubscriptionCreateRequest(CredentialFields):
    subscription: SubscriptionCreate | None = None


class SubscriptionUpdateRequest(CredentialFields):
    subscription: SubscriptionInput | None = None


class BulkDeleteRequest(CredentialFields):
    ids: list[str] | None = None

    @field_validator("ids", mode="before")
    @classmethod
    def normalize_ids(cls, v: object) -> object:
        """Stringify numeric ids and drop blanks and duplicates, keeping order."""
        if not isinstance(v, list):
            return v
        seen: dict[str, None] = {}
        for item in v:
            sid = str(item).strip() if isinstance(item, (str, int)) else item
            if isinstance(sid, str) and sid:
                seen.setdefault(sid, None)
            elif not isinstance(sid, str):
                return v
        return list(seen)


class BulkDeleteItem(BaseModel):
    id: str
    success: bool
    error: str | None = None


class BulkDeleteResponse(BaseModel):
    results: list[BulkDeleteItem]
    deleted: int
    failed: int
