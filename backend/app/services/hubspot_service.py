"""
HubSpot Webhooks v3 client.
Developer API key auth (hapikey query param), requests library, one attempt per call.
Every method returns a normalized Outcome instead of raising.
"""

import logging
from typing import Any

import requests

from app.core.config import get_settings
from app.services.normalizer import Outcome, normalize_response, transport_failure

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    """Percent-encode one URL path segment, slashes included."""
    return requests.utils.quote(value, safe="")


class HubSpotWebhooksService:
    """
    Proxy for one HubSpot app's webhook configuration.
    Built per request from the caller's credentials; holds no other state.
    """

    def __init__(self, app_id: str, api_key: str) -> None:
        settings = get_settings()
        self._app_id = app_id
        self._api_key = api_key
        self._base_url = settings.hubspot_base_url
        self._timeout = settings.hubspot_timeout

    def _url(self, path: str) -> str:
        app_id = _segment(self._app_id)
        return f"{self._base_url.rstrip('/')}/webhooks/v3/{app_id}/{path.lstrip('/')}"

    def _call(
        self,
        method: str,
        path: str,
        *,
        default_message: str,
        json: dict[str, Any] | None = None,
        missing_ok: bool = False,
    ) -> Outcome:
        """
        Execute one HTTP request and normalize the response.
        The body is streamed so normalize_response() performs the only read.
        """
        headers = {"Content-Type": "application/json"} if json is not None else None
        try:
            resp = requests.request(
                method=method,
                url=self._url(path),
                params={"hapikey": self._api_key},
                headers=headers,
                json=json,
                timeout=self._timeout,
                stream=True,
            )
        except requests.RequestException as e:
            failure = transport_failure(e, secrets=[self._api_key])
            logger.warning("HubSpot %s %s failed: %s", method, path, failure.detail)
            return failure

        try:
            outcome = normalize_response(resp, default_message=default_message, missing_ok=missing_ok)
        finally:
            resp.close()
        logger.info("HubSpot %s %s -> %s", method, path, resp.status_code)
        return outcome

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def get_settings(self) -> Outcome:
        """Fetch webhook settings. A 404 means none configured yet: Success(None)."""
        return self._call(
            "GET",
            "/settings",
            default_message="Failed to fetch webhook settings",
            missing_ok=True,
        )

    def update_settings(self, settings: dict[str, Any]) -> Outcome:
        return self._call(
            "PUT",
            "/settings",
            json=settings,
            default_message="Failed to update settings",
        )

    def delete_settings(self) -> Outcome:
        return self._call("DELETE", "/settings", default_message="Failed to delete webhook settings")

    def validate_credentials(self) -> Outcome:
        """Probe the settings endpoint; anything but a 404 or 2xx means the credentials are bad."""
        return self._call(
            "GET",
            "/settings",
            default_message="Invalid credentials or API error",
            missing_ok=True,
        )

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def list_subscriptions(self) -> Outcome:
        return self._call("GET", "/subscriptions", default_message="Failed to fetch webhook subscriptions")

    def create_subscription(self, subscription: dict[str, Any]) -> Outcome:
        return self._call(
            "POST",
            "/subscriptions",
            json=subscription,
            default_message="Failed to create subscription",
        )

    def update_subscription(self, subscription_id: str, subscription: dict[str, Any]) -> Outcome:
        return self._call(
            "PATCH",
            f"/subscriptions/{_segment(subscription_id)}",
            json=subscription,
            default_message="Failed to update subscription",
        )

    def delete_subscription(self, subscription_id: str) -> Outcome:
        return self._call(
            "DELETE",
            f"/subscriptions/{_segment(subscription_id)}",
            default_message="Failed to delete subscription",
        )


def get_hubspot_service(app_id: str, api_key: str) -> HubSpotWebhooksService:
    """Factory used by the endpoints; tests patch requests.request underneath it."""
    return HubSpotWebhooksService(app_id=app_id, api_key=api_key)
