"""
Live integration tests against the real HubSpot Webhooks API.

How to run:
-----------
1. Set credentials of a HubSpot developer app you are allowed to modify:
   HUBSPOT_TEST_APP_ID, HUBSPOT_TEST_API_KEY (env or backend/.env).

2. From the project root:
   pytest backend/tests/test_hubspot_integration.py -v -s

Without those variables every test here is skipped. The tests create one
contact.creation subscription and delete it again; settings are only read.
"""

import os

import pytest

from app.services.hubspot_service import get_hubspot_service
from app.services.normalizer import Failure, Success

APP_ID = os.environ.get("HUBSPOT_TEST_APP_ID", "")
API_KEY = os.environ.get("HUBSPOT_TEST_API_KEY", "")

pytestmark = pytest.mark.skipif(
    not (APP_ID and API_KEY),
    reason="Set HUBSPOT_TEST_APP_ID and HUBSPOT_TEST_API_KEY to run live HubSpot tests",
)


def test_credentials_are_valid() -> None:
    outcome = get_hubspot_service(APP_ID, API_KEY).validate_credentials()
    assert isinstance(outcome, Success), getattr(outcome, "message", "")


def test_read_settings() -> None:
    outcome = get_hubspot_service(APP_ID, API_KEY).get_settings()
    assert isinstance(outcome, Success)
    if outcome.payload is not None:
        print(f"   targetUrl={outcome.payload.get('targetUrl')}")


def test_create_and_delete_subscription() -> None:
    hubspot = get_hubspot_service(APP_ID, API_KEY)
    created = hubspot.create_subscription({"eventType": "contact.creation", "active": False})
    if isinstance(created, Failure):
        pytest.skip(f"Could not create subscription: {created.message}")
    assert isinstance(created.payload, dict)
    subscription_id = str(created.payload["id"])
    print(f"   Created subscription id={subscription_id}")

    deleted = hubspot.delete_subscription(subscription_id)
    assert isinstance(deleted, Success), getattr(deleted, "message", "")


def test_bad_key_is_rejected() -> None:
    outcome = get_hubspot_service(APP_ID, "not-a-real-key").validate_credentials()
    assert isinstance(outcome, Failure)
    assert outcome.message.startswith("HubSpot API Error: ")
