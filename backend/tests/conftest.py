"""Shared fixtures: a fake HubSpot behind requests.request and a TestClient for the app."""

from unittest.mock import MagicMock, PropertyMock

import pytest
import requests
from fastapi.testclient import TestClient

from app.core.config import get_settings

APP_ID = "123456"
API_KEY = "test-hapikey-0000"
CREDS = {"appId": APP_ID, "apiKey": API_KEY}


def make_response(
    status_code: int = 200,
    body: str | bytes = b"",
    read_error: Exception | None = None,
) -> requests.Response:
    """A HubSpot response with a fixed body, or one whose body read fails."""
    if read_error is not None:
        resp = MagicMock(spec=requests.Response)
        resp.status_code = status_code
        type(resp).text = PropertyMock(side_effect=read_error)
        return resp
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    resp._content_consumed = True
    resp.encoding = "utf-8"
    return resp


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def upstream(monkeypatch) -> MagicMock:
    """Replaces requests.request; set .return_value or .side_effect per test."""
    mock = MagicMock(return_value=make_response(200, "{}"))
    monkeypatch.setattr("app.services.hubspot_service.requests.request", mock)
    return mock


@pytest.fixture
def client() -> TestClient:
    from app.main import app

    return TestClient(app)


@pytest.fixture
def logged_in_client(client: TestClient) -> TestClient:
    client.cookies.set("hubspot_app_id", APP_ID)
    client.cookies.set("hubspot_hapi_key", API_KEY)
    return client
