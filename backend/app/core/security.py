"""
Credential store: the HubSpot app id and API key live in two http-only cookies.
"""

from dataclasses import dataclass, field

from fastapi import Request, Response

from app.core.config import get_settings
from app.core.errors import AuthenticationError, ValidationError

APP_ID_COOKIE = "hubspot_app_id"
API_KEY_COOKIE = "hubspot_hapi_key"

MISSING_PARAMETERS = "Missing required parameters"


@dataclass(frozen=True)
class Credentials:
    """HubSpot app id + developer API key. The key never appears in repr."""

    app_id: str
    api_key: str = field(repr=False)


def credentials_from_fields(
    app_id: str | None,
    api_key: str | None,
    message: str = MISSING_PARAMETERS,
) -> Credentials:
    """Build the pair from request fields; both are required (blank counts as missing)."""
    app_id = (app_id or "").strip()
    api_key = (api_key or "").strip()
    if not app_id or not api_key:
        raise ValidationError(message)
    return Credentials(app_id=app_id, api_key=api_key)


def set_credentials(response: Response, credentials: Credentials) -> None:
    settings = get_settings()
    for key, value in (
        (APP_ID_COOKIE, credentials.app_id),
        (API_KEY_COOKIE, credentials.api_key),
    ):
        response.set_cookie(
            key=key,
            value=value,
            max_age=settings.credentials_max_age,
            path="/",
            secure=settings.is_production,
            httponly=True,
        )


def get_credentials(request: Request) -> Credentials | None:
    """Both cookies or nothing: a half-stored pair is treated as absent."""
    app_id = request.cookies.get(APP_ID_COOKIE)
    api_key = request.cookies.get(API_KEY_COOKIE)
    if not app_id or not api_key:
        return None
    return Credentials(app_id=app_id, api_key=api_key)


def clear_credentials(response: Response) -> None:
    settings = get_settings()
    for key in (APP_ID_COOKIE, API_KEY_COOKIE):
        response.delete_cookie(key=key, path="/", secure=settings.is_production, httponly=True)


async def require_credentials(request: Request) -> Credentials:
    """Dependency: credentials from cookies. Raises 401 if not stored."""
    credentials = get_credentials(request)
    if credentials is None:
        raise AuthenticationError("HubSpot credentials not set")
    return credentials
