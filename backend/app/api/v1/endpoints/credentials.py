"""
Credentials endpoints. Validate the HubSpot app id + API key, then keep them in cookies.
"""

import logging

from fastapi import APIRouter, Request, Response

from app.core.errors import (
    AuthenticationError,
    InternalError,
    ParseError,
    ProxyError,
    TransportError,
)
from app.core.security import (
    clear_credentials,
    credentials_from_fields,
    get_credentials,
    set_credentials,
)
from app.schemas.common import SuccessResponse
from app.schemas.credentials import CredentialsRequest, CredentialsStatus
from app.services.hubspot_service import get_hubspot_service
from app.services.normalizer import Failure, FailureKind

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/credentials", tags=["credentials"])


@router.get(
    "",
    response_model=CredentialsStatus,
    summary="Credential status",
    description="Report whether credentials are stored. The values themselves are never returned.",
)
def credentials_status(request: Request) -> CredentialsStatus:
    return CredentialsStatus(configured=get_credentials(request) is not None)


@router.post(
    "",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Store credentials",
)
def store_credentials(body: CredentialsRequest, response: Response) -> SuccessResponse:
    """
    POST /api/v1/credentials: check the credentials against HubSpot, then set cookies.

    A 404 from the settings probe only means no settings exist yet and is accepted.
    """
    credentials = credentials_from_fields(body.app_id, body.api_key, "App ID and API Key are required")
    try:
        outcome = get_hubspot_service(credentials.app_id, credentials.api_key).validate_credentials()
        if isinstance(outcome, Failure):
            if outcome.kind is FailureKind.TRANSPORT:
                raise TransportError(outcome.message)
            raise AuthenticationError(outcome.message)
        if outcome.degraded:
            raise ParseError("Received invalid response from HubSpot API")
        set_credentials(response, credentials)
    except ProxyError:
        raise
    except Exception as e:
        logger.exception("Save credentials error: %s", e)
        raise InternalError("Failed to save credentials")
    logger.info("Stored HubSpot credentials")
    return SuccessResponse()


@router.delete(
    "",
    response_model=SuccessResponse,
    response_model_exclude_none=True,
    summary="Clear credentials",
)
def delete_credentials(response: Response) -> SuccessResponse:
    """DELETE /api/v1/credentials: log out by expiring both cookies."""
    try:
        clear_credentials(response)
    except Exception as e:
        logger.exception("Clear credentials error: %s", e)
        raise InternalError("Failed to clear credentials")
    return SuccessResponse()
