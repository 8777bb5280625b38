"""
Error taxonomy for the proxy endpoints.

Every error carries the HTTP status and the human-readable message that is
sent back to the caller as {"message": ...}. Handlers are registered in
app.main so nothing leaves a route as an unhandled fault.
"""

from fastapi import status

from app.services.normalizer import Failure, FailureKind, Outcome, Success


class ProxyError(Exception):
    """Base class: an error that maps onto one JSON error response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(ProxyError):
    """Missing or malformed input, rejected before any upstream call."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ProxyError):
    """Credentials missing from the cookie store or rejected by HubSpot."""

    status_code = status.HTTP_401_UNAUTHORIZED


class UpstreamError(ProxyError):
    """Non-2xx answer from HubSpot; status_code is HubSpot's own status."""


class TransportError(ProxyError):
    """HubSpot could not be reached at all."""


class ParseError(ProxyError):
    """HubSpot answered OK but the body could not be used."""


class InternalError(ProxyError):
    """Unexpected local failure."""


def raise_for_outcome(outcome: Outcome) -> Success:
    """Return a Success unchanged, raise the matching ProxyError for a Failure."""
    if isinstance(outcome, Failure):
        if outcome.kind is FailureKind.TRANSPORT:
            raise TransportError(outcome.message, status_code=outcome.status_code)
        raise UpstreamError(outcome.message, status_code=outcome.status_code)
    return outcome
