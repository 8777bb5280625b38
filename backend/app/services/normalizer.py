"""
Upstream response normalization.

HubSpot's webhook endpoints do not reliably answer with JSON: writes may come
back as 204 or with an empty body, and error bodies can be empty, plain text
or malformed JSON. normalize_response() turns any such response into exactly
one Success or Failure without raising, reading the body once.
"""

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Union
from urllib.parse import quote, quote_plus

import requests

logger = logging.getLogger(__name__)

ERROR_PREFIX = "HubSpot API Error: "
RAW_BODY_PREFIX = "API returned: "
NETWORK_ERROR_PREFIX = "Network error: "


class FailureKind(str, enum.Enum):
    UPSTREAM = "upstream"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class Success:
    """
    payload is the parsed JSON body, or None when there was nothing usable.
    degraded is set when a 2xx response carried a body that was not JSON:
    HubSpot said OK, so the call still succeeds, just without a payload.
    """

    payload: Any = None
    degraded: bool = False


@dataclass(frozen=True)
class Failure:
    """
    status_code: HubSpot's status, or 500 for transport failures.
    message: caller-facing text. detail: the same text without the prefix.
    """

    status_code: int
    message: str
    detail: str
    kind: FailureKind = FailureKind.UPSTREAM


Outcome = Union[Success, Failure]


def _read_text(response: requests.Response) -> str:
    """Read the body once; a truncated or broken body counts as empty."""
    try:
        return response.text or ""
    except requests.RequestException as e:
        logger.warning("Could not read HubSpot response body (status %s): %s", response.status_code, e)
        return ""


def _error_detail(text: str, default_message: str) -> str:
    if not text.strip():
        return default_message
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        # Never drop HubSpot's own error text
        return f"{RAW_BODY_PREFIX}{text}"
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return default_message


def normalize_response(
    response: requests.Response,
    *,
    default_message: str,
    missing_ok: bool = False,
) -> Outcome:
    """
    Classify a HubSpot response.

    - 204, and 404 when missing_ok (settings not configured yet) -> Success(None)
    - other non-2xx -> Failure with HubSpot's message, the raw body, or default_message
    - 2xx -> Success(parsed JSON); empty body -> Success(None);
      unparseable body -> Success(None, degraded=True)
    """
    status_code = response.status_code
    text = _read_text(response)

    if status_code == 204:
        return Success()
    if missing_ok and status_code == 404:
        return Success()

    if not 200 <= status_code < 300:
        detail = _error_detail(text, default_message)
        logger.warning("HubSpot API returned %s: %s", status_code, detail)
        return Failure(status_code=status_code, message=f"{ERROR_PREFIX}{detail}", detail=detail)

    if not text.strip():
        return Success()
    try:
        return Success(payload=json.loads(text))
    except (ValueError, RecursionError) as e:
        logger.warning("Unparseable HubSpot success body (status %s): %s", status_code, e)
        return Success(degraded=True)


def redact(text: str, secrets: Iterable[str]) -> str:
    """Mask each secret, including the percent-encoded forms requests puts in URLs."""
    for secret in secrets:
        if not secret:
            continue
        for form in sorted({secret, quote(secret, safe=""), quote_plus(secret)}, key=len, reverse=True):
            text = text.replace(form, "***")
    return text


def transport_failure(exc: BaseException, *, secrets: Iterable[str] = ()) -> Failure:
    """The request never completed (DNS, connection, timeout)."""
    cause = redact(str(exc) or exc.__class__.__name__, secrets)
    return Failure(
        status_code=500,
        message=f"{NETWORK_ERROR_PREFIX}{cause}",
        detail=cause,
        kind=FailureKind.TRANSPORT,
    )
