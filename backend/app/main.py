"""
HubSpot Webhook Manager - FastAPI application.
CORS, API versioning (/api/v1), health check, error handling.
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest

from app.api.v1.routes import api_router
from app.core.config import get_settings
from app.core.errors import ProxyError

# Ensure app logs (including request logs) appear in deploy logs
_log_handler = logging.StreamHandler(sys.stdout)
_log_handler.setLevel(logging.INFO)
_log_handler.setFormatter(logging.Formatter("%(levelname)s:     %(message)s"))
_app_logger = logging.getLogger("app")
_app_logger.setLevel(logging.INFO)
if not _app_logger.handlers:
    _app_logger.addHandler(_log_handler)
logger = logging.getLogger(__name__)

# Load settings once at import so CORS list is available to middleware
_settings = get_settings()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request (method + path, never the query string or body, which may carry credentials)."""

    async def dispatch(self, request: StarletteRequest, call_next: Callable) -> Response:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    logger.info("Starting HubSpot Webhook Manager API (%s)", _settings.ENVIRONMENT)
    logger.info("CORS_ORIGINS=%s", _settings.cors_origins)
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="HubSpot Webhook Manager API",
    version="1.0.0",
    description="Store HubSpot credentials in cookies and manage webhook settings and subscriptions.",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
# Credentials travel in cookies, so origins must be explicit
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(ProxyError)
async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are a 400 with one readable message, like missing fields."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"Invalid request: {loc + ': ' if loc else ''}{first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"message": message})


# Error handling middleware
@app.middleware("http")
async def catch_exceptions(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error"},
        )


# Root and health (outside versioning)
@app.get("/")
def root():
    return {
        "message": "HubSpot Webhook Manager API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "credentials": "/api/v1/credentials",
            "settings": "/api/v1/webhooks/settings",
            "subscriptions": "/api/v1/webhooks/subscriptions",
        },
    }


@app.get("/health")
def health():
    return {"status": "healthy"}


# API v1
app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "8080"))
    uvicorn.run("app.main:app", host="0.0.0.0", port=port)
