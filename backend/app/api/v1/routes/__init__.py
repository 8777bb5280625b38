"""
Aggregate v1 API routes.

Convention: Use "" (not "/") for the root path of a segment (e.g. @router.get(""), @router.post(""))
so the route is /api/v1/credentials not /api/v1/credentials/. This avoids 307 redirects when the
request arrives without a trailing slash.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import credentials, webhooks

api_router = APIRouter()

api_router.include_router(credentials.router, prefix="")
api_router.include_router(webhooks.router, prefix="")
