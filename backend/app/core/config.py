"""
Application configuration from environment variables.
Settings class using pydantic-settings; every field has a local-dev default.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from backend root so it loads when running from backend/ or project root
_BACKEND_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BACKEND_ROOT / ".env"

DEFAULT_CORS_ORIGIN = "http://localhost:3000"


class Settings(BaseSettings):
    """
    Application settings loaded from environment and .env.
    """

    ENVIRONMENT: str = "development"
    # Store as string so env never triggers json.loads; parsed in cors_origins_list.
    cors_origins: str = Field(
        default=DEFAULT_CORS_ORIGIN,
        description="Comma-separated origins or JSON array",
        validation_alias="CORS_ORIGINS",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def normalize_cors_origins(cls, v: object) -> str:
        """Ensure we always have a string (avoid empty env causing json.loads in pydantic-settings)."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_CORS_ORIGIN
        if isinstance(v, list):
            return ",".join(str(x).strip() for x in v if str(x).strip())
        return str(v).strip()

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # HubSpot webhooks API
    hubspot_base_url: str = Field(
        default="https://api.hubapi.com",
        description="HubSpot API host; webhooks live under /webhooks/v3/{appId}",
        validation_alias="HUBSPOT_BASE_URL",
    )
    hubspot_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds to wait on a single HubSpot request",
        validation_alias="HUBSPOT_TIMEOUT",
    )

    # Credential cookies
    credentials_max_age: int = Field(
        default=60 * 60 * 24,
        gt=0,
        description="Lifetime of the credential cookies in seconds (1 day)",
        validation_alias="CREDENTIALS_MAX_AGE",
    )

    bulk_delete_batch_size: int = Field(
        default=5,
        ge=1,
        description="Subscriptions deleted concurrently per batch",
        validation_alias="BULK_DELETE_BATCH_SIZE",
    )

    @field_validator("hubspot_base_url", mode="before")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated or JSON array string."""
        raw = (self.cors_origins or "").strip()
        if not raw:
            return [DEFAULT_CORS_ORIGIN]
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
            except ValueError:
                parsed = None
            if isinstance(parsed, list):
                return [x.strip() for x in parsed if isinstance(x, str) and x.strip()]
        return [x.strip() for x in raw.split(",") if x.strip()] or [DEFAULT_CORS_ORIGIN]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
