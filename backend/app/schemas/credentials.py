"""Credential schemas (store / status)."""

from pydantic import BaseModel, ConfigDict

from app.schemas.common import CredentialFields


class CredentialsRequest(CredentialFields):
    """Request body for storing credentials."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "appId": "123456",
                    "apiKey": "your-developer-api-key",
                }
            ]
        }
    )


class CredentialsStatus(BaseModel):
    """Whether both credential cookies are present. Never echoes the values."""
    configured: bool
