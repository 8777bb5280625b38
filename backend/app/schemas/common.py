"""
Common Pydantic schemas (success/error bodies, credential fields).
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    """Error body: every failure is rendered as {"message": ...}."""
    message: str


class SuccessResponse(BaseModel):
    success: bool = True
    id: str | None = None


class CredentialFields(BaseModel):
    """
    appId / apiKey carried in a proxy request body.
    Optional here so a missing value becomes a 400 "Missing required parameters"
    instead of a schema error. HubSpot app ids are numeric, so JSON numbers are accepted.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    app_id: str | None = Field(
        None,
        validation_alias=AliasChoices("appId", "app_id"),
        description="HubSpot application id",
    )
    api_key: str | None = Field(
        None,
        validation_alias=AliasChoices("apiKey", "hapiKey", "api_key"),
        description="HubSpot developer API key (hapikey)",
    )
