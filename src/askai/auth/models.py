"""Data models for access tokens."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

TOKEN_SUBJECT = "n8n"
TOKEN_AUDIENCE = "ai-assistant"


class AccessTokenClaims(BaseModel):
    """Claims carried by a self-contained access token."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    subject: str = Field(default=TOKEN_SUBJECT, alias="sub")
    audience: str = Field(default=TOKEN_AUDIENCE, alias="aud")
    license_cert: str = Field(alias="licenseCert", min_length=1)
    expires_at: datetime = Field(description="Absolute expiry (UTC)")
