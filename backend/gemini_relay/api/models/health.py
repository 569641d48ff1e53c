"""
Response models for the diagnostic endpoints.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: datetime
    version: str
    environment: str


class ApiTestResponse(BaseModel):
    """Credential diagnostic returned by /api/test."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    has_api_key: bool = Field(..., alias="hasApiKey")
    api_key_length: int = Field(..., alias="apiKeyLength")
