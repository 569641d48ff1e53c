"""
Health check endpoints.
Simple endpoints for monitoring application health and configuration.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from gemini_relay import __version__
from gemini_relay.api.models import ApiTestResponse, HealthResponse
from gemini_relay.config.settings import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic health check endpoint."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment,
    )


@router.get("/api/test", response_model=ApiTestResponse, response_model_by_alias=True)
async def api_test(settings: Settings = Depends(get_settings)):
    """Report whether a Gemini API key is configured, without revealing it."""
    return ApiTestResponse(
        status="ok",
        has_api_key=settings.has_api_key,
        api_key_length=len(settings.gemini_api_key),
    )
