"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gemini_relay.services.relay.models import GenerationConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Field names double as environment variable names (case-insensitive),
    # e.g. gemini_api_key <- GEMINI_API_KEY
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=[".env", ".env.local"],  # .env.local overrides .env
    )

    # Application settings
    app_name: str = "Gemini Chat Relay"
    environment: str = "local"
    debug: bool = True
    host: str = "0.0.0.0"
    port: int = 3000

    # CORS / static client
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])
    public_dir: str = "public"

    # Logging settings
    log_level: str = "INFO"
    enable_request_logging: bool = True

    # Gemini settings
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_api_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_seconds: float = Field(default=60.0, gt=0)

    # Generation parameters sent with every request
    gemini_temperature: float = 0.9
    gemini_top_k: int = 40
    gemini_top_p: float = 0.95
    gemini_max_output_tokens: int = 8192

    # Upper bound for provider error bodies echoed back to the client
    diagnostic_excerpt_length: int = Field(default=300, gt=0)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_local(self) -> bool:
        """Check if running in local development environment."""
        return self.environment == "local"

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def generation_config(self) -> GenerationConfig:
        """Generation parameters as the request builder expects them."""
        return GenerationConfig(
            temperature=self.gemini_temperature,
            top_k=self.gemini_top_k,
            top_p=self.gemini_top_p,
            max_output_tokens=self.gemini_max_output_tokens,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
