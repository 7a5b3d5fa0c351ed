"""Application configuration."""

import os

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

LOCAL_USER_ID = "00000000-0000-0000-0000-000000000001"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    edamam_app_id: str
    edamam_app_key: str
    edamam_base_url: str = "https://api.edamam.com/api/food-database/v2"
    supabase_url: str
    supabase_service_key: str
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "high"
    openai_store: bool = False
    recognition_provider: str = Field(default="mock", pattern="^(mock|openai)$")
    barcode_provider: str = Field(default="mock", pattern="^(mock|edamam)$")
    local_user_id: str = LOCAL_USER_ID
    default_timezone: str = "UTC"
    on_track_tolerance: float = Field(default=0.10, ge=0.0, le=1.0)
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_openai_key(self) -> "Settings":
        if self.recognition_provider == "openai" and not self.openai_api_key:
            raise ValueError("openai_api_key is required for the openai provider")
        return self
