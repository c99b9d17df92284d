"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from typing import Dict, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./tsea.db"

    # Security
    secret_key: str = "change-this-in-production-minimum-32-characters-long"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440  # 24 hours

    # OpenAI / assistant personas
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    openai_default_model: str = "gpt-4o-mini"
    assistant_api_style: str = "chat"  # "chat" or "responses"
    persona_models: Dict[str, str] = {}  # JSON, e.g. {"evaluate": "gpt-4o"}
    persona_assistant_ids: Dict[str, str] = {}  # JSON, e.g. {"icator": "asst_..."}
    upstream_timeout_seconds: float = 30.0

    # Curriculum (defaults to the packaged curriculum.json)
    curriculum_path: Optional[str] = None

    # Billing
    billing_webhook_secret: str = ""

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_v1_prefix: str = "/api/v1"
    project_name: str = "TSEA Learning Platform"
    version: str = "1.0.0"

    # Rate limiting
    rate_limit_auth_per_minute: int = 10    # per IP for login/register
    rate_limit_api_per_minute: int = 120    # per user or IP for general API
    rate_limit_chat_per_hour: int = 60      # per user for assistant chat turns
    rate_limit_enabled: bool = True

    @property
    def ai_configured(self) -> bool:
        key = (self.openai_api_key or "").strip()
        return bool(key and not key.startswith("sk-your-"))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
