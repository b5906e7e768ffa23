"""
Configuration settings for the application
"""
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,  # Allow both field name and alias
        extra="ignore",
    )

    # Core authentication and security
    jwt_secret_key: Optional[str] = Field(default=None, alias="JWT_SECRET_KEY")
    jwt_expiry_minutes: int = Field(default=120, alias="JWT_EXPIRY_MINUTES")

    # Text generation (any OpenAI-compatible endpoint)
    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    openai_base_url: Optional[str] = Field(default=None, alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    ai_temperature: float = Field(default=0.7, alias="AI_TEMPERATURE")
    ai_max_output_tokens: int = Field(default=1000, alias="AI_MAX_OUTPUT_TOKENS")
    ai_request_timeout_seconds: float = Field(default=60.0, alias="AI_REQUEST_TIMEOUT_SECONDS")

    # Retry policy: linear backoff of attempt * step seconds on rate limits
    ai_max_attempts: int = Field(default=3, alias="AI_MAX_ATTEMPTS")
    ai_backoff_step_seconds: float = Field(default=2.0, alias="AI_BACKOFF_STEP_SECONDS")

    # Infrastructure configuration
    database_url: Optional[str] = Field(default="sqlite+aiosqlite:///./startups.db", alias="DATABASE_URL")
    uploads_dir: str = Field(default="./uploads", alias="UPLOADS_DIR")

    # Conversational sessions (in-memory)
    session_ttl_seconds: int = Field(default=2 * 60 * 60, alias="SESSION_TTL_SECONDS")
    session_sweep_interval_seconds: int = Field(default=30 * 60, alias="SESSION_SWEEP_INTERVAL_SECONDS")
    max_sessions: Optional[int] = Field(default=None, alias="MAX_SESSIONS")

    # Frontend configuration
    frontend_url: Optional[str] = Field(default="http://localhost:5173", alias="FRONTEND_URL")

    # Environment configuration
    env: Optional[str] = Field(default=None, alias="ENV")


# Instantiate settings object
settings = Settings()

UPLOADS_DIR = Path(settings.uploads_dir)

# Determine if we're in production mode
IS_PRODUCTION = bool(settings.env and settings.env.lower() == "production")
