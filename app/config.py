"""
Configuration management using Pydantic Settings.
Loads configuration from environment variables and .env file.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Correction Configuration
    CORRECTION_PROVIDER: str = "anthropic"  # Options: anthropic, noop
    VALIDATE_RESULTS: bool = False  # Schema-check parsed results before returning them

    # Anthropic API Configuration
    ANTHROPIC_API_KEY: Optional[str] = None  # Required when using Anthropic provider
    ANTHROPIC_API_URL: str = "https://api.anthropic.com/v1/messages"
    ANTHROPIC_VERSION: str = "2023-06-01"  # Value of the anthropic-version header
    ANTHROPIC_MODEL: str = "claude-sonnet-4-20250514"
    ANTHROPIC_MAX_TOKENS: int = 2000
    ANTHROPIC_TIMEOUT_SECONDS: float = 120.0

    # NoOp provider (offline development and tests)
    NOOP_REPLY_TEXT: Optional[str] = None  # Canned reply; echoes the items when unset

    # CORS Configuration
    CORS_ORIGINS: str = "*"

    # Development/Debug
    DEBUG: bool = False
    RELOAD: bool = False

    # Logging Configuration (Optional - per-module log levels)
    APP_LOG_LEVEL: Optional[str] = None
    UVICORN_LOG_LEVEL: Optional[str] = None
    HTTPX_LOG_LEVEL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def cors_headers(self) -> dict:
        """
        Headers attached to every response of the correction endpoint.

        With an explicit origin list the allow-origin header is left to
        CORSMiddleware, which echoes the matching request origin.
        """
        headers = {
            "Access-Control-Allow-Methods": "POST, OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type",
        }
        if self.CORS_ORIGINS == "*":
            headers["Access-Control-Allow-Origin"] = "*"
        return headers


# Provider definitions with required settings
CORRECTION_PROVIDERS = {
    "anthropic": {
        "required_settings": ["ANTHROPIC_API_KEY"],
        "description": "Anthropic Messages API"
    },
    "noop": {
        "required_settings": [],  # Always available for testing
        "description": "NoOp (test provider)"
    }
}


# Global settings instance
settings = Settings()
