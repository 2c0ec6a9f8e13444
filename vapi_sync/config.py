"""
Configuration management for the Vapi sync service.

Settings are loaded from environment variables (and an optional .env file)
with pydantic-settings. The Vapi credential is optional at startup: when it
is missing the service still boots and serves local records, and every call
to the Vapi gateway fails instead.
"""

from typing import Union

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Example: VAPI_API_KEY=xxx DATA_FILE=/var/lib/vapi-sync/data.json python -m vapi_sync

    Configuration sections:
    1. Vapi AI - remote provider connection settings
    2. Storage - location of the JSON record file
    3. Application - logging and environment
    4. Server - HTTP server configuration
    """

    # ===== Vapi AI Configuration =====
    vapi_api_key: str | None = Field(
        default=None,
        description="Private API key for the Vapi platform"
    )
    vapi_base_url: str = Field(
        default="https://api.vapi.ai",
        description="Base URL for Vapi API"
    )
    vapi_timeout: int = Field(
        default=30,
        ge=5, le=120,
        description="HTTP timeout in seconds for Vapi API calls"
    )

    # ===== Storage =====
    data_file: str = Field(
        default="data.json",
        description="Path of the JSON file holding assistants and phone numbers"
    )

    # ===== Application Settings =====
    app_env: str = Field(
        default="development",
        pattern="^(development|staging|production|test)$",
        description="Application environment"
    )
    log_level: str = Field(
        default="info",
        pattern="^(debug|info|warning|error|critical)$",
        description="Logging level"
    )
    log_format: str = Field(
        default="console",
        pattern="^(json|console)$",
        description="Log output format (json for prod, console for dev)"
    )

    # ===== Server Configuration =====
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind host"
    )
    server_port: int = Field(
        default=3000,
        ge=1, le=65535,
        description="Server port"
    )
    cors_origins: Union[str, list[str]] = Field(
        default="",
        description="Allowed CORS origins - comma-separated string or list"
    )

    @model_validator(mode="after")
    def parse_cors_origins(self):
        """Split a comma-separated CORS_ORIGINS value into a list."""
        if isinstance(self.cors_origins, str):
            self.cors_origins = [
                origin.strip() for origin in self.cors_origins.split(",") if origin.strip()
            ]
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton instance - loaded once at module import
settings = Settings()
