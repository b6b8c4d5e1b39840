"""
Module: settings.py
Description: Sender configuration using pydantic-settings.

Loads the gateway endpoint, API key and HTTP options from GCM_*
environment variables with validation and defaults. Supports .env
files for local development.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Legacy GCM HTTP endpoint, used when no endpoint is configured.
GCM_SEND_ENDPOINT = "https://gcm-http.googleapis.com/gcm/send"

# Firebase Cloud Messaging endpoint for the same legacy protocol.
FCM_SEND_ENDPOINT = "https://fcm.googleapis.com/fcm/send"

# Retry rounds after the first when a send call doesn't give a budget.
DEFAULT_RETRIES = 3


class Settings(BaseSettings):
    """Sender settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GCM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    api_key: str = Field(
        ...,
        min_length=1,
        description="Server API key used to authorize requests"
    )
    endpoint: str = Field(
        default=GCM_SEND_ENDPOINT,
        description="Gateway send endpoint URL"
    )
    timeout: float = Field(
        default=10.0,
        ge=1,
        le=60,
        description="HTTP timeout in seconds for each round"
    )
    retries: int = Field(
        default=DEFAULT_RETRIES,
        ge=0,
        description="Default retry budget for senders built from settings"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('endpoint')
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Validate endpoint is an HTTP(S) URL."""
        if not v or not v.startswith(('http://', 'https://')):
            raise ValueError("endpoint must be a valid HTTP/HTTPS URL")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()
