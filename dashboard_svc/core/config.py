"""
Configuration module for the Patient Vitals Dashboard service.
Uses Pydantic BaseSettings for validation - app fails fast if required config is missing.
"""
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordServiceConfig:
    """
    Connection settings for the remote patient record service.

    Attributes:
        endpoint_url: Full URL of the endpoint returning the JSON array of patient records.
        username: Basic-auth username sent with every request (may be empty).
        password: Basic-auth password sent with every request (may be empty).
        timeout_seconds: HTTP timeout applied to the whole request.
    """
    endpoint_url: str
    username: str = ""
    password: str = ""
    timeout_seconds: float = 10.0

    def __post_init__(self) -> None:
        if not self.endpoint_url:
            raise ValueError("endpoint_url must be set")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    def log_fields(self) -> Dict[str, Any]:
        """Fields safe to log; credentials are left out."""
        return {
            "endpoint_url": self.endpoint_url,
            "timeout_seconds": self.timeout_seconds,
        }

    def __repr__(self) -> str:
        # Credentials stay out of logs and tracebacks
        return (
            f"RecordServiceConfig(endpoint_url={self.endpoint_url!r}, "
            f"username='***', password='***', "
            f"timeout_seconds={self.timeout_seconds!r})"
        )


class Settings(BaseSettings):
    """
    Application settings with validation.
    Required fields will cause the app to fail fast if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Record Service Configuration
    record_service_url: str = Field(
        ...,  # Required - no default means fail fast if missing
        description="URL of the endpoint returning the list of patient records",
    )
    record_service_username: str = Field(default="", description="Basic-auth username")
    record_service_password: str = Field(default="", description="Basic-auth password")
    record_service_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout in seconds")

    # Dashboard Configuration
    dashboard_patient_name: str = Field(
        default="Jessica Taylor",
        description="Patient shown when no patient_name is given",
    )
    dashboard_window_size: int = Field(
        default=6,
        ge=1,
        description="Number of most recent history entries plotted in the blood pressure chart",
    )

    # API Configuration
    dashboard_host: str = Field(default="0.0.0.0", description="API host")
    dashboard_port: int = Field(default=8000, description="API port")
    dashboard_reload: bool = Field(default=False, description="Enable hot reload")

    @field_validator("record_service_url")
    @classmethod
    def validate_record_service_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("RECORD_SERVICE_URL must be set in environment or .env file")
        return v

    @property
    def record_service_config(self) -> RecordServiceConfig:
        """Build the explicit record service configuration."""
        return RecordServiceConfig(
            endpoint_url=self.record_service_url,
            username=self.record_service_username,
            password=self.record_service_password,
            timeout_seconds=self.record_service_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance - fails fast if required config is missing."""
    settings = Settings()
    if not settings.record_service_username:
        logger.warning("RECORD_SERVICE_USERNAME not set - requests will use empty basic-auth credentials")
    return settings
