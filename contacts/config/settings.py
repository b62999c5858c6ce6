"""
Client configuration with environment variable support.

The backend URL is resolved once per process from the deployment target
and never re-derived per request.

Environment variables override defaults:
- DEPLOYMENT_TARGET: emulator | device | local
- API_BASE_URL: explicit backend URL (wins over the deployment target)
- REQUEST_TIMEOUT_MS: per-request client-side timeout
"""
from functools import lru_cache
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from contacts import __version__


# Setting attribute holding the host for each deployment target
DEPLOYMENT_HOSTS = {
    "emulator": "EMULATOR_HOST",
    "device": "DEVICE_HOST",
    "local": "LOCAL_HOST",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # Application
    APP_NAME: str = "Student Contacts"
    APP_ICON: str = "📇"
    APP_VERSION: str = __version__
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Backend endpoint
    DEPLOYMENT_TARGET: Literal["emulator", "device", "local"] = "emulator"
    API_PORT: int = 5000
    EMULATOR_HOST: str = "10.0.2.2"  # Android emulator loopback to host machine
    DEVICE_HOST: str = "192.168.1.10"  # LAN address of the dev machine
    LOCAL_HOST: str = "localhost"
    API_BASE_URL: Optional[str] = None
    API_PREFIX: str = "/api"

    # Fetch resilience
    REQUEST_TIMEOUT_MS: int = 10000
    MAX_AUTO_RETRIES: int = 2
    BACKOFF_BASE_MS: int = 1000

    @field_validator("API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if v:
            return v.rstrip("/")
        return v or None

    @field_validator("REQUEST_TIMEOUT_MS", "BACKOFF_BASE_MS")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive number of milliseconds")
        return v

    @field_validator("MAX_AUTO_RETRIES")
    @classmethod
    def must_not_be_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be zero or more")
        return v

    @property
    def base_url(self) -> str:
        """Backend URL for the configured deployment target."""
        if self.API_BASE_URL:
            return self.API_BASE_URL
        host = getattr(self, DEPLOYMENT_HOSTS[self.DEPLOYMENT_TARGET])
        return f"http://{host}:{self.API_PORT}{self.API_PREFIX}"

    @property
    def log_level(self) -> str:
        """Root log level; DEBUG forces verbose logging."""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL.upper()

    @property
    def request_timeout_seconds(self) -> float:
        """Get request timeout in seconds."""
        return self.REQUEST_TIMEOUT_MS / 1000.0

    def backoff_delay_seconds(self, attempt_index: int) -> float:
        """Delay before the retry following attempt ``attempt_index`` (0-based)."""
        return (self.BACKOFF_BASE_MS * (2 ** attempt_index)) / 1000.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
