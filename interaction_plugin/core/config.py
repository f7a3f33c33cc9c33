"""Plugin settings.

Environment variables:
- ENVIRONMENT: development / staging / production (default: development)
- LOG_LEVEL: log level (default: INFO)
- LOG_FORMAT: console or json (default: console in development, json otherwise)
- HOST / PORT: bind address of the plugin server
- STATUS_SERVICE_BACKEND: http or memory (default: http)
- STATUS_SERVICE_URL: base URL of the Execution Status Service
- STATUS_SERVICE_API_KEY: credential sent on every status service call
- STATUS_SERVICE_AUTH_HEADER / STATUS_SERVICE_AUTH_PREFIX: how the credential is sent
- STATUS_SERVICE_TIMEOUT: request timeout in seconds
- POLL_INTERVAL_SECONDS: delay between step polls while waiting for interaction
"""

from functools import lru_cache
from typing import Optional

from pydantic import model_validator
from pydantic_settings import (
    BaseSettings,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """Interaction plugin settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "interaction-plugin"
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Optional[str] = None

    # Plugin server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Execution Status Service
    STATUS_SERVICE_BACKEND: str = "http"
    STATUS_SERVICE_URL: str = "http://localhost:8080"
    STATUS_SERVICE_API_KEY: str = ""
    STATUS_SERVICE_AUTH_HEADER: str = "Authorization"
    STATUS_SERVICE_AUTH_PREFIX: str = ""
    STATUS_SERVICE_TIMEOUT: float = 30.0

    # Interaction wait
    POLL_INTERVAL_SECONDS: float = 5.0

    @model_validator(mode="after")
    def _default_log_format(self) -> "Settings":
        if not self.LOG_FORMAT:
            self.LOG_FORMAT = "console" if self.ENVIRONMENT == "development" else "json"
        return self

    def status_service_config(self) -> dict:
        """Return the status service client config built from these settings."""
        return {
            "base_url": self.STATUS_SERVICE_URL,
            "api_key": self.STATUS_SERVICE_API_KEY,
            "auth_header": self.STATUS_SERVICE_AUTH_HEADER,
            "auth_prefix": self.STATUS_SERVICE_AUTH_PREFIX,
            "timeout": self.STATUS_SERVICE_TIMEOUT,
        }


@lru_cache
def get_settings() -> Settings:
    """Settings singleton."""
    return Settings()


settings = get_settings()
