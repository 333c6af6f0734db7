"""Client settings.

Loaded from environment variables with the ``CONDUIT_`` prefix or a
``.env`` file (CONDUIT_API_BASE_URL=https://api.example.com/api).
Components receive settings through AppContext; the global accessor is a
convenience for scripts and tests.
"""

import re
from typing import Optional, TYPE_CHECKING

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from conduit_client.protocols import LoggerProtocol

# URL pattern for HTTP/HTTPS endpoints
_URL_PATTERN = re.compile(r'^https?://[^\s/$.?#].[^\s]*$', re.IGNORECASE)

STORAGE_BACKENDS = ("memory", "file", "null")


class Settings(BaseSettings):
    """Conduit client settings."""

    # =========================================================================
    # API
    # =========================================================================
    api_base_url: str = "https://api.realworld.show/api"
    request_timeout: float = Field(default=30.0, gt=0.0, le=600.0)

    # =========================================================================
    # SESSION PERSISTENCE
    # =========================================================================
    # Fixed key the session token is stored under
    token_key: str = "jwtToken"
    storage_backend: str = "memory"  # Options: memory | file | null
    storage_path: Optional[str] = None

    # =========================================================================
    # LISTING
    # =========================================================================
    article_page_size: int = Field(default=10, ge=1, le=100)
    profile_page_size: int = Field(default=10, ge=1, le=100)

    # =========================================================================
    # LOGGING
    # =========================================================================
    log_level: str = "INFO"
    log_json: bool = True

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator('api_base_url', mode='after')
    @classmethod
    def validate_http_url(cls, v: str) -> str:
        """Validate that the API base is an HTTP/HTTPS URL."""
        if not _URL_PATTERN.match(v):
            raise ValueError(f"Invalid URL format: {v}. Must be http:// or https://")
        return v.rstrip("/")

    @field_validator('storage_backend', mode='after')
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in STORAGE_BACKENDS:
            raise ValueError(f"Invalid storage backend: {v}. Valid: {list(STORAGE_BACKENDS)}")
        return v

    @model_validator(mode='after')
    def validate_storage_path(self) -> 'Settings':
        """A file backend needs somewhere to write."""
        if self.storage_backend == "file" and not self.storage_path:
            raise ValueError("CONDUIT_STORAGE_PATH must be set when storage_backend=file")
        return self

    model_config = SettingsConfigDict(
        env_prefix="CONDUIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def log_config(self, logger: "LoggerProtocol") -> None:
        logger.info(
            "client_config",
            api_base_url=self.api_base_url,
            storage_backend=self.storage_backend,
            article_page_size=self.article_page_size,
        )


# =============================================================================
# GLOBAL SETTINGS (Lazy Initialization)
# =============================================================================

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings instance.

    Prefer passing settings through AppContext over this global getter.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings_instance: Settings) -> None:
    global _settings
    _settings = settings_instance


def reset_settings() -> None:
    """Forces re-creation on next get_settings() call."""
    global _settings
    _settings = None
