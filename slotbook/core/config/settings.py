"""Application settings with Pydantic validation."""

from typing import Any, Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SlotBookSettings(BaseSettings):
    """Application settings with validation and environment variable support."""

    # Backing service
    api_base_url: str = Field(
        default="http://localhost:3333", description="Base URL of the booking backend"
    )
    api_token: SecretStr = Field(
        default=SecretStr(""),
        description="Bearer token of the already authenticated client session",
    )
    request_timeout: float = Field(
        default=15.0, gt=0, le=300, description="Total HTTP request timeout in seconds"
    )

    # Environment
    env: str = Field(
        default="production", description="Environment (production, development, testing)"
    )

    @model_validator(mode="before")
    @classmethod
    def default_env_for_pytest(cls, data: Any) -> Any:
        """Auto-detect testing environment when running under pytest."""
        import sys

        if not isinstance(data, dict):
            return data

        if ("env" not in data or not data.get("env")) and "pytest" in sys.modules:
            data["env"] = "testing"

        return data

    # Logging
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_json: bool = Field(default=False, description="Write JSON lines to the log file")
    logs_dir: Optional[str] = Field(
        default=None, description="Directory for log files (console only when empty)"
    )

    model_config = SettingsConfigDict(
        env_prefix="SLOTBOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Require an http(s) URL and strip the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("API_BASE_URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value."""
        allowed = ["production", "development", "testing", "staging"]
        if v.lower() not in allowed:
            raise ValueError(f'ENV must be one of: {", ".join(allowed)}')
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f'LOG_LEVEL must be one of: {", ".join(allowed)}')
        return v_upper

    @model_validator(mode="after")
    def require_https_in_production(self) -> "SlotBookSettings":
        """
        Refuse to send the bearer token over plain HTTP in production.

        Returns:
            Self if validation passes

        Raises:
            ValueError: If production environment uses an http:// backend
        """
        if self.env == "production" and self.api_base_url.startswith("http://"):
            host = self.api_base_url[len("http://") :].split("/")[0].split(":")[0]
            if host not in ("localhost", "127.0.0.1"):
                raise ValueError("Production API_BASE_URL must use https://")
        return self

    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.env == "production"


# Singleton instance
_settings: Optional[SlotBookSettings] = None


def get_settings() -> SlotBookSettings:
    """
    Get application settings singleton.

    Returns:
        SlotBookSettings instance

    Raises:
        ValidationError: If settings are invalid
    """
    global _settings
    if _settings is None:
        _settings = SlotBookSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings
    _settings = None
