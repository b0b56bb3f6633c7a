"""
GPGMail Backend Configuration

Manages all configuration settings with environment variable support.
Security-critical settings are validated and never logged.
"""

import secrets
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="GPGMAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "GPGMail Backend"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Security
    secret_key: str = Field(default_factory=lambda: secrets.token_hex(32))
    api_token: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    token_expire_minutes: int = 1440

    # Encryption
    use_pgp_mime: bool = False
    gpg_binary: Optional[str] = None
    temp_dir: Optional[Path] = None

    # Outgoing mail
    smtp_host: str = "127.0.0.1"
    smtp_port: int = 25
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_start_tls: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("temp_dir", mode="after")
    @classmethod
    def ensure_temp_dir_exists(cls, v: Optional[Path]) -> Optional[Path]:
        """Create the GnuPG scratch directory if one is configured."""
        if v is not None:
            v.mkdir(parents=True, exist_ok=True)
        return v

    @field_validator("host")
    @classmethod
    def validate_localhost_only(cls, v: str) -> str:
        """Ensure backend only binds to localhost for security."""
        if v not in ("127.0.0.1", "localhost", "::1"):
            raise ValueError("Backend must bind to localhost only for security")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
