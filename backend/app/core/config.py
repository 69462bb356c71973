"""
Configuration management using Pydantic Settings
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.errors import StartupConfigurationError

# config.py is at: backend/app/core/config.py
# Project root is: backend/app/core/../../../
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent.parent
_project_root = _backend_dir.parent
ENV_FILE = _project_root / ".env"
# Fallback: try in backend/ directory if not found in project root
if not ENV_FILE.exists():
    ENV_FILE = _backend_dir / ".env"
# Variables already present in the environment win over the file
if ENV_FILE.exists():
    load_dotenv(ENV_FILE, override=False)

_MODEL_CONFIG = SettingsConfigDict(
    env_file=str(ENV_FILE) if ENV_FILE.exists() else None,
    env_file_encoding="utf-8",
    case_sensitive=False,
    extra="ignore",
    env_ignore_empty=True
)


class LoggingSettings(BaseSettings):
    """
    Logging settings

    Kept separate from Settings and free of required fields, so logging can
    be configured (and report the problem) even when the rest of the
    configuration is missing.
    """

    app_name: str = "Storefront"
    app_env: str = Field(default="development", description="Application environment")
    log_level: str = Field(default="INFO", description="Logging level")
    log_sqlalchemy: bool = Field(default=False, description="Enable SQLAlchemy query logging")
    log_uvicorn_access: bool = Field(default=False, description="Enable Uvicorn access logging")
    log_module_levels: Optional[str] = Field(
        default=None,
        description='Module-specific log levels (JSON string, e.g., {"app.api": "DEBUG"})'
    )
    log_format: str = Field(
        default="json",
        description="Log format: 'json' for structured logging, 'text' for plain text"
    )
    log_file_enabled: bool = Field(default=True, description="Enable file logging")
    log_file_path: str = Field(
        default="logs/storefront.log",
        description="Path to log file (relative to project root)"
    )
    log_file_retention: int = Field(
        default=30,
        ge=1,
        description="Number of days to keep log files"
    )
    log_sensitive_data: bool = Field(
        default=False,
        description="Enable logging of sensitive data (passwords, tokens) - NOT RECOMMENDED"
    )

    model_config = _MODEL_CONFIG


class Settings(LoggingSettings):
    """Application settings"""

    # HTTP listener
    host: str = Field(default="0.0.0.0", description="API host")
    port: int = Field(default=5000, ge=1, le=65535, description="API port")
    allowed_origins: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    # Record store
    database_url: str = Field(..., description="SQLAlchemy URL of the record store")
    database_pool_size: int = Field(default=5, ge=1, description="Database pool size")
    database_max_overflow: int = Field(default=10, ge=0, description="Database max overflow")

    # Email account
    email_user: str = Field(..., description="SMTP account identity")
    email_pass: str = Field(..., description="SMTP account credential")
    email_from: Optional[str] = Field(default=None, description="From header (defaults to EMAIL_USER)")
    operator_email: Optional[str] = Field(
        default=None,
        description="Recipient of contact notifications (defaults to EMAIL_USER)"
    )
    smtp_host: str = Field(default="smtp.gmail.com", description="SMTP relay host")
    smtp_port: int = Field(default=465, ge=1, le=65535, description="SMTP relay port")
    smtp_use_ssl: bool = Field(default=True, description="Implicit TLS; STARTTLS is used when false")
    smtp_timeout_seconds: float = Field(default=30.0, gt=0, description="SMTP socket timeout (seconds)")

    @property
    def sender_address(self) -> str:
        return self.email_from or self.email_user

    @property
    def operator_address(self) -> str:
        return self.operator_email or self.email_user

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    model_config = _MODEL_CONFIG


@lru_cache()
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings instance"""
    return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance

    Raises:
        StartupConfigurationError: required values are missing or invalid
    """
    try:
        return Settings()
    except PydanticValidationError as exc:
        fields = [
            ".".join(str(part) for part in error["loc"]).upper()
            for error in exc.errors()
        ]
        raise StartupConfigurationError(
            f"Missing or invalid configuration: {', '.join(fields)}. Check your .env file.",
            fields=fields,
        ) from exc
