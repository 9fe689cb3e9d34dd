# python
# projectstore/core/config.py
"""Configuration settings for the local-first project store.

Uses Pydantic BaseSettings for environment variable management.
"""
from enum import Enum

from pydantic import AnyHttpUrl, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentEnum(str, Enum):
    development = "development"
    testing = "testing"
    staging = "staging"
    production = "production"


class LogLevelEnum(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Application Settings =====
    app_name: str = Field(default="Project Store", description="Application name")
    environment: EnvironmentEnum = Field(
        default=EnvironmentEnum.development, description="Environment type"
    )
    debug: bool = Field(default=False, description="Debug mode")
    version: str = Field(default="1.0.0", description="Application version")

    # ===== Authoritative Backend =====
    api_base_url: AnyHttpUrl = Field(
        default="http://localhost:3003", description="Authoritative backend base URL"
    )
    api_prefix: str = Field(default="/api/v1", description="Backend API path prefix")
    request_timeout: float = Field(default=30.0, description="Backend request timeout in seconds")

    # ===== Local Storage =====
    local_database_url: str = Field(
        default="sqlite:///./projectstore.db",
        description="SQLAlchemy URL of the durable key-value storage",
    )
    local_projects_storage_key: str = Field(
        default="synthstack_local_projects_v1",
        description="Key of the durable local projects payload",
    )
    demo_session_key: str = Field(
        default="synthstack_demo_session",
        description="Key of the session overlay payload",
    )

    # ===== Listing =====
    page_size: int = Field(default=20, description="Default project list page size")

    # ===== Monitoring & Logging =====
    log_level: LogLevelEnum = Field(default=LogLevelEnum.INFO, description="Logging level")

    # ===== Server Settings =====
    host: str = Field(default="127.0.0.1", description="Host to bind the server")
    port: int = Field(default=8000, description="Port to bind the server")
    allowed_origins: list[str] = Field(
        default=["http://localhost:9000", "http://127.0.0.1:9000"],
        description="Origins allowed to call the local API",
    )

    # ===== Computed Properties =====
    @property
    def is_development(self) -> bool:
        return self.environment == EnvironmentEnum.development

    @property
    def is_production(self) -> bool:
        return self.environment == EnvironmentEnum.production

    @property
    def is_testing(self) -> bool:
        return self.environment == EnvironmentEnum.testing

    @property
    def backend_url(self) -> str:
        """Base URL plus API prefix, without a trailing slash."""
        base = str(self.api_base_url).rstrip("/")
        prefix = "/" + self.api_prefix.strip("/") if self.api_prefix.strip("/") else ""
        return f"{base}{prefix}"

    # ===== Validation Methods =====
    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        if v and isinstance(v, str):
            lv = v.lower()
            if lv in ["dev", "develop"]:
                return "development"
            if lv in ["prod"]:
                return "production"
            return lv
        return v

    @field_validator("page_size")
    @classmethod
    def validate_page_size(cls, v):
        if v < 1 or v > 100:
            raise ValueError("Page size must be between 1 and 100")
        return v

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("Request timeout must be positive")
        return v


settings = Settings()


__all__ = [
    "settings",
    "Settings",
    "EnvironmentEnum",
    "LogLevelEnum",
]
