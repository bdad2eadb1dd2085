"""
APRE Reporting
Centralized Configuration Management

Configuration for the report gateway and the report console, loaded with
Pydantic settings from environment variables and an optional .env file.
"""

from functools import lru_cache
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoSettings(BaseSettings):
    """MongoDB Connection Configuration"""

    model_config = SettingsConfigDict(env_prefix="MONGO_")

    url: str = Field(default="mongodb://localhost:27017", description="MongoDB connection URL")
    database: str = Field(default="apre", description="Database name")
    server_selection_timeout_ms: int = Field(
        default=5000,
        description="How long the driver waits to find a usable server",
    )

    # Collections
    feedback_collection: str = Field(default="customerFeedback", description="Customer feedback collection")
    sales_collection: str = Field(default="sales", description="Sales collection")


class SecuritySettings(BaseSettings):
    """Security Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    # CORS
    cors_origins: List[str] = Field(
        default=["http://localhost:4200"],
        description="Allowed CORS origins"
    )


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or text")


class ConsoleSettings(BaseSettings):
    """Report Console Configuration"""

    model_config = SettingsConfigDict(env_prefix="CONSOLE_")

    api_base_url: str = Field(default="http://localhost:3000/api", description="Gateway base URL")
    timeout: float = Field(default=10.0, description="Request timeout in seconds")


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    debug: bool = Field(default=False, alias="DEBUG", description="Debug mode")

    # API Server
    api_host: str = Field(default="0.0.0.0", alias="API_HOST", description="API host")
    api_port: int = Field(default=3000, alias="API_PORT", description="API port")
    api_workers: int = Field(default=4, alias="API_WORKERS", description="API workers")
    api_prefix: str = Field(default="/api", alias="API_PREFIX", description="Prefix for all API routes")

    # Version
    version: str = Field(default="1.0.0", description="Application version")

    # Subsystem configurations
    mongo: MongoSettings = Field(default_factory=MongoSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)
    console: ConsoleSettings = Field(default_factory=ConsoleSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.app_env == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
