# src/files_manager/config/settings.py
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from files_manager.config.settings import get_settings
        settings = get_settings()
        folder = settings.folder_path
    """

    # Application Settings
    app_name: str = Field(
        default="files-manager",
        description="Application name"
    )

    port: int = Field(
        default=5000,
        description="Port the API server listens on"
    )

    # Local content storage
    folder_path: str = Field(
        default="/tmp/files_manager",
        description="Directory where uploaded file content is written"
    )

    # MongoDB Configuration
    db_host: str = Field(
        default="localhost",
        description="MongoDB host"
    )

    db_port: int = Field(
        default=27017,
        description="MongoDB port"
    )

    db_database: str = Field(
        default="files_manager",
        description="MongoDB database name"
    )

    mongodb_uri: Optional[str] = Field(
        default=None,
        description="Full MongoDB URI, overrides host and port when set"
    )

    db_timeout_ms: int = Field(
        default=5000,
        description="Server selection timeout for MongoDB operations"
    )

    # Redis Configuration
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis URL holding session tokens"
    )

    redis_timeout_seconds: float = Field(
        default=5.0,
        description="Socket timeout for Redis operations"
    )

    # Listing
    page_size: int = Field(
        default=20,
        ge=1,
        description="Number of records per listing page"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        level = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if level not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return level

    @property
    def mongo_connection_string(self) -> str:
        """MongoDB URI built from host and port unless given explicitly."""
        if self.mongodb_uri:
            return self.mongodb_uri
        return f"mongodb://{self.db_host}:{self.db_port}/{self.db_database}"

    def get_environment_dict(self) -> dict:
        """Get configuration as a dictionary of environment variable names.

        Returns:
            Dictionary of environment variables
        """
        return {
            'FOLDER_PATH': self.folder_path,
            'DB_HOST': self.db_host,
            'DB_PORT': str(self.db_port),
            'DB_DATABASE': self.db_database,
            'MONGODB_URI': self.mongo_connection_string,
            'REDIS_URL': self.redis_url,
            'PAGE_SIZE': str(self.page_size),
            'LOG_LEVEL': self.log_level,
            'PORT': str(self.port),
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
