# backend/travelmap/config.py
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .enums import LogLevel, ThumbnailStyle


class Settings(BaseSettings):
    environment: str = "development"
    # Database
    database_url: str = Field(..., description="PostgreSQL connection string")
    db_pool_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Database connection pool size",
    )
    db_pool_timeout: int = Field(
        default=30,
        ge=5,
        le=300,
        description="Seconds to wait for a pooled connection",
    )

    # API
    api_host: str = Field(default="0.0.0.0", description="API host to bind to")
    api_port: int = Field(
        default=10000, ge=1, le=65535, description="API port to bind to"
    )
    api_reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    # CORS - comma-separated string or list
    cors_origins: Union[str, List[str]] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins. Can be comma-separated string.",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert cors_origins to a list of strings"""
        if isinstance(self.cors_origins, str):
            return [origin.strip() for origin in self.cors_origins.split(",")]
        return self.cors_origins

    # Access control
    access_code: str = Field(
        default="", description="Shared access code required to log in"
    )
    session_timeout_minutes: int = Field(
        default=120,
        ge=1,
        le=60 * 24 * 30,
        description="Minutes a session stays valid after it is created",
    )
    session_sweep_interval_seconds: int = Field(
        default=15 * 60,
        ge=10,
        le=86400,
        description="How often expired sessions are swept",
    )
    session_cookie_name: str = Field(
        default="session_id", description="Cookie carrying the session token"
    )

    # Image pipeline
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1024,
        le=100 * 1024 * 1024,
        description="Uploads larger than this are rejected before processing",
    )
    image_quality: int = Field(
        default=80, ge=1, le=95, description="JPEG quality for re-encoded images"
    )
    png_conversion_threshold_bytes: int = Field(
        default=1024 * 1024,
        ge=0,
        description="PNG uploads larger than this are converted to JPEG",
    )
    thumbnail_size: int = Field(
        default=200, ge=16, le=1024, description="Edge length of square thumbnails"
    )
    thumbnail_style: ThumbnailStyle = Field(
        default=ThumbnailStyle.CIRCLE,
        description="Marker thumbnail style (circle or square)",
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path (optional)"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> LogLevel:
        """Validate log level is one of the allowed values"""
        allowed_levels = LogLevel.__members__.keys()
        v_upper = str(v.value if isinstance(v, LogLevel) else v).upper()
        if v_upper not in allowed_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(allowed_levels)}"
            )
        return LogLevel[v_upper]

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values"""
        allowed_envs = ["development", "staging", "production", "test"]
        v_lower = v.lower()
        if v_lower not in allowed_envs:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {', '.join(allowed_envs)}"
            )
        return v_lower

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


# Global settings instance
settings = Settings()  # type: ignore[call-arg]
