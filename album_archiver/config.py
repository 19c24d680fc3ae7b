"""
Configuration management for the album archiver.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import Field, ValidationError, validator
from pydantic_settings import BaseSettings


class ConfigurationError(Exception):
    """Raised when the environment cannot produce usable settings."""
    pass


class Settings(BaseSettings):
    """Application settings with validation."""
    
    # Database Configuration
    database_url: str = Field(..., env="DATABASE_URL")
    db_sslmode: Optional[str] = Field(default="require", env="DB_SSLMODE")
    links_table: str = Field(default="PhotoUploadAlbumLinks", env="LINKS_TABLE")
    
    # Archival Configuration
    date_threshold: datetime = Field(..., env="DATE_THRESHOLD")
    codes_dir: str = Field(default="codes", env="CODES_DIR")
    image_extension: str = Field(default=".png", env="IMAGE_EXTENSION")
    
    # Logging Configuration
    log_level: str = Field(default="INFO", env="LOG_LEVEL")
    
    @validator("database_url")
    def validate_database_url(cls, v):
        """Ensure the database URL points at PostgreSQL."""
        if not v.startswith(("postgres://", "postgresql://")):
            raise ValueError("DATABASE_URL must start with postgres:// or postgresql://")
        return v
    
    @validator("date_threshold", pre=True)
    def reject_epoch_threshold(cls, v):
        """Only accept ISO-8601 text, not Unix timestamps."""
        if isinstance(v, (int, float)) or (isinstance(v, str) and v.strip().isdigit()):
            raise ValueError("DATE_THRESHOLD must be an ISO-8601 date or date-time")
        return v
    
    @validator("date_threshold")
    def validate_date_threshold(cls, v):
        """Interpret naive thresholds as UTC so comparisons are well defined."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v
    
    @validator("image_extension")
    def validate_image_extension(cls, v):
        """Ensure the extension carries its leading dot."""
        v = v.strip()
        if not v:
            raise ValueError("IMAGE_EXTENSION must not be empty")
        return v if v.startswith(".") else f".{v}"
    
    @validator("log_level")
    def validate_log_level(cls, v):
        """Ensure the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()
    
    class Config:
        env_file = ".env"
        case_sensitive = False


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, letting non-None overrides win.
    
    Raises:
        ConfigurationError: if a required value is missing or unparsable.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']).upper()}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e
