"""Configuration schema using Pydantic."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class StoreConfig(BaseSettings):
    """Root configuration for branchstore."""
    
    model_config = SettingsConfigDict(env_prefix="BRANCHSTORE_")
    
    default_branch: str = "master"
    date_format: str = "%a %b %d %H:%M %Y %z"  # Used for commit ids and log dates
    head_overlay: bool = False  # Report live items as the head entry's changes
    log_level: str = "WARNING"
    
    @field_validator("default_branch")
    @classmethod
    def validate_default_branch(cls, v: str) -> str:
        """Validate the default branch name is not blank."""
        if not v.strip():
            raise ValueError("default_branch must not be blank")
        return v
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log_level is a loguru level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level
