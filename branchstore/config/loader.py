"""Configuration loading utilities."""

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from branchstore.config.schema import StoreConfig


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".branchstore" / "config.json"


def load_config(config_path: Path | None = None) -> StoreConfig:
    """
    Load configuration from file, or create default.
    
    Environment variables prefixed with BRANCHSTORE_ override values
    that are not set in the file.
    
    Args:
        config_path: Optional path to config file. Uses default if not provided.
    
    Returns:
        Loaded configuration object.
    
    Raises:
        ValidationError: If the file holds invalid values.
    """
    path = config_path or get_config_path()
    
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse config from {path}: {e}")
            logger.warning("Using default configuration.")
            return StoreConfig()
        try:
            return StoreConfig(**data)
        except ValidationError as e:
            logger.error(f"Invalid config in {path}: {e}")
            raise
    
    return StoreConfig()


def save_config(config: StoreConfig, config_path: Path | None = None) -> Path:
    """
    Save configuration to file.
    
    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    
    Returns:
        The path written.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.model_dump(), indent=2), encoding="utf-8")
    return path
