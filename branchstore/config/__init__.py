"""Configuration module for branchstore."""

from branchstore.config.loader import load_config, get_config_path
from branchstore.config.schema import StoreConfig

__all__ = ["StoreConfig", "load_config", "get_config_path"]
