"""Configuration for the accessor and its CLI."""

from .config import AccessorConfig, AccessorSettings, clear_config_cache, load_config

__all__ = ["AccessorConfig", "AccessorSettings", "clear_config_cache", "load_config"]
