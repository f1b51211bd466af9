"""Configuration management for workfs."""

from workfs.core.config.loader import detect_format, load_app_config, load_config
from workfs.core.config.models import AppConfig, FacadeConfig, LoggingConfig

__all__ = [
    "AppConfig",
    "FacadeConfig",
    "LoggingConfig",
    "detect_format",
    "load_app_config",
    "load_config",
]
