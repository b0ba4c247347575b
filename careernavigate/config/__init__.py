"""Configuration management for CareerNavigate."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, parse_app_config, validate_config_file
from .models import (
    AdvancedConfig,
    AIConfig,
    AppConfig,
    JobMode,
    JobSearchConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    StorageConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "parse_app_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "AIConfig",
    "JobSearchConfig",
    "StorageConfig",
    "LoggingConfig",
    "AdvancedConfig",
    "EnvironmentConfig",
    # Enums
    "JobMode",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
