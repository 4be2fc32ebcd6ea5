"""Configuration management: criteria files, environment and engine factory."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .factory import build_matcher
from .loader import config_from_dict, load_config, validate_config_file
from .models import (
    CriterionConfig,
    FilterConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SettingsConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "config_from_dict",
    "validate_config_file",
    "load_environment_config",
    "build_matcher",
    # Configuration models
    "FilterConfig",
    "SettingsConfig",
    "CriterionConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
