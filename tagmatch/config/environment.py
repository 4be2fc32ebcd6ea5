"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
        config_path: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.log_level = log_level
        self.environment = environment or "local"
        self.config_path = config_path


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - TAGMATCH_LOG_LEVEL: overrides the configured log level
    - TAGMATCH_ENVIRONMENT: label added to log records (default: local)
    - TAGMATCH_CONFIG: configuration file used when --config is not given

    Returns:
        EnvironmentConfig with the values found

    Raises:
        ConfigurationError: If TAGMATCH_LOG_LEVEL is not a valid level
    """
    log_level = os.environ.get("TAGMATCH_LOG_LEVEL", "").strip() or None
    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid TAGMATCH_LOG_LEVEL: {log_level}",
                suggestions=[f"Use one of: {', '.join(_LOG_LEVELS)}"],
            )

    return EnvironmentConfig(
        log_level=log_level,
        environment=os.environ.get("TAGMATCH_ENVIRONMENT", "").strip() or None,
        config_path=os.environ.get("TAGMATCH_CONFIG", "").strip() or None,
    )
