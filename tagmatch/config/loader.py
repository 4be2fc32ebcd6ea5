"""Configuration loader for tag criteria files."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import FilterConfig
from .validators import check_for_warnings, emit_warnings

DEFAULT_CONFIG_LOCATIONS = (
    Path("tagmatch.yaml"),
    Path("config") / "tagmatch.yaml",
)


def load_config(config_path: Optional[Path] = None) -> FilterConfig:
    """
    Load and validate a criteria configuration from a YAML file.

    Implements fallback logic for the file location:
    1. Use config_path if given
    2. Try tagmatch.yaml in the current directory
    3. Try ./config/tagmatch.yaml
    4. Fail with a helpful error message

    Args:
        config_path: Optional path to the configuration file

    Returns:
        Validated FilterConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    config_file = _find_config_file(config_path)
    config_dict = _read_yaml(config_file)

    if config_dict is None:
        # An empty file selects every game.
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration file {config_file} must contain a mapping at the top level",
            suggestions=["Start the file with 'settings:' or 'criteria:'"],
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    try:
        return FilterConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=format_validation_errors(e),
            suggestions=[
                "Review tagmatch.example.yaml for the expected format",
                "Operators are one of = <> < <= > >= ~",
                "settings.setup is one of any, absent, present",
            ],
        ) from e


def format_validation_errors(error: ValidationError) -> List[str]:
    """Turn pydantic errors into one readable line each."""
    messages = []
    for detail in error.errors():
        field_path = " -> ".join(str(loc) for loc in detail["loc"])
        error_type = detail["type"]
        if error_type == "missing":
            messages.append(f"Missing required field: {field_path}")
        elif error_type in ("string_type", "bool_type", "list_type", "dict_type"):
            expected_type = error_type.replace("_type", "")
            messages.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {detail.get('input')!r}"
            )
        elif error_type == "enum":
            messages.append(f"Invalid value for '{field_path}': {detail['msg']}")
        else:
            messages.append(f"{field_path}: {detail['msg']}" if field_path else detail["msg"])
    return messages


def _read_yaml(config_file: Path) -> Any:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Quote operators such as '>=' and values starting with special characters",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Ensure {config_file} is readable"],
        ) from e


def _find_config_file(config_path: Optional[Path] = None) -> Path:
    """
    Find the configuration file using fallback logic.

    Raises:
        ConfigurationError: If no config file is found
    """
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                suggestions=[
                    f"Ensure {config_path} exists",
                    "Copy tagmatch.example.yaml to tagmatch.yaml",
                ],
            )
        return config_path

    for candidate in DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "Configuration file not found",
        errors=[f"Tried: {candidate}" for candidate in DEFAULT_CONFIG_LOCATIONS],
        suggestions=[
            "Copy tagmatch.example.yaml to tagmatch.yaml",
            "Use --config to specify a custom location",
        ],
    )


def validate_config_file(config_path: Path) -> bool:
    """
    Validate a configuration file without building an engine.

    Args:
        config_path: Path to configuration file

    Returns:
        True if valid, False otherwise (errors printed to stdout)
    """
    try:
        load_config(config_path)
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
    print(f"✓ Configuration file {config_path} is valid")
    return True


def config_from_dict(config_dict: Dict[str, Any]) -> FilterConfig:
    """Validate an in-memory configuration, with the same error handling as load_config()."""
    try:
        return FilterConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed", errors=format_validation_errors(e)
        ) from e
