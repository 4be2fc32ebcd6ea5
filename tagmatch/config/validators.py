"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

# Tags whose matcher never consults regular expressions.
_NON_TEXT_TAGS = {"Date", "WhiteElo", "BlackElo", "Elo", "TimeControl"}


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check a raw configuration for likely mistakes that are not errors.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    criteria = config_dict.get("criteria", [])
    selectors = config_dict.get("selectors", [])
    if not criteria and not selectors:
        warning_messages.append("No criteria configured: every game will be accepted")

    if isinstance(criteria, list):
        seen = set()
        for criterion in criteria:
            if not isinstance(criterion, dict):
                continue
            tag = str(criterion.get("tag", "")).strip()
            operator = str(criterion.get("operator") or "").strip()
            key = (tag, operator, str(criterion.get("value")))
            if key in seen:
                warning_messages.append(
                    f"Duplicate criterion for {tag}: {operator or 'match'} {criterion.get('value')!r}"
                )
            seen.add(key)

            if operator == "~" and tag in _NON_TEXT_TAGS:
                warning_messages.append(
                    f"Regular expression criterion on {tag} is never consulted"
                )

    settings = config_dict.get("settings", {})
    if isinstance(settings, dict) and settings.get("soundex") and settings.get("match_anywhere"):
        warning_messages.append(
            "soundex with match_anywhere compares digit codes as substrings and will over-match"
        )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
