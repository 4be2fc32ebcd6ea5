"""Factory function for building a configured matching engine."""

import logging
from typing import Callable, Optional

from tagmatch.matching.engine import TagCriteriaMatcher
from tagmatch.matching.exceptions import FatalMatchError

from .exceptions import ConfigurationError
from .models import FilterConfig

logger = logging.getLogger(__name__)


def build_matcher(
    config: FilterConfig,
    position_pattern_handler: Optional[Callable[[str], None]] = None,
) -> TagCriteriaMatcher:
    """Create a TagCriteriaMatcher and register every configured criterion.

    Named criteria are registered first, in file order, then the shorthand
    selectors. Order matters for Date criteria.

    Args:
        config: Validated configuration
        position_pattern_handler: Receives FEN/position pattern criteria

    Returns:
        Engine ready for evaluation

    Raises:
        ConfigurationError: If a criterion cannot be registered

    Example:
        >>> config = FilterConfig(criteria=[{"tag": "White", "value": "Tal"}])
        >>> matcher = build_matcher(config)
        >>> matcher.evaluate_headers({"White": "Tal, Mikhail"})
        True
    """
    matcher = TagCriteriaMatcher(
        settings=config.settings.to_match_settings(),
        position_pattern_handler=position_pattern_handler,
    )

    errors = []
    for index, criterion in enumerate(config.criteria):
        try:
            matcher.register_named_criterion(
                criterion.tag, criterion.value, criterion.parsed_operator
            )
        except ValueError as e:
            errors.append(f"criteria -> {index}: {e}")

    for argument in config.selectors:
        try:
            matcher.extract_tag_argument(argument)
        except FatalMatchError as e:
            errors.append(f"selectors: {e}")

    if errors:
        raise ConfigurationError(
            "Failed to register criteria",
            errors=errors,
            suggestions=[
                "Check tag names and operators in the criteria section",
                "Selectors start with one of a, b, d, e, f, h, p, r, t, w",
            ],
        )

    logger.debug(
        "Matching engine built",
        extra={
            "event": "matcher.built",
            "criteria_count": config.criteria_count(),
            "tag_table_length": len(matcher.store),
            "soundex": config.settings.soundex,
            "match_anywhere": config.settings.match_anywhere,
        },
    )
    return matcher
