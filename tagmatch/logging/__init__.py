"""Structured logging for the matching engine and its command-line harness."""

import logging
from typing import Optional, Union

from .config import ContextualFilter, JSONFormatter, KeyValueFormatter, configure_logging
from .context import clear_log_context, get_log_context, log_context


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that stamps a component name on every record.

    Unlike the stdlib adapter, the per-call `extra` is merged with (and
    overrides) the adapter's own fields instead of replacing them.
    """

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(
    name: str, component: Optional[str] = None
) -> Union[logging.Logger, ComponentLoggerAdapter]:
    """Return the logger for name, tagged with component when given.

    Example:
        >>> logger = get_logger(__name__, component="matching")
        >>> logger.info("Criterion registered", extra={"event": "criteria.registered"})
    """
    logger = logging.getLogger(name)
    if component:
        return ComponentLoggerAdapter(logger, {"component": component})
    return logger


__all__ = [
    "get_logger",
    "ComponentLoggerAdapter",
    "configure_logging",
    "ContextualFilter",
    "JSONFormatter",
    "KeyValueFormatter",
    "log_context",
    "get_log_context",
    "clear_log_context",
]
