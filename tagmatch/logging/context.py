"""Scoped metadata attached to every log record.

While a game is being evaluated, its position in the input and its
players can be pushed here; ContextualFilter copies the active fields
onto each record so that matcher warnings say which game they concern.
Uses contextvars, so nested scopes restore cleanly.
"""

from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

_log_context: ContextVar[Dict[str, Any]] = ContextVar("tagmatch_log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return dict(_log_context.get())


def push_log_context(**fields) -> Token:
    """Add fields to the active context.

    Returns:
        Token to hand to pop_log_context() to restore the previous state

    Example:
        >>> token = push_log_context(record_index=3)
        >>> pop_log_context(token)
    """
    return _log_context.set({**_log_context.get(), **fields})


def pop_log_context(token: Token) -> None:
    """Restore the context that was active before push_log_context()."""
    _log_context.reset(token)


def clear_log_context() -> None:
    """Drop all context fields (used by tests)."""
    _log_context.set({})


class log_context:
    """Context manager form of push/pop.

    Example:
        >>> with log_context(record_index=12, white="Karpov"):
        ...     matcher.evaluate_headers(headers)
    """

    def __init__(self, **fields):
        self.fields = fields
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
            self.token = None
        return False
