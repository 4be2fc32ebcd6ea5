"""Shared test fixtures."""

import logging
from pathlib import Path

import pytest

from tagmatch.logging.config import ContextualFilter
from tagmatch.logging.context import clear_log_context
from tagmatch.matching import FieldMatchers, MatchSettings, TagCriteriaMatcher

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def settings():
    """Default settings: prefix matching, no soundex."""
    return MatchSettings()


@pytest.fixture
def matchers(settings):
    return FieldMatchers(settings)


@pytest.fixture
def matcher(settings):
    """A TagCriteriaMatcher with no criteria registered."""
    return TagCriteriaMatcher(settings=settings)


@pytest.fixture
def anywhere_matcher():
    return TagCriteriaMatcher(settings=MatchSettings(match_anywhere=True))


@pytest.fixture
def soundex_matcher():
    return TagCriteriaMatcher(settings=MatchSettings(use_soundex=True))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove TAGMATCH_* variables for the duration of a test."""
    for name in ("TAGMATCH_LOG_LEVEL", "TAGMATCH_ENVIRONMENT", "TAGMATCH_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def restore_root_logger():
    """Undo configure_logging() changes to the root logger."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield root_logger
    for handler in list(root_logger.handlers):
        if any(isinstance(f, ContextualFilter) for f in handler.filters):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
