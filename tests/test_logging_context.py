"""Tests for logging context propagation."""

import pytest

from tagmatch.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


def test_empty_context():
    assert get_log_context() == {}


def test_push_and_pop():
    token = push_log_context(record_index=3)
    assert get_log_context() == {"record_index": 3}

    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_context():
    outer = push_log_context(record_index=1)
    inner = push_log_context(white="Tal")
    assert get_log_context() == {"record_index": 1, "white": "Tal"}

    pop_log_context(inner)
    assert get_log_context() == {"record_index": 1}
    pop_log_context(outer)
    assert get_log_context() == {}


def test_context_override():
    push_log_context(record_index=1)
    with log_context(record_index=2):
        assert get_log_context()["record_index"] == 2
    assert get_log_context()["record_index"] == 1


def test_get_returns_copy():
    push_log_context(record_index=1)
    get_log_context()["record_index"] = 99
    assert get_log_context() == {"record_index": 1}


def test_context_manager_exception():
    """The context is restored when the body raises."""
    with pytest.raises(RuntimeError):
        with log_context(record_index=5):
            raise RuntimeError("boom")

    assert get_log_context() == {}


def test_context_manager_not_reentered():
    scope = log_context(record_index=5)
    with scope:
        pass
    assert scope.token is None
    # A second exit is harmless.
    scope.__exit__(None, None, None)


def test_clear_context():
    push_log_context(record_index=1, black="Botvinnik")
    clear_log_context()
    assert get_log_context() == {}
