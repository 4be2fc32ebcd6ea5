"""Test helper utilities for tagmatch tests."""

from .games import load_fixture_games, make_fields

__all__ = ["load_fixture_games", "make_fields"]
