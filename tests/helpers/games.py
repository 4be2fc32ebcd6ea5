"""Game builders for tests.

Field arrays are built directly from Tag member names; whole games are
loaded from YAML fixtures so integration tests run on a fixed corpus.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from tagmatch.domain import GameHeaders
from tagmatch.domain.tags import ORIGINAL_NUMBER_OF_TAGS, Tag


def make_fields(length: int = ORIGINAL_NUMBER_OF_TAGS, **values: str) -> List[Optional[str]]:
    """Build a field array; keyword names are Tag member names (WHITE="Tal")."""
    fields: List[Optional[str]] = [None] * length
    for name, value in values.items():
        fields[Tag[name]] = value
    return fields


def load_fixture_games(fixture_path: Path) -> List[GameHeaders]:
    """Load games from a YAML file holding a top-level `games` list.

    Each entry is a mapping of tag names to values.

    Raises:
        FileNotFoundError: If fixture file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    with open(fixture_path, "r", encoding="utf-8") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}
    return [GameHeaders(tags=entry) for entry in data.get("games", [])]
