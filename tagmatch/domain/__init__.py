"""Domain models: PGN tag identifiers and game header records."""

from .models import GameHeaders
from .tags import (
    ORIGINAL_NUMBER_OF_TAGS,
    PSEUDO_TAGS,
    SOUNDEX_TAGS,
    TAG_NAMES,
    Tag,
    TagRegistry,
    field_value,
    is_soundex_tag,
)

__all__ = [
    "GameHeaders",
    "Tag",
    "TagRegistry",
    "TAG_NAMES",
    "PSEUDO_TAGS",
    "SOUNDEX_TAGS",
    "ORIGINAL_NUMBER_OF_TAGS",
    "field_value",
    "is_soundex_tag",
]
