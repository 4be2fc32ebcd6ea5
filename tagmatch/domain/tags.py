"""PGN tag identifiers and the field array handed to the matching engine.

Tags are small non-negative integers. The well-known roster is fixed by
the Tag enum; tag names that are not part of it are given fresh ids by
TagRegistry as they are encountered, so that the criteria table and the
field array can grow to cover them.
"""

from enum import IntEnum
from typing import Dict, List, Mapping, Optional, Sequence


class Tag(IntEnum):
    """Well-known PGN tags, plus the two pseudo tags."""

    ANNOTATOR = 0
    BLACK = 1
    BLACK_ELO = 2
    BLACK_FIDE_ID = 3
    BLACK_TITLE = 4
    BLACK_TYPE = 5
    DATE = 6
    ECO = 7
    PSEUDO_ELO = 8
    EVENT = 9
    EVENT_DATE = 10
    FEN = 11
    HASHCODE = 12
    MODE = 13
    OPENING = 14
    PSEUDO_PLAYER = 15
    PLY_COUNT = 16
    RESULT = 17
    ROUND = 18
    SETUP = 19
    SITE = 20
    TERMINATION = 21
    TIME_CONTROL = 22
    UTC_DATE = 23
    UTC_TIME = 24
    VARIANT = 25
    VARIATION = 26
    WHITE = 27
    WHITE_ELO = 28
    WHITE_FIDE_ID = 29
    WHITE_TITLE = 30
    WHITE_TYPE = 31


# Number of tags with a fixed identifier.
ORIGINAL_NUMBER_OF_TAGS = len(Tag)

# The pseudo tags are spelled this way in configuration files.
TAG_NAMES: Dict[Tag, str] = {
    Tag.ANNOTATOR: "Annotator",
    Tag.BLACK: "Black",
    Tag.BLACK_ELO: "BlackElo",
    Tag.BLACK_FIDE_ID: "BlackFideId",
    Tag.BLACK_TITLE: "BlackTitle",
    Tag.BLACK_TYPE: "BlackType",
    Tag.DATE: "Date",
    Tag.ECO: "ECO",
    Tag.PSEUDO_ELO: "Elo",
    Tag.EVENT: "Event",
    Tag.EVENT_DATE: "EventDate",
    Tag.FEN: "FEN",
    Tag.HASHCODE: "HashCode",
    Tag.MODE: "Mode",
    Tag.OPENING: "Opening",
    Tag.PSEUDO_PLAYER: "Player",
    Tag.PLY_COUNT: "PlyCount",
    Tag.RESULT: "Result",
    Tag.ROUND: "Round",
    Tag.SETUP: "SetUp",
    Tag.SITE: "Site",
    Tag.TERMINATION: "Termination",
    Tag.TIME_CONTROL: "TimeControl",
    Tag.UTC_DATE: "UTCDate",
    Tag.UTC_TIME: "UTCTime",
    Tag.VARIANT: "Variant",
    Tag.VARIATION: "Variation",
    Tag.WHITE: "White",
    Tag.WHITE_ELO: "WhiteElo",
    Tag.WHITE_FIDE_ID: "WhiteFideId",
    Tag.WHITE_TITLE: "WhiteTitle",
    Tag.WHITE_TYPE: "WhiteType",
}

PSEUDO_TAGS = frozenset({Tag.PSEUDO_PLAYER, Tag.PSEUDO_ELO})

# Tags whose values are compared by phonetic code when soundex is enabled.
SOUNDEX_TAGS = frozenset(
    {Tag.WHITE, Tag.BLACK, Tag.PSEUDO_PLAYER, Tag.EVENT, Tag.SITE, Tag.ANNOTATOR}
)


def is_soundex_tag(tag: int) -> bool:
    """Return True if tag is matched phonetically when soundex is on."""
    return tag in SOUNDEX_TAGS


class TagRegistry:
    """Maps tag names to ids, handing out new ids for unknown names."""

    def __init__(self):
        self._ids: Dict[str, int] = {name: int(tag) for tag, name in TAG_NAMES.items()}
        self._names: List[Optional[str]] = [TAG_NAMES[tag] for tag in Tag]

    def __len__(self) -> int:
        return len(self._names)

    def lookup(self, name: str) -> Optional[int]:
        """Return the id for name, or None if it has never been seen."""
        return self._ids.get(name)

    def identify(self, name: str) -> int:
        """Return the id for name, allocating the next free id if needed."""
        name = name.strip()
        if not name:
            raise ValueError("Tag name cannot be empty")
        tag_id = self._ids.get(name)
        if tag_id is None:
            tag_id = len(self._names)
            self._ids[name] = tag_id
            self._names.append(name)
        return tag_id

    def reserve(self, length: int) -> None:
        """Make sure ids below length are never handed out to new names.

        Criteria registered directly by id can reach past the names known
        here; the unnamed ids are held as placeholders.
        """
        if length > len(self._names):
            self._names.extend([None] * (length - len(self._names)))

    def name_of(self, tag_id: int) -> Optional[str]:
        """Return the tag name for an id (None for a reserved, unnamed id)."""
        return self._names[tag_id]

    def build_field_array(
        self, headers: Mapping[str, str], length: int = 0
    ) -> List[Optional[str]]:
        """Build the field array for one game from its header mapping.

        Header names not yet known are registered on the way, so the array
        covers every tag the game carries. Tags the game lacks are None,
        and blank header names are ignored.

        Args:
            headers: Tag name to tag value
            length: Minimum length of the returned array

        Returns:
            List indexed by tag id
        """
        ids = {
            self.identify(name): value
            for name, value in headers.items()
            if name.strip()
        }
        fields: List[Optional[str]] = [None] * max(length, len(self._names))
        for tag_id, value in ids.items():
            fields[tag_id] = value
        return fields


def field_value(fields: Sequence[Optional[str]], tag: int) -> Optional[str]:
    """Return fields[tag], or None when the array is too short."""
    if tag < len(fields):
        return fields[tag]
    return None
