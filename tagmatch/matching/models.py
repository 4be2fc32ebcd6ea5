"""Data models for the tag criteria matching engine.

This module defines:
- Operator: how a criterion's text is compared with a tag value
- Criterion: one registered (text, operator) pair
- SetupStatus: acceptance rule for the SetUp tag
- MatchSettings: the configuration read by every matcher
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Operator(Enum):
    """Comparison applied between a tag value and a criterion.

    NONE is a plain text (prefix or substring) match, not the absence of
    an operator.
    """

    NONE = "none"
    EQUAL = "="
    NOT_EQUAL = "<>"
    LESS_THAN = "<"
    LESS_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_OR_EQUAL = ">="
    REGEX = "~"

    @property
    def is_relational(self) -> bool:
        """True for the six numeric comparison operators."""
        return self not in (Operator.NONE, Operator.REGEX)

    @classmethod
    def parse(cls, symbol: Optional[str]) -> "Operator":
        """Parse an operator from a tag-file symbol or a member name.

        Args:
            symbol: One of = == != <> < <= > >= ~, a member name such as
                "greater_or_equal", or None/empty for a plain match

        Returns:
            The matching Operator

        Raises:
            ValueError: If the symbol is not recognised
        """
        if symbol is None:
            return cls.NONE
        text = symbol.strip()
        if not text:
            return cls.NONE
        aliases = {"==": cls.EQUAL, "!=": cls.NOT_EQUAL}
        if text in aliases:
            return aliases[text]
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        raise ValueError(f"Unknown tag operator: '{symbol}'")


@dataclass(frozen=True)
class Criterion:
    """A single selection criterion registered against a tag.

    Attributes:
        text: Value to compare with (already phonetically encoded where
            soundex matching applies)
        operator: How the comparison is made
    """

    text: str
    operator: Operator = Operator.NONE

    @property
    def is_relational(self) -> bool:
        return self.operator.is_relational


class SetupStatus(Enum):
    """Which games pass the SetUp tag check."""

    ANY = "any"
    ABSENT_ONLY = "absent"
    PRESENT_ONLY = "present"


@dataclass
class MatchSettings:
    """Configuration shared by the field matchers and the decision combiner.

    Attributes:
        use_soundex: Compare player, event, site and annotator values by
            phonetic code
        match_anywhere: Plain criteria may occur anywhere in the value
            instead of only at its start
        setup_status: Rule applied by the SetUp tag check
    """

    use_soundex: bool = False
    match_anywhere: bool = False
    setup_status: SetupStatus = SetupStatus.ANY
