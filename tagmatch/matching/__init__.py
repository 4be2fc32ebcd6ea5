"""Tag criteria matching engine for chess game headers.

This package provides:
- TagCriteriaMatcher: registers criteria and evaluates games
- Operator, Criterion, MatchSettings, SetupStatus: engine data model
- FieldMatchers: the per-family comparison rules
- soundex, relative_numeric_match: the building blocks
- FatalMatchError and subclasses: broken engine invariants
"""

from .comparator import relative_numeric_match
from .engine import SELECTOR_TAGS, TagCriteriaMatcher
from .exceptions import (
    FatalMatchError,
    FieldCountMismatchError,
    TagTableShrinkError,
    UnknownSetupStatusError,
    UnknownTagSelectorError,
)
from .matchers import FieldMatchers
from .models import Criterion, MatchSettings, Operator, SetupStatus
from .phonetic import soundex
from .store import CriteriaStore

__all__ = [
    "TagCriteriaMatcher",
    "SELECTOR_TAGS",
    "CriteriaStore",
    "FieldMatchers",
    "Criterion",
    "MatchSettings",
    "Operator",
    "SetupStatus",
    "soundex",
    "relative_numeric_match",
    "FatalMatchError",
    "FieldCountMismatchError",
    "TagTableShrinkError",
    "UnknownSetupStatusError",
    "UnknownTagSelectorError",
]
