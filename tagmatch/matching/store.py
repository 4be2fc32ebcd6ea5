"""Per-tag storage of registered criteria.

The store is a table indexed by tag id. Each slot holds the ordered list
of criteria registered for that tag; an empty list places no restriction
on the tag. The table only ever grows.
"""

import logging
from typing import List, Sequence

from tagmatch.domain.tags import ORIGINAL_NUMBER_OF_TAGS

from .exceptions import TagTableShrinkError
from .models import Criterion, Operator

logger = logging.getLogger(__name__)


class CriteriaStore:
    """Growable table of criteria lists, one per tag id.

    Attributes:
        criteria_present: True once any criterion has been added
    """

    def __init__(self, initial_length: int = ORIGINAL_NUMBER_OF_TAGS):
        self._lists: List[List[Criterion]] = [[] for _ in range(initial_length)]
        self.criteria_present = False

    def __len__(self) -> int:
        return len(self._lists)

    def extend(self, new_length: int) -> None:
        """Grow the table to new_length slots.

        Raises:
            TagTableShrinkError: If new_length is below the current length
        """
        current = len(self._lists)
        if new_length < current:
            logger.critical(
                "Internal error: inappropriate call to extend the tag table",
                extra={
                    "event": "matching.fatal",
                    "new_length": new_length,
                    "current_length": current,
                },
            )
            raise TagTableShrinkError(new_length, current)
        self._lists.extend([] for _ in range(new_length - current))

    def add(self, tag: int, text: str, operator: Operator = Operator.NONE) -> Criterion:
        """Append a criterion to the list for tag, growing the table if needed.

        Args:
            tag: Tag id (non-negative)
            text: Criterion text, stored as given
            operator: Comparison to apply

        Returns:
            The stored Criterion

        Raises:
            ValueError: If tag is negative
        """
        if tag < 0:
            logger.error(
                f"Illegal tag number {tag}",
                extra={"event": "criteria.illegal_tag", "tag": tag},
            )
            raise ValueError(f"Illegal tag number {tag}")
        if tag >= len(self._lists):
            # A tag without a fixed id; make room for it.
            self.extend(tag + 1)

        criterion = Criterion(text=text, operator=operator)
        self._lists[tag].append(criterion)
        self.criteria_present = True
        return criterion

    def criteria_for(self, tag: int) -> Sequence[Criterion]:
        """Return the criteria registered for tag (empty if none)."""
        if 0 <= tag < len(self._lists):
            return self._lists[tag]
        return ()

    def active_tags(self) -> List[int]:
        """Return the ids of tags that have at least one criterion, in id order."""
        return [tag for tag, criteria in enumerate(self._lists) if criteria]
