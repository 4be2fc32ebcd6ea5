"""Relational comparison between a tag value and a criterion value."""

import logging

from .models import Operator

logger = logging.getLogger(__name__)


def relative_numeric_match(operator: Operator, lhs: float, rhs: float) -> bool:
    """Determine whether `lhs operator rhs` holds.

    Args:
        operator: One of the six relational operators
        lhs: Value taken from the game
        rhs: Value taken from the criterion

    Returns:
        Result of the comparison. NONE and REGEX are not relational; they
        are reported as an internal error and give False.
    """
    if operator is Operator.LESS_THAN:
        return lhs < rhs
    if operator is Operator.LESS_OR_EQUAL:
        return lhs <= rhs
    if operator is Operator.GREATER_THAN:
        return lhs > rhs
    if operator is Operator.GREATER_OR_EQUAL:
        return lhs >= rhs
    if operator is Operator.EQUAL:
        return lhs == rhs
    if operator is Operator.NOT_EQUAL:
        return lhs != rhs

    logger.error(
        f"Internal error: {operator} in call to relative_numeric_match",
        extra={"event": "matching.comparator.invalid_operator", "operator": str(operator)},
    )
    return False
