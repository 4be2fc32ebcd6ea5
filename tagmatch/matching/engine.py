"""Tag criteria matching engine.

This module implements the decision for one game:
1. Criteria are registered per tag before any game is evaluated
2. Each game's header fields are tested tag by tag; different tags are ANDed
3. The "either player" and "either rating" pseudo tags OR the White and
   Black values together
4. ECO and SetUp are checked by their own entry points
"""

import logging
from typing import Callable, List, Mapping, Optional, Sequence

from tagmatch.domain.tags import PSEUDO_TAGS, Tag, TagRegistry, field_value, is_soundex_tag
from tagmatch.logging import get_logger

from .exceptions import (
    FieldCountMismatchError,
    UnknownSetupStatusError,
    UnknownTagSelectorError,
)
from .matchers import FieldMatchers
from .models import MatchSettings, Operator, SetupStatus
from .phonetic import soundex
from .store import CriteriaStore

logger = get_logger(__name__, component="matching")

# Shorthand selector letters: "wKasparov" is a White criterion of "Kasparov".
SELECTOR_TAGS = {
    "a": Tag.ANNOTATOR,
    "b": Tag.BLACK,
    "d": Tag.DATE,
    "e": Tag.ECO,
    "f": Tag.FEN,
    "h": Tag.HASHCODE,
    "p": Tag.PSEUDO_PLAYER,
    "r": Tag.RESULT,
    "t": Tag.TIME_CONTROL,
    "w": Tag.WHITE,
}

# Tags skipped by evaluate_record(): handled via pseudo tags or elsewhere.
_NOT_CHECKED_PER_TAG = PSEUDO_TAGS | {Tag.ECO, Tag.FEN}

Fields = Sequence[Optional[str]]


class TagCriteriaMatcher:
    """Evaluates games' header fields against registered tag criteria.

    Responsibilities:
    - Register criteria (phonetically encoded where soundex applies)
    - Hand position patterns (the FEN tag) to their own collaborator
    - Combine the per-tag matchers into one accept/reject verdict
    - Check the ECO and SetUp tags on request
    """

    def __init__(
        self,
        settings: Optional[MatchSettings] = None,
        registry: Optional[TagRegistry] = None,
        position_pattern_handler: Optional[Callable[[str], None]] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize TagCriteriaMatcher.

        Args:
            settings: Matching configuration (defaults to MatchSettings())
            registry: Tag name registry used by evaluate_headers()
            position_pattern_handler: Receives the text of criteria registered
                against the FEN tag; when None they are kept in
                pending_position_patterns
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.settings = settings or MatchSettings()
        self.registry = registry or TagRegistry()
        self.store = CriteriaStore()
        self.matchers = FieldMatchers(self.settings)
        self.position_pattern_handler = position_pattern_handler
        self.pending_position_patterns: List[str] = []
        self.logger = logger_instance or logger

    # Registration

    def register_criterion(self, tag: int, text: str, operator: Operator = Operator.NONE) -> None:
        """Add one criterion for tag.

        Tag ids beyond the known set extend the table. Criteria for the FEN
        tag are position patterns and go to the position pattern handler.

        Args:
            tag: Tag id
            text: Criterion text
            operator: Comparison to apply
        """
        if tag == Tag.FEN:
            if self.position_pattern_handler is not None:
                self.position_pattern_handler(text)
            else:
                self.pending_position_patterns.append(text)
            return

        stored_text = text
        if self.settings.use_soundex and is_soundex_tag(tag):
            stored_text = soundex(text)

        self.store.add(tag, stored_text, operator)
        # Ids used directly must not be handed out to header names later.
        self.registry.reserve(len(self.store))
        self.logger.debug(
            f"Criterion registered for tag {tag}",
            extra={
                "event": "criteria.registered",
                "tag": int(tag),
                "criterion": stored_text,
                "operator": operator.name,
            },
        )

    def parse_shorthand_criterion(self, letter: str, value: str) -> None:
        """Register value against the tag selected by a shorthand letter.

        Letters: a annotator, b black, d date, e ECO, f position pattern,
        h hash code, p either player, r result, t time control, w white.

        Raises:
            UnknownTagSelectorError: If the letter is not a selector
        """
        tag = SELECTOR_TAGS.get(letter)
        if tag is None:
            self.logger.critical(
                f"Unknown type of tag extraction argument: {letter}{value}",
                extra={"event": "matching.fatal", "selector": letter},
            )
            raise UnknownTagSelectorError(f"{letter}{value}")
        self.register_criterion(tag, value, Operator.NONE)

    def extract_tag_argument(self, argument: str) -> None:
        """Register a selector letter and its value given as one string ("wKasparov")."""
        self.parse_shorthand_criterion(argument[:1], argument[1:])

    def register_named_criterion(self, name: str, text: str, operator: Operator = Operator.NONE) -> int:
        """Register a criterion by tag name, allocating an id for unknown names.

        Returns:
            The tag id used
        """
        tag = self.registry.identify(name)
        self.register_criterion(tag, text, operator)
        return tag

    # Evaluation

    def evaluate_record(self, fields: Fields, field_count: Optional[int] = None) -> bool:
        """Check every tag apart from ECO against the registered criteria.

        An empty list places no restriction on its tag, so with no criteria
        at all every game is wanted. A tag with criteria that the game
        lacks rejects the game.

        Args:
            fields: Tag values indexed by tag id, None where absent
            field_count: Number of valid entries (defaults to len(fields))

        Returns:
            True if the game is wanted

        Raises:
            FieldCountMismatchError: If fewer fields than table slots are given
        """
        if not self.store.criteria_present:
            return True

        if field_count is None:
            field_count = len(fields)
        if field_count < len(self.store):
            self.logger.critical(
                "Internal error: mismatch in tag set lengths",
                extra={
                    "event": "matching.fatal",
                    "field_count": field_count,
                    "table_length": len(self.store),
                },
            )
            raise FieldCountMismatchError(field_count, len(self.store))

        player_criteria = self.store.criteria_for(Tag.PSEUDO_PLAYER)
        if player_criteria and not self._either_colour(
            fields, Tag.WHITE, Tag.BLACK,
            lambda tag, value: self.matchers.check_list(tag, value, player_criteria),
        ):
            return False

        elo_criteria = self.store.criteria_for(Tag.PSEUDO_ELO)
        if elo_criteria and not self._either_colour(
            fields, Tag.WHITE_ELO, Tag.BLACK_ELO,
            lambda tag, value: self.matchers.check_elo(value, elo_criteria),
        ):
            return False

        for tag in self.store.active_tags():
            if tag in _NOT_CHECKED_PER_TAG:
                continue
            value = field_value(fields, tag)
            if value is None:
                # Required tag not present.
                return False
            if not self._check_tag(tag, value):
                return False
        return True

    def _check_tag(self, tag: int, value: str) -> bool:
        criteria = self.store.criteria_for(tag)
        if tag == Tag.DATE:
            return self.matchers.check_date(value, criteria)
        if tag in (Tag.WHITE_ELO, Tag.BLACK_ELO):
            return self.matchers.check_elo(value, criteria)
        if tag == Tag.TIME_CONTROL:
            return self.matchers.check_time_control(value, criteria)
        return self.matchers.check_list(tag, value, criteria)

    @staticmethod
    def _either_colour(
        fields: Fields, white_tag: Tag, black_tag: Tag, check: Callable[[int, str], bool]
    ) -> bool:
        white = field_value(fields, white_tag)
        black = field_value(fields, black_tag)
        if white is not None and check(white_tag, white):
            return True
        if black is not None:
            return check(black_tag, black)
        return False

    def evaluate_opening_classification(self, fields: Fields) -> bool:
        """Check just the ECO tag."""
        if not self.store.criteria_present:
            return True
        criteria = self.store.criteria_for(Tag.ECO)
        if not criteria:
            return True
        value = field_value(fields, Tag.ECO)
        if value is None:
            return False
        return self.matchers.check_list(Tag.ECO, value, criteria)

    def evaluate_setup_position(self, fields: Fields) -> bool:
        """Check the presence of the SetUp tag against settings.setup_status.

        Raises:
            UnknownSetupStatusError: If setup_status is not a SetupStatus
        """
        status = self.settings.setup_status
        has_setup = field_value(fields, Tag.SETUP) is not None
        if status is SetupStatus.ANY:
            return True
        if status is SetupStatus.ABSENT_ONLY:
            return not has_setup
        if status is SetupStatus.PRESENT_ONLY:
            return has_setup

        self.logger.critical(
            f"Internal error: setup status {status!r} not recognised",
            extra={"event": "matching.fatal"},
        )
        raise UnknownSetupStatusError(status)

    def evaluate_headers(self, headers: Mapping[str, str]) -> bool:
        """Evaluate a game given as a mapping of tag names to values.

        Applies the SetUp check, the per-tag criteria and the ECO check in
        turn, stopping at the first rejection.
        """
        fields = self.registry.build_field_array(headers, len(self.store))
        return (
            self.evaluate_setup_position(fields)
            and self.evaluate_record(fields)
            and self.evaluate_opening_classification(fields)
        )
