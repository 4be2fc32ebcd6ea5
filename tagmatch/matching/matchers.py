"""Field matchers: one per family of tags with its own comparison rules.

- check_list: generic text tags (prefix/substring, numeric ranges, regex)
- check_date: Date-like tags encoded as YYYYMMDD integers
- check_time_control: TimeControl, compared on the first period in seconds
- check_elo: rating tags, compared as unsigned integers

None of these raise on bad game data; a value that cannot be interpreted
simply does not match. A malformed criterion is reported once.
"""

import logging
import re
from typing import Dict, Optional, Pattern, Sequence, Set, Tuple

from tagmatch.domain.tags import is_soundex_tag
from tagmatch.logging import get_logger

from .comparator import relative_numeric_match
from .models import Criterion, MatchSettings, Operator
from .phonetic import soundex

logger = get_logger(__name__, component="matching")

# Years outside (MINDATE, MAXDATE) never satisfy a date comparison.
# Two-digit years are ambiguous across centuries, so they are excluded.
MINDATE = 100
MAXDATE = 3000

_UNSIGNED = re.compile(r"\s*\+?([0-9]+)")
_NUMBER = re.compile(r"\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_NUMERIC_VALUE = re.compile(r"[+-]?[0-9.]*")
_MONTH_DAY = re.compile(r"\s*\+?[0-9]+\.\s*\+?([0-9]+)(?:\.\s*\+?([0-9]+))?")
_ALL_DIGITS = re.compile(r"[0-9]+")


def parse_unsigned(text: str) -> Optional[int]:
    """Parse the unsigned integer at the start of text, or None."""
    match = _UNSIGNED.match(text)
    return int(match.group(1)) if match else None


def parse_number(text: str) -> Optional[float]:
    """Parse the decimal number at the start of text, or None."""
    match = _NUMBER.match(text)
    return float(match.group(1)) if match else None


def is_numeric(text: str) -> bool:
    """True if text is an optional sign followed only by digits and dots.

    Several dots are tolerated; parse_number reads the leading part.
    """
    return _NUMERIC_VALUE.fullmatch(text) is not None


def encode_date(text: str) -> Optional[Tuple[int, int]]:
    """Encode a YYYY[.MM[.DD]] string as (year, year*10000 + month*100 + day).

    Month and day default to 1 when absent or unknown ("1999.??.??").

    Returns:
        (year, encoded) or None if no year can be read
    """
    year = parse_unsigned(text)
    if year is None:
        return None
    month, day = 1, 1
    parts = _MONTH_DAY.match(text)
    if parts:
        month = int(parts.group(1))
        if parts.group(2) is not None:
            day = int(parts.group(2))
    return year, 10000 * year + 100 * month + day


def extract_time_period(time_control: str) -> Optional[Tuple[str, int]]:
    """Extract the first period, in seconds, from a TimeControl value.

    Only the first colon-separated control is examined. Recognised forms
    are period+increment, *period (sandclock), moves/period and a bare
    number of seconds (sudden death).

    Returns:
        (first control, period) or None if nothing can be compared
    """
    if not time_control or time_control[0] in ("?", "-"):
        return None

    control = time_control.split(":", 1)[0]
    if "+" in control:
        period = parse_unsigned(control)
    elif control.startswith("*"):
        period = parse_unsigned(control[1:])
    elif "/" in control:
        period = parse_unsigned(control.split("/", 1)[1])
    elif _ALL_DIGITS.fullmatch(control):
        period = int(control)
    else:
        period = None

    if period is None:
        return None
    return control, period


class FieldMatchers:
    """Tag-family matchers sharing one MatchSettings.

    The instance remembers which malformed criteria it has already
    reported and caches compiled regular expressions.
    """

    def __init__(self, settings: MatchSettings, logger_instance: Optional[logging.Logger] = None):
        self.settings = settings
        self.logger = logger_instance or logger
        self._reported: Set[Tuple[str, str]] = set()
        self._patterns: Dict[str, Optional[Pattern]] = {}

    # Generic text tags

    def check_list(self, tag: int, tag_value: str, criteria: Sequence[Criterion]) -> bool:
        """Check a tag value against the criteria of a text tag.

        Plain criteria are ORed: any prefix (or, with match_anywhere,
        substring) hit accepts. Failing that, if the value is numeric,
        the relational criteria are ANDed: all must hold. Failing that,
        the first regex criterion that matches accepts.

        Args:
            tag: Tag id, used to decide on phonetic comparison
            tag_value: Value of the tag in the game
            criteria: Criteria registered for the tag

        Returns:
            True if the value is wanted
        """
        if self.settings.use_soundex and is_soundex_tag(tag):
            search_str = soundex(tag_value)
        else:
            search_str = tag_value
        value_is_numeric = is_numeric(search_str)

        possible_range_check = False
        possible_regex_check = False
        for criterion in criteria:
            if criterion.operator is Operator.NONE:
                if self._text_matches(search_str, criterion.text):
                    return True
            elif criterion.operator is Operator.REGEX:
                possible_regex_check = True
            elif value_is_numeric:
                possible_range_check = True

        if possible_range_check and self._all_relational_hold(search_str, criteria):
            return True

        if possible_regex_check:
            for criterion in criteria:
                if criterion.operator is Operator.REGEX:
                    pattern = self._compile(criterion.text)
                    if pattern is not None and pattern.search(search_str):
                        return True
        return False

    def _text_matches(self, search_str: str, text: str) -> bool:
        if self.settings.match_anywhere:
            return text in search_str
        return search_str.startswith(text)

    @staticmethod
    def _all_relational_hold(search_str: str, criteria: Sequence[Criterion]) -> bool:
        tag_number = parse_number(search_str)
        if tag_number is None:
            return False
        for criterion in criteria:
            if not criterion.is_relational:
                continue
            list_number = parse_number(criterion.text)
            if list_number is None:
                return False
            if not relative_numeric_match(criterion.operator, tag_number, list_number):
                return False
        return True

    def _compile(self, expression: str) -> Optional[Pattern]:
        if expression not in self._patterns:
            try:
                self._patterns[expression] = re.compile(expression)
            except re.error as e:
                self._patterns[expression] = None
                self._report_malformed("regex", expression, str(e))
        return self._patterns[expression]

    # Dates

    def check_date(self, date_string: str, criteria: Sequence[Criterion]) -> bool:
        """Check a Date value against the date criteria.

        A criterion text starting with 'b' means before, 'a' means after.
        Relational results are ANDed onto the running verdict, which the
        first criterion seeds. A plain criterion is a prefix test on the
        raw date and is only tried while the verdict is still false, so
        the outcome depends on registration order.
        """
        game_date = encode_date(date_string)
        if game_date is None:
            return False
        game_year, encoded_game_date = game_date

        wanted = False
        for index, criterion in enumerate(criteria):
            list_string = criterion.text
            operator = criterion.operator
            if list_string.startswith("b"):
                operator = Operator.LESS_THAN
                list_string = list_string[1:]
            elif list_string.startswith("a"):
                operator = Operator.GREATER_THAN
                list_string = list_string[1:]

            if operator is not Operator.NONE:
                if not operator.is_relational:
                    wanted = False
                    self._report_malformed("date", criterion.text, "operator not supported for dates")
                    continue
                list_date = encode_date(list_string)
                if list_date is None:
                    wanted = False
                    self._report_malformed("date", criterion.text, "no year found")
                elif MINDATE < game_year < MAXDATE:
                    matches = relative_numeric_match(operator, encoded_game_date, list_date[1])
                    wanted = matches if index == 0 else (wanted and matches)
                else:
                    # Out of range in the game; not reported.
                    wanted = False
            elif index == 0 or not wanted:
                wanted = date_string.startswith(list_string)
        return wanted

    # Time controls

    def check_time_control(self, tc_string: str, criteria: Sequence[Criterion]) -> bool:
        """Check a TimeControl value against the time control criteria."""
        extracted = extract_time_period(tc_string)
        if extracted is None:
            return False
        control, period = extracted
        return self.check_time_period(control, period, criteria)

    def check_time_period(self, control: str, period: int, criteria: Sequence[Criterion]) -> bool:
        """Return True if any criterion accepts the period (or the control text)."""
        for criterion in criteria:
            if criterion.operator is Operator.NONE:
                if control.startswith(criterion.text):
                    return True
            elif self._compare_unsigned("time control", period, criterion):
                return True
        return False

    # Ratings

    def check_elo(self, elo_string: str, criteria: Sequence[Criterion]) -> bool:
        """Check a rating value; any single satisfied criterion accepts."""
        game_elo = parse_unsigned(elo_string)
        if game_elo is None:
            return False
        for criterion in criteria:
            if criterion.operator is Operator.NONE:
                if elo_string.startswith(criterion.text):
                    return True
            elif self._compare_unsigned("rating", game_elo, criterion):
                return True
        return False

    def _compare_unsigned(self, kind: str, game_value: int, criterion: Criterion) -> bool:
        list_value = parse_unsigned(criterion.text) if criterion.is_relational else None
        if list_value is None:
            self._report_malformed(kind, criterion.text, "not a relational number")
            return False
        return relative_numeric_match(criterion.operator, game_value, list_value)

    def _report_malformed(self, kind: str, text: str, reason: str) -> None:
        key = (kind, text)
        if key in self._reported:
            return
        self._reported.add(key)
        self.logger.warning(
            f"Ignoring malformed {kind} criterion '{text}': {reason}",
            extra={
                "event": "matching.criterion.malformed",
                "criterion_kind": kind,
                "criterion": text,
            },
        )
