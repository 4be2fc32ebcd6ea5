"""Unit tests for the tag criteria matching engine.

Tests TagCriteriaMatcher for:
- Registration, including FEN hand-off and phonetic encoding
- Shorthand selector arguments
- Per-tag AND combination and the either-colour pseudo tags
- ECO and SetUp checks
- Fatal contract violations
"""

import logging

import pytest

from tagmatch.domain.tags import ORIGINAL_NUMBER_OF_TAGS, Tag
from tagmatch.matching import (
    Criterion,
    FieldCountMismatchError,
    MatchSettings,
    Operator,
    SetupStatus,
    TagCriteriaMatcher,
    UnknownSetupStatusError,
    UnknownTagSelectorError,
)

from tests.helpers import make_fields


class TestRegistration:
    """Tests for registering criteria."""

    def test_register_stores_criterion(self, matcher):
        matcher.register_criterion(Tag.WHITE, "Tal")

        assert list(matcher.store.criteria_for(Tag.WHITE)) == [Criterion("Tal")]
        assert matcher.store.criteria_present

    def test_register_logs_event(self, matcher, caplog):
        with caplog.at_level(logging.DEBUG):
            matcher.register_criterion(Tag.RESULT, "1-0")

        record = next(r for r in caplog.records if getattr(r, "event", None) == "criteria.registered")
        assert record.tag == int(Tag.RESULT)
        assert record.operator == "NONE"
        assert record.component == "matching"

    def test_fen_criteria_go_to_pending_patterns(self, matcher):
        matcher.register_criterion(Tag.FEN, "8/8/8/8/8/8/8/8")

        assert matcher.pending_position_patterns == ["8/8/8/8/8/8/8/8"]
        assert matcher.store.criteria_present is False

    def test_fen_criteria_go_to_handler(self):
        received = []
        matcher = TagCriteriaMatcher(position_pattern_handler=received.append)
        matcher.register_criterion(Tag.FEN, "rnbqkbnr/pppppppp")

        assert received == ["rnbqkbnr/pppppppp"]
        assert matcher.pending_position_patterns == []

    def test_soundex_encodes_player_criteria(self, soundex_matcher):
        soundex_matcher.register_criterion(Tag.WHITE, "Nimzovich")
        soundex_matcher.register_criterion(Tag.RESULT, "1-0")

        assert soundex_matcher.store.criteria_for(Tag.WHITE)[0].text == "52"
        assert soundex_matcher.store.criteria_for(Tag.RESULT)[0].text == "1-0"

    def test_register_named_criterion_allocates_ids(self, matcher):
        tag = matcher.register_named_criterion("Board", "3")

        assert tag == ORIGINAL_NUMBER_OF_TAGS
        assert len(matcher.store) == ORIGINAL_NUMBER_OF_TAGS + 1
        assert matcher.register_named_criterion("White", "Tal") == Tag.WHITE


class TestShorthand:
    """Tests for selector-letter arguments."""

    @pytest.mark.parametrize(
        "argument,tag,text",
        [
            ("wKasparov", Tag.WHITE, "Kasparov"),
            ("bKarpov", Tag.BLACK, "Karpov"),
            ("pCarlsen", Tag.PSEUDO_PLAYER, "Carlsen"),
            ("d1985", Tag.DATE, "1985"),
            ("eB9", Tag.ECO, "B9"),
            ("r1-0", Tag.RESULT, "1-0"),
            ("t40/7200", Tag.TIME_CONTROL, "40/7200"),
            ("aKasparov", Tag.ANNOTATOR, "Kasparov"),
            ("h1234abcd", Tag.HASHCODE, "1234abcd"),
        ],
    )
    def test_extract_tag_argument(self, matcher, argument, tag, text):
        matcher.extract_tag_argument(argument)
        assert list(matcher.store.criteria_for(tag)) == [Criterion(text)]

    def test_position_selector(self, matcher):
        matcher.parse_shorthand_criterion("f", "8/8/8/8/8/8/8/8")
        assert matcher.pending_position_patterns == ["8/8/8/8/8/8/8/8"]

    def test_unknown_selector_is_fatal(self, matcher, caplog):
        with caplog.at_level(logging.CRITICAL):
            with pytest.raises(UnknownTagSelectorError) as exc_info:
                matcher.extract_tag_argument("zfoo")

        assert exc_info.value.argument == "zfoo"
        assert "Unknown type of tag extraction argument" in caplog.text
        assert matcher.store.criteria_present is False


class TestEvaluateRecord:
    """Tests for the per-tag decision."""

    def test_no_criteria_accepts_everything(self, matcher):
        assert matcher.evaluate_record(make_fields())
        assert matcher.evaluate_record(make_fields(WHITE="Tal", RESULT="1-0"))

    def test_single_tag(self, matcher):
        matcher.register_criterion(Tag.WHITE, "Tal")

        assert matcher.evaluate_record(make_fields(WHITE="Tal"))
        assert not matcher.evaluate_record(make_fields(WHITE="Karpov"))

    def test_missing_required_tag_rejects(self, matcher):
        matcher.register_criterion(Tag.WHITE, "Tal")
        assert not matcher.evaluate_record(make_fields(BLACK="Tal"))

    def test_different_tags_are_anded(self, matcher):
        matcher.register_criterion(Tag.WHITE, "Tal")
        matcher.register_criterion(Tag.RESULT, "1-0")

        assert matcher.evaluate_record(make_fields(WHITE="Tal", RESULT="1-0"))
        assert not matcher.evaluate_record(make_fields(WHITE="Tal", RESULT="0-1"))

    def test_same_tag_plain_criteria_are_ored(self, matcher):
        matcher.register_criterion(Tag.RESULT, "1-0")
        matcher.register_criterion(Tag.RESULT, "0-1")

        assert matcher.evaluate_record(make_fields(RESULT="0-1"))
        assert not matcher.evaluate_record(make_fields(RESULT="1/2-1/2"))

    def test_either_player(self, matcher):
        matcher.register_criterion(Tag.PSEUDO_PLAYER, "Kasparov")

        assert matcher.evaluate_record(make_fields(WHITE="Kasparov", BLACK="Karpov"))
        assert matcher.evaluate_record(make_fields(WHITE="Karpov", BLACK="Kasparov"))
        assert matcher.evaluate_record(make_fields(BLACK="Kasparov"))
        assert not matcher.evaluate_record(make_fields(WHITE="Karpov", BLACK="Anand"))
        assert not matcher.evaluate_record(make_fields())

    def test_either_player_and_other_tags(self, matcher):
        """A rejected pseudo-player check is not overridden by later checks."""
        matcher.register_criterion(Tag.PSEUDO_PLAYER, "Kasparov")
        matcher.register_criterion(Tag.PSEUDO_ELO, "2000", Operator.GREATER_THAN)

        assert not matcher.evaluate_record(
            make_fields(WHITE="Karpov", BLACK="Anand", WHITE_ELO="2700", BLACK_ELO="2700")
        )
        assert matcher.evaluate_record(
            make_fields(WHITE="Karpov", BLACK="Kasparov", WHITE_ELO="2700", BLACK_ELO="2800")
        )

    def test_either_rating(self, matcher):
        matcher.register_criterion(Tag.PSEUDO_ELO, "2700", Operator.GREATER_OR_EQUAL)

        assert matcher.evaluate_record(make_fields(WHITE_ELO="2600", BLACK_ELO="2750"))
        assert matcher.evaluate_record(make_fields(WHITE_ELO="2710"))
        assert not matcher.evaluate_record(make_fields(WHITE_ELO="2600", BLACK_ELO="2650"))
        assert not matcher.evaluate_record(make_fields())

    def test_rating_tags_use_rating_rules(self, matcher):
        """Rating criteria on one tag are alternatives, not a range."""
        matcher.register_criterion(Tag.WHITE_ELO, "2600", Operator.GREATER_OR_EQUAL)
        matcher.register_criterion(Tag.WHITE_ELO, "2800", Operator.LESS_THAN)

        assert matcher.evaluate_record(make_fields(WHITE_ELO="2850"))
        assert matcher.evaluate_record(make_fields(WHITE_ELO="2500"))
        assert not matcher.evaluate_record(make_fields(WHITE_ELO="?"))

    def test_numeric_range_on_text_tag(self, matcher):
        matcher.register_criterion(Tag.PLY_COUNT, "40", Operator.GREATER_OR_EQUAL)
        matcher.register_criterion(Tag.PLY_COUNT, "80", Operator.LESS_THAN)

        assert matcher.evaluate_record(make_fields(PLY_COUNT="60"))
        assert not matcher.evaluate_record(make_fields(PLY_COUNT="80"))
        assert not matcher.evaluate_record(make_fields(PLY_COUNT="39"))

    def test_date_dispatch_and_order(self, matcher):
        matcher.register_criterion(Tag.DATE, "b1980")
        matcher.register_criterion(Tag.DATE, "1985")

        assert matcher.evaluate_record(make_fields(DATE="1985.05.05"))
        assert matcher.evaluate_record(make_fields(DATE="1975.01.01"))
        assert not matcher.evaluate_record(make_fields(DATE="1990.01.01"))

    def test_time_control_dispatch(self, matcher):
        matcher.register_criterion(Tag.TIME_CONTROL, "600", Operator.LESS_THAN)

        assert matcher.evaluate_record(make_fields(TIME_CONTROL="180+2"))
        assert not matcher.evaluate_record(make_fields(TIME_CONTROL="40/7200:3600"))

    def test_soundex_matching(self, soundex_matcher):
        soundex_matcher.register_criterion(Tag.PSEUDO_PLAYER, "Nimzovich")

        assert soundex_matcher.evaluate_record(make_fields(WHITE="Nimsowitsch"))
        assert not soundex_matcher.evaluate_record(make_fields(WHITE="Capablanca"))

    def test_match_anywhere(self, anywhere_matcher):
        anywhere_matcher.register_criterion(Tag.EVENT, "Open")

        assert anywhere_matcher.evaluate_record(make_fields(EVENT="Gibraltar Open"))
        assert not anywhere_matcher.evaluate_record(make_fields(EVENT="Candidates"))

    def test_eco_not_checked_here(self, matcher):
        matcher.register_criterion(Tag.ECO, "B9")
        assert matcher.evaluate_record(make_fields(ECO="C00"))

    def test_extended_tag(self, matcher):
        tag = matcher.register_named_criterion("Board", "3")
        fields = make_fields(length=len(matcher.store))
        fields[tag] = "3"

        assert matcher.evaluate_record(fields)
        fields[tag] = "4"
        assert not matcher.evaluate_record(fields)

    def test_short_field_array_is_fatal(self, matcher, caplog):
        matcher.register_named_criterion("Board", "3")

        with caplog.at_level(logging.CRITICAL):
            with pytest.raises(FieldCountMismatchError) as exc_info:
                matcher.evaluate_record(make_fields())

        assert exc_info.value.field_count == ORIGINAL_NUMBER_OF_TAGS
        assert exc_info.value.table_length == ORIGINAL_NUMBER_OF_TAGS + 1
        assert "mismatch in tag set lengths" in caplog.text

    def test_explicit_field_count(self, matcher):
        matcher.register_criterion(Tag.WHITE, "Tal")
        with pytest.raises(FieldCountMismatchError):
            matcher.evaluate_record(make_fields(WHITE="Tal"), field_count=5)


class TestOpeningClassification:
    """Tests for the ECO check."""

    def test_no_criteria(self, matcher):
        assert matcher.evaluate_opening_classification(make_fields())

    def test_criteria_on_other_tags_only(self, matcher):
        matcher.register_criterion(Tag.WHITE, "Tal")
        assert matcher.evaluate_opening_classification(make_fields())

    def test_prefix(self, matcher):
        matcher.register_criterion(Tag.ECO, "B9")

        assert matcher.evaluate_opening_classification(make_fields(ECO="B90"))
        assert not matcher.evaluate_opening_classification(make_fields(ECO="C00"))
        assert not matcher.evaluate_opening_classification(make_fields())


class TestSetupPosition:
    """Tests for the SetUp check."""

    @pytest.mark.parametrize(
        "status,with_setup,without_setup",
        [
            (SetupStatus.ANY, True, True),
            (SetupStatus.ABSENT_ONLY, False, True),
            (SetupStatus.PRESENT_ONLY, True, False),
        ],
    )
    def test_statuses(self, status, with_setup, without_setup):
        matcher = TagCriteriaMatcher(settings=MatchSettings(setup_status=status))

        assert matcher.evaluate_setup_position(make_fields(SETUP="1")) is with_setup
        assert matcher.evaluate_setup_position(make_fields()) is without_setup

    def test_unknown_status_is_fatal(self):
        matcher = TagCriteriaMatcher(settings=MatchSettings(setup_status="sometimes"))

        with pytest.raises(UnknownSetupStatusError) as exc_info:
            matcher.evaluate_setup_position(make_fields())
        assert exc_info.value.status == "sometimes"


class TestEvaluateHeaders:
    """Tests for evaluating games given by tag name."""

    def test_combines_all_checks(self, matcher):
        matcher.register_named_criterion("White", "Tal")
        matcher.extract_tag_argument("eB9")

        assert matcher.evaluate_headers({"White": "Tal, Mikhail", "ECO": "B92"})
        assert not matcher.evaluate_headers({"White": "Tal, Mikhail", "ECO": "A00"})
        assert not matcher.evaluate_headers({"White": "Botvinnik", "ECO": "B92"})

    def test_setup_rejection(self):
        matcher = TagCriteriaMatcher(settings=MatchSettings(setup_status=SetupStatus.ABSENT_ONLY))

        assert matcher.evaluate_headers({"White": "Tal"})
        assert not matcher.evaluate_headers({"White": "Tal", "SetUp": "1", "FEN": "8/8"})

    def test_unknown_tags_in_game(self, matcher):
        """Tags first seen in a game get ids without breaking evaluation."""
        matcher.register_named_criterion("Board", "3")

        assert matcher.evaluate_headers({"Board": "3", "WhiteClock": "0:01:00"})
        assert not matcher.evaluate_headers({"Board": "4"})
        assert not matcher.evaluate_headers({"WhiteClock": "0:01:00"})

    def test_criteria_registered_after_new_game_tags(self, matcher):
        assert matcher.evaluate_headers({"Board": "1"})

        matcher.register_named_criterion("Board", "1")
        assert matcher.evaluate_headers({"Board": "1"})
        assert not matcher.evaluate_headers({"Board": "2"})

    def test_blank_header_names_ignored(self, matcher):
        matcher.register_named_criterion("White", "Tal")

        assert matcher.evaluate_headers({"White": "Tal", " ": "x", "": "y"})
        assert not matcher.evaluate_headers({"White": "Karpov", " ": "Tal"})

    def test_raw_tag_id_not_given_to_header_names(self, matcher):
        """A criterion on an id past the known tags keeps that id to itself."""
        raw_tag = ORIGINAL_NUMBER_OF_TAGS + 8
        matcher.register_criterion(raw_tag, "x")
        headers = {f"T{i}": "y" for i in range(8)}
        headers["T8"] = "x"

        assert not matcher.evaluate_headers(headers)
        assert matcher.registry.lookup("T8") != raw_tag
        assert matcher.registry.name_of(raw_tag) is None


ROUND_TRIP_CASES = [
    (Tag.WHITE, "WHITE", "Tal, Mikhail"),
    (Tag.EVENT, "EVENT", "Wijk aan Zee"),
    (Tag.RESULT, "RESULT", "1/2-1/2"),
    (Tag.PLY_COUNT, "PLY_COUNT", "40"),
    (Tag.PSEUDO_PLAYER, "WHITE", "Kasparov, Garry"),
    (Tag.PSEUDO_PLAYER, "BLACK", "Kasparov, Garry"),
    (Tag.DATE, "DATE", "1985.11.09"),
    (Tag.TIME_CONTROL, "TIME_CONTROL", "5400+30"),
    (Tag.TIME_CONTROL, "TIME_CONTROL", "40/7200"),
    (Tag.WHITE_ELO, "WHITE_ELO", "2700"),
    (Tag.PSEUDO_ELO, "BLACK_ELO", "2650"),
]


class TestPlainCriterionRoundTrip:
    """A plain criterion accepts a field holding exactly its text."""

    @pytest.mark.parametrize("match_anywhere", [False, True])
    @pytest.mark.parametrize("tag,field,text", ROUND_TRIP_CASES)
    def test_exact_value_accepted(self, tag, field, text, match_anywhere):
        matcher = TagCriteriaMatcher(settings=MatchSettings(match_anywhere=match_anywhere))
        matcher.register_criterion(tag, text)

        assert matcher.evaluate_record(make_fields(**{field: text}))

    @pytest.mark.parametrize("match_anywhere", [False, True])
    @pytest.mark.parametrize(
        "tag,field,text",
        [
            (Tag.WHITE, "WHITE", "Nimzovich"),
            (Tag.BLACK, "BLACK", "Yusupov, Artur"),
            (Tag.PSEUDO_PLAYER, "BLACK", "Tal, Mikhail"),
            (Tag.EVENT, "EVENT", "Linares"),
            (Tag.SITE, "SITE", "Wijk aan Zee NED"),
            (Tag.ANNOTATOR, "ANNOTATOR", "?"),
        ],
    )
    def test_exact_value_accepted_with_soundex(self, tag, field, text, match_anywhere):
        matcher = TagCriteriaMatcher(
            settings=MatchSettings(use_soundex=True, match_anywhere=match_anywhere)
        )
        matcher.register_criterion(tag, text)

        assert matcher.evaluate_record(make_fields(**{field: text}))

    @pytest.mark.parametrize("match_anywhere", [False, True])
    @pytest.mark.parametrize(
        "tag,field,text",
        [
            # Read as "before 2000"; the game value has no year.
            (Tag.DATE, "DATE", "b2000"),
            (Tag.DATE, "DATE", "a1990"),
            # Unknown time controls never match.
            (Tag.TIME_CONTROL, "TIME_CONTROL", "?"),
            # Only the first period is compared with the criterion.
            (Tag.TIME_CONTROL, "TIME_CONTROL", "40/7200:3600"),
            # A rating must start with a number.
            (Tag.WHITE_ELO, "WHITE_ELO", "?"),
        ],
    )
    def test_values_the_matcher_cannot_read(self, tag, field, text, match_anywhere):
        matcher = TagCriteriaMatcher(settings=MatchSettings(match_anywhere=match_anywhere))
        matcher.register_criterion(tag, text)

        assert not matcher.evaluate_record(make_fields(**{field: text}))
