"""
Tests for score parsing, zero-sum validation and formatting.
"""

import pytest

from wildcard.domain.errors import ScoreParseError, ScoreSumError
from wildcard.domain.scores import (
    format_score,
    format_scores,
    get_sum,
    looks_like_scores,
    parse_scores,
    validate_sum,
)


class TestParseScores:
    """Parsing of "Name: score" lines."""

    def test_parses_full_game(self):
        scores = parse_scores("Winz: 5, Luffy: 10, Lucas: -10, Finn: -5")

        assert scores == {"Winz": 5, "Luffy": 10, "Lucas": -10, "Finn": -5}
        assert list(scores) == ["Winz", "Luffy", "Lucas", "Finn"]

    def test_whitespace_is_flexible(self):
        assert parse_scores("  Winz:5 ,Finn:   -5  ") == {"Winz": 5, "Finn": -5}

    def test_single_pair(self):
        assert parse_scores("Winz: 0") == {"Winz": 0}

    def test_names_may_contain_spaces(self):
        assert parse_scores("Big Winz: 3, Finn: -3") == {"Big Winz": 3, "Finn": -3}

    def test_name_keeps_everything_before_last_colon(self):
        assert parse_scores("a:b: 4") == {"a:b": 4}

    def test_one_bad_pair_rejects_everything(self):
        assert parse_scores("Winz five, Luffy: 10") is None

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "Winz: 5,",
            "Winz: 5.5, Finn: -5.5",
            "Winz: +5, Finn: -5",
            ": 5",
            "Winz: 5 points",
            "Winz - 5",
            "Winz: ５, Finn: -５",
            "Winz: ٥, Finn: -٥",
        ],
    )
    def test_invalid_inputs(self, text):
        assert parse_scores(text) is None

    def test_non_string_input(self):
        assert parse_scores(None) is None
        assert parse_scores(42) is None

    def test_duplicate_name_last_wins(self):
        scores = parse_scores("Winz: 5, Finn: -5, Winz: -5")

        assert scores == {"Winz": -5, "Finn": -5}


class TestValidation:
    """The zero-sum rule."""

    def test_balanced_entry_is_valid(self):
        scores = {"Winz": 5, "Luffy": 10, "Lucas": -10, "Finn": -5}

        assert get_sum(scores) == 0
        assert validate_sum(scores)

    def test_unbalanced_entry_reports_sum(self):
        scores = parse_scores("Winz: 5, Luffy: 10")

        assert get_sum(scores) == 15
        assert not validate_sum(scores)

    def test_empty_entry_sums_to_zero(self):
        assert get_sum({}) == 0

    def test_sum_error_carries_total(self):
        error = ScoreSumError(15)

        assert error.total == 15
        assert str(error) == "Invalid scores! Sum must equal 0. Current sum: 15"
        assert isinstance(error, ValueError)

    def test_parse_error_default_message(self):
        assert str(ScoreParseError()) == "Invalid score format"


class TestFormatting:
    """Display helpers."""

    @pytest.mark.parametrize("score,expected", [(5, "+5"), (-3, "-3"), (0, "0")])
    def test_format_score(self, score, expected):
        assert format_score(score) == expected

    def test_format_scores_keeps_order(self):
        scores = {"Winz": 5, "Finn": -5, "Lucas": 0}

        assert format_scores(scores) == "Winz: +5, Finn: -5, Lucas: 0"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Winz: 5", True),
            ("gg, Winz:-5 lol", True),
            ("hello there", False),
            ("Winz: ５", False),
            ("", False),
            (None, False),
        ],
    )
    def test_looks_like_scores(self, text, expected):
        assert looks_like_scores(text) is expected
