"""Unit tests for tracker query normalization and eligibility."""

import pytest

from ballot_tracker.lib.tracker_search.query import is_eligible_query, normalize_query

SAMPLES = [
    "",
    "ABC-123",
    "  abc - 123  ",
    "a\tb\nc",
    "Correct-Horse-Battery-Staple",
    "---",
    "MiXeD cAsE",
    "ümlaut-Ä",
]


class TestNormalizeQuery:
    """Tests for normalize_query()."""

    def test_strips_hyphens_and_lowercases(self) -> None:
        assert normalize_query("ABC-123") == "abc123"

    def test_strips_all_whitespace(self) -> None:
        assert normalize_query(" a b\tc\n d ") == "abcd"

    def test_none_and_empty_are_empty(self) -> None:
        assert normalize_query(None) == ""
        assert normalize_query("") == ""

    def test_only_separators_is_empty(self) -> None:
        assert normalize_query(" - -\t") == ""

    @pytest.mark.parametrize("raw", SAMPLES)
    def test_idempotent(self, raw: str) -> None:
        once = normalize_query(raw)
        assert normalize_query(once) == once

    def test_separator_and_case_variants_share_a_key(self) -> None:
        variants = ["ABC-123", "abc123", "a-b-c 1 2 3", "  Abc-12-3 "]
        assert {normalize_query(v) for v in variants} == {"abc123"}


class TestIsEligibleQuery:
    """Tests for is_eligible_query()."""

    def test_two_characters_not_eligible(self) -> None:
        assert is_eligible_query(normalize_query("ab")) is False

    def test_hyphenated_three_characters_eligible(self) -> None:
        assert is_eligible_query(normalize_query("a-bc")) is True

    def test_empty_and_none_not_eligible(self) -> None:
        assert is_eligible_query("") is False
        assert is_eligible_query(None) is False

    def test_custom_minimum_length(self) -> None:
        assert is_eligible_query("abcd", minimum_length=5) is False
        assert is_eligible_query("abcde", minimum_length=5) is True

    def test_minimum_length_one_accepts_single_character(self) -> None:
        assert is_eligible_query("a", minimum_length=1) is True
