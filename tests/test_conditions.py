"""
Tests for research_study.conditions — condition / keyword parsing.

Validates:
- Comma splitting with trimming, order preserved, empty tokens kept
- Bracketed strings decoded as JSON, decode errors propagated
- Lists used as-is
"""

import json

import pytest

from research_study.conditions import (
    concepts_from_list,
    parse_condition_string,
    parse_conditions,
)


class TestCommaSeparated:
    """Unbracketed strings split on commas."""

    def test_splits_and_trims(self):
        assert parse_conditions("Breast Cancer,  Lung Cancer ,Melanoma") == [
            {"text": "Breast Cancer"},
            {"text": "Lung Cancer"},
            {"text": "Melanoma"},
        ]

    def test_single_value(self):
        assert parse_conditions("Glioma") == [{"text": "Glioma"}]

    def test_empty_tokens_kept(self):
        assert parse_conditions("a,,b, ") == [
            {"text": "a"}, {"text": ""}, {"text": "b"}, {"text": ""},
        ]

    def test_empty_string_gives_one_empty_concept(self):
        assert parse_conditions("") == [{"text": ""}]

    @pytest.mark.parametrize("text", ["z, y, x", "1,2,3,4,5", " c , b , a "])
    def test_one_concept_per_segment_in_order(self, text):
        expected = [segment.strip() for segment in text.split(",")]
        assert [c["text"] for c in parse_conditions(text)] == expected

    def test_only_leading_bracket_is_not_json(self):
        assert parse_conditions("[a, b") == [{"text": "[a"}, {"text": "b"}]


class TestJsonArray:
    """Bracketed strings are JSON arrays."""

    def test_json_array(self):
        assert parse_conditions('["a","b"]') == [{"text": "a"}, {"text": "b"}]

    def test_commas_inside_json_values_survive(self):
        assert parse_conditions('["Cancer, Breast", "HER2+"]') == [
            {"text": "Cancer, Breast"},
            {"text": "HER2+"},
        ]

    def test_empty_array(self):
        assert parse_conditions("[]") == []

    def test_invalid_json_raises(self):
        with pytest.raises(json.JSONDecodeError):
            parse_conditions("[invalid]")

    def test_invalid_json_does_not_fall_back(self):
        with pytest.raises(ValueError):
            parse_condition_string("[a, b]")


class TestLists:
    """Sequences are used as-is."""

    def test_list(self):
        assert parse_conditions(["x", " y "]) == [{"text": "x"}, {"text": " y "}]

    def test_tuple(self):
        assert parse_conditions(("x",)) == [{"text": "x"}]

    def test_empty_list(self):
        assert concepts_from_list([]) == []

    def test_input_not_mutated(self):
        items = ["a", "b"]
        parse_conditions(items)
        assert items == ["a", "b"]
