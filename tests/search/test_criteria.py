"""Tests for album search criteria normalization."""

import logging

import pytest

from albumcat.errors import FieldValidationError
from albumcat.search.criteria import (
    AlbumCriteria,
    SortBy,
    normalize_criteria,
    normalize_term,
    normalize_year,
    parse_sort_by,
)


class TestNormalizeTerm:
    """Blank text terms collapse to None."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\t\n ", "\xa0", "\x0c\x0b"])
    def test_blank_values_are_absent(self, value):
        assert normalize_term(value) is None

    def test_terms_are_trimmed(self):
        assert normalize_term("  Party ") == "Party"

    def test_inner_whitespace_is_kept(self):
        assert normalize_term(" summer  trip ") == "summer  trip"


class TestNormalizeYear:
    """Year parsing."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_year_is_absent(self, value):
        assert normalize_year(value) is None

    def test_int_passthrough(self):
        assert normalize_year(2023) == 2023

    def test_numeric_string(self):
        assert normalize_year(" 2021 ") == 2021

    def test_non_numeric_string_raises(self):
        with pytest.raises(FieldValidationError) as exc_info:
            normalize_year("last year")
        assert exc_info.value.field == "year"


class TestParseSortBy:
    """Sort key resolution."""

    def test_absent_key_defaults_to_event(self):
        assert parse_sort_by(None) == (SortBy.EVENT, True)
        assert parse_sort_by("  ") == (SortBy.EVENT, True)

    @pytest.mark.parametrize("value", ["DATE", "date", " Date "])
    def test_case_insensitive(self, value):
        assert parse_sort_by(value) == (SortBy.DATE, True)

    def test_enum_passthrough(self):
        assert parse_sort_by(SortBy.DATE) == (SortBy.DATE, True)

    def test_unrecognized_key_falls_back_and_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="albumcat.search.criteria"):
            resolved, recognized = parse_sort_by("popularity")

        assert resolved == SortBy.EVENT
        assert recognized is False
        assert "popularity" in caplog.text


class TestNormalizeCriteria:
    """End-to-end criteria building."""

    def test_all_blank_matches_default_criteria(self):
        criteria = normalize_criteria(keyword=" ", event="", year="", tag_name=None, contributor_login="\t")
        assert criteria == AlbumCriteria()

    def test_values_are_normalized(self):
        criteria = normalize_criteria(
            keyword=" cat ",
            event="Party",
            year="2022",
            tag_name=" beach",
            contributor_login="alice ",
            sort_by="date",
        )
        assert criteria.keyword == "cat"
        assert criteria.event == "Party"
        assert criteria.year == 2022
        assert criteria.tag_name == "beach"
        assert criteria.contributor_login == "alice"
        assert criteria.sort_by == SortBy.DATE
        assert criteria.sort_key_recognized is True

    def test_unrecognized_sort_is_flagged(self):
        criteria = normalize_criteria(sort_by="sideways")
        assert criteria.sort_by == SortBy.EVENT
        assert criteria.sort_key_recognized is False
