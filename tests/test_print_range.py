"""Tests for page range parsing."""

import os
import pytest

from workflows import parse_print_range, parse_selection_arg, to_page_indices
from workflows.print_range import page_span


class TestParsePrintRange:
    """Tests for parse_print_range()."""

    def test_single_pages(self):
        assert parse_print_range("1, 3,7") == [1, 3, 7]

    def test_ranges_are_inclusive(self):
        assert parse_print_range("1-5, 7, 10") == [1, 2, 3, 4, 5, 7, 10]

    def test_sorted_and_deduplicated(self):
        assert parse_print_range("5, 1-3, 2") == [1, 2, 3, 5]

    def test_open_start(self):
        assert parse_print_range("-3") == [1, 2, 3]

    def test_open_end_selects_nothing(self):
        assert parse_print_range("5-") == []

    def test_empty_string(self):
        assert parse_print_range("") == []
        assert parse_print_range(" , ") == []

    def test_reversed_range_is_empty(self):
        assert parse_print_range("5-3") == []

    def test_invalid_text_raises(self):
        with pytest.raises(ValueError):
            parse_print_range("1-x")
        with pytest.raises(ValueError):
            parse_print_range("two")

    def test_zero_raises(self):
        with pytest.raises(ValueError):
            parse_print_range("0-2")


class TestHelpers:
    """Tests for page_span() and to_page_indices()."""

    def test_page_span(self):
        assert page_span(2, 4) == [2, 3, 4]
        assert page_span(None, 2) == [1, 2]
        assert page_span(3, None) == []

    def test_to_page_indices(self):
        assert to_page_indices([1, 2, 5]) == [0, 1, 4]


class TestParseSelectionArg:
    """Tests for parse_selection_arg()."""

    def test_plain_path(self):
        selection = parse_selection_arg("docs/a.pdf")
        assert selection.path == os.path.abspath("docs/a.pdf")
        assert selection.name == "a.pdf"
        assert selection.print_range is None

    def test_path_with_range(self):
        selection = parse_selection_arg("a.pdf:1-3,5")
        assert selection.path == os.path.abspath("a.pdf")
        assert selection.print_range == [0, 1, 2, 4]

    def test_colon_without_range_is_part_of_path(self):
        selection = parse_selection_arg("scan:final.pdf")
        assert selection.name == "scan:final.pdf"
        assert selection.print_range is None

    def test_invalid_range_raises(self):
        with pytest.raises(ValueError):
            parse_selection_arg("a.pdf:0")
