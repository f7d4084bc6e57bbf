"""Tests for the name filter."""

import pytest

from isotest.core.filter import NameFilter
from isotest.exceptions import InvalidFilterFormat


class TestParse:
    """Tests for NameFilter.parse."""

    def test_empty_filter(self):
        """Test that empty and missing filters are accepted."""
        assert NameFilter.parse("").is_empty
        assert NameFilter.parse(None).is_empty

    def test_filter_without_separator_rejected(self):
        """Test that a non-empty filter needs a separator."""
        with pytest.raises(InvalidFilterFormat) as exc_info:
            NameFilter.parse("lonely")
        assert exc_info.value.test_filter == "lonely"

    def test_trailing_separator_selects_suite(self):
        """Test that 'A/' is a valid filter for suite A."""
        name_filter = NameFilter.parse("A/")
        assert name_filter.matches_test("A/t1")
        assert not name_filter.is_exact_match("A/t1")


class TestEmptyFilter:
    """Tests for the empty filter."""

    def test_everything_in_scope(self):
        """Test that every suite and test is selected."""
        name_filter = NameFilter("")
        assert name_filter.in_scope("A")
        assert name_filter.in_scope("A/B/C")
        assert name_filter.matches_test("A/t1")

    def test_nothing_exact(self):
        """Test that the empty filter never forces in-process execution."""
        assert not NameFilter("").is_exact_match("A/t1")


class TestSuiteFilter:
    """Tests for a filter naming a suite."""

    def test_ancestors_in_scope(self):
        """Test that suites on the way to the filtered suite are visited."""
        name_filter = NameFilter("A/B")
        assert name_filter.in_scope("A")
        assert name_filter.in_scope("A/B")

    def test_descendants_in_scope(self):
        """Test that suites below the filtered suite are visited."""
        assert NameFilter("A/B").in_scope("A/B/C")

    def test_siblings_pruned(self):
        """Test that unrelated suites are pruned."""
        name_filter = NameFilter("A/B")
        assert not name_filter.in_scope("A/C")
        assert not name_filter.in_scope("Z")

    def test_component_boundaries(self):
        """Test that a suite sharing a string prefix is not selected."""
        name_filter = NameFilter("A/B")
        assert not name_filter.in_scope("A/BC")
        assert not name_filter.in_scope("AB")
        assert not name_filter.matches_test("A/BC/t1")

    def test_descendant_tests_selected(self):
        """Test that every test below the suite is selected."""
        name_filter = NameFilter("A/B")
        assert name_filter.matches_test("A/B/t1")
        assert name_filter.matches_test("A/B/C/t2")
        assert not name_filter.matches_test("A/t1")

    def test_not_exact(self):
        """Test that tests under a suite filter are not exact matches."""
        assert not NameFilter("A/B").is_exact_match("A/B/t1")


class TestExactFilter:
    """Tests for a filter naming one test case."""

    def test_only_that_test_selected(self):
        """Test that only the named test is selected."""
        name_filter = NameFilter("A/B/t1")
        assert name_filter.matches_test("A/B/t1")
        assert not name_filter.matches_test("A/B/t2")

    def test_exact_match(self):
        """Test exact match detection."""
        name_filter = NameFilter("A/B/t1")
        assert name_filter.is_exact_match("A/B/t1")
        assert not name_filter.is_exact_match("A/B/t2")
