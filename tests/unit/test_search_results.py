"""
Unit tests for the SearchOutput data model and result aggregation.
"""

import pytest
from pydantic import ValidationError

from filesearch.models.search_results import SearchOutput
from filesearch.tools.aggregator import aggregate


class TestSearchOutput:
    """Test cases for SearchOutput."""

    def test_defaults(self):
        output = SearchOutput()

        assert output.scanned == 0
        assert output.matched == ()
        assert output.is_empty()

    def test_matches_sorted_and_deduplicated(self):
        output = SearchOutput(scanned=10, matched=["/b/2.txt", "/a/1.txt", "/b/2.txt"])

        assert output.matched == ("/a/1.txt", "/b/2.txt")
        assert output.get_match_count() == 2

    def test_negative_scanned_rejected(self):
        with pytest.raises(ValidationError):
            SearchOutput(scanned=-1)

    def test_more_matches_than_scanned_rejected(self):
        with pytest.raises(ValidationError, match="cannot exceed"):
            SearchOutput(scanned=1, matched=["/a", "/b"])

    def test_output_is_immutable(self):
        output = SearchOutput(scanned=1, matched=["/a"])

        with pytest.raises(ValidationError):
            output.scanned = 5

    def test_to_dict(self):
        data = SearchOutput(scanned=4, matched=["/a"]).to_dict()

        assert data == {'scanned': 4, 'matched': ['/a'], 'match_count': 1}

    def test_string_representation(self):
        assert str(SearchOutput(scanned=4, matched=["/a"])) == "Found 1 matches | Scanned 4 files"


class TestAggregate:
    """Test cases for aggregate()."""

    def test_merges_fragments(self):
        output = aggregate([["/c", "/a"], [], ["/b"]], scanned=9, max_results=10)

        assert output.matched == ("/a", "/b", "/c")
        assert output.scanned == 9

    def test_removes_duplicates_across_fragments(self):
        output = aggregate([["/a", "/b"], ["/b", "/a"]], scanned=4, max_results=10)

        assert output.matched == ("/a", "/b")

    def test_order_independent_of_fragment_order(self):
        first = aggregate([["/z"], ["/m", "/a"]], scanned=3, max_results=10)
        second = aggregate([["/m", "/a"], ["/z"]], scanned=3, max_results=10)

        assert first == second

    def test_never_exceeds_cap(self):
        output = aggregate([["/a", "/b"], ["/c", "/d"]], scanned=4, max_results=3)

        assert output.matched == ("/a", "/b", "/c")

    def test_no_fragments(self):
        assert aggregate([], scanned=0, max_results=5) == SearchOutput()
