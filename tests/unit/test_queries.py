"""
Unit tests for the report queries.
"""

import logging
import re

import pytest

from posts_pipeline.reporting.queries import (
    DEFAULT_FRAGMENTS,
    TitleSearch,
    ViewCountAggregate,
    build_title_pattern,
    compute_view_count_stats,
)


class TestViewCountStats:
    """Tests for the ViewCount aggregate"""

    def test_mean_and_count_above(self):
        stats = compute_view_count_stats([{"ViewCount": v} for v in (10, 20, 30, 40)])
        assert stats.total_posts == 4
        assert stats.mean_view_count == 25
        assert stats.above_mean_count == 2

    def test_equal_to_mean_is_not_above(self):
        stats = compute_view_count_stats([{"ViewCount": 5}, {"ViewCount": 5}])
        assert stats.above_mean_count == 0

    def test_missing_view_count_counts_as_zero(self):
        stats = compute_view_count_stats([{"ViewCount": 10}, {}, {"ViewCount": None}])
        assert stats.mean_view_count == pytest.approx(10 / 3)
        assert stats.above_mean_count == 1

    def test_empty_collection(self, caplog):
        with caplog.at_level(logging.WARNING, logger="posts_pipeline"):
            stats = compute_view_count_stats([])
        assert stats.total_posts == 0
        assert stats.mean_view_count == 0.0
        assert stats.above_mean_count == 0
        assert "empty" in caplog.text

    def test_aggregate_reads_collection(self, memory_collection):
        memory_collection.documents = [{"ViewCount": v} for v in (1, 2, 3, 100)]
        stats = ViewCountAggregate(memory_collection).run()
        assert stats.mean_view_count == 26.5
        assert stats.above_mean_count == 1


class TestTitlePattern:
    """Tests for the fragment pattern"""

    def test_pattern_text_alternates_fragments(self):
        assert build_title_pattern(["wig", "zap"]) == "wig|zap"

    def test_matches_substrings_when_case_is_ignored(self):
        pattern = build_title_pattern(["wig", "zap"])
        assert re.search(pattern, "ZAP!", re.IGNORECASE)
        assert re.search(pattern, "wiggle room", re.IGNORECASE)
        assert not re.search(pattern, "No match here", re.IGNORECASE)

    def test_fragments_are_literal(self):
        pattern = build_title_pattern(["c++", "a.b"])
        assert pattern == r"c\+\+|a\.b"
        assert re.search(pattern, "Learning C++", re.IGNORECASE)
        assert not re.search(pattern, "axb")

    def test_requires_a_fragment(self):
        with pytest.raises(ValueError):
            build_title_pattern([])
        with pytest.raises(ValueError):
            build_title_pattern([""])


class TestTitleSearch:
    """Tests for TitleSearch"""

    def test_returns_matches_in_store_order(self, memory_collection):
        memory_collection.documents = [
            {"Id": "1", "Title": "A wig store"},
            {"Id": "2", "Title": "No match here"},
            {"Id": "3", "Title": "ZAP!"},
        ]
        matches = TitleSearch(memory_collection, DEFAULT_FRAGMENTS).run()
        assert [doc["Id"] for doc in matches] == ["1", "3"]

    def test_default_fragments(self, memory_collection):
        assert TitleSearch(memory_collection).fragments == DEFAULT_FRAGMENTS
