"""
Report queries: the ViewCount aggregate and the title fragment search.
"""

import re
from typing import Any, Iterable, Sequence

from posts_pipeline.core.models import ViewCountStats
from posts_pipeline.observability.logger import get_logger
from posts_pipeline.store.collection import PostCollection


logger = get_logger(__name__)

DEFAULT_FRAGMENTS = ("pug", "wig", "yak", "nap", "jig", "mug", "zap", "gag", "oaf", "elf")


def compute_view_count_stats(documents: Iterable[dict[str, Any]]) -> ViewCountStats:
    """
    Compute the mean ViewCount and how many documents are strictly above it.

    A missing or null ViewCount counts as 0. An empty input yields a mean of
    0.0 and a count of 0.

    Args:
        documents: Stored post documents

    Returns:
        ViewCountStats
    """
    view_counts = [document.get("ViewCount") or 0 for document in documents]
    if not view_counts:
        logger.warning("Collection is empty; mean ViewCount reported as 0")
        return ViewCountStats()

    mean = sum(view_counts) / len(view_counts)
    above = sum(1 for count in view_counts if count > mean)
    return ViewCountStats(
        total_posts=len(view_counts),
        mean_view_count=mean,
        above_mean_count=above,
    )


def build_title_pattern(fragments: Sequence[str]) -> str:
    """
    Build a "contains any fragment" regular expression for the store.

    Matching is unanchored substring search, so "wig" also matches "wiggle".
    Case is ignored by the store query (PostgreSQL `~*`), not by the pattern.
    Fragments are escaped with `re.escape`, which only puts a backslash before
    non-alphanumeric characters; PostgreSQL regular expressions read those
    escapes as literals too.

    Args:
        fragments: Word fragments

    Returns:
        Pattern text

    Raises:
        ValueError: If no non-empty fragment is given
    """
    cleaned = [fragment for fragment in fragments if fragment]
    if not cleaned:
        raise ValueError("At least one non-empty search fragment is required")
    return "|".join(re.escape(fragment) for fragment in cleaned)


class ViewCountAggregate:
    """Reads every document and computes ViewCount statistics."""

    def __init__(self, collection: PostCollection):
        self.collection = collection

    def run(self) -> ViewCountStats:
        documents = self.collection.find_all()
        stats = compute_view_count_stats(documents)
        logger.info(f"Mean ViewCount over {stats.total_posts} posts: {stats.mean_view_count:.2f}")
        logger.info(f"Posts with ViewCount above the mean: {stats.above_mean_count}")
        return stats


class TitleSearch:
    """Finds documents whose Title contains any of the given fragments."""

    def __init__(self, collection: PostCollection, fragments: Sequence[str] = DEFAULT_FRAGMENTS):
        self.collection = collection
        self.fragments = tuple(fragments)
        self.pattern = build_title_pattern(self.fragments)

    def run(self) -> list[dict[str, Any]]:
        """
        Run the search.

        Returns:
            Matching documents in store order
        """
        matches = self.collection.find_by_title_pattern(self.pattern)
        logger.info(f"Posts with titles matching {', '.join(self.fragments)}: {len(matches)}")
        return matches
