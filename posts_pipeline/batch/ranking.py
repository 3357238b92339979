"""
Ranking and truncation of normalized posts.
"""

from typing import Sequence

from posts_pipeline.core.models import Post

DEFAULT_LIMIT = 10_000


def rank_by_view_count(posts: Sequence[Post], limit: int = DEFAULT_LIMIT) -> list[Post]:
    """
    Return the most viewed posts, highest ViewCount first.

    The sort is stable: posts with equal ViewCount keep their input order.
    The input is not modified.

    Args:
        posts: Normalized posts
        limit: Maximum number of posts to keep

    Returns:
        At most ``limit`` posts sorted by ViewCount descending

    Raises:
        ValueError: If limit is negative
    """
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    # sorted() stays stable with reverse=True
    ranked = sorted(posts, key=lambda post: post.view_count, reverse=True)
    return ranked[:limit]
