"""
Report models: computed query results and the rendered report payload.
"""

from pathlib import Path

from pydantic import BaseModel, Field


class ViewCountStats(BaseModel):
    """
    Result of the view count aggregate.

    Attributes:
        total_posts: Number of documents read
        mean_view_count: Arithmetic mean of ViewCount (0.0 for an empty collection)
        above_mean_count: Documents whose ViewCount is strictly above the mean
    """

    total_posts: int = Field(0, ge=0)
    mean_view_count: float = 0.0
    above_mean_count: int = Field(0, ge=0)


class Report(BaseModel):
    """
    A titled, ordered list of text lines destined for one output file.
    """

    title: str
    lines: list[str] = Field(default_factory=list)
    output_path: Path
