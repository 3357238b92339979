"""
Core data models for the posts pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .post import Post, RawRecord
from .report import Report, ViewCountStats

__all__ = [
    "Post",
    "RawRecord",
    "Report",
    "ViewCountStats",
]
