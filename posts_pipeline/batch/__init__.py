"""
Posts ingestion: XML reading, normalization, ranking and bulk loading.
"""

from .normalizer import PostNormalizer
from .pipeline import IngestionPipeline
from .ranking import DEFAULT_LIMIT, rank_by_view_count
from .readers import XmlReader
from .writers import BulkLoader

__all__ = [
    "DEFAULT_LIMIT",
    "IngestionPipeline",
    "PostNormalizer",
    "XmlReader",
    "BulkLoader",
    "rank_by_view_count",
]
