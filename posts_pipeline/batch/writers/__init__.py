"""
Batch data writers.
"""

from .bulk_loader import BulkLoader

__all__ = [
    "BulkLoader",
]
