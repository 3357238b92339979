"""
Reporting: queries over the post collection rendered to PDF.
"""

from .config import ReportConfigLoader, ReportSettings, ReportTarget
from .pipeline import ReportingPipeline
from .queries import (
    DEFAULT_FRAGMENTS,
    TitleSearch,
    ViewCountAggregate,
    build_title_pattern,
    compute_view_count_stats,
)
from .renderer import PdfReportRenderer

__all__ = [
    "DEFAULT_FRAGMENTS",
    "PdfReportRenderer",
    "ReportConfigLoader",
    "ReportSettings",
    "ReportTarget",
    "ReportingPipeline",
    "TitleSearch",
    "ViewCountAggregate",
    "build_title_pattern",
    "compute_view_count_stats",
]
