"""
Reporting pipeline orchestration.

Runs the ViewCount aggregate report and the title search report as two
independent tasks against the same collection and waits for both.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

from posts_pipeline.core.errors import PipelineError
from posts_pipeline.core.models import Report, ViewCountStats
from posts_pipeline.observability.logger import get_logger, log_operation
from posts_pipeline.observability.metrics import record_report_rendered, record_stage_duration
from posts_pipeline.store.collection import PostCollection

from .config import ReportSettings
from .queries import TitleSearch, ViewCountAggregate
from .renderer import PdfReportRenderer


logger = get_logger(__name__)


def view_count_report_lines(stats: ViewCountStats) -> list[str]:
    return [
        f"Average ViewCount: {stats.mean_view_count:.2f}",
        f"Questions with ViewCount above average: {stats.above_mean_count}",
    ]


class ReportingPipeline:
    """
    Builds and renders the two reports.

    Neither task mutates the collection, so they run concurrently without
    any ordering between them. Each task catches and logs its own errors.
    """

    def __init__(
        self,
        collection: PostCollection,
        settings: Optional[ReportSettings] = None,
        renderer: Optional[PdfReportRenderer] = None,
    ):
        """
        Initialize reporting pipeline.

        Args:
            collection: Source collection
            settings: Fragments, titles and output paths
            renderer: PDF renderer
        """
        self.collection = collection
        self.settings = settings or ReportSettings()
        self.renderer = renderer or PdfReportRenderer()

    def view_count_report(self) -> tuple[ViewCountStats, Report]:
        """
        Query ViewCount statistics and render the aggregate report.

        Raises:
            PipelineError: If the query or the render fails
        """
        with log_operation("ViewCount aggregate query", logger=logger) as op:
            stats = ViewCountAggregate(self.collection).run()
        record_stage_duration("aggregate", op.duration)

        target = self.settings.view_count
        report = Report(
            title=target.title,
            lines=view_count_report_lines(stats),
            output_path=target.output,
        )
        self._render("view_count", report)
        return stats, report

    def title_search_report(self) -> tuple[list[str], Report]:
        """
        Search titles for the configured fragments and render the matches.

        Raises:
            PipelineError: If the query or the render fails
        """
        with log_operation("Title search query", logger=logger) as op:
            matches = TitleSearch(self.collection, self.settings.fragments).run()
        record_stage_duration("search", op.duration)

        titles = [document.get("Title") or "" for document in matches]
        target = self.settings.title_search
        report = Report(title=target.title, lines=titles, output_path=target.output)
        self._render("title_search", report)
        return titles, report

    def run_view_count_report(self) -> Optional[ViewCountStats]:
        """Top-level task: returns the stats, or None after logging a failure."""
        try:
            stats, _ = self.view_count_report()
            return stats
        except PipelineError as e:
            logger.error(f"Error in ViewCount report: {e}")
            return None

    def run_title_search_report(self) -> Optional[list[str]]:
        """Top-level task: returns matching titles, or None after logging a failure."""
        try:
            titles, _ = self.title_search_report()
            return titles
        except PipelineError as e:
            logger.error(f"Error in title search report: {e}")
            return None

    def run_all(self) -> Dict[str, Any]:
        """
        Run both report tasks concurrently and wait for both to finish.

        Returns:
            ``{"view_count": ViewCountStats | None, "title_search": list[str] | None}``
        """
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="report") as executor:
            view_count = executor.submit(self.run_view_count_report)
            title_search = executor.submit(self.run_title_search_report)
            return {
                "view_count": view_count.result(),
                "title_search": title_search.result(),
            }

    def _render(self, name: str, report: Report) -> None:
        try:
            with log_operation(f"Rendering {name} report", logger=logger, path=str(report.output_path)) as op:
                self.renderer.render_report(report)
        except PipelineError:
            record_report_rendered(name, success=False)
            raise
        record_stage_duration("render", op.duration)
        record_report_rendered(name)
