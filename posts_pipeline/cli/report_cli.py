"""
Command-line interface for the PDF reports.

Usage:
    posts-report [--config <yaml_path>] [options]
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from posts_pipeline.config import PipelineSettings
from posts_pipeline.core.errors import PipelineError
from posts_pipeline.observability.logger import close_logger, get_logger, setup_logger
from posts_pipeline.observability.metrics import write_metrics
from posts_pipeline.reporting.config import ReportConfigLoader, ReportSettings
from posts_pipeline.reporting.pipeline import ReportingPipeline
from posts_pipeline.store.collection import PostCollection
from posts_pipeline.store.connection import DocumentStoreConnection


logger = get_logger(__name__)

LOG_FILE_NAME = "reports.log"
DEFAULT_CONFIG_PATH = Path("config/reports.yaml")


def load_report_settings(config_path: Path) -> ReportSettings:
    """Load report settings, falling back to defaults when the file is missing."""
    if not config_path.exists():
        logger.warning(f"Report configuration not found: {config_path}; using defaults")
        return ReportSettings()
    return ReportConfigLoader(config_path).load()


def run_reports(settings: PipelineSettings, report_settings: ReportSettings) -> Optional[Dict[str, Any]]:
    """
    Run both reports against the store.

    One store connection pool is opened for the run and closed afterwards.
    The store is only read; a missing collection makes both reports fail.

    Returns:
        Per-report results (None entries for failed reports), or None if the
        store could not be reached
    """
    store = DocumentStoreConnection(uri=settings.db_uri, max_size=2)
    try:
        store.open()
        logger.info(f"Connected to store database {store.database!r}")

        return ReportingPipeline(PostCollection(store), report_settings).run_all()

    except PipelineError as e:
        logger.error(f"Error querying the store: {e}")
        return None
    finally:
        store.close()
        logger.info("Store connection closed")


def print_results(results: Dict[str, Any]) -> None:
    stats = results["view_count"]
    if stats is not None:
        print(f"Questions with ViewCount above average: {stats.above_mean_count}")

    titles = results["title_search"]
    if titles is not None:
        print(f"Posts with titles matching the search words: {len(titles)}")
        for title in titles:
            print(f"Title: {title}")


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Render the ViewCount and title search PDF reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render both reports with config/reports.yaml
  posts-report

  # Use another configuration and store
  posts-report --config my_reports.yaml --db-uri postgresql://user:pw@db:5432/
        """
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Report configuration YAML (default: {DEFAULT_CONFIG_PATH})"
    )
    parser.add_argument("--db-uri", help="Store connection URI (default: POSTS_DB_URI)")
    parser.add_argument("--metrics-file", type=Path, help="Write Prometheus metrics to this file")

    args = parser.parse_args(argv)

    load_dotenv()
    settings = PipelineSettings.from_env()
    if args.db_uri:
        settings = settings.model_copy(update={"db_uri": args.db_uri})

    setup_logger(
        level=settings.log_level,
        format_type=settings.log_format,
        log_dir=settings.log_dir,
        log_file_name=LOG_FILE_NAME,
    )

    try:
        try:
            report_settings = load_report_settings(args.config)
        except ValueError as e:
            logger.error(f"Invalid report configuration: {e}")
            sys.exit(1)

        results = run_reports(settings, report_settings)
        if args.metrics_file:
            write_metrics(args.metrics_file)
    finally:
        close_logger()

    if results is None:
        sys.exit(1)

    print_results(results)
    if any(value is None for value in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
