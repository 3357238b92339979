"""
Command-line interface for posts ingestion.

Usage:
    posts-ingest [--input <file_path>] [options]
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from posts_pipeline.batch.pipeline import IngestionPipeline
from posts_pipeline.config import PipelineSettings
from posts_pipeline.core.errors import PipelineError
from posts_pipeline.observability.logger import close_logger, get_logger, setup_logger
from posts_pipeline.observability.metrics import write_metrics
from posts_pipeline.store.collection import PostCollection
from posts_pipeline.store.connection import DocumentStoreConnection


logger = get_logger(__name__)

LOG_FILE_NAME = "ingest.log"


def run_ingestion(
    settings: PipelineSettings,
    input_path: Optional[Path] = None,
    dry_run: bool = False,
) -> Optional[Dict[str, Any]]:
    """
    Run one ingestion: parse, normalize, rank and replace the collection.

    The store connection is opened before the first stage and closed
    afterwards whatever happens. Stage errors are logged, not raised.

    Args:
        settings: Runtime settings
        input_path: XML export (defaults to settings.xml_path)
        dry_run: Skip the store entirely

    Returns:
        Processing results, or None if the run failed
    """
    input_path = input_path or settings.xml_path

    if dry_run:
        logger.info("DRY RUN MODE: No data will be written to the store")
        try:
            return IngestionPipeline(limit=settings.post_limit).process_file(input_path, dry_run=True)
        except PipelineError as e:
            logger.error(f"Error loading posts: {e}")
            return None

    store = DocumentStoreConnection(uri=settings.db_uri, max_size=1)
    try:
        store.open()
        logger.info(f"Connected to store database {store.database!r}")

        pipeline = IngestionPipeline(
            collection=PostCollection(store),
            limit=settings.post_limit,
        )
        return pipeline.process_file(input_path)

    except PipelineError as e:
        logger.error(f"Error loading posts: {e}")
        return None
    finally:
        store.close()
        logger.info("Store connection closed")


def main(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Load the most viewed posts from an XML export into the document store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load data/Posts.xml (or POSTS_XML_PATH)
  posts-ingest

  # Load another export, keeping only the top 500 posts
  posts-ingest --input exports/Posts.xml --limit 500

  # Parse and rank without writing to the store
  posts-ingest --dry-run
        """
    )
    parser.add_argument("--input", type=Path, help="Path to the posts XML file")
    parser.add_argument("--limit", type=int, help="Number of top posts to keep (default: 10000)")
    parser.add_argument("--db-uri", help="Store connection URI (default: POSTS_DB_URI)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse, normalize and rank without writing to the store"
    )
    parser.add_argument("--metrics-file", type=Path, help="Write Prometheus metrics to this file")

    args = parser.parse_args(argv)
    if args.limit is not None and args.limit < 0:
        parser.error("--limit must be zero or greater")

    load_dotenv()
    settings = PipelineSettings.from_env()
    overrides = {}
    if args.limit is not None:
        overrides["post_limit"] = args.limit
    if args.db_uri:
        overrides["db_uri"] = args.db_uri
    if overrides:
        settings = settings.model_copy(update=overrides)

    setup_logger(
        level=settings.log_level,
        format_type=settings.log_format,
        log_dir=settings.log_dir,
        log_file_name=LOG_FILE_NAME,
    )

    try:
        result = run_ingestion(settings, input_path=args.input, dry_run=args.dry_run)
        if args.metrics_file:
            write_metrics(args.metrics_file)
    finally:
        close_logger()

    if result is None:
        sys.exit(1)

    print(f"{result['inserted_records']} documents inserted "
          f"({result['ranked_records']} of {result['total_records']} posts kept)")


if __name__ == "__main__":
    main()
