"""
Ingestion pipeline orchestration.

Coordinates the flow: read XML → normalize → rank/truncate → bulk load
"""

from pathlib import Path
from typing import Any, Dict, Optional

from posts_pipeline.core.models import Post
from posts_pipeline.observability.logger import get_logger, log_operation
from posts_pipeline.observability.metrics import posts_parsed_total, record_stage_duration
from posts_pipeline.store.collection import PostCollection

from .normalizer import PostNormalizer
from .ranking import DEFAULT_LIMIT, rank_by_view_count
from .readers import XmlReader
from .writers import BulkLoader


logger = get_logger(__name__)


class IngestionPipeline:
    """
    Orchestrates posts ingestion.

    Flow:
    1. Read the XML export into raw records
    2. Normalize records into Post models
    3. Keep the most viewed posts
    4. Replace the collection contents with them

    Stages run strictly in sequence; an error in any stage propagates.
    """

    def __init__(
        self,
        collection: Optional[PostCollection] = None,
        reader: Optional[XmlReader] = None,
        normalizer: Optional[PostNormalizer] = None,
        limit: int = DEFAULT_LIMIT,
    ):
        """
        Initialize ingestion pipeline.

        Args:
            collection: Target collection; required unless only ``prepare`` is used
            reader: XML reader (default reads <posts><row .../></posts>)
            normalizer: Record normalizer
            limit: Number of posts to keep
        """
        self.collection = collection
        self.reader = reader or XmlReader()
        self.normalizer = normalizer or PostNormalizer()
        self.limit = limit
        self.last_total_records = 0

    def prepare(self, file_path: str | Path) -> list[Post]:
        """
        Read, normalize and rank posts without touching the store.

        Args:
            file_path: Path to the XML export

        Returns:
            Ranked posts
        """
        with log_operation("Reading XML file", logger=logger, path=str(file_path)) as op:
            records = self.reader.read_records(file_path)
        record_stage_duration("parse", op.duration)
        posts_parsed_total.inc(len(records))
        self.last_total_records = len(records)
        logger.info(f"Read {len(records)} records")

        with log_operation("Normalizing records", logger=logger) as op:
            posts = self.normalizer.normalize(records)
        record_stage_duration("normalize", op.duration)

        with log_operation("Ranking posts by ViewCount", logger=logger, limit=self.limit) as op:
            ranked = rank_by_view_count(posts, self.limit)
        record_stage_duration("rank", op.duration)
        logger.info(f"Kept {len(ranked)} of {len(posts)} posts")

        return ranked

    def process_file(self, file_path: str | Path, dry_run: bool = False) -> Dict[str, Any]:
        """
        Run the complete pipeline on one file.

        Args:
            file_path: Path to the XML export
            dry_run: Stop before writing to the store

        Returns:
            Dictionary with processing results:
            - total_records: Row elements read
            - ranked_records: Posts kept after truncation
            - deleted_records: Documents removed from the collection
            - inserted_records: Documents inserted
            - coercion_fallbacks: Field values that fell back to a default
        """
        logger.info(f"Starting ingestion for file: {file_path}")
        fallbacks_before = self.normalizer.fallback_count

        ranked = self.prepare(file_path)
        result: Dict[str, Any] = {
            "total_records": self.last_total_records,
            "ranked_records": len(ranked),
            "deleted_records": 0,
            "inserted_records": 0,
            "coercion_fallbacks": self.normalizer.fallback_count - fallbacks_before,
        }

        if dry_run:
            logger.info("DRY RUN: No data was written to the store")
            return result

        if self.collection is None:
            raise RuntimeError("IngestionPipeline needs a collection to load posts")

        loader = BulkLoader(self.collection)
        with log_operation("Loading posts into the store", logger=logger) as op:
            inserted = loader.load(ranked)
        record_stage_duration("load", op.duration)

        result["deleted_records"] = loader.last_deleted
        result["inserted_records"] = inserted
        logger.info("Ingestion complete")
        return result
