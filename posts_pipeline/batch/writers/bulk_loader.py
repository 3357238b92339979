"""
Bulk loader for ranked posts.

Replaces the whole collection: delete everything, then insert the new batch.
"""

from typing import Sequence

from posts_pipeline.core.models import Post
from posts_pipeline.observability.logger import get_logger
from posts_pipeline.observability.metrics import posts_loaded_total
from posts_pipeline.store.collection import PostCollection


logger = get_logger(__name__)


class BulkLoader:
    """
    Writes posts to the collection, replacing its previous contents.

    The delete and the insert commit separately. If the insert fails the
    collection may be left empty; there is no rollback.
    """

    def __init__(self, collection: PostCollection):
        """
        Initialize bulk loader.

        Args:
            collection: Target collection
        """
        self.collection = collection
        self.last_deleted = 0

    def load(self, posts: Sequence[Post]) -> int:
        """
        Replace the collection contents with ``posts``.

        Args:
            posts: Posts to insert, in the order they should be stored

        Returns:
            Number of documents inserted

        Raises:
            StoreOperationError: If the delete or the insert fails
        """
        self.collection.ensure_exists()

        logger.info("Deleting existing documents...")
        self.last_deleted = self.collection.delete_all()
        logger.info(f"Deleted {self.last_deleted} documents")

        logger.info(f"Inserting {len(posts)} documents...")
        inserted = self.collection.insert_many([post.to_document() for post in posts])
        posts_loaded_total.inc(inserted)
        logger.info(f"{inserted} documents inserted")

        return inserted
