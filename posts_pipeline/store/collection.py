"""
Post collection stored as JSONB documents.

Table layout: ``posts(seq BIGSERIAL PRIMARY KEY, doc JSONB NOT NULL)``.
``seq`` preserves insertion order, which is the store-native order returned
by the find methods.
"""

from typing import Any, Sequence

from psycopg import Error as PsycopgError
from psycopg import sql
from psycopg.types.json import Jsonb

from posts_pipeline.core.errors import StoreOperationError

from .connection import DocumentStoreConnection

COLLECTION_NAME = "posts"


class PostCollection:
    """
    Document operations on one collection table.
    """

    def __init__(self, store: DocumentStoreConnection, name: str = COLLECTION_NAME):
        """
        Initialize the collection.

        Args:
            store: Open store connection
            name: Collection (table) name
        """
        self.store = store
        self.name = name
        self._table = sql.Identifier(name)

    def ensure_exists(self) -> None:
        """Create the collection table if it does not exist yet."""
        command = sql.SQL(
            "CREATE TABLE IF NOT EXISTS {} ("
            " seq BIGSERIAL PRIMARY KEY,"
            " doc JSONB NOT NULL"
            ")"
        ).format(self._table)
        self._run("create", lambda: self.store.execute_command(command))

    def delete_all(self) -> int:
        """
        Delete every document.

        Returns:
            Number of documents deleted
        """
        command = sql.SQL("DELETE FROM {}").format(self._table)
        return self._run("delete", lambda: self.store.execute_command(command))

    def insert_many(self, documents: Sequence[dict[str, Any]]) -> int:
        """
        Insert documents as one batch in a single transaction.

        Args:
            documents: JSON-ready documents

        Returns:
            Number of documents inserted
        """
        if not documents:
            return 0

        command = sql.SQL("INSERT INTO {} (doc) VALUES (%s)").format(self._table)

        def insert() -> int:
            with self.store.get_connection() as conn:
                with conn.cursor() as cur:
                    cur.executemany(command, [(Jsonb(doc),) for doc in documents])
                conn.commit()
            return len(documents)

        return self._run("insert", insert)

    def find_all(self) -> list[dict[str, Any]]:
        """Return every document in store order."""
        query = sql.SQL("SELECT doc FROM {} ORDER BY seq").format(self._table)
        rows = self._run("find", lambda: self.store.execute_query(query))
        return [row["doc"] for row in rows]

    def find_by_title_pattern(self, pattern: str) -> list[dict[str, Any]]:
        """
        Return documents whose Title matches a regular expression, ignoring case.

        Args:
            pattern: Regular expression, unanchored

        Returns:
            Matching documents in store order
        """
        query = sql.SQL(
            "SELECT doc FROM {} WHERE doc->>'Title' ~* %s ORDER BY seq"
        ).format(self._table)
        rows = self._run("find", lambda: self.store.execute_query(query, (pattern,)))
        return [row["doc"] for row in rows]

    def count(self) -> int:
        """Return the number of documents."""
        query = sql.SQL("SELECT COUNT(*) AS n FROM {}").format(self._table)
        rows = self._run("count", lambda: self.store.execute_query(query))
        return rows[0]["n"]

    def _run(self, operation: str, action):
        try:
            return action()
        except PsycopgError as e:
            raise StoreOperationError(operation, str(e)) from e
