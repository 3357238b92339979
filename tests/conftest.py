"""
Pytest configuration and fixtures for posts-pipeline tests

This module provides shared fixtures for unit and integration tests.
"""
import re
from pathlib import Path
from typing import Any, Generator

import pytest

from posts_pipeline.core.errors import StoreOperationError


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests that require Docker containers"
    )


# =======================
# IN-MEMORY STORE FIXTURES
# =======================

class InMemoryPostCollection:
    """
    Stand-in for PostCollection that keeps documents in a list.

    Store order is insertion order, as with the ``seq`` column.
    """

    def __init__(self, documents: list[dict[str, Any]] | None = None):
        self.documents = list(documents or [])
        self.ensure_calls = 0

    def ensure_exists(self) -> None:
        self.ensure_calls += 1

    def delete_all(self) -> int:
        deleted = len(self.documents)
        self.documents = []
        return deleted

    def insert_many(self, documents) -> int:
        self.documents.extend(dict(doc) for doc in documents)
        return len(documents)

    def find_all(self) -> list[dict[str, Any]]:
        return [dict(doc) for doc in self.documents]

    def find_by_title_pattern(self, pattern: str) -> list[dict[str, Any]]:
        regex = re.compile(pattern, re.IGNORECASE)
        return [dict(doc) for doc in self.documents if regex.search(doc.get("Title") or "")]

    def count(self) -> int:
        return len(self.documents)


class FailingPostCollection(InMemoryPostCollection):
    """Collection whose reads and inserts fail like a dropped connection."""

    def insert_many(self, documents) -> int:
        raise StoreOperationError("insert", "connection lost")

    def find_all(self) -> list[dict[str, Any]]:
        raise StoreOperationError("find", "connection lost")

    def find_by_title_pattern(self, pattern: str) -> list[dict[str, Any]]:
        raise StoreOperationError("find", "connection lost")


@pytest.fixture
def memory_collection() -> InMemoryPostCollection:
    """Empty in-memory collection"""
    return InMemoryPostCollection()


@pytest.fixture
def failing_collection() -> FailingPostCollection:
    """Collection that fails on insert and query"""
    return FailingPostCollection([{"Id": "old", "ViewCount": 1, "Title": "old"}])


# =======================
# FILE FIXTURES
# =======================

SAMPLE_POSTS_XML = """<?xml version="1.0" encoding="utf-8"?>
<posts>
  <row Id="1" channel="1" AcceptedAnswerId="15" CreationDate="2010-07-19T19:12:12.510"
       Score="24" ViewCount="1520" Body="&lt;p&gt;How should I elicit priors?&lt;/p&gt;"
       OwnerUserId="8" LastActivityDate="2010-09-15T21:08:26.077" Title="Eliciting priors from experts"
       Tags="&amp;lt;bayesian&amp;gt;&amp;lt;prior&amp;gt;" AnswerCount="5" CommentCount="1"
       ContentLicense="CC BY-SA 2.5" />
  <row Id="2" channel="1" CreationDate="2010-07-19T19:12:57.157" Score="28" ViewCount="30"
       Title="What is normality?" Tags="&amp;lt;distributions&amp;gt;" AnswerCount="7" CommentCount="1"
       ContentLicense="CC BY-SA 2.5" />
  <row Id="3" channel="2" CreationDate="2010-07-19T19:13:28.577" Score="12"
       Body="Answer without views" OwnerUserId="" ContentLicense="CC BY-SA 2.5" />
  <row Id="4" channel="1" CreationDate="2010-07-19T19:14:44.080" Score="71" ViewCount="1520"
       Title="A wig store for statisticians" AnswerCount="3" CommentCount="0" />
</posts>
"""


@pytest.fixture
def posts_xml(tmp_path) -> Path:
    """Small posts export written to a temporary file"""
    path = tmp_path / "Posts.xml"
    path.write_text(SAMPLE_POSTS_XML, encoding="utf-8")
    return path


@pytest.fixture
def write_xml(tmp_path):
    """Factory writing arbitrary XML text to a temporary file"""
    def _write(content: str, name: str = "input.xml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


# =======================
# DATABASE FIXTURES (Testcontainers)
# =======================

@pytest.fixture(scope="session")
def postgres_container() -> Generator[Any, None, None]:
    """
    Start a PostgreSQL container for integration tests

    Yields:
        PostgresContainer instance with a ``posts_db`` database
    """
    from testcontainers.postgres import PostgresContainer

    container = PostgresContainer(
        image="postgres:16.2-alpine",
        username="test_pipeline",
        password="test_password",
        dbname="posts_db",
    )
    try:
        container.start()
    except Exception as e:
        pytest.skip(f"Docker is not available: {e}")

    try:
        yield container
    finally:
        container.stop()


@pytest.fixture(scope="session")
def postgres_uri(postgres_container) -> str:
    """Plain postgresql:// URI for the test container"""
    return postgres_container.get_connection_url(driver=None)


@pytest.fixture
def store(postgres_uri):
    """
    Open store connection against the container, with an empty posts table

    Yields:
        DocumentStoreConnection
    """
    from posts_pipeline.store.collection import PostCollection
    from posts_pipeline.store.connection import DocumentStoreConnection

    connection = DocumentStoreConnection(uri=postgres_uri, max_size=2)
    connection.open()
    collection = PostCollection(connection)
    collection.ensure_exists()
    collection.delete_all()
    try:
        yield connection
    finally:
        connection.close()
