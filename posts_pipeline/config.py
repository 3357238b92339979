"""
Runtime settings read from the environment.

The CLIs call ``load_dotenv`` first, so values may also come from a ``.env``
file in the working directory. Real environment variables win.
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from posts_pipeline.batch.ranking import DEFAULT_LIMIT
from posts_pipeline.store.connection import DEFAULT_URI


class PipelineSettings(BaseModel):
    """
    Settings shared by the ingestion and report scripts.

    Attributes:
        db_uri: Document store connection URI
        xml_path: Path to the posts XML export
        post_limit: Number of top posts kept by ViewCount
        log_level: Logging level name
        log_dir: Directory for log files
        log_format: "text" or "json"
    """

    db_uri: str = DEFAULT_URI
    xml_path: Path = Path("data/Posts.xml")
    post_limit: int = Field(DEFAULT_LIMIT, ge=0)
    log_level: str = "INFO"
    log_dir: Path = Path("data/logs")
    log_format: Literal["text", "json"] = "text"

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        """Build settings from environment variables, using defaults for unset ones."""
        env = {
            "db_uri": os.getenv("POSTS_DB_URI"),
            "xml_path": os.getenv("POSTS_XML_PATH"),
            "post_limit": os.getenv("POSTS_LIMIT"),
            "log_level": os.getenv("LOG_LEVEL"),
            "log_dir": os.getenv("LOG_FILE_PATH"),
            "log_format": os.getenv("LOG_FORMAT"),
        }
        return cls(**{key: value for key, value in env.items() if value})
