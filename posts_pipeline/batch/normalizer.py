"""
Record normalization: raw XML rows to typed Post models.
"""

from datetime import datetime
from typing import Iterable

from posts_pipeline.core.coercion import (
    decode_tag_entities,
    is_blank,
    try_parse_int,
    try_parse_timestamp,
)
from posts_pipeline.core.models import Post, RawRecord
from posts_pipeline.observability.logger import get_logger
from posts_pipeline.observability.metrics import record_coercion_fallback


logger = get_logger(__name__)

INTEGER_FIELDS = ("Score", "ViewCount", "AnswerCount", "CommentCount")
TIMESTAMP_FIELDS = ("CreationDate", "LastActivityDate")


class PostNormalizer:
    """
    Maps raw records to Post models.

    Numeric fields default to 0 and timestamps to None; text that is present
    but unparseable also falls back to the default and is logged as a warning.
    Normalization never raises for malformed field text.
    """

    def __init__(self):
        self.fallback_count = 0

    def normalize(self, records: Iterable[RawRecord]) -> list[Post]:
        """
        Normalize every raw record.

        Args:
            records: Raw records in document order

        Returns:
            Posts in the same order
        """
        return [self.normalize_record(record) for record in records]

    def normalize_record(self, record: RawRecord) -> Post:
        """
        Normalize one raw record.

        Args:
            record: Mapping of source field name to text

        Returns:
            Post model
        """
        post_id = record.get("Id")
        integers = {name: self._integer(record, name, post_id) for name in INTEGER_FIELDS}
        timestamps = {name: self._timestamp(record, name, post_id) for name in TIMESTAMP_FIELDS}

        return Post(
            id=post_id,
            post_type_id=record.get("channel"),
            accepted_answer_id=record.get("AcceptedAnswerId"),
            creation_date=timestamps["CreationDate"],
            score=integers["Score"],
            view_count=integers["ViewCount"],
            body=record.get("Body") or "",
            owner_user_id=record.get("OwnerUserId") or None,
            last_activity_date=timestamps["LastActivityDate"],
            title=record.get("Title") or "",
            tags=decode_tag_entities(record.get("Tags")),
            answer_count=integers["AnswerCount"],
            comment_count=integers["CommentCount"],
            content_license=record.get("ContentLicense") or "",
        )

    def _integer(self, record: RawRecord, field_name: str, post_id: str | None) -> int:
        text = record.get(field_name)
        value = try_parse_int(text)
        if value is not None:
            return value
        if not is_blank(text):
            self._fallback(field_name, text, post_id, "0")
        return 0

    def _timestamp(self, record: RawRecord, field_name: str, post_id: str | None) -> datetime | None:
        text = record.get(field_name)
        value = try_parse_timestamp(text)
        if value is None and not is_blank(text):
            self._fallback(field_name, text, post_id, "null")
        return value

    def _fallback(self, field_name: str, text: str, post_id: str | None, default: str) -> None:
        self.fallback_count += 1
        record_coercion_fallback(field_name)
        logger.warning(
            f"Post {post_id}: cannot parse {field_name}={text!r}, using {default}"
        )
