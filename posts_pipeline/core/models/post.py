"""
Post model representing a normalized forum post as stored in the collection.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# Raw row as parsed from the XML export: every value is text.
RawRecord = dict[str, str]


class Post(BaseModel):
    """
    A forum post after field coercion.

    Field names are snake_case in Python; the stored document uses the
    PascalCase keys of the source export (see ``to_document``).

    Attributes:
        id: Post identifier (verbatim)
        post_type_id: Post type, taken from the source ``channel`` attribute
        accepted_answer_id: Accepted answer identifier, if any
        creation_date: When the post was created
        score: Net vote score
        view_count: Number of views
        body: HTML body
        owner_user_id: Author identifier, if known
        last_activity_date: Last activity timestamp, if any
        title: Question title
        tags: Tag string with angle brackets decoded
        answer_count: Number of answers
        comment_count: Number of comments
        content_license: License identifier
    """

    id: str | None = Field(None, alias="Id")
    post_type_id: str | None = Field(None, alias="PostTypeId")
    accepted_answer_id: str | None = Field(None, alias="AcceptedAnswerId")
    creation_date: datetime | None = Field(None, alias="CreationDate")
    score: int = Field(0, alias="Score")
    view_count: int = Field(0, alias="ViewCount")
    body: str = Field("", alias="Body")
    owner_user_id: str | None = Field(None, alias="OwnerUserId")
    last_activity_date: datetime | None = Field(None, alias="LastActivityDate")
    title: str = Field("", alias="Title")
    tags: str = Field("", alias="Tags")
    answer_count: int = Field(0, alias="AnswerCount")
    comment_count: int = Field(0, alias="CommentCount")
    content_license: str = Field("", alias="ContentLicense")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "Id": "1",
                "PostTypeId": "1",
                "AcceptedAnswerId": "3",
                "CreationDate": "2010-07-19T19:12:12.510",
                "Score": 24,
                "ViewCount": 1520,
                "Body": "<p>How should I elicit prior distributions?</p>",
                "OwnerUserId": "8",
                "LastActivityDate": "2010-09-15T21:08:26.077",
                "Title": "Eliciting priors from experts",
                "Tags": "<bayesian><prior><elicitation>",
                "AnswerCount": 5,
                "CommentCount": 1,
                "ContentLicense": "CC BY-SA 2.5",
            }
        }

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready document stored in the collection."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Post":
        """Rebuild a Post from a stored document."""
        return cls.model_validate(document)
