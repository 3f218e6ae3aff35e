"""
Pydantic schemas for comment-related request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from shareit.domain.entities import Comment


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)

    model_config = {"str_strip_whitespace": True}


class CommentResponse(BaseModel):
    id: int
    text: str
    author_name: str
    created: datetime


def to_comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        text=comment.text,
        author_name=comment.author.name,
        created=comment.created,
    )
