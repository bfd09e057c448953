# blog/schemas/comment.py
"""
Pydantic schemas for comment endpoints.
"""
import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field

from .post import AuthorOut


class CommentIn(BaseModel):
    body: str = Field(min_length=1)
    parent_id: Optional[int] = None  # Reply target; must be a comment of the same post


class CommentUpdateIn(BaseModel):
    body: str = Field(min_length=1)  # Replaces the whole body


class CommentOut(BaseModel):
    id: int
    post_id: int
    user_id: str
    parent_id: Optional[int] = None
    body: str
    created_at: dt.datetime
    updated_at: dt.datetime
    author: Optional[AuthorOut] = None

    @classmethod
    def from_model(cls, comment, author=None) -> "CommentOut":
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            user_id=str(comment.user_id),
            parent_id=comment.parent_id,
            body=comment.body,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            author=AuthorOut.from_model(author) if author is not None else None,
        )


class CommentThreadOut(CommentOut):
    """Top-level comment with its direct replies."""
    replies: List[CommentOut] = []
