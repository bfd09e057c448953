# blog/schemas/post.py
"""
Pydantic schemas for post endpoints.
"""
import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field


class PostIn(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)


class PostUpdateIn(BaseModel):
    """
    Partial update: omitted fields are left alone.
    Explicit null is rejected (the field type stays str).
    """
    title: str = Field(default=None, min_length=1, max_length=255)
    body: str = Field(default=None, min_length=1)


class AuthorOut(BaseModel):
    """Author summary attached to posts and comments."""
    id: str
    username: str
    name: str

    @classmethod
    def from_model(cls, user) -> "AuthorOut":
        return cls(id=str(user.id), username=user.username, name=user.name)


class PostOut(BaseModel):
    id: int
    user_id: str
    title: str
    body: str
    created_at: dt.datetime
    updated_at: dt.datetime
    likes_count: int = 0
    author: Optional[AuthorOut] = None

    @classmethod
    def from_model(cls, post, likes_count: int = 0, author=None) -> "PostOut":
        return cls(
            id=post.id,
            user_id=str(post.user_id),
            title=post.title,
            body=post.body,
            created_at=post.created_at,
            updated_at=post.updated_at,
            likes_count=likes_count,
            author=AuthorOut.from_model(author) if author is not None else None,
        )


class LikeCountOut(BaseModel):
    post_id: int
    likes_count: int
