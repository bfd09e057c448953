# blog/services/comments.py
"""
Comment service.

Comments form a tree per post: a top-level comment has no parent, a reply
points to another comment of the same post (any depth). Listing pages over
top-level comments and attaches each one's direct replies.
"""
from typing import Dict, List, Optional

from blog.core.errors import AuthorizationFailure, BadRequestFailure
from blog.models.comment import Comment
from blog.models.post import Post
from blog.models.user import User
from blog.schemas.comment import CommentOut, CommentThreadOut
from blog.schemas.pagination import Page

INVALID_REPLY_TARGET = "Invalid reply target."
MISMATCHED_ACCESS = "Mismatched access."
NOT_AUTHOR = "Only the author can modify or delete this comment."


async def list_comments(post: Post, page: int = 1, per_page: int = 10) -> Page[CommentThreadOut]:
    """
    Page through the top-level comments of a post, oldest first.

    Each item carries its author and its direct replies (with authors),
    replies also oldest first. Pagination never splits a reply list.
    """
    qs = Comment.filter(post_id=post.id, parent_id__isnull=True)
    total = await qs.count()
    roots = (
        await qs.order_by("created_at", "id")
        .offset((page - 1) * per_page)
        .limit(per_page)
        .prefetch_related("user")
    )

    replies_by_parent: Dict[int, List[CommentOut]] = {}
    if roots:
        replies = (
            await Comment.filter(parent_id__in=[c.id for c in roots])
            .order_by("created_at", "id")
            .prefetch_related("user")
        )
        for r in replies:
            replies_by_parent.setdefault(r.parent_id, []).append(CommentOut.from_model(r, author=r.user))

    items = [
        CommentThreadOut(
            **CommentOut.from_model(c, author=c.user).model_dump(),
            replies=replies_by_parent.get(c.id, []),
        )
        for c in roots
    ]
    return Page[CommentThreadOut].build(items, page=page, per_page=per_page, total=total)


async def store(user: User, post: Post, body: str, parent_id: Optional[int] = None) -> CommentOut:
    """
    Add a comment to a post, optionally as a reply.

    Raises:
        BadRequestFailure: parent_id names no comment, or a comment of
            another post; nothing is created
    """
    if parent_id is not None:
        parent = await Comment.get_or_none(id=parent_id)
        if parent is None or parent.post_id != post.id:
            raise BadRequestFailure(INVALID_REPLY_TARGET)
    comment = await Comment.create(post_id=post.id, user_id=user.id, parent_id=parent_id, body=body)
    return CommentOut.from_model(comment, author=user)


def _check_post_match(post: Post, comment: Comment) -> None:
    if comment.post_id != post.id:
        raise BadRequestFailure(MISMATCHED_ACCESS)


def _authorize_owner(user: User, comment: Comment) -> None:
    if str(comment.user_id) != str(user.id):
        raise AuthorizationFailure(NOT_AUTHOR)


async def update(user: User, post: Post, comment: Comment, body: str) -> CommentOut:
    """
    Replace a comment's body.

    Raises:
        BadRequestFailure: comment does not belong to post
        AuthorizationFailure: user is not the comment's author
    """
    _check_post_match(post, comment)
    _authorize_owner(user, comment)
    comment.body = body
    await comment.save()
    return CommentOut.from_model(comment, author=user)


async def destroy(user: User, post: Post, comment: Comment) -> None:
    """Delete a comment after the same checks as update; replies go with it (FK cascade)."""
    _check_post_match(post, comment)
    _authorize_owner(user, comment)
    await comment.delete()
