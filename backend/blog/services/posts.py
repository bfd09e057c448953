# blog/services/posts.py
"""
Post service.

Listing with filters, creation and author-only mutation of posts. Returns
PostOut records carrying the like count and the author summary.
"""
import datetime as dt
from typing import Optional

from tortoise.functions import Count

from blog.core.errors import AuthorizationFailure
from blog.models.like import Like
from blog.models.post import Post
from blog.models.user import User
from blog.schemas.pagination import Page
from blog.schemas.post import PostOut

NOT_AUTHOR = "Only the author can modify or delete this post."


async def index(
    title: Optional[str] = None,
    date_from: Optional[dt.date] = None,
    date_to: Optional[dt.date] = None,
    page: int = 1,
    per_page: int = 10,
) -> Page[PostOut]:
    """
    List posts, newest first.

    Args:
        title: Case-insensitive substring to look for in the title
        date_from: Earliest creation date (inclusive)
        date_to: Latest creation date (inclusive, whole day)
        page: 1-based page number
        per_page: Page size

    Returns:
        Page of posts, each with likes_count and author
    """
    qs = Post.all()
    if title:
        qs = qs.filter(title__icontains=title)
    if date_from:
        qs = qs.filter(created_at__gte=dt.datetime.combine(date_from, dt.time.min))
    if date_to:
        qs = qs.filter(created_at__lt=dt.datetime.combine(date_to + dt.timedelta(days=1), dt.time.min))

    total = await qs.count()
    rows = (
        await qs.annotate(likes_count=Count("likes"))
        .order_by("-created_at", "-id")
        .offset((page - 1) * per_page)
        .limit(per_page)
        .prefetch_related("user")
    )
    items = [PostOut.from_model(p, likes_count=p.likes_count, author=p.user) for p in rows]
    return Page[PostOut].build(items, page=page, per_page=per_page, total=total)


async def store(user: User, data: dict) -> PostOut:
    post = await Post.create(user_id=user.id, title=data["title"], body=data["body"])
    return PostOut.from_model(post, likes_count=0, author=user)


async def show(post: Post) -> PostOut:
    likes_count = await Like.filter(post_id=post.id).count()
    author = await User.get(id=post.user_id)
    return PostOut.from_model(post, likes_count=likes_count, author=author)


def _authorize_owner(user: User, post: Post) -> None:
    if str(post.user_id) != str(user.id):
        raise AuthorizationFailure(NOT_AUTHOR)


async def update(user: User, post: Post, data: dict) -> PostOut:
    """
    Change the supplied fields of a post (title and/or body).

    Raises:
        AuthorizationFailure: user is not the author; nothing is written
    """
    _authorize_owner(user, post)
    if data:
        post.update_from_dict(data)
        await post.save()
    return await show(post)


async def destroy(user: User, post: Post) -> None:
    """Delete a post; its comments (with replies) and likes are removed by FK cascade."""
    _authorize_owner(user, post)
    await post.delete()
