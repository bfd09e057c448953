# blog/services/likes.py
"""
Like service: one like per (post, user).
"""
from tortoise.exceptions import IntegrityError

from blog.core.errors import DomainConflict
from blog.models.like import Like
from blog.models.post import Post
from blog.models.user import User

ALREADY_LIKED = "You have already liked this post."


async def like(user: User, post: Post) -> None:
    """
    Like a post.

    The existence check gives the usual answer; the unique (post, user)
    index settles concurrent requests, the loser gets the same conflict.

    Raises:
        DomainConflict: the user already likes this post
    """
    if await Like.filter(post_id=post.id, user_id=user.id).exists():
        raise DomainConflict(ALREADY_LIKED)
    try:
        await Like.create(post_id=post.id, user_id=user.id)
    except IntegrityError:
        raise DomainConflict(ALREADY_LIKED)


async def unlike(user: User, post: Post) -> None:
    """Remove the user's like if there is one; no error otherwise."""
    await Like.filter(post_id=post.id, user_id=user.id).delete()


async def count_likes(post: Post) -> int:
    return await Like.filter(post_id=post.id).count()
