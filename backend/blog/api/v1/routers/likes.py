# blog/api/v1/routers/likes.py
from fastapi import APIRouter, Depends

from blog.api.v1.deps import get_current_user, get_post_or_404
from blog.core.responses import success
from blog.models.post import Post
from blog.models.user import User
from blog.schemas.post import LikeCountOut
from blog.services import likes as like_service

router = APIRouter(prefix="/posts/{post_id}/likes", tags=["likes"], dependencies=[Depends(get_current_user)])


@router.post("")
async def like_post(post: Post = Depends(get_post_or_404), user: User = Depends(get_current_user)):
    """
    Like a post.

    Raises:
        409: the user already likes this post
    """
    await like_service.like(user, post)
    return success(None, "Post liked.")


@router.delete("")
async def unlike_post(post: Post = Depends(get_post_or_404), user: User = Depends(get_current_user)):
    """Remove the current user's like; succeeds even if there was none."""
    await like_service.unlike(user, post)
    return success(None, "Like removed.")


@router.get("/count")
async def count_likes(post: Post = Depends(get_post_or_404), user: User = Depends(get_current_user)):
    count = await like_service.count_likes(post)
    return success(LikeCountOut(post_id=post.id, likes_count=count))
