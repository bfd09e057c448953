# blog/api/v1/routers/posts.py
import datetime as dt

from fastapi import APIRouter, Depends, Query

from blog.api.v1.deps import PageParams, get_current_user, get_page_params, get_post_or_404
from blog.core.responses import success
from blog.models.post import Post
from blog.models.user import User
from blog.schemas.post import PostIn, PostUpdateIn
from blog.services import posts as post_service

router = APIRouter(prefix="/posts", tags=["posts"], dependencies=[Depends(get_current_user)])


@router.get("")
async def list_posts(
    title: str | None = Query(default=None, description="Case-insensitive title search"),
    date_from: dt.date | None = Query(default=None, alias="from", description="Created on or after (YYYY-MM-DD)"),
    date_to: dt.date | None = Query(default=None, alias="to", description="Created on or before (YYYY-MM-DD)"),
    paging: PageParams = Depends(get_page_params),
    user: User = Depends(get_current_user),
):
    """
    Get a page of posts, newest first.

    Each post carries likes_count and an author summary.
    """
    page = await post_service.index(title, date_from, date_to, paging.page, paging.per_page)
    return success(page)


@router.post("", status_code=201)
async def create_post(body: PostIn, user: User = Depends(get_current_user)):
    post = await post_service.store(user, body.model_dump())
    return success(post, "Post created.", 201)


@router.get("/{post_id}")
async def show_post(post: Post = Depends(get_post_or_404), user: User = Depends(get_current_user)):
    return success(await post_service.show(post))


@router.put("/{post_id}")
async def update_post(
    body: PostUpdateIn,
    post: Post = Depends(get_post_or_404),
    user: User = Depends(get_current_user),
):
    """
    Update title and/or body of a post (author only).

    Raises:
        403: the current user is not the author
        404: no such post
    """
    updated = await post_service.update(user, post, body.model_dump(exclude_unset=True))
    return success(updated, "Post updated.")


@router.delete("/{post_id}")
async def delete_post(post: Post = Depends(get_post_or_404), user: User = Depends(get_current_user)):
    """Delete a post (author only) together with its comments and likes."""
    await post_service.destroy(user, post)
    return success(None, "Post deleted.")
