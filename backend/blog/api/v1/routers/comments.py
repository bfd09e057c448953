# blog/api/v1/routers/comments.py
from fastapi import APIRouter, Depends

from blog.api.v1.deps import (
    PageParams,
    get_comment_or_404,
    get_current_user,
    get_page_params,
    get_post_or_404,
)
from blog.core.responses import success
from blog.models.comment import Comment
from blog.models.post import Post
from blog.models.user import User
from blog.schemas.comment import CommentIn, CommentUpdateIn
from blog.services import comments as comment_service

router = APIRouter(prefix="/posts/{post_id}/comments", tags=["comments"], dependencies=[Depends(get_current_user)])


@router.get("")
async def list_comments(
    post: Post = Depends(get_post_or_404),
    paging: PageParams = Depends(get_page_params),
    user: User = Depends(get_current_user),
):
    """
    Get a page of top-level comments (oldest first), each with its direct replies.
    Pagination applies to top-level comments only.
    """
    page = await comment_service.list_comments(post, paging.page, paging.per_page)
    return success(page)


@router.post("", status_code=201)
async def create_comment(
    body: CommentIn,
    post: Post = Depends(get_post_or_404),
    user: User = Depends(get_current_user),
):
    """
    Comment on a post, or reply to one of its comments via parent_id.

    Raises:
        400: parent_id is not a comment of this post
    """
    comment = await comment_service.store(user, post, body.body, body.parent_id)
    return success(comment, "Comment created.", 201)


@router.put("/{comment_id}")
async def update_comment(
    body: CommentUpdateIn,
    post: Post = Depends(get_post_or_404),
    comment: Comment = Depends(get_comment_or_404),
    user: User = Depends(get_current_user),
):
    updated = await comment_service.update(user, post, comment, body.body)
    return success(updated, "Comment updated.")


@router.delete("/{comment_id}")
async def delete_comment(
    post: Post = Depends(get_post_or_404),
    comment: Comment = Depends(get_comment_or_404),
    user: User = Depends(get_current_user),
):
    """Delete a comment (author only); its replies are removed with it."""
    await comment_service.destroy(user, post, comment)
    return success(None, "Comment deleted.")
