# blog/api/v1/deps.py
from dataclasses import dataclass

from fastapi import Depends, Header, Query, Request

from blog.config import settings
from blog.core.errors import AuthenticationFailure, NotFoundFailure
from blog.models.comment import Comment
from blog.models.post import Post
from blog.models.user import User
from blog.services import auth as auth_service


@dataclass
class AuthContext:
    user: User
    payload: dict  # Decoded token claims (sub, jti, iat, exp)


async def get_auth_context(
    request: Request,
    authorization: str | None = Header(default=None),
) -> AuthContext:
    """
    FastAPI dependency resolving the bearer token of the request.

    The token is taken from:
    1. Authorization header (Bearer token) - preferred method
    2. HttpOnly cookie (accessToken) - fallback method

    Raises:
        AuthenticationFailure (401): no token, or a token that is invalid,
            expired, revoked or whose user is gone
    """
    token = None
    # 1) Prioritize Authorization: Bearer xxx
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
    # 2) Secondly HttpOnly Cookie: accessToken
    if not token:
        token = request.cookies.get("accessToken")

    if not token:
        raise AuthenticationFailure("Authentication required.")

    user, payload = await auth_service.authenticate(token)
    return AuthContext(user=user, payload=payload)


async def get_current_user(ctx: AuthContext = Depends(get_auth_context)) -> User:
    """
    FastAPI dependency to get the current authenticated user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            ...
    """
    return ctx.user


async def get_post_or_404(post_id: int) -> Post:
    """Bind the {post_id} path parameter to a Post, 404 when it does not exist."""
    post = await Post.get_or_none(id=post_id)
    if not post:
        raise NotFoundFailure("Post not found.")
    return post


async def get_comment_or_404(comment_id: int) -> Comment:
    """Bind {comment_id}; whether it belongs to the post is the service's call."""
    comment = await Comment.get_or_none(id=comment_id)
    if not comment:
        raise NotFoundFailure("Comment not found.")
    return comment


@dataclass
class PageParams:
    page: int
    per_page: int


def get_page_params(
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.default_per_page, ge=1, le=settings.max_per_page),
) -> PageParams:
    return PageParams(page=page, per_page=per_page)
