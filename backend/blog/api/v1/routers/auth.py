# blog/api/v1/routers/auth.py
from fastapi import APIRouter, Depends, Request

from blog.api.v1.deps import AuthContext, get_auth_context
from blog.config import settings
from blog.core.limiter import limiter
from blog.core.responses import success
from blog.schemas.auth import LoginIn, RegisterIn, RegisterOut, TokenOut, UserOut
from blog.services import auth as auth_service

router = APIRouter(tags=["auth"])


@router.post("/register", status_code=201)
@limiter.limit(settings.register_rate_limit)
async def register(request: Request, body: RegisterIn):
    """
    Register a new user account and log it in.

    Username must follow the username policy; username and email must be
    unique. The password is hashed before storage. The response already
    contains an access token so the client can skip a separate login.

    Returns:
        201 with data:
            - user: the created user
            - access_token, token_type ("Bearer"), expires_in (seconds)

    Raises:
        422: invalid input, policy violation, or username/email taken
        429: too many attempts from this address
    """
    user, token = await auth_service.register_and_login(body.model_dump())
    data = RegisterOut(user=UserOut.from_model(user), **vars(token))
    return success(data, "Registration completed.", 201)


@router.post("/login")
@limiter.limit(settings.login_rate_limit)
async def login(request: Request, body: LoginIn):
    """
    Authenticate user and create access token.

    The token is returned in the response body and also set as an HttpOnly
    cookie for browser-based clients.

    Raises:
        401: unknown username or wrong password (same message for both)
        429: too many attempts from this address
    """
    token = await auth_service.login(body.username, body.password)
    response = success(TokenOut(**vars(token)), "Logged in.")
    response.set_cookie("accessToken", token.access_token, httponly=True, secure=False, samesite="lax")
    return response


@router.post("/logout")
async def logout(ctx: AuthContext = Depends(get_auth_context)):
    """
    Log out by revoking the presented token.

    The token is added to the revocation set and rejected from now on, even
    before it expires. The access token cookie is cleared as well.
    """
    await auth_service.logout(ctx.user, ctx.payload)
    response = success(None, "Logged out.")
    response.delete_cookie("accessToken")
    return response
