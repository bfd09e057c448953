# blog/services/auth.py
"""
Authentication service.

Registration, login, logout and token verification. Raises typed failures
from blog.core.errors; building the HTTP response is left to the routers.
"""
import datetime as dt
import logging
from dataclasses import dataclass

import jwt  # PyJWT
from tortoise.exceptions import IntegrityError

from blog.core.errors import AuthenticationFailure, UniqueConstraintViolation
from blog.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    token_ttl_seconds,
    verify_password,
)
from blog.models.revoked_token import RevokedToken
from blog.models.user import User

logger = logging.getLogger("uvicorn.error")

# Same message for unknown username and wrong password (no account enumeration)
INVALID_CREDENTIALS = "Invalid username or password."


@dataclass
class IssuedToken:
    access_token: str
    token_type: str
    expires_in: int  # Seconds


async def register(data: dict) -> User:
    """
    Create a user account.

    Args:
        data: Validated registration fields (username, name, email, password)

    Returns:
        The created User

    Raises:
        UniqueConstraintViolation: username or email already in use; also
            raised when a concurrent registration wins the unique index
    """
    if await User.filter(username=data["username"]).exists():
        raise UniqueConstraintViolation("username")
    if await User.filter(email=data["email"]).exists():
        raise UniqueConstraintViolation("email")
    try:
        user = await User.create(
            username=data["username"],
            name=data["name"],
            email=data["email"],
            password_hash=hash_password(data["password"]),  # Hash password before storing
        )
    except IntegrityError:
        field = "username" if await User.filter(username=data["username"]).exists() else "email"
        raise UniqueConstraintViolation(field)
    logger.info("[auth] registered user id=%s username=%s", user.id, user.username)
    return user


async def login(username: str, password: str) -> IssuedToken:
    """
    Verify credentials and issue a signed, expiring bearer token.

    Raises:
        AuthenticationFailure: unknown username or wrong password, with the
            same message in both cases
    """
    user = await User.get_or_none(username=username)
    if not user or not verify_password(password, user.password_hash):
        logger.info("[auth] failed login for username=%s", username)
        raise AuthenticationFailure(INVALID_CREDENTIALS)
    return IssuedToken(
        access_token=create_access_token(str(user.id)),
        token_type="Bearer",
        expires_in=token_ttl_seconds(),
    )


async def register_and_login(data: dict) -> tuple[User, IssuedToken]:
    """Register, then log in with the plaintext password so the client gets a token at once."""
    user = await register(data)
    token = await login(user.username, data["password"])
    return user, token


async def authenticate(token: str) -> tuple[User, dict]:
    """
    Resolve a bearer token to its user.

    Returns:
        (user, decoded payload)

    Raises:
        AuthenticationFailure: malformed, badly signed, expired or revoked
            token, or a token whose user no longer exists
    """
    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise AuthenticationFailure("Token has expired.")
    except jwt.InvalidTokenError:
        raise AuthenticationFailure("Token is invalid.")

    if await RevokedToken.filter(jti=payload["jti"]).exists():
        raise AuthenticationFailure("Token has been revoked.")

    user = await User.get_or_none(id=payload["sub"])
    if not user:
        raise AuthenticationFailure("Token is invalid.")
    return user, payload


async def logout(user: User, payload: dict) -> None:
    """
    Revoke the token described by `payload` so it can never authenticate again.

    Idempotent for the same token. Revocations of tokens that have expired
    on their own are purged on the way.
    """
    # Stored as naive UTC
    expires_at = dt.datetime.fromtimestamp(payload["exp"], tz=dt.timezone.utc).replace(tzinfo=None)
    await RevokedToken.get_or_create(
        jti=payload["jti"],
        defaults={"user_id": user.id, "expires_at": expires_at},
    )
    now = dt.datetime.now(dt.timezone.utc).replace(tzinfo=None)
    await RevokedToken.filter(expires_at__lt=now).delete()
    logger.info("[auth] logged out user id=%s", user.id)
