# blog/services/users.py
"""
Current-account management: profile update and account deletion.
"""
import logging

from tortoise.exceptions import IntegrityError

from blog.core.errors import UniqueConstraintViolation
from blog.core.security import hash_password
from blog.models.user import User

logger = logging.getLogger("uvicorn.error")


async def update(user: User, data: dict) -> User:
    """
    Partially update the user's profile.

    Args:
        user: The authenticated user
        data: Only the supplied fields (name, email, password); a None
            password keeps the current one

    Raises:
        UniqueConstraintViolation: email belongs to another user
    """
    if "name" in data:
        user.name = data["name"]
    if "email" in data and data["email"] != user.email:
        if await User.filter(email=data["email"]).exclude(id=user.id).exists():
            raise UniqueConstraintViolation("email")
        user.email = data["email"]
    if data.get("password"):
        user.password_hash = hash_password(data["password"])
    try:
        await user.save()
    except IntegrityError:
        raise UniqueConstraintViolation("email")
    return user


async def destroy(user: User) -> None:
    """Delete the account; posts, comments, likes and revoked tokens go with it (FK cascade)."""
    user_id = user.id
    await user.delete()
    logger.info("[users] deleted account id=%s", user_id)
