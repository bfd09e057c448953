# blog/api/v1/routers/users.py
from fastapi import APIRouter, Depends

from blog.api.v1.deps import get_current_user
from blog.core.responses import success
from blog.models.user import User
from blog.schemas.auth import UserOut, UserUpdateIn
from blog.services import users as user_service

router = APIRouter(prefix="/user", tags=["user"], dependencies=[Depends(get_current_user)])


@router.get("")
async def show_user(user: User = Depends(get_current_user)):
    """Get the authenticated user's profile."""
    return success(UserOut.from_model(user))


@router.put("")
async def update_user(body: UserUpdateIn, user: User = Depends(get_current_user)):
    """
    Update the authenticated user's profile.

    Only provided fields change: name, email (must stay unique), password
    (re-hashed).
    """
    updated = await user_service.update(user, body.model_dump(exclude_unset=True))
    return success(UserOut.from_model(updated), "Profile updated.")


@router.delete("")
async def delete_user(user: User = Depends(get_current_user)):
    """Delete the account together with everything it owns."""
    await user_service.destroy(user)
    return success(None, "Account deleted.")
