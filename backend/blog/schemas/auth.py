# blog/schemas/auth.py
"""
Pydantic schemas for authentication and account endpoints.
Defines request/response models for register, login and the current user profile.
"""
import datetime as dt
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from blog.core.validation import UsernameValidator, run_validator

username_validator = UsernameValidator()


class RegisterIn(BaseModel):
    """
    Request model for user registration.
    Username must satisfy the username policy; password must be confirmed.
    """
    username: str
    name: str = Field(min_length=1, max_length=100)  # Display name, sized to users.name
    email: EmailStr = Field(max_length=255)
    password: str = Field(min_length=8)
    password_confirmation: str  # Must equal password

    @field_validator("username")
    @classmethod
    def username_policy(cls, v: str) -> str:
        return run_validator(username_validator, v)

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, v: str, info: ValidationInfo) -> str:
        if "password" in info.data and v != info.data["password"]:
            raise PydanticCustomError("confirmed", "The password confirmation does not match.")
        return v


class LoginIn(BaseModel):
    """
    Request model for user login endpoint.
    Contains credentials for authentication.
    """
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)  # Plain text, verified against the stored hash


class TokenOut(BaseModel):
    """Issued access token."""
    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # Seconds until the token expires


class UserOut(BaseModel):
    """
    User information returned by the API.
    Never contains the password hash.
    """
    id: str
    username: str
    name: str
    email: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    @classmethod
    def from_model(cls, user) -> "UserOut":
        return cls(
            id=str(user.id),
            username=user.username,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class RegisterOut(TokenOut):
    """Registration response: the new user plus a token, saving the client a login round trip."""
    user: UserOut


class UserUpdateIn(BaseModel):
    """
    Request model for updating the current user.
    All fields are optional - only provided fields will be updated.
    Explicit null is rejected for name and email.
    """
    name: str = Field(default=None, min_length=1, max_length=100)
    email: EmailStr = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, min_length=8)  # Null/omitted keeps the current password
