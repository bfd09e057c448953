# blog/models/user.py
"""
Database model for users.
Represents a registered account: login credentials and profile information.
"""
import uuid
from tortoise import fields, models


class User(models.Model):
    """
    User database model.

    Root of all owned data. Deleting a user cascades (at the database level)
    to their posts, comments, likes and revoked tokens.

    Security:
    - Password is stored as an Argon2 hash and never serialized outward
    - Username and email are unique across all users
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: opaque user identifier
    username = fields.CharField(
        max_length=20,
        unique=True,
        index=True
    )  # Login name (policy-constrained, 12-20 chars)
    name = fields.CharField(max_length=100)  # Display name
    email = fields.CharField(max_length=255, unique=True)  # Email address (unique)
    password_hash = fields.CharField(max_length=255)  # Hashed password, never plain text
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name
